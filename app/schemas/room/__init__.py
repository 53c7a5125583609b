from app.schemas.room.room_search import RoomAvailability, RoomSearchFilters, RoomSearchResult

__all__ = ["RoomSearchFilters", "RoomAvailability", "RoomSearchResult"]
