from app.models.room.room import Room, normalize_amenities

__all__ = ["Room", "normalize_amenities"]
