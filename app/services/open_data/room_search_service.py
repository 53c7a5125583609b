"""
Room filter engine.

Validates a RoomSearchFilters configuration, selects matching rooms and
annotates each with its dormitory's contact data and current occupancy.
"""

from app.core.exceptions import ConflictingFilterError, InvalidRangeError, InvalidValueError
from app.models import Dormitory, Room
from app.services.base import BaseService, ServiceResult
from app.schemas.room.room_search import RoomAvailability, RoomSearchFilters, RoomSearchResult


def annotate_room(room: Room, dorm: Dormitory, occupied: int) -> RoomAvailability:
    """Project a room with its dormitory contact data and occupancy."""
    available = max(0, room.bed_capacity - occupied)
    return RoomAvailability(
        room_id=room.id,
        dormitory_id=dorm.id,
        dormitory_name=dorm.name,
        dormitory_address=dorm.address or "",
        dormitory_phone=dorm.phone,
        dormitory_email=dorm.email,
        bed_capacity=room.bed_capacity,
        amenities=list(room.amenities or []),
        occupied=occupied,
        available_spots=available,
        is_available=available > 0,
        is_overbooked=occupied > room.bed_capacity,
    )


class RoomSearchService(BaseService):
    """
    Service for searching rooms.

    Column filters are pushed down to the repository; amenity containment,
    address matching and availability are evaluated here so that the
    page boundaries are computed over the fully filtered list.
    """

    def search_rooms(self, filters: RoomSearchFilters) -> ServiceResult[RoomSearchResult]:
        """
        Search rooms.

        Args:
            filters: Search configuration

        Returns:
            ServiceResult containing one page of RoomSearchResult
        """
        try:
            limit = self.validate_filters(filters)

            candidates = self.repositories.rooms.find_candidates(
                dormitory_id=filters.dormitory_id,
                exact_capacity=filters.exact_capacity,
                min_capacity=filters.min_capacity,
                max_capacity=filters.max_capacity,
            )
            candidates = [
                (room, dorm) for room, dorm in candidates
                if self._matches(room, dorm, filters)
            ]

            occupancy = self.repositories.accepted_applications.count_by_room(
                room.id for room, _ in candidates
            )
            rooms = [annotate_room(room, dorm, occupancy.get(room.id, 0)) for room, dorm in candidates]
            if filters.only_available:
                rooms = [room for room in rooms if room.is_available]

            page = rooms[filters.offset:filters.offset + limit]

            self._logger.debug(
                "Room search completed",
                extra={"matched": len(rooms), "returned": len(page)},
            )

            return ServiceResult.success(
                RoomSearchResult(
                    rooms=page,
                    count=len(page),
                    total=len(rooms),
                    limit=limit,
                    offset=filters.offset,
                ),
                message=f"Found {len(rooms)} rooms",
            )

        except Exception as e:
            return self._handle_exception(
                e,
                "search rooms",
                additional_context={"filters": filters.model_dump(exclude_defaults=True)},
            )

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate_filters(self, filters: RoomSearchFilters) -> int:
        """
        Check a search configuration before the store is touched.

        Returns:
            The effective page size

        Raises:
            ConflictingFilterError: exact capacity combined with a range bound
            InvalidRangeError: min_capacity greater than max_capacity
            InvalidValueError: capacity below 1 or bad pagination
        """
        if filters.exact_capacity is not None and (
            filters.min_capacity is not None or filters.max_capacity is not None
        ):
            raise ConflictingFilterError(
                "exact_capacity cannot be combined with min_capacity or max_capacity",
                fields=["exact_capacity", "min_capacity", "max_capacity"],
            )

        if (
            filters.min_capacity is not None
            and filters.max_capacity is not None
            and filters.min_capacity > filters.max_capacity
        ):
            raise InvalidRangeError(
                f"min_capacity ({filters.min_capacity}) is greater than "
                f"max_capacity ({filters.max_capacity})",
                lower=filters.min_capacity,
                upper=filters.max_capacity,
            )

        for field in ("exact_capacity", "min_capacity", "max_capacity"):
            value = getattr(filters, field)
            if value is not None and value < 1:
                raise InvalidValueError(f"{field} must be at least 1", field=field, value=value)

        limit = self.config.ROOM_SEARCH_DEFAULT_LIMIT if filters.limit is None else filters.limit
        if not 1 <= limit <= self.config.ROOM_SEARCH_MAX_LIMIT:
            raise InvalidValueError(
                f"limit must be between 1 and {self.config.ROOM_SEARCH_MAX_LIMIT}",
                field="limit",
                value=limit,
            )

        if filters.offset < 0:
            raise InvalidValueError("offset cannot be negative", field="offset", value=filters.offset)

        return limit

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _matches(room: Room, dorm: Dormitory, filters: RoomSearchFilters) -> bool:
        if filters.amenities and not set(filters.amenities).issubset(room.amenities or []):
            return False
        if filters.address_substring:
            address = (dorm.address or "").casefold()
            if filters.address_substring.casefold() not in address:
                return False
        return True

