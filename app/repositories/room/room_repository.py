"""
Room repository with candidate selection for room search.
"""

from typing import Iterable, List, Optional, Tuple

from sqlalchemy import select

from app.models.dormitory import Dormitory
from app.models.room import Room
from app.repositories.base.base_repository import BaseRepository


class RoomRepository(BaseRepository[Room]):
    """
    Repository for rooms.

    Only the column filters that map cleanly onto SQL are pushed down;
    amenity containment and address matching are evaluated by the
    search engine on the returned candidates.
    """

    def find_candidates(
        self,
        dormitory_id: Optional[str] = None,
        exact_capacity: Optional[int] = None,
        min_capacity: Optional[int] = None,
        max_capacity: Optional[int] = None,
    ) -> List[Tuple[Room, Dormitory]]:
        """
        Select rooms joined with their dormitory.

        Args:
            dormitory_id: Restrict to one dormitory
            exact_capacity: Bed capacity equal to this value
            min_capacity: Bed capacity at least this value
            max_capacity: Bed capacity at most this value

        Returns:
            (room, dormitory) pairs ordered by room ID
        """
        query = select(Room, Dormitory).join(Dormitory, Room.dormitory_id == Dormitory.id)

        if dormitory_id is not None:
            query = query.where(Room.dormitory_id == dormitory_id)

        if exact_capacity is not None:
            query = query.where(Room.bed_capacity == exact_capacity)

        if min_capacity is not None:
            query = query.where(Room.bed_capacity >= min_capacity)

        if max_capacity is not None:
            query = query.where(Room.bed_capacity <= max_capacity)

        query = query.order_by(Room.id)

        return self._run(
            "find candidates",
            lambda: [(room, dorm) for room, dorm in self.db.execute(query).all()],
        )

    def find_by_dormitories(self, dormitory_ids: Iterable[str]) -> List[Room]:
        """Rooms of several dormitories ordered by ID."""
        ids = list(dormitory_ids)
        if not ids:
            return []
        return self.find_by_criteria({"dormitory_id": ids})
