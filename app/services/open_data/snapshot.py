"""
Point-in-time view of the entity store used by the aggregating engines.

A snapshot is loaded once per call and every figure in a result is
computed from it, so one response never mixes two states of the store.
"""

from collections import Counter
from dataclasses import dataclass
from functools import cached_property
from typing import Dict, Iterable, List, Optional, Tuple

from app.models import AcceptedApplication, Application, Dormitory, Room
from app.repositories.base.repository_factory import RepositoryFactory


@dataclass(frozen=True)
class EntitySnapshot:
    """Dormitories, rooms and applications read in one pass."""

    dormitories: Tuple[Dormitory, ...]
    rooms: Tuple[Room, ...]
    applications: Tuple[Application, ...]
    accepted_applications: Tuple[AcceptedApplication, ...]

    @classmethod
    def load(
        cls,
        repositories: RepositoryFactory,
        dormitory_ids: Optional[Iterable[str]] = None,
    ) -> "EntitySnapshot":
        """
        Read the store.

        Args:
            repositories: Repository factory for the current session
            dormitory_ids: Restrict the snapshot to these dormitories and
                everything that hangs off them; the whole store when None
        """
        if dormitory_ids is None:
            return cls(
                dormitories=tuple(repositories.dormitories.find_all()),
                rooms=tuple(repositories.rooms.find_all()),
                applications=tuple(repositories.applications.find_all()),
                accepted_applications=tuple(repositories.accepted_applications.find_all()),
            )

        dormitories = repositories.dormitories.find_by_ids(dormitory_ids)
        rooms = repositories.rooms.find_by_dormitories(d.id for d in dormitories)
        room_ids = [room.id for room in rooms]
        return cls(
            dormitories=tuple(dormitories),
            rooms=tuple(rooms),
            applications=tuple(repositories.applications.find_by_rooms(room_ids)),
            accepted_applications=tuple(repositories.accepted_applications.find_by_rooms(room_ids)),
        )

    # ------------------------------------------------------------------
    # Indexes
    # ------------------------------------------------------------------

    @cached_property
    def dormitory_index(self) -> Dict[str, Dormitory]:
        return {dorm.id: dorm for dorm in self.dormitories}

    @cached_property
    def room_index(self) -> Dict[str, Room]:
        return {room.id: room for room in self.rooms}

    @cached_property
    def rooms_by_dormitory(self) -> Dict[str, List[Room]]:
        grouped: Dict[str, List[Room]] = {dorm.id: [] for dorm in self.dormitories}
        for room in self.rooms:
            grouped.setdefault(room.dormitory_id, []).append(room)
        return grouped

    @cached_property
    def occupancy_by_room(self) -> Counter:
        """Accepted applications per room ID."""
        return Counter(accepted.room_id for accepted in self.accepted_applications)

    @cached_property
    def applications_by_dormitory(self) -> Dict[str, List[Application]]:
        return self._group_by_dormitory(self.applications)

    @cached_property
    def accepted_by_dormitory(self) -> Dict[str, List[AcceptedApplication]]:
        return self._group_by_dormitory(self.accepted_applications)

    def _group_by_dormitory(self, records) -> Dict[str, list]:
        grouped: Dict[str, list] = {dorm.id: [] for dorm in self.dormitories}
        for record in records:
            room = self.room_index.get(record.room_id)
            if room is not None:
                grouped.setdefault(room.dormitory_id, []).append(record)
        return grouped

    def occupied(self, room: Room) -> int:
        return self.occupancy_by_room.get(room.id, 0)
