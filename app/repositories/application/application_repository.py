"""
Repositories for room applications and accepted applications.
"""

from typing import Dict, Iterable, List, Optional

from sqlalchemy import func, select

from app.models.application import AcceptedApplication, Application
from app.repositories.base.base_repository import BaseRepository


class ApplicationRepository(BaseRepository[Application]):
    """Read access to submitted applications."""

    def find_by_rooms(self, room_ids: Iterable[str]) -> List[Application]:
        ids = list(room_ids)
        if not ids:
            return []
        return self.find_by_criteria({"room_id": ids})


class AcceptedApplicationRepository(BaseRepository[AcceptedApplication]):
    """
    Read access to accepted applications.

    Accepted applications are the occupancy ledger: each row holds one
    bed in its room.
    """

    def find_by_room(self, room_id: str) -> List[AcceptedApplication]:
        return self.find_by_criteria({"room_id": room_id}, order_by=["academic_year", "id"])

    def find_by_rooms(self, room_ids: Iterable[str]) -> List[AcceptedApplication]:
        ids = list(room_ids)
        if not ids:
            return []
        return self.find_by_criteria({"room_id": ids})

    def find_by_academic_year(self, academic_year: str) -> List[AcceptedApplication]:
        return self.find_by_criteria({"academic_year": academic_year}, order_by=["room_id", "id"])

    def count_by_room(self, room_ids: Optional[Iterable[str]] = None) -> Dict[str, int]:
        """
        Count accepted applications per room.

        Args:
            room_ids: Restrict to these rooms; all rooms when None

        Returns:
            Mapping of room ID to occupied beds; rooms without
            accepted applications are absent
        """
        stmt = (
            select(AcceptedApplication.room_id, func.count(AcceptedApplication.id))
            .group_by(AcceptedApplication.room_id)
        )
        if room_ids is not None:
            ids = list(room_ids)
            if not ids:
                return {}
            stmt = stmt.where(AcceptedApplication.room_id.in_(ids))

        return self._run(
            "count by room",
            lambda: {room_id: int(total) for room_id, total in self.db.execute(stmt).all()},
        )
