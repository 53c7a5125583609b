"""
Dormitory repository.
"""

from typing import List

from sqlalchemy import select

from app.models.dormitory import Dormitory
from app.repositories.base.base_repository import BaseRepository


class DormitoryRepository(BaseRepository[Dormitory]):
    """Read access to dormitories."""

    def find_all_by_name(self) -> List[Dormitory]:
        """All dormitories ordered by name, then ID."""
        stmt = select(Dormitory).order_by(Dormitory.name, Dormitory.id)
        return self._scalars("find all by name", stmt)
