"""
Repository factory for centralized instantiation and dependency injection.

Hands out one repository instance per class for the lifetime of a
session, so every service built for a request shares them.
"""

from typing import Dict, Type, TypeVar

from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.models import AcceptedApplication, Application, Dormitory, Payment, Room
from app.models.base import BaseModel
from app.repositories.base.base_repository import BaseRepository

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=BaseModel)
RepositoryType = TypeVar("RepositoryType", bound=BaseRepository)


class RepositoryFactory:
    """
    Factory for creating and managing repository instances.
    """

    def __init__(self, db: Session):
        """
        Initialize repository factory.

        Args:
            db: Database session
        """
        self.db = db
        self._instances: Dict[str, BaseRepository] = {}

    def create(
        self,
        repository_class: Type[RepositoryType],
        model: Type[ModelType],
        singleton: bool = True,
    ) -> RepositoryType:
        """
        Create repository instance.

        Args:
            repository_class: Repository class to instantiate
            model: Model class
            singleton: Whether to use singleton pattern

        Returns:
            Repository instance
        """
        key = f"{repository_class.__name__}:{model.__name__}"

        if singleton and key in self._instances:
            return self._instances[key]

        repository = repository_class(model=model, db=self.db)

        if singleton:
            self._instances[key] = repository

        logger.debug(f"Created repository: {key}")
        return repository

    # ==================== Domain Repositories ====================

    @property
    def dormitories(self) -> "DormitoryRepository":
        from app.repositories.dormitory import DormitoryRepository
        return self.create(DormitoryRepository, Dormitory)

    @property
    def rooms(self) -> "RoomRepository":
        from app.repositories.room import RoomRepository
        return self.create(RoomRepository, Room)

    @property
    def applications(self) -> "ApplicationRepository":
        from app.repositories.application import ApplicationRepository
        return self.create(ApplicationRepository, Application)

    @property
    def accepted_applications(self) -> "AcceptedApplicationRepository":
        from app.repositories.application import AcceptedApplicationRepository
        return self.create(AcceptedApplicationRepository, AcceptedApplication)

    @property
    def payments(self) -> "PaymentRepository":
        from app.repositories.payment import PaymentRepository
        return self.create(PaymentRepository, Payment)
