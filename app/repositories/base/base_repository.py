"""
Base repository with standardized read operations and error handling.

Provides foundation for all domain repositories. The open-data store is
read-only from the service's point of view, so only read operations
are exposed. Driver failures surface as StoreUnavailableError.
"""

from typing import Any, Callable, Dict, Generic, Iterable, List, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select
from sqlalchemy.exc import SQLAlchemyError

from app.models.base import BaseModel
from app.core.logging import get_logger
from app.core.exceptions import StoreUnavailableError

logger = get_logger(__name__)

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=BaseModel)
T = TypeVar("T")


class BaseRepository(Generic[ModelType]):
    """
    Base repository with standardized read operations.

    Every query goes through ``_run`` so that a failing store is reported
    the same way regardless of which repository touched it.
    """

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    # ==================== Error Handling ====================

    def _run(self, operation: str, fn: Callable[[], T]) -> T:
        """
        Execute a store read, translating driver failures.

        Args:
            operation: Short description used in logs and error details
            fn: Zero-argument callable performing the query

        Raises:
            StoreUnavailableError: If the driver raises
        """
        try:
            return fn()
        except SQLAlchemyError as e:
            logger.error(
                f"{self.model.__name__} {operation} failed",
                extra={"operation": operation, "error_type": type(e).__name__},
                exc_info=True,
            )
            raise StoreUnavailableError(
                f"Could not read {self.model.__tablename__}",
                operation=operation,
                original_error=str(e),
            ) from e

    def _scalars(self, operation: str, stmt: Select) -> List[ModelType]:
        return self._run(operation, lambda: list(self.db.execute(stmt).scalars().all()))

    # ==================== Read Operations ====================

    def find_by_id(self, id: str) -> Optional[ModelType]:
        """
        Find entity by ID.

        Args:
            id: Entity ID

        Returns:
            Entity or None
        """
        return self._run("find by id", lambda: self.db.get(self.model, id))

    def find_by_ids(self, ids: Iterable[str]) -> List[ModelType]:
        """Find all entities whose ID is in ``ids``, ordered by ID."""
        ids = list(ids)
        if not ids:
            return []
        stmt = select(self.model).where(self.model.id.in_(ids)).order_by(self.model.id)
        return self._scalars("find by ids", stmt)

    def find_all(self, skip: int = 0, limit: Optional[int] = None) -> List[ModelType]:
        """
        Find all entities ordered by ID.

        Args:
            skip: Number of records to skip
            limit: Maximum number of records, unbounded when None

        Returns:
            List of entities
        """
        stmt = select(self.model).order_by(self.model.id).offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)
        return self._scalars("find all", stmt)

    def find_by_criteria(
        self,
        criteria: Dict[str, Any],
        order_by: Optional[List[str]] = None,
    ) -> List[ModelType]:
        """
        Find entities matching criteria.

        Args:
            criteria: Filter criteria as key-value pairs; list values match with IN
            order_by: List of fields to order by (prefix with - for desc)

        Returns:
            List of matching entities
        """
        stmt = select(self.model)

        for key, value in criteria.items():
            column = getattr(self.model, key)
            if isinstance(value, (list, tuple, set)):
                stmt = stmt.where(column.in_(list(value)))
            else:
                stmt = stmt.where(column == value)

        for field in order_by or ["id"]:
            if field.startswith('-'):
                stmt = stmt.order_by(getattr(self.model, field[1:]).desc())
            else:
                stmt = stmt.order_by(getattr(self.model, field))

        return self._scalars("find by criteria", stmt)
