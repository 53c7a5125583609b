# app/api/deps.py
"""
FastAPI dependencies: database session, repositories, services and the
conversion of failed service results into HTTP errors.

Example usage in a router:
    from fastapi import Depends, APIRouter
    from app.api import deps

    @router.get("/statistics")
    def read_statistics(service = Depends(deps.get_statistics_service)):
        return deps.unwrap_result(service.get_public_statistics())
"""

from typing import List, Optional, TypeVar

from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.exceptions import BaseAppException
from app.db.session import get_db
from app.repositories.base.repository_factory import RepositoryFactory
from app.services.base import ServiceError, ServiceResult
from app.services.open_data import (
    CatalogService,
    ComparisonService,
    ExportService,
    OccupancyHeatmapService,
    RoomSearchService,
    StatisticsService,
    TrendsService,
)

T = TypeVar("T")


class ServiceResultError(BaseAppException):
    """A failed ServiceResult surfacing at the API boundary."""

    def __init__(self, error: ServiceError):
        super().__init__(error.message, error.code, error.details or {}, error.status_code)
        self.error = error


def unwrap_result(result: ServiceResult[T]) -> T:
    """Return the data of a successful result or raise its error."""
    if not result.is_success:
        raise ServiceResultError(result.error)
    return result.data


def split_csv_param(value: Optional[str]) -> List[str]:
    """Split a comma-separated query parameter, dropping blank items."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


# --- Database & repositories --------------------------------------------------

def get_repositories(db: Session = Depends(get_db)) -> RepositoryFactory:
    return RepositoryFactory(db)


# --- Services -------------------------------------------------------------------

def get_room_search_service(repositories: RepositoryFactory = Depends(get_repositories)) -> RoomSearchService:
    return RoomSearchService(repositories)


def get_statistics_service(repositories: RepositoryFactory = Depends(get_repositories)) -> StatisticsService:
    return StatisticsService(repositories)


def get_comparison_service(repositories: RepositoryFactory = Depends(get_repositories)) -> ComparisonService:
    return ComparisonService(repositories)


def get_trends_service(repositories: RepositoryFactory = Depends(get_repositories)) -> TrendsService:
    return TrendsService(repositories)


def get_heatmap_service(repositories: RepositoryFactory = Depends(get_repositories)) -> OccupancyHeatmapService:
    return OccupancyHeatmapService(repositories)


def get_export_service(repositories: RepositoryFactory = Depends(get_repositories)) -> ExportService:
    return ExportService(repositories)


def get_catalog_service(repositories: RepositoryFactory = Depends(get_repositories)) -> CatalogService:
    return CatalogService(repositories)


__all__ = [
    "ServiceResultError",
    "unwrap_result",
    "split_csv_param",
    "get_db",
    "get_repositories",
    "get_room_search_service",
    "get_statistics_service",
    "get_comparison_service",
    "get_trends_service",
    "get_heatmap_service",
    "get_export_service",
    "get_catalog_service",
]
