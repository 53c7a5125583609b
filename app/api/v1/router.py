"""
API v1 Router - Main Entry Point
Aggregates all v1 API endpoints for the dormitory open-data service
"""
from fastapi import APIRouter

from app.api.v1.endpoints import open_data
from app.config.settings import settings
from app.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(
    responses={
        400: {"description": "Bad Request"},
        404: {"description": "Not Found"},
        422: {"description": "Validation Error"},
        500: {"description": "Internal Server Error"},
        503: {"description": "Service Unavailable"},
    }
)

router.include_router(open_data.router, prefix="/open-data", tags=["Open Data"])


@router.get("/health", tags=["Health"])
def health_check():
    """Liveness check."""
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.API_VERSION,
        "environment": settings.ENVIRONMENT,
    }


logger.debug("API v1 router initialised", extra={"routers": ["open_data"]})
