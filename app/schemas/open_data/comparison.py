"""
Dormitory comparison schemas.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import Field

from app.core.exceptions import ErrorCode
from app.schemas.common.base import BaseSchema
from app.schemas.open_data.statistics import ApplicationStatistics, DormStatistics

__all__ = [
    "ComparisonError",
    "DormComparisonDetails",
    "DormComparisonEntry",
    "DormComparison",
]


class ComparisonError(BaseSchema):
    code: ErrorCode
    message: str


class DormComparisonDetails(BaseSchema):
    """Everything known about one compared dormitory."""

    dormitory_id: str
    name: str
    address: str
    phone: Optional[str] = None
    email: Optional[str] = None
    statistics: DormStatistics
    room_distribution: Dict[int, int] = Field(
        default_factory=dict,
        description="Bed capacity to number of rooms",
    )
    amenities_offered: Dict[str, int] = Field(
        default_factory=dict,
        description="Amenity tag to number of rooms offering it",
    )
    application_metrics: ApplicationStatistics


class DormComparisonEntry(BaseSchema):
    """
    Per-id comparison outcome.

    Exactly one of ``details`` and ``error`` is set.
    """

    dormitory_id: str
    found: bool
    error: Optional[ComparisonError] = None
    details: Optional[DormComparisonDetails] = None


class DormComparison(BaseSchema):
    dormitories: List[DormComparisonEntry] = Field(default_factory=list)
    requested: int
    found: int
    not_found: List[str] = Field(default_factory=list)
