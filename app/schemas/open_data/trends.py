"""
Application trend schemas.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field, field_validator

from app.models.base.enums import TrendDirection
from app.schemas.common.base import BaseSchema

__all__ = [
    "TrendsQuery",
    "YearlyTrend",
    "DormTrend",
    "TrendMetrics",
    "ApplicationTrends",
]


class TrendsQuery(BaseSchema):
    """
    Optional academic-year window for trend analysis.

    Format and ordering are checked by the trends service.
    """

    from_year: Optional[str] = Field(default=None, examples=["2021/2022"])
    to_year: Optional[str] = Field(default=None, examples=["2024/2025"])

    @field_validator("from_year", "to_year")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class YearlyTrend(BaseSchema):
    academic_year: str
    total_applications: int = Field(0, description="Applications submitted during the year")
    accepted_applications: int = 0
    acceptance_rate: float = 0.0
    average_grade: float = Field(0.0, description="0 when nothing was accepted that year")
    min_grade: int = 0
    max_grade: int = 0


class DormTrend(BaseSchema):
    dormitory_id: str
    dormitory_name: str
    total_applications: int
    accepted_applications: int
    acceptance_rate: float


class TrendMetrics(BaseSchema):
    total_years: int
    average_applications_per_year: float
    average_accepted_per_year: float
    average_yearly_change: float = Field(
        0.0,
        description="Mean year-over-year change of accepted applications",
    )
    trend_slope: float = Field(0.0, description="Least-squares slope of accepted applications per year")
    trend_direction: TrendDirection


class ApplicationTrends(BaseSchema):
    yearly_trends: List[YearlyTrend] = Field(default_factory=list)
    dorm_trends: List[DormTrend] = Field(default_factory=list)
    metrics: TrendMetrics
