"""
Occupancy heatmap schemas.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from app.models.base.enums import OccupancyLevel
from app.schemas.common.base import BaseSchema

__all__ = ["HeatmapPoint", "HeatmapSummary", "OccupancyHeatmap"]


class HeatmapPoint(BaseSchema):
    dormitory_id: str
    dormitory_name: str
    address: str
    capacity: int
    occupied: int
    available: int
    occupancy_rate: float
    status: OccupancyLevel


class HeatmapSummary(BaseSchema):
    """Aggregates over dormitories that have at least one bed."""

    average_occupancy: float = 0.0
    highest_occupancy: Optional[float] = None
    lowest_occupancy: Optional[float] = None
    full_dorms: int = Field(0, description="Dormitories at or above 100%")
    empty_dorms: int = Field(0, description="Dormitories at 0%")


class OccupancyHeatmap(BaseSchema):
    points: List[HeatmapPoint] = Field(default_factory=list)
    summary: HeatmapSummary
