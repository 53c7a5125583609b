"""
Statistics result schemas.

Rates are percentages rounded to two decimals. Average grades are
``None`` when there is nothing to average.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import Field

from app.schemas.common.base import BaseSchema

__all__ = [
    "ApplicationStatistics",
    "PaymentStatistics",
    "DormStatistics",
    "DormRanking",
    "PublicStatistics",
]


class ApplicationStatistics(BaseSchema):
    """Application counts and grade averages."""

    total_applications: int = 0
    active_applications: int = 0
    accepted_applications: int = 0
    acceptance_rate: float = Field(0.0, description="accepted / total x 100")
    average_grade_of_accepted: Optional[float] = Field(
        default=None,
        description="Mean grade of accepted applications, null when there are none",
    )
    average_grade_of_applications: Optional[float] = Field(
        default=None,
        description="Mean grade of submitted applications, null when there are none",
    )


class PaymentStatistics(BaseSchema):
    """Payment status counts and amounts."""

    total_payments: int = 0
    paid: int = 0
    pending: int = 0
    overdue: int = Field(0, description="Overdue, including pending payments past their due date")
    unrecognized: int = Field(0, description="Payments whose stored status is none of the above")
    collection_rate: float = Field(0.0, description="paid / total x 100")
    total_amount: float = 0.0
    paid_amount: float = 0.0
    outstanding_amount: float = 0.0


class DormStatistics(BaseSchema):
    """Capacity and occupancy of one dormitory."""

    dormitory_id: str
    dormitory_name: str
    address: str
    total_rooms: int
    total_capacity: int
    occupied_spots: int
    available_spots: int
    overbooked_spots: int = Field(0, description="Accepted applications beyond bed capacity")
    occupancy_rate: float = Field(..., description="occupied / capacity x 100, capped at 100")
    average_grade: Optional[float] = Field(
        default=None,
        description="Mean grade of accepted applications in this dormitory",
    )
    room_types: Dict[int, int] = Field(
        default_factory=dict,
        description="Bed capacity to number of rooms",
    )
    amenities: Dict[str, int] = Field(
        default_factory=dict,
        description="Amenity tag to number of rooms offering it",
    )


class DormRanking(BaseSchema):
    """Entry of a most-full / most-empty list."""

    dormitory_id: str
    dormitory_name: str
    occupancy_rate: float
    occupied_spots: int
    total_capacity: int


class PublicStatistics(BaseSchema):
    """System-wide open statistics."""

    total_dorms: int
    total_rooms: int
    total_capacity: int
    total_occupied: int
    available_spots: int
    occupancy_rate: float
    amenities_distribution: Dict[str, int] = Field(default_factory=dict)
    room_type_distribution: Dict[int, int] = Field(default_factory=dict)
    application_statistics: ApplicationStatistics
    payment_statistics: PaymentStatistics
    dorm_statistics: List[DormStatistics] = Field(default_factory=list)
    most_full: List[DormRanking] = Field(default_factory=list)
    most_empty: List[DormRanking] = Field(default_factory=list)
    last_updated: datetime
