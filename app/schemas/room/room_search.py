"""
Room search schemas.

``RoomSearchFilters`` is deliberately permissive: bounds, pagination and
filter combinations are checked by the search service so callers get a
specific error kind instead of a generic validation failure.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field, field_validator

from app.models.room import normalize_amenities
from app.schemas.common.base import BaseSchema

__all__ = [
    "RoomSearchFilters",
    "RoomAvailability",
    "RoomSearchResult",
]


class RoomSearchFilters(BaseSchema):
    """
    Room search configuration.

    Amenities are combined with AND semantics and compared exactly.
    ``exact_capacity`` cannot be combined with ``min_capacity`` or
    ``max_capacity``.
    """

    amenities: List[str] = Field(
        default_factory=list,
        description="Every listed amenity must be present on the room",
        examples=[["klima", "terasa"]],
    )
    dormitory_id: Optional[str] = Field(
        default=None,
        description="Restrict to one dormitory",
    )
    address_substring: Optional[str] = Field(
        default=None,
        description="Case-insensitive substring of the dormitory address",
        examples=["Bulevar"],
    )
    exact_capacity: Optional[int] = Field(
        default=None,
        description="Bed capacity must equal this value",
    )
    min_capacity: Optional[int] = Field(
        default=None,
        description="Bed capacity lower bound (inclusive)",
    )
    max_capacity: Optional[int] = Field(
        default=None,
        description="Bed capacity upper bound (inclusive)",
    )
    only_available: bool = Field(
        default=False,
        description="Only rooms with at least one free bed",
    )
    limit: Optional[int] = Field(
        default=None,
        description="Page size; the configured default applies when omitted",
    )
    offset: int = Field(
        default=0,
        description="Number of matching rooms to skip",
    )

    @field_validator("amenities", mode="before")
    @classmethod
    def normalize_amenity_list(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            v = v.split(",")
        return normalize_amenities([tag.strip() for tag in v if tag and tag.strip()])

    @field_validator("dormitory_id", "address_substring")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class RoomAvailability(BaseSchema):
    """A room annotated with its dormitory and current occupancy."""

    room_id: str
    dormitory_id: str
    dormitory_name: str
    dormitory_address: str
    dormitory_phone: Optional[str] = None
    dormitory_email: Optional[str] = None
    bed_capacity: int
    amenities: List[str] = Field(default_factory=list)
    occupied: int = Field(..., description="Accepted applications referencing the room")
    available_spots: int = Field(..., description="max(0, bed_capacity - occupied)")
    is_available: bool
    is_overbooked: bool = Field(
        default=False,
        description="More accepted applications than beds",
    )


class RoomSearchResult(BaseSchema):
    """One page of room search results."""

    rooms: List[RoomAvailability] = Field(default_factory=list)
    count: int = Field(..., description="Rooms on this page")
    total: int = Field(..., description="Rooms matching the filters before pagination")
    limit: int
    offset: int
