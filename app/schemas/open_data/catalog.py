"""
Catalog schemas: dormitories, amenities and accepted applications.
"""

from __future__ import annotations

from typing import Optional

from app.schemas.common.base import BaseDBSchema, BaseSchema

__all__ = ["DormitorySummary", "AmenityInfo", "AcceptedApplicationResponse"]


class DormitorySummary(BaseSchema):
    id: str
    name: str
    address: str
    phone: Optional[str] = None
    email: Optional[str] = None


class AmenityInfo(BaseSchema):
    tag: str
    label: str


class AcceptedApplicationResponse(BaseDBSchema):
    application_id: Optional[str] = None
    student_index: str
    grade: int
    room_id: str
    academic_year: str
