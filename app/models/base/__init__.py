"""
Base models package.

Provides base classes, mixins and enums for all database models.
"""

from app.models.base.base_model import Base, BaseModel, TimestampModel
from app.models.base.mixins import AddressMixin, ContactMixin
from app.models.base.enums import (
    Amenity,
    ExportFormat,
    OccupancyLevel,
    PaymentStatus,
    TrendDirection,
)

__all__ = [
    "Base",
    "BaseModel",
    "TimestampModel",
    "AddressMixin",
    "ContactMixin",
    "Amenity",
    "ExportFormat",
    "OccupancyLevel",
    "PaymentStatus",
    "TrendDirection",
]
