# app/models/room/room.py
"""
Room model.

A room belongs to exactly one dormitory, has a fixed bed capacity and
an amenity set. Occupancy is not stored on the room; it is the number
of accepted applications that reference it.
"""

from typing import List, Optional

from sqlalchemy import JSON, CheckConstraint, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from app.models.base.base_model import TimestampModel

__all__ = ["Room", "normalize_amenities"]


def normalize_amenities(amenities: Optional[List[str]]) -> List[str]:
    """Collapse duplicate amenity tags keeping first-seen order."""
    seen = []
    for tag in amenities or []:
        if tag not in seen:
            seen.append(tag)
    return seen


class Room(TimestampModel):
    """
    Dormitory room with bed capacity and amenities.

    Amenity tags are stored verbatim; tags outside the known set are
    kept as-is.
    """

    __tablename__ = "rooms"
    __table_args__ = (
        CheckConstraint("bed_capacity > 0", name="ck_rooms_bed_capacity_positive"),
    )

    dormitory_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("dormitories.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    bed_capacity: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
        comment="Number of beds",
    )
    amenities: Mapped[List[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Amenity tags",
    )

    # Relationships
    dormitory: Mapped["Dormitory"] = relationship("Dormitory", back_populates="rooms")
    applications: Mapped[List["Application"]] = relationship(
        "Application",
        back_populates="room",
        cascade="all, delete-orphan",
    )
    accepted_applications: Mapped[List["AcceptedApplication"]] = relationship(
        "AcceptedApplication",
        back_populates="room",
        cascade="all, delete-orphan",
    )

    @validates("amenities")
    def validate_amenities(self, key: str, value: Optional[List[str]]) -> List[str]:
        return normalize_amenities(value)

    def __repr__(self) -> str:
        return f"<Room(id={self.id}, dormitory_id={self.dormitory_id}, bed_capacity={self.bed_capacity})>"
