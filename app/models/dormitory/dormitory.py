"""
Dormitory model.

A dormitory is the top-level public entity: it owns rooms and carries
the contact information published in every open-data view.
"""

from typing import List

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import TimestampModel
from app.models.base.mixins import AddressMixin, ContactMixin

__all__ = ["Dormitory"]


class Dormitory(TimestampModel, AddressMixin, ContactMixin):
    """Student dormitory with address and contact details."""

    __tablename__ = "dormitories"

    name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
        index=True,
        comment="Public dormitory name",
    )

    rooms: Mapped[List["Room"]] = relationship(
        "Room",
        back_populates="dormitory",
        cascade="all, delete-orphan",
        order_by="Room.id",
    )

    def __repr__(self) -> str:
        return f"<Dormitory(id={self.id}, name={self.name})>"
