"""
Room application models.

An Application is a student's request for a room. Approval creates an
AcceptedApplication for an academic year and deactivates the original
Application without deleting it. The number of AcceptedApplication
rows per room is that room's occupancy.
"""

from typing import List, Optional

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import TimestampModel

__all__ = ["Application", "AcceptedApplication"]

GRADE_RANGE_CHECK = "grade >= 6 AND grade <= 10"


class Application(TimestampModel):
    """Pending or historical room application."""

    __tablename__ = "applications"
    __table_args__ = (
        CheckConstraint(GRADE_RANGE_CHECK, name="ck_applications_grade_range"),
    )

    student_index: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        index=True,
        comment="Student index number",
    )
    grade: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Grade average, 6 to 10",
    )
    room_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("rooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        nullable=True,
        index=True,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        index=True,
        comment="False once the application has been processed",
    )

    room: Mapped["Room"] = relationship("Room", back_populates="applications")

    def __repr__(self) -> str:
        return f"<Application(id={self.id}, room_id={self.room_id}, active={self.is_active})>"


class AcceptedApplication(TimestampModel):
    """Approved application occupying one bed for an academic year."""

    __tablename__ = "accepted_applications"
    __table_args__ = (
        CheckConstraint(GRADE_RANGE_CHECK, name="ck_accepted_applications_grade_range"),
    )

    application_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("applications.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    student_index: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    grade: Mapped[int] = mapped_column(Integer, nullable=False)
    room_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("rooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True, index=True)
    academic_year: Mapped[str] = mapped_column(
        String(9),
        nullable=False,
        index=True,
        comment="Academic year as YYYY/YYYY",
    )

    room: Mapped["Room"] = relationship("Room", back_populates="accepted_applications")
    payments: Mapped[List["Payment"]] = relationship(
        "Payment",
        back_populates="accepted_application",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return (
            f"<AcceptedApplication(id={self.id}, room_id={self.room_id}, "
            f"academic_year={self.academic_year})>"
        )
