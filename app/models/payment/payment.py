"""
Payment model.

Monthly dormitory fee records attached to an accepted application.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import CheckConstraint, Date, DateTime, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import TimestampModel
from app.models.base.enums import PaymentStatus

__all__ = ["Payment"]


class Payment(TimestampModel):
    """Monthly payment for one accepted application."""

    __tablename__ = "payments"
    __table_args__ = (
        CheckConstraint(
            "status IN ('paid', 'pending', 'overdue')",
            name="ck_payments_status_known",
        ),
    )

    accepted_application_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("accepted_applications.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True, index=True)
    amount: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        comment="Amount due for the period",
    )
    payment_period: Mapped[str] = mapped_column(
        String(7),
        nullable=False,
        index=True,
        comment="Billing period as YYYY-MM",
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=PaymentStatus.PENDING.value,
        index=True,
    )
    due_date: Mapped[date] = mapped_column(Date, nullable=False)
    paid_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    accepted_application: Mapped["AcceptedApplication"] = relationship(
        "AcceptedApplication",
        back_populates="payments",
    )

    def effective_status(self, today: date) -> Optional[PaymentStatus]:
        """
        Status with pending payments past their due date reported as overdue.

        None for a status outside PaymentStatus.
        """
        try:
            status = PaymentStatus(self.status)
        except ValueError:
            return None
        if status is PaymentStatus.PENDING and self.due_date < today:
            return PaymentStatus.OVERDUE
        return status

    def __repr__(self) -> str:
        return f"<Payment(id={self.id}, period={self.payment_period}, status={self.status})>"
