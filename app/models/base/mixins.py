"""
SQLAlchemy model mixins for reusable functionality.
"""

from typing import Optional

from sqlalchemy import Column, String
from sqlalchemy.orm import validates


class AddressMixin:
    """
    Mixin for a single-line postal address.

    Dormitory addresses are matched by substring, so they are kept
    as one free-text line rather than split into components.
    """

    address = Column(
        String(500),
        nullable=False,
        default="",
        comment="Street address"
    )


class ContactMixin:
    """Mixin for public contact information."""

    phone = Column(
        String(50),
        nullable=True,
        comment="Primary contact phone"
    )
    email = Column(
        String(255),
        nullable=True,
        comment="Contact email address"
    )

    @validates("email")
    def validate_email(self, key: str, value: Optional[str]) -> Optional[str]:
        """Normalize email to lowercase."""
        if value:
            return value.strip().lower()
        return value
