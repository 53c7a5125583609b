"""
Payment repository.
"""

from app.models.payment import Payment
from app.repositories.base.base_repository import BaseRepository


class PaymentRepository(BaseRepository[Payment]):
    """Read access to monthly payments; statistics read them all at once."""
