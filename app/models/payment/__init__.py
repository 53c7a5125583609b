from app.models.payment.payment import Payment

__all__ = ["Payment"]
