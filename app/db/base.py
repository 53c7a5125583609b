"""SQLAlchemy Base with every model registered on its metadata."""
from app.models import (  # noqa: F401
    AcceptedApplication,
    Application,
    Base,
    Dormitory,
    Payment,
    Room,
)

__all__ = ["Base"]
