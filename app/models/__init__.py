"""
ORM models for the dormitory open-data store.

Importing this package registers every table on ``Base.metadata``.
"""

from app.models.base import Base
from app.models.dormitory import Dormitory
from app.models.room import Room
from app.models.application import AcceptedApplication, Application
from app.models.payment import Payment

__all__ = [
    "Base",
    "Dormitory",
    "Room",
    "Application",
    "AcceptedApplication",
    "Payment",
]
