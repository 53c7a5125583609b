"""
Database enums mirroring schema enums.

Provides enum definitions shared by the ORM models and the
Pydantic schemas.
"""

import enum


class Amenity(str, enum.Enum):
    """Known room amenity tags, stored verbatim on rooms."""
    AIR_CONDITIONING = "klima"
    TERRACE = "terasa"
    PRIVATE_BATHROOM = "sopstveno kupatilo"
    ELECTRICITY = "áram"
    WINDOW = "ablak"
    CLEAN_WALL = "neisvrljan zid"

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()


class PaymentStatus(str, enum.Enum):
    """Monthly payment status."""
    PAID = "paid"
    PENDING = "pending"
    OVERDUE = "overdue"


class OccupancyLevel(str, enum.Enum):
    """Heatmap occupancy bucket."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class TrendDirection(str, enum.Enum):
    """Direction of the accepted-applications trend."""
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


class ExportFormat(str, enum.Enum):
    """Supported export formats."""
    JSON = "json"
    CSV = "csv"
