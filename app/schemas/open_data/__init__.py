"""
Open-data result schemas.
"""

from app.schemas.open_data.catalog import AcceptedApplicationResponse, AmenityInfo, DormitorySummary
from app.schemas.open_data.comparison import (
    ComparisonError,
    DormComparison,
    DormComparisonDetails,
    DormComparisonEntry,
)
from app.schemas.open_data.export import ExportRequest, ExportResult
from app.schemas.open_data.occupancy import HeatmapPoint, HeatmapSummary, OccupancyHeatmap
from app.schemas.open_data.statistics import (
    ApplicationStatistics,
    DormRanking,
    DormStatistics,
    PaymentStatistics,
    PublicStatistics,
)
from app.schemas.open_data.trends import (
    ApplicationTrends,
    DormTrend,
    TrendMetrics,
    TrendsQuery,
    YearlyTrend,
)

__all__ = [
    "AcceptedApplicationResponse",
    "AmenityInfo",
    "DormitorySummary",
    "ComparisonError",
    "DormComparison",
    "DormComparisonDetails",
    "DormComparisonEntry",
    "ExportRequest",
    "ExportResult",
    "HeatmapPoint",
    "HeatmapSummary",
    "OccupancyHeatmap",
    "ApplicationStatistics",
    "DormRanking",
    "DormStatistics",
    "PaymentStatistics",
    "PublicStatistics",
    "ApplicationTrends",
    "DormTrend",
    "TrendMetrics",
    "TrendsQuery",
    "YearlyTrend",
]
