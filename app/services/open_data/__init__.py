"""
Open-data engines: room search, statistics, comparison, trends,
occupancy heatmap, catalog lookups and exports.
"""

from app.services.open_data.catalog_service import CatalogService
from app.services.open_data.comparison_service import ComparisonService
from app.services.open_data.export_service import ExportDataset, ExportService
from app.services.open_data.occupancy_heatmap_service import OccupancyHeatmapService
from app.services.open_data.room_search_service import RoomSearchService
from app.services.open_data.snapshot import EntitySnapshot
from app.services.open_data.statistics_service import StatisticsService
from app.services.open_data.trends_service import TrendsService

__all__ = [
    "CatalogService",
    "ComparisonService",
    "EntitySnapshot",
    "ExportDataset",
    "ExportService",
    "OccupancyHeatmapService",
    "RoomSearchService",
    "StatisticsService",
    "TrendsService",
]
