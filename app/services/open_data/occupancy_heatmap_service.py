"""
Occupancy heatmap.

One point per dormitory bucketed into high / medium / low occupancy.
"""

from typing import List

from app.models.base.enums import OccupancyLevel
from app.services.base import BaseService, ServiceResult
from app.services.open_data.snapshot import EntitySnapshot
from app.services.open_data.statistics_service import dorm_statistics
from app.schemas.open_data.occupancy import HeatmapPoint, HeatmapSummary, OccupancyHeatmap


class OccupancyHeatmapService(BaseService):
    """Service for the per-dormitory occupancy heatmap."""

    def get_heatmap(self) -> ServiceResult[OccupancyHeatmap]:
        """
        Build the occupancy heatmap.

        Returns:
            ServiceResult containing OccupancyHeatmap
        """
        try:
            snapshot = EntitySnapshot.load(self.repositories)
            points = self.build_points(snapshot)
            return ServiceResult.success(
                OccupancyHeatmap(points=points, summary=self.summarize(points)),
                message="Occupancy heatmap computed",
            )

        except Exception as e:
            return self._handle_exception(e, "compute occupancy heatmap")

    def classify(self, rate: float) -> OccupancyLevel:
        if rate >= self.config.HEATMAP_HIGH_THRESHOLD:
            return OccupancyLevel.HIGH
        if rate >= self.config.HEATMAP_MEDIUM_THRESHOLD:
            return OccupancyLevel.MEDIUM
        return OccupancyLevel.LOW

    def build_points(self, snapshot: EntitySnapshot) -> List[HeatmapPoint]:
        points = []
        for dormitory in snapshot.dormitories:
            stats = dorm_statistics(snapshot, dormitory)
            points.append(
                HeatmapPoint(
                    dormitory_id=stats.dormitory_id,
                    dormitory_name=stats.dormitory_name,
                    address=stats.address,
                    capacity=stats.total_capacity,
                    occupied=stats.occupied_spots,
                    available=stats.available_spots,
                    occupancy_rate=stats.occupancy_rate,
                    status=self.classify(stats.occupancy_rate),
                )
            )
        return points

    @staticmethod
    def summarize(points: List[HeatmapPoint]) -> HeatmapSummary:
        """Aggregate over dormitories with at least one bed."""
        rates = [point.occupancy_rate for point in points if point.capacity > 0]
        if not rates:
            return HeatmapSummary()

        return HeatmapSummary(
            average_occupancy=round(sum(rates) / len(rates), 2),
            highest_occupancy=max(rates),
            lowest_occupancy=min(rates),
            full_dorms=sum(1 for rate in rates if rate >= 100),
            empty_dorms=sum(1 for rate in rates if rate == 0),
        )
