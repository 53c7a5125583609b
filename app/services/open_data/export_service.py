"""
Export service.

Serializes open-data datasets to JSON or CSV. Each dataset produces a
payload for JSON and a flat record list for CSV; for most datasets the
two are the same list.
"""

from collections import defaultdict
from enum import Enum
from typing import Any, Callable, Dict, List, Sequence, Tuple, Type

from pydantic import BaseModel

from app.core.exceptions import InvalidValueError, UnknownDatasetError
from app.models.base.enums import ExportFormat
from app.services.base import BaseService, ServiceResult
from app.services.open_data.occupancy_heatmap_service import OccupancyHeatmapService
from app.services.open_data.room_search_service import annotate_room
from app.services.open_data.snapshot import EntitySnapshot
from app.services.open_data.statistics_service import (
    StatisticsService,
    application_statistics,
    occupancy_rate,
)
from app.services.open_data.trends_service import TrendsService
from app.schemas.open_data.catalog import AcceptedApplicationResponse, DormitorySummary
from app.schemas.open_data.export import ExportRequest, ExportResult
from app.schemas.open_data.occupancy import HeatmapPoint
from app.schemas.open_data.statistics import ApplicationStatistics, DormStatistics
from app.schemas.open_data.trends import DormTrend, TrendsQuery, YearlyTrend
from app.schemas.room.room_search import RoomAvailability
from app.utils.formatters import round_rate, to_csv, to_json


class ExportDataset(str, Enum):
    """Exportable datasets."""
    DORMS = "dorms"
    ROOMS = "rooms"
    STATISTICS = "statistics"
    APPLICATION_ANALYTICS = "application-analytics"
    ACCEPTED_APPLICATIONS = "accepted-applications"
    YEARLY_TRENDS = "yearly-trends"
    DORM_TRENDS = "dorm-trends"
    AMENITIES_REPORT = "amenities-report"
    OCCUPANCY_REPORT = "occupancy-report"
    ROOM_TYPES = "room-types"


MEDIA_TYPES = {
    ExportFormat.JSON: "application/json",
    ExportFormat.CSV: "text/csv",
}

# (payload for JSON, records for CSV)
DatasetOutput = Tuple[Any, List[Any]]


def jsonable(value: Any) -> Any:
    """Convert schemas (and lists of them) to JSON-compatible data."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, (list, tuple)):
        return [jsonable(item) for item in value]
    return value


class ExportService(BaseService):
    """
    Service for dataset exports.

    Provides:
    - Dataset registry
    - JSON and CSV serialization
    """

    # Column set used for CSV headers when a dataset has no rows
    RECORD_SCHEMAS: Dict[ExportDataset, Type[BaseModel]] = {
        ExportDataset.DORMS: DormitorySummary,
        ExportDataset.ROOMS: RoomAvailability,
        ExportDataset.STATISTICS: DormStatistics,
        ExportDataset.APPLICATION_ANALYTICS: ApplicationStatistics,
        ExportDataset.ACCEPTED_APPLICATIONS: AcceptedApplicationResponse,
        ExportDataset.YEARLY_TRENDS: YearlyTrend,
        ExportDataset.DORM_TRENDS: DormTrend,
        ExportDataset.OCCUPANCY_REPORT: HeatmapPoint,
    }

    AMENITIES_REPORT_COLUMNS = ["amenity", "room_count", "percentage"]
    ROOM_TYPES_COLUMNS = [
        "bed_capacity",
        "rooms",
        "total_capacity",
        "occupied",
        "available",
        "occupancy_rate",
    ]

    @property
    def available_datasets(self) -> List[str]:
        return [dataset.value for dataset in ExportDataset]

    def export(self, request: ExportRequest) -> ServiceResult[ExportResult]:
        """
        Export a dataset.

        Args:
            request: Dataset name and format

        Returns:
            ServiceResult containing ExportResult; UNKNOWN_DATASET for an
            unknown dataset name, INVALID_VALUE for an unknown format
        """
        try:
            dataset, export_format = self._validate_request(request)

            snapshot = EntitySnapshot.load(self.repositories)
            payload, records = self._builders()[dataset](snapshot)

            if export_format is ExportFormat.JSON:
                content = to_json(jsonable(payload))
            else:
                content = to_csv(
                    jsonable(records),
                    delimiter=self.config.EXPORT_CSV_DELIMITER,
                    default_headers=self._default_headers(dataset),
                )

            self._log_operation(
                "export dataset",
                dataset.value,
                extra={"format": export_format.value, "records": len(records)},
            )

            return ServiceResult.success(
                ExportResult(
                    dataset=dataset.value,
                    format=export_format.value,
                    media_type=MEDIA_TYPES[export_format],
                    filename=f"{dataset.value}.{export_format.value}",
                    content=content,
                ),
                metadata={"records": len(records)},
            )

        except Exception as e:
            return self._handle_exception(
                e,
                "export dataset",
                request.dataset,
                additional_context={"format": request.format},
            )

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def _validate_request(self, request: ExportRequest) -> Tuple[ExportDataset, ExportFormat]:
        try:
            dataset = ExportDataset(request.dataset)
        except ValueError as e:
            raise UnknownDatasetError(request.dataset, self.available_datasets) from e

        try:
            export_format = ExportFormat((request.format or "").lower())
        except ValueError as e:
            raise InvalidValueError(
                f"Unsupported export format: {request.format}",
                field="format",
                value=request.format,
            ) from e

        return dataset, export_format

    def _default_headers(self, dataset: ExportDataset) -> Sequence[str]:
        if dataset is ExportDataset.AMENITIES_REPORT:
            return self.AMENITIES_REPORT_COLUMNS
        if dataset is ExportDataset.ROOM_TYPES:
            return self.ROOM_TYPES_COLUMNS
        schema = self.RECORD_SCHEMAS.get(dataset)
        return list(schema.model_fields) if schema else []

    # -------------------------------------------------------------------------
    # Dataset builders
    # -------------------------------------------------------------------------

    def _builders(self) -> Dict[ExportDataset, Callable[[EntitySnapshot], DatasetOutput]]:
        return {
            ExportDataset.DORMS: self._export_dorms,
            ExportDataset.ROOMS: self._export_rooms,
            ExportDataset.STATISTICS: self._export_statistics,
            ExportDataset.APPLICATION_ANALYTICS: self._export_application_analytics,
            ExportDataset.ACCEPTED_APPLICATIONS: self._export_accepted_applications,
            ExportDataset.YEARLY_TRENDS: self._export_yearly_trends,
            ExportDataset.DORM_TRENDS: self._export_dorm_trends,
            ExportDataset.AMENITIES_REPORT: self._export_amenities_report,
            ExportDataset.OCCUPANCY_REPORT: self._export_occupancy_report,
            ExportDataset.ROOM_TYPES: self._export_room_types,
        }

    def _export_dorms(self, snapshot: EntitySnapshot) -> DatasetOutput:
        records = [DormitorySummary.model_validate(dorm) for dorm in snapshot.dormitories]
        return records, records

    def _export_rooms(self, snapshot: EntitySnapshot) -> DatasetOutput:
        records = [
            annotate_room(room, snapshot.dormitory_index[room.dormitory_id], snapshot.occupied(room))
            for room in snapshot.rooms
            if room.dormitory_id in snapshot.dormitory_index
        ]
        return records, records

    def _export_statistics(self, snapshot: EntitySnapshot) -> DatasetOutput:
        payments = self.repositories.payments.find_all()
        statistics = StatisticsService(self.repositories, self.config).build_public_statistics(
            snapshot, payments
        )
        return statistics, statistics.dorm_statistics

    def _export_application_analytics(self, snapshot: EntitySnapshot) -> DatasetOutput:
        stats = application_statistics(snapshot.applications, snapshot.accepted_applications)
        return stats, [stats]

    def _export_accepted_applications(self, snapshot: EntitySnapshot) -> DatasetOutput:
        records = [
            AcceptedApplicationResponse.model_validate(accepted)
            for accepted in snapshot.accepted_applications
        ]
        return records, records

    def _export_yearly_trends(self, snapshot: EntitySnapshot) -> DatasetOutput:
        trends = TrendsService(self.repositories, self.config).build_yearly_trends(snapshot, TrendsQuery())
        return trends, trends

    def _export_dorm_trends(self, snapshot: EntitySnapshot) -> DatasetOutput:
        trends = TrendsService.build_dorm_trends(snapshot)
        return trends, trends

    def _export_amenities_report(self, snapshot: EntitySnapshot) -> DatasetOutput:
        """Rooms per amenity, most common first, with share of all rooms."""
        counts: Dict[str, int] = defaultdict(int)
        for room in snapshot.rooms:
            for tag in set(room.amenities or []):
                counts[tag] += 1

        total_rooms = len(snapshot.rooms)
        records = [
            {
                "amenity": tag,
                "room_count": count,
                "percentage": round_rate(count, total_rooms),
            }
            for tag, count in sorted(counts.items(), key=lambda item: (-item[1], item[0]))
        ]
        return records, records

    def _export_occupancy_report(self, snapshot: EntitySnapshot) -> DatasetOutput:
        heatmap_service = OccupancyHeatmapService(self.repositories, self.config)
        points = heatmap_service.build_points(snapshot)
        return {"points": jsonable(points), "summary": jsonable(heatmap_service.summarize(points))}, points

    def _export_room_types(self, snapshot: EntitySnapshot) -> DatasetOutput:
        """Capacity and occupancy per bed-capacity class, smallest first."""
        grouped: Dict[int, List] = defaultdict(list)
        for room in snapshot.rooms:
            grouped[room.bed_capacity].append(room)

        records = []
        for bed_capacity in sorted(grouped):
            rooms = grouped[bed_capacity]
            capacity = sum(room.bed_capacity for room in rooms)
            occupied = sum(snapshot.occupied(room) for room in rooms)
            records.append({
                "bed_capacity": bed_capacity,
                "rooms": len(rooms),
                "total_capacity": capacity,
                "occupied": occupied,
                "available": sum(max(0, room.bed_capacity - snapshot.occupied(room)) for room in rooms),
                "occupancy_rate": occupancy_rate(occupied, capacity),
            })
        return records, records
