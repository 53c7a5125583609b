"""
Open Data API

Public, read-only endpoints over the dormitory data:
- Room search with amenity, capacity and address filters
- System-wide and per-dormitory statistics
- Dormitory comparison
- Application trends across academic years
- Occupancy heatmap
- Dataset exports (JSON, CSV)
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response

from app.api import deps
from app.schemas.open_data import (
    AcceptedApplicationResponse,
    AmenityInfo,
    ApplicationTrends,
    DormComparison,
    DormitorySummary,
    DormStatistics,
    ExportRequest,
    OccupancyHeatmap,
    PublicStatistics,
    TrendsQuery,
)
from app.schemas.room import RoomSearchFilters, RoomSearchResult
from app.services.open_data import (
    CatalogService,
    ComparisonService,
    ExportService,
    OccupancyHeatmapService,
    RoomSearchService,
    StatisticsService,
    TrendsService,
)

router = APIRouter()


# ==================== Rooms ====================

@router.get("/rooms/search", response_model=RoomSearchResult)
def search_rooms(
    amenities: Optional[str] = Query(None, description="Comma-separated amenity tags, all required"),
    dormitory_id: Optional[str] = Query(None),
    address: Optional[str] = Query(None, description="Case-insensitive address substring"),
    exact_capacity: Optional[int] = Query(None),
    min_capacity: Optional[int] = Query(None),
    max_capacity: Optional[int] = Query(None),
    only_available: bool = Query(False),
    limit: Optional[int] = Query(None),
    offset: int = Query(0),
    service: RoomSearchService = Depends(deps.get_room_search_service),
):
    """Search rooms; results are ordered by room ID."""
    filters = RoomSearchFilters(
        amenities=deps.split_csv_param(amenities),
        dormitory_id=dormitory_id,
        address_substring=address,
        exact_capacity=exact_capacity,
        min_capacity=min_capacity,
        max_capacity=max_capacity,
        only_available=only_available,
        limit=limit,
        offset=offset,
    )
    return deps.unwrap_result(service.search_rooms(filters))


@router.get("/rooms/{room_id}/applications", response_model=List[AcceptedApplicationResponse])
def room_applications(
    room_id: str,
    service: CatalogService = Depends(deps.get_catalog_service),
):
    return deps.unwrap_result(service.get_room_applications(room_id))


@router.get("/amenities", response_model=List[AmenityInfo])
def list_amenities(service: CatalogService = Depends(deps.get_catalog_service)):
    return deps.unwrap_result(service.list_amenities())


# ==================== Dormitories ====================

@router.get("/dorms/list", response_model=List[DormitorySummary])
def list_dormitories(service: CatalogService = Depends(deps.get_catalog_service)):
    return deps.unwrap_result(service.list_dormitories())


@router.get("/dorms/compare", response_model=DormComparison)
def compare_dormitories(
    dorm_ids: Optional[str] = Query(None, description="Comma-separated dormitory IDs"),
    service: ComparisonService = Depends(deps.get_comparison_service),
):
    """Side-by-side statistics; unknown IDs are reported per entry."""
    return deps.unwrap_result(service.compare_dorms(deps.split_csv_param(dorm_ids)))


@router.get("/dorms/{dormitory_id}/statistics", response_model=DormStatistics)
def dormitory_statistics(
    dormitory_id: str,
    service: StatisticsService = Depends(deps.get_statistics_service),
):
    return deps.unwrap_result(service.get_dorm_statistics(dormitory_id))


# ==================== Analytics ====================

@router.get("/statistics", response_model=PublicStatistics)
def public_statistics(service: StatisticsService = Depends(deps.get_statistics_service)):
    return deps.unwrap_result(service.get_public_statistics())


@router.get("/applications/academic-year", response_model=List[AcceptedApplicationResponse])
def accepted_by_academic_year(
    academic_year: str = Query(..., examples=["2023/2024"]),
    service: CatalogService = Depends(deps.get_catalog_service),
):
    return deps.unwrap_result(service.get_accepted_by_academic_year(academic_year))


@router.get("/trends/applications", response_model=ApplicationTrends)
def application_trends(
    from_year: Optional[str] = Query(None, examples=["2021/2022"]),
    to_year: Optional[str] = Query(None, examples=["2024/2025"]),
    service: TrendsService = Depends(deps.get_trends_service),
):
    query = TrendsQuery(from_year=from_year, to_year=to_year)
    return deps.unwrap_result(service.get_application_trends(query))


@router.get("/occupancy/heatmap", response_model=OccupancyHeatmap)
def occupancy_heatmap(service: OccupancyHeatmapService = Depends(deps.get_heatmap_service)):
    return deps.unwrap_result(service.get_heatmap())


# ==================== Export ====================

@router.get("/export")
def export_dataset(
    dataset: str = Query(..., examples=["rooms"]),
    format: str = Query("json", examples=["json", "csv"]),
    service: ExportService = Depends(deps.get_export_service),
):
    """Download a dataset as an attachment."""
    result = deps.unwrap_result(service.export(ExportRequest(dataset=dataset, format=format)))
    return Response(
        content=result.content,
        media_type=result.media_type,
        headers={"Content-Disposition": f'attachment; filename="{result.filename}"'},
    )
