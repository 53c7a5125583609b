"""
Comparison engine.

Side-by-side statistics for a bounded set of dormitories. Unknown ids do
not fail the call; they come back as entries carrying a NOT_FOUND marker.
"""

from typing import Iterable, List

from app.core.exceptions import EmptyInputError, ErrorCode, TooManyInputsError
from app.services.base import BaseService, ServiceResult
from app.services.open_data.snapshot import EntitySnapshot
from app.services.open_data.statistics_service import (
    amenity_distribution,
    application_statistics,
    dorm_statistics,
    room_type_distribution,
)
from app.schemas.open_data.comparison import (
    ComparisonError,
    DormComparison,
    DormComparisonDetails,
    DormComparisonEntry,
)


def normalize_ids(dormitory_ids: Iterable[str]) -> List[str]:
    """Strip ids, drop blanks and collapse duplicates keeping first occurrence."""
    unique: List[str] = []
    for raw in dormitory_ids:
        value = (raw or "").strip()
        if value and value not in unique:
            unique.append(value)
    return unique


class ComparisonService(BaseService):
    """Service for comparing dormitories."""

    def compare_dorms(self, dormitory_ids: Iterable[str]) -> ServiceResult[DormComparison]:
        """
        Compare dormitories.

        Args:
            dormitory_ids: Ids to compare, in the order they should be reported

        Returns:
            ServiceResult containing DormComparison; EMPTY_INPUT or
            TOO_MANY_INPUTS when the id count is out of bounds
        """
        try:
            ids = normalize_ids(dormitory_ids)
            max_dorms = self.config.COMPARISON_MAX_DORMS

            if not ids:
                raise EmptyInputError("At least one dormitory id is required", field="dormitory_ids")
            if len(ids) > max_dorms:
                raise TooManyInputsError(
                    f"At most {max_dorms} dormitories can be compared",
                    limit=max_dorms,
                    received=len(ids),
                )

            snapshot = EntitySnapshot.load(self.repositories, dormitory_ids=ids)
            entries = [self._entry(snapshot, dormitory_id) for dormitory_id in ids]
            not_found = [entry.dormitory_id for entry in entries if not entry.found]

            if not_found:
                self._logger.info(
                    "Comparison requested unknown dormitories",
                    extra={"not_found": not_found},
                )

            return ServiceResult.success(
                DormComparison(
                    dormitories=entries,
                    requested=len(ids),
                    found=len(entries) - len(not_found),
                    not_found=not_found,
                ),
                message=f"Compared {len(entries) - len(not_found)} of {len(ids)} dormitories",
            )

        except Exception as e:
            return self._handle_exception(e, "compare dormitories")

    @staticmethod
    def _entry(snapshot: EntitySnapshot, dormitory_id: str) -> DormComparisonEntry:
        dormitory = snapshot.dormitory_index.get(dormitory_id)
        if dormitory is None:
            return DormComparisonEntry(
                dormitory_id=dormitory_id,
                found=False,
                error=ComparisonError(
                    code=ErrorCode.NOT_FOUND,
                    message=f"Dormitory not found (ID: {dormitory_id})",
                ),
            )

        rooms = snapshot.rooms_by_dormitory.get(dormitory_id, [])
        return DormComparisonEntry(
            dormitory_id=dormitory_id,
            found=True,
            details=DormComparisonDetails(
                dormitory_id=dormitory.id,
                name=dormitory.name,
                address=dormitory.address or "",
                phone=dormitory.phone,
                email=dormitory.email,
                statistics=dorm_statistics(snapshot, dormitory),
                room_distribution=room_type_distribution(rooms),
                amenities_offered=amenity_distribution(rooms),
                application_metrics=application_statistics(
                    snapshot.applications_by_dormitory.get(dormitory_id, []),
                    snapshot.accepted_by_dormitory.get(dormitory_id, []),
                ),
            ),
        )
