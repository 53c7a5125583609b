"""
Trends engine.

Year-by-year and per-dormitory application figures plus an overall
trend classification.

Definitions:
- A year's ``accepted_applications`` groups AcceptedApplication rows by
  their ``academic_year`` label. Rows with a malformed label are skipped.
- A year's ``total_applications`` counts Applications *submitted* during
  that academic year, derived from ``created_at`` and the configured
  start month.
- The year axis is contiguous; years without data are reported with
  all numeric fields at zero.
- ``trend_direction`` compares the latest accepted count with the level
  a linear fit over the earlier years reached, within a tolerance band.
"""

import statistics
from collections import Counter, defaultdict
from typing import Dict, List, Optional, Sequence

from app.core.exceptions import InvalidRangeError, InvalidValueError
from app.models.base.enums import TrendDirection
from app.services.base import BaseService, ServiceResult
from app.services.open_data.snapshot import EntitySnapshot
from app.schemas.open_data.trends import (
    ApplicationTrends,
    DormTrend,
    TrendMetrics,
    TrendsQuery,
    YearlyTrend,
)
from app.utils.date_utils import (
    DateUtilsError,
    academic_year_for,
    academic_year_range,
    is_valid_academic_year,
    parse_academic_year,
)
from app.utils.formatters import round_mean, round_rate


def classify_trend(counts: Sequence[int], tolerance_percent: float) -> tuple:
    """
    Classify a series of yearly counts.

    A line fitted over the earlier years gives the level the series had
    reached before the latest year. The latest count is compared with that
    level; a change inside ±``tolerance_percent`` of it is stable.

    Returns:
        (slope over all years, direction); fewer than two points is stable
    """
    if len(counts) < 2:
        return 0.0, TrendDirection.STABLE

    slope, _ = statistics.linear_regression(range(len(counts)), counts)

    earlier = counts[:-1]
    if len(earlier) >= 2:
        earlier_slope, intercept = statistics.linear_regression(range(len(earlier)), earlier)
        baseline = max(0.0, intercept + earlier_slope * (len(earlier) - 1))
    else:
        baseline = float(earlier[0])

    latest = counts[-1]
    if baseline == 0:
        direction = TrendDirection.INCREASING if latest > 0 else TrendDirection.STABLE
        return round(slope, 4), direction

    relative_change = (latest - baseline) / baseline * 100
    if relative_change > tolerance_percent:
        direction = TrendDirection.INCREASING
    elif relative_change < -tolerance_percent:
        direction = TrendDirection.DECREASING
    else:
        direction = TrendDirection.STABLE
    return round(slope, 4), direction


class TrendsService(BaseService):
    """Service for application trends across academic years."""

    def get_application_trends(
        self,
        query: Optional[TrendsQuery] = None,
    ) -> ServiceResult[ApplicationTrends]:
        """
        Compute application trends.

        Args:
            query: Optional academic-year window

        Returns:
            ServiceResult containing ApplicationTrends
        """
        query = query or TrendsQuery()
        try:
            self._validate_query(query)

            snapshot = EntitySnapshot.load(self.repositories)
            yearly = self.build_yearly_trends(snapshot, query)
            data = ApplicationTrends(
                yearly_trends=yearly,
                dorm_trends=self.build_dorm_trends(snapshot),
                metrics=self.build_metrics(yearly),
            )

            return ServiceResult.success(
                data,
                message=f"Trends computed over {len(yearly)} academic years",
            )

        except Exception as e:
            return self._handle_exception(
                e,
                "compute application trends",
                additional_context=query.model_dump(exclude_none=True),
            )

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    @staticmethod
    def _validate_query(query: TrendsQuery) -> None:
        bounds = {}
        for field in ("from_year", "to_year"):
            value = getattr(query, field)
            if value is None:
                continue
            try:
                bounds[field] = parse_academic_year(value)
            except DateUtilsError as e:
                raise InvalidValueError(str(e), field=field, value=value) from e

        if len(bounds) == 2 and bounds["from_year"] > bounds["to_year"]:
            raise InvalidRangeError(
                f"from_year ({query.from_year}) is after to_year ({query.to_year})",
                lower=query.from_year,
                upper=query.to_year,
            )

    # -------------------------------------------------------------------------
    # Aggregation
    # -------------------------------------------------------------------------

    def build_yearly_trends(self, snapshot: EntitySnapshot, query: TrendsQuery) -> List[YearlyTrend]:
        """One entry per academic year of the contiguous range."""
        grades_by_year: Dict[str, List[int]] = defaultdict(list)
        skipped = 0
        for accepted in snapshot.accepted_applications:
            if is_valid_academic_year(accepted.academic_year):
                grades_by_year[accepted.academic_year].append(accepted.grade)
            else:
                skipped += 1
                self._logger.warning(
                    "Skipping accepted application with malformed academic year",
                    extra={
                        "accepted_application_id": accepted.id,
                        "academic_year": accepted.academic_year,
                    },
                )

        start_month = self.config.ACADEMIC_YEAR_START_MONTH
        submitted = Counter(
            academic_year_for(application.created_at, start_month)
            for application in snapshot.applications
            if application.created_at is not None
        )

        years = self._year_axis(set(grades_by_year) | set(submitted), query)

        trends = []
        for year in years:
            grades = grades_by_year.get(year, [])
            total = submitted.get(year, 0)
            trends.append(
                YearlyTrend(
                    academic_year=year,
                    total_applications=total,
                    accepted_applications=len(grades),
                    acceptance_rate=round_rate(len(grades), total),
                    average_grade=round_mean(grades) or 0.0,
                    min_grade=min(grades, default=0),
                    max_grade=max(grades, default=0),
                )
            )

        if skipped:
            self._logger.info("Trend years computed", extra={"years": len(trends), "skipped": skipped})
        return trends

    @staticmethod
    def _year_axis(observed: set, query: TrendsQuery) -> List[str]:
        """
        Contiguous academic years covering the observed data.

        Requested bounds widen the axis when data is missing on either end
        and clip it when data lies outside them.
        """
        candidates = set(observed)
        if query.from_year:
            candidates.add(query.from_year)
        if query.to_year:
            candidates.add(query.to_year)
        if not candidates:
            return []

        first = query.from_year or min(candidates, key=parse_academic_year)
        last = query.to_year or max(candidates, key=parse_academic_year)
        if parse_academic_year(first) > parse_academic_year(last):
            return []
        return academic_year_range(first, last)

    @staticmethod
    def build_dorm_trends(snapshot: EntitySnapshot) -> List[DormTrend]:
        """Per-dormitory totals across all years."""
        trends = []
        for dormitory in snapshot.dormitories:
            total = len(snapshot.applications_by_dormitory.get(dormitory.id, []))
            accepted = len(snapshot.accepted_by_dormitory.get(dormitory.id, []))
            trends.append(
                DormTrend(
                    dormitory_id=dormitory.id,
                    dormitory_name=dormitory.name,
                    total_applications=total,
                    accepted_applications=accepted,
                    acceptance_rate=round_rate(accepted, total),
                )
            )
        return trends

    def build_metrics(self, yearly: Sequence[YearlyTrend]) -> TrendMetrics:
        accepted_counts = [year.accepted_applications for year in yearly]
        totals = [year.total_applications for year in yearly]
        deltas = [b - a for a, b in zip(accepted_counts, accepted_counts[1:])]

        slope, direction = classify_trend(accepted_counts, self.config.TREND_TOLERANCE_PERCENT)

        return TrendMetrics(
            total_years=len(yearly),
            average_applications_per_year=round_mean(totals) or 0.0,
            average_accepted_per_year=round_mean(accepted_counts) or 0.0,
            average_yearly_change=round_mean(deltas) or 0.0,
            trend_slope=slope,
            trend_direction=direction,
        )
