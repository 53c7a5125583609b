"""
Statistics aggregator for the public open-data views.

Computes per-dormitory capacity and occupancy figures, system-wide
application and payment statistics, and most-full / most-empty rankings.

Occupancy rules:
- A room's occupancy is the number of accepted applications for it.
- Over-booking is tolerated, not rejected: a room's free beds are
  ``max(0, capacity - occupied)`` and the excess is reported as
  ``overbooked_spots``. Occupancy rates are capped at 100.
- Rates are 0 when the denominator is 0.
- Average grades are ``None`` when there is nothing to average.
"""

from collections import Counter
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence

from app.core.exceptions import NotFoundError
from app.models import AcceptedApplication, Application, Dormitory, Payment, Room
from app.models.base.enums import PaymentStatus
from app.services.base import BaseService, ServiceResult
from app.services.open_data.snapshot import EntitySnapshot
from app.schemas.open_data.statistics import (
    ApplicationStatistics,
    DormRanking,
    DormStatistics,
    PaymentStatistics,
    PublicStatistics,
)
from app.utils.date_utils import today_utc
from app.utils.formatters import round_mean, round_rate


# ----------------------------------------------------------------------
# Pure aggregations
# ----------------------------------------------------------------------

def occupancy_rate(occupied: int, capacity: int) -> float:
    """occupied / capacity x 100, capped at 100 and 0 for empty capacity."""
    return round_rate(occupied, capacity)


def amenity_distribution(rooms: Iterable[Room]) -> Dict[str, int]:
    """Number of rooms offering each amenity, most common first."""
    counts = Counter(tag for room in rooms for tag in set(room.amenities or []))
    return dict(sorted(counts.items(), key=lambda item: (-item[1], item[0])))


def room_type_distribution(rooms: Iterable[Room]) -> Dict[int, int]:
    """Number of rooms per bed capacity, smallest capacity first."""
    counts = Counter(room.bed_capacity for room in rooms)
    return dict(sorted(counts.items()))


def application_statistics(
    applications: Sequence[Application],
    accepted: Sequence[AcceptedApplication],
) -> ApplicationStatistics:
    total = len(applications)
    accepted_count = len(accepted)
    return ApplicationStatistics(
        total_applications=total,
        active_applications=sum(1 for app in applications if app.is_active),
        accepted_applications=accepted_count,
        acceptance_rate=round_rate(accepted_count, total),
        average_grade_of_accepted=round_mean([a.grade for a in accepted]),
        average_grade_of_applications=round_mean([a.grade for a in applications]),
    )


def payment_statistics(payments: Sequence[Payment], today: date) -> PaymentStatistics:
    """
    Count payments by effective status.

    Pending payments past their due date count as overdue; a stored
    status outside PaymentStatus is counted as unrecognized.
    """
    counts: Counter = Counter(payment.effective_status(today) for payment in payments)
    total_amount = sum((Decimal(p.amount) for p in payments), Decimal("0"))
    paid_amount = sum(
        (Decimal(p.amount) for p in payments if p.status == PaymentStatus.PAID.value),
        Decimal("0"),
    )
    return PaymentStatistics(
        total_payments=len(payments),
        paid=counts[PaymentStatus.PAID],
        pending=counts[PaymentStatus.PENDING],
        overdue=counts[PaymentStatus.OVERDUE],
        unrecognized=counts[None],
        collection_rate=round_rate(counts[PaymentStatus.PAID], len(payments)),
        total_amount=float(total_amount),
        paid_amount=float(paid_amount),
        outstanding_amount=float(total_amount - paid_amount),
    )


def dorm_statistics(snapshot: EntitySnapshot, dormitory: Dormitory) -> DormStatistics:
    rooms = snapshot.rooms_by_dormitory.get(dormitory.id, [])
    capacity = sum(room.bed_capacity for room in rooms)
    occupied = sum(snapshot.occupied(room) for room in rooms)
    available = sum(max(0, room.bed_capacity - snapshot.occupied(room)) for room in rooms)
    overbooked = sum(max(0, snapshot.occupied(room) - room.bed_capacity) for room in rooms)
    accepted = snapshot.accepted_by_dormitory.get(dormitory.id, [])

    return DormStatistics(
        dormitory_id=dormitory.id,
        dormitory_name=dormitory.name,
        address=dormitory.address or "",
        total_rooms=len(rooms),
        total_capacity=capacity,
        occupied_spots=occupied,
        available_spots=available,
        overbooked_spots=overbooked,
        occupancy_rate=occupancy_rate(occupied, capacity),
        average_grade=round_mean([a.grade for a in accepted]),
        room_types=room_type_distribution(rooms),
        amenities=amenity_distribution(rooms),
    )


def rank_dormitories(
    records: Sequence[DormStatistics],
    limit: int,
    most_full: bool = True,
) -> List[DormRanking]:
    """
    Top dormitories by occupancy rate.

    Ties are broken by dormitory ID ascending in both directions.
    """
    if most_full:
        ordered = sorted(records, key=lambda r: (-r.occupancy_rate, r.dormitory_id))
    else:
        ordered = sorted(records, key=lambda r: (r.occupancy_rate, r.dormitory_id))

    return [
        DormRanking(
            dormitory_id=r.dormitory_id,
            dormitory_name=r.dormitory_name,
            occupancy_rate=r.occupancy_rate,
            occupied_spots=r.occupied_spots,
            total_capacity=r.total_capacity,
        )
        for r in ordered[:limit]
    ]


# ----------------------------------------------------------------------
# Service
# ----------------------------------------------------------------------

class StatisticsService(BaseService):
    """
    Service for public dormitory statistics.

    Provides:
    - System-wide statistics with rankings
    - Single-dormitory statistics
    """

    def get_public_statistics(self) -> ServiceResult[PublicStatistics]:
        """
        Compute system-wide statistics.

        Returns:
            ServiceResult containing PublicStatistics
        """
        try:
            snapshot = EntitySnapshot.load(self.repositories)
            payments = self.repositories.payments.find_all()
            data = self.build_public_statistics(snapshot, payments)

            return ServiceResult.success(
                data,
                message="Public statistics computed",
                metadata={"dormitories": data.total_dorms},
            )

        except Exception as e:
            return self._handle_exception(e, "compute public statistics")

    def get_dorm_statistics(self, dormitory_id: str) -> ServiceResult[DormStatistics]:
        """
        Compute statistics for a single dormitory.

        Args:
            dormitory_id: Dormitory to report on

        Returns:
            ServiceResult containing DormStatistics, NOT_FOUND when absent
        """
        try:
            dormitory = self.repositories.dormitories.find_by_id(dormitory_id)
            if dormitory is None:
                raise NotFoundError("Dormitory", dormitory_id)

            snapshot = EntitySnapshot.load(self.repositories, dormitory_ids=[dormitory_id])
            return ServiceResult.success(
                dorm_statistics(snapshot, dormitory),
                message="Dormitory statistics computed",
            )

        except Exception as e:
            return self._handle_exception(e, "compute dormitory statistics", dormitory_id)

    def build_public_statistics(
        self,
        snapshot: EntitySnapshot,
        payments: Sequence[Payment] = (),
        today: Optional[date] = None,
    ) -> PublicStatistics:
        """Assemble PublicStatistics from an already loaded snapshot."""
        records = [dorm_statistics(snapshot, dorm) for dorm in snapshot.dormitories]
        total_capacity = sum(r.total_capacity for r in records)
        total_occupied = sum(r.occupied_spots for r in records)
        top_n = self.config.TOP_DORMS_COUNT

        return PublicStatistics(
            total_dorms=len(records),
            total_rooms=sum(r.total_rooms for r in records),
            total_capacity=total_capacity,
            total_occupied=total_occupied,
            available_spots=sum(r.available_spots for r in records),
            occupancy_rate=occupancy_rate(total_occupied, total_capacity),
            amenities_distribution=amenity_distribution(snapshot.rooms),
            room_type_distribution=room_type_distribution(snapshot.rooms),
            application_statistics=application_statistics(
                snapshot.applications, snapshot.accepted_applications
            ),
            payment_statistics=payment_statistics(payments, today or today_utc()),
            dorm_statistics=records,
            most_full=rank_dormitories(records, top_n, most_full=True),
            most_empty=rank_dormitories(records, top_n, most_full=False),
            last_updated=datetime.now(timezone.utc),
        )
