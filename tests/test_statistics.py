from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import ErrorCode
from app.models import AcceptedApplication, Dormitory, Payment, Room
from app.services.open_data import EntitySnapshot, StatisticsService
from app.services.open_data.statistics_service import (
    amenity_distribution,
    occupancy_rate,
    payment_statistics,
    rank_dormitories,
)
from app.schemas.open_data import DormStatistics


@pytest.fixture
def service(repositories, config):
    return StatisticsService(repositories, config)


def by_id(records):
    return {record.dormitory_id: record for record in records}


def test_public_statistics_totals(seeded, service):
    result = service.get_public_statistics()

    assert result.is_success
    stats = result.data
    assert stats.total_dorms == 3
    assert stats.total_rooms == 4
    assert stats.total_capacity == 8
    assert stats.total_occupied == 4
    assert stats.available_spots == 5
    assert stats.occupancy_rate == 50.0


def test_distributions(seeded, service):
    stats = service.get_public_statistics().data

    assert list(stats.amenities_distribution.items()) == [('klima', 2), ('ablak', 1), ('terasa', 1)]
    assert stats.room_type_distribution == {1: 1, 2: 2, 3: 1}


def test_application_statistics(seeded, service):
    apps = service.get_public_statistics().data.application_statistics

    assert apps.total_applications == 5
    assert apps.active_applications == 4
    assert apps.accepted_applications == 4
    assert apps.acceptance_rate == 80.0
    assert apps.average_grade_of_accepted == 8.75
    assert apps.average_grade_of_applications == 8.0


def test_dormitory_records(seeded, service):
    records = by_id(service.get_public_statistics().data.dorm_statistics)

    assert records['d1'].total_capacity == 5
    assert records['d1'].occupied_spots == 2
    assert records['d1'].available_spots == 3
    assert records['d1'].occupancy_rate == 40.0
    assert records['d1'].average_grade == 8.5

    # r3 holds two students in one bed
    assert records['d2'].occupied_spots == 2
    assert records['d2'].available_spots == 2
    assert records['d2'].overbooked_spots == 1
    assert records['d2'].occupancy_rate == 66.67


def test_dormitory_without_rooms(seeded, service):
    record = by_id(service.get_public_statistics().data.dorm_statistics)['d3']

    assert record.total_capacity == 0
    assert record.occupancy_rate == 0.0
    assert record.average_grade is None
    assert record.room_types == {}


def test_rankings(seeded, service):
    stats = service.get_public_statistics().data

    assert [r.dormitory_id for r in stats.most_full] == ['d2', 'd1', 'd3']
    assert [r.dormitory_id for r in stats.most_empty] == ['d3', 'd1', 'd2']


def test_rankings_respect_configured_size(seeded, repositories, config):
    config.TOP_DORMS_COUNT = 1
    stats = StatisticsService(repositories, config).get_public_statistics().data

    assert len(stats.most_full) == 1
    assert len(stats.most_empty) == 1


def test_rank_ties_broken_by_id():
    records = [
        DormStatistics(dormitory_id=dorm_id, dormitory_name=dorm_id, address='', total_rooms=1,
                       total_capacity=2, occupied_spots=1, available_spots=1, occupancy_rate=50.0)
        for dorm_id in ('b', 'a', 'c')
    ]

    assert [r.dormitory_id for r in rank_dormitories(records, 5, most_full=True)] == ['a', 'b', 'c']
    assert [r.dormitory_id for r in rank_dormitories(records, 5, most_full=False)] == ['a', 'b', 'c']


def test_payment_statistics_counts_overdue(seeded, service):
    payments = service.get_public_statistics().data.payment_statistics

    assert payments.total_payments == 3
    assert payments.paid == 1
    assert payments.pending == 1
    assert payments.overdue == 1
    assert payments.collection_rate == 33.33
    assert payments.total_amount == 30000.0
    assert payments.outstanding_amount == 20000.0


def test_payment_statistics_empty():
    stats = payment_statistics([], date(2024, 1, 1))

    assert stats.total_payments == 0
    assert stats.collection_rate == 0.0


def test_unknown_payment_status_is_counted_separately(seeded, service, repositories):
    refunded = Payment(id='p9', accepted_application_id='x4', amount=Decimal('5000.00'),
                       payment_period='2023-11', status='refunded', due_date=date(2023, 11, 15))
    payments = repositories.payments.find_all() + [refunded]

    stats = service.build_public_statistics(EntitySnapshot.load(repositories), payments).payment_statistics

    assert stats.total_payments == 4
    assert (stats.paid, stats.pending, stats.overdue, stats.unrecognized) == (1, 1, 1, 1)
    assert stats.paid_amount == 10000.0
    assert stats.outstanding_amount == 25000.0


def test_store_rejects_unknown_payment_status(seeded, db_session):
    db_session.add(Payment(id='p9', accepted_application_id='x4', amount=Decimal('5000.00'),
                           payment_period='2023-11', status='refunded', due_date=date(2023, 11, 15)))

    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_empty_store(db_session, service):
    stats = service.get_public_statistics().data

    assert stats.total_dorms == 0
    assert stats.occupancy_rate == 0.0
    assert stats.application_statistics.acceptance_rate == 0.0
    assert stats.application_statistics.average_grade_of_accepted is None
    assert stats.most_full == []


def test_single_dormitory_statistics(seeded, service):
    result = service.get_dorm_statistics('d2')

    assert result.is_success
    assert result.data.dormitory_name == 'Dom Studentski Grad'
    assert result.data.room_types == {1: 1, 2: 1}


def test_single_dormitory_not_found(seeded, service):
    result = service.get_dorm_statistics('missing')

    assert not result.is_success
    assert result.error.code == ErrorCode.NOT_FOUND
    assert result.error.status_code == 404


def test_rates_are_bounded():
    assert occupancy_rate(3, 2) == 100.0
    assert occupancy_rate(1, 0) == 0.0
    assert occupancy_rate(1, 3) == 33.33


def test_amenity_distribution_counts_each_room_once(seeded, repositories):
    snapshot = EntitySnapshot.load(repositories)
    assert amenity_distribution(snapshot.rooms)['klima'] == 2


def test_fuller_dormitory_ranks_first(db_session, service):
    db_session.add_all([
        Dormitory(id='A', name='A', address='a'),
        Dormitory(id='B', name='B', address='b'),
        Room(id='ra', dormitory_id='A', bed_capacity=10),
        Room(id='rb', dormitory_id='B', bed_capacity=10),
    ])
    db_session.add_all(
        [AcceptedApplication(student_index=f'A-{i}', grade=8, room_id='ra', academic_year='2023/2024')
         for i in range(8)]
        + [AcceptedApplication(student_index='B-0', grade=8, room_id='rb', academic_year='2023/2024')]
    )
    db_session.commit()

    stats = service.get_public_statistics().data

    assert [r.dormitory_id for r in stats.most_full] == ['A', 'B']
    assert [r.dormitory_id for r in stats.most_empty] == ['B', 'A']
    assert stats.most_full[0].occupancy_rate == 80.0
