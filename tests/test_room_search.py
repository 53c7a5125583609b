import pytest

from app.core.exceptions import ErrorCode
from app.schemas.room import RoomSearchFilters
from app.services.open_data import RoomSearchService


@pytest.fixture
def service(repositories, config):
    return RoomSearchService(repositories, config)


def room_ids(result):
    return [room.room_id for room in result.data.rooms]


def test_search_without_filters_returns_all_rooms_ordered(seeded, service):
    result = service.search_rooms(RoomSearchFilters())

    assert result.is_success
    assert room_ids(result) == ['r1', 'r2', 'r3', 'r4']
    assert result.data.total == 4
    assert result.data.limit == 50
    assert result.data.offset == 0


def test_amenities_use_and_semantics(seeded, service):
    single = service.search_rooms(RoomSearchFilters(amenities=['klima']))
    both = service.search_rooms(RoomSearchFilters(amenities=['klima', 'terasa']))

    assert room_ids(single) == ['r1', 'r2']
    assert room_ids(both) == ['r1']


def test_amenities_accept_comma_string_and_duplicates(seeded, service):
    filters = RoomSearchFilters(amenities='klima, terasa,klima')

    assert filters.amenities == ['klima', 'terasa']
    assert room_ids(service.search_rooms(filters)) == ['r1']


def test_address_substring_is_case_insensitive(seeded, service):
    result = service.search_rooms(RoomSearchFilters(address_substring='BULEVAR'))

    assert room_ids(result) == ['r1', 'r2']
    assert all(room.dormitory_id == 'd1' for room in result.data.rooms)


def test_address_match_handles_non_ascii(seeded, service):
    # d3 matches but has no rooms
    result = service.search_rooms(RoomSearchFilters(address_substring='ćirila'))

    assert result.is_success
    assert result.data.total == 0


def test_capacity_filters(seeded, service):
    exact = service.search_rooms(RoomSearchFilters(exact_capacity=2))
    ranged = service.search_rooms(RoomSearchFilters(min_capacity=2, max_capacity=3))

    assert room_ids(exact) == ['r1', 'r4']
    assert room_ids(ranged) == ['r1', 'r2', 'r4']


def test_dormitory_filter(seeded, service):
    result = service.search_rooms(RoomSearchFilters(dormitory_id='d2'))
    assert room_ids(result) == ['r3', 'r4']


def test_rooms_carry_dormitory_contact_and_occupancy(seeded, service):
    rooms = {room.room_id: room for room in service.search_rooms(RoomSearchFilters()).data.rooms}

    assert rooms['r1'].dormitory_name == 'Dom Ivo Lola Ribar'
    assert rooms['r1'].dormitory_email == 'lola@dom.rs'
    assert rooms['r1'].occupied == 2
    assert rooms['r1'].available_spots == 0
    assert rooms['r1'].is_available is False
    assert rooms['r2'].available_spots == 3


def test_overbooked_room_reports_zero_available(seeded, service):
    room = next(r for r in service.search_rooms(RoomSearchFilters()).data.rooms if r.room_id == 'r3')

    assert room.occupied == 2
    assert room.available_spots == 0
    assert room.is_overbooked is True


def test_only_available_excludes_full_and_overbooked_rooms(seeded, service):
    result = service.search_rooms(RoomSearchFilters(only_available=True))
    assert room_ids(result) == ['r2', 'r4']


def test_pagination_reports_total_before_slicing(seeded, service):
    result = service.search_rooms(RoomSearchFilters(limit=2, offset=1))

    assert room_ids(result) == ['r2', 'r3']
    assert result.data.count == 2
    assert result.data.total == 4


def test_offset_past_the_end_is_empty(seeded, service):
    result = service.search_rooms(RoomSearchFilters(offset=10))

    assert result.is_success
    assert result.data.rooms == []
    assert result.data.total == 4


def test_empty_store_returns_empty_page(db_session, service):
    result = service.search_rooms(RoomSearchFilters())

    assert result.is_success
    assert result.data.total == 0


@pytest.mark.parametrize(
    'filters, expected',
    [
        ({'exact_capacity': 2, 'min_capacity': 1}, ErrorCode.CONFLICTING_FILTER),
        ({'exact_capacity': 2, 'max_capacity': 3}, ErrorCode.CONFLICTING_FILTER),
        # conflict is reported before the inverted range
        ({'exact_capacity': 2, 'min_capacity': 5, 'max_capacity': 1}, ErrorCode.CONFLICTING_FILTER),
        ({'min_capacity': 3, 'max_capacity': 2}, ErrorCode.INVALID_RANGE),
        ({'min_capacity': 0, 'max_capacity': -1}, ErrorCode.INVALID_RANGE),
        ({'min_capacity': 0}, ErrorCode.INVALID_VALUE),
        ({'exact_capacity': -1}, ErrorCode.INVALID_VALUE),
        ({'limit': 0}, ErrorCode.INVALID_VALUE),
        ({'limit': 1001}, ErrorCode.INVALID_VALUE),
        ({'offset': -1}, ErrorCode.INVALID_VALUE),
    ],
)
def test_invalid_filters_are_rejected(seeded, service, filters, expected):
    result = service.search_rooms(RoomSearchFilters(**filters))

    assert not result.is_success
    assert result.error.code == expected


def test_max_limit_is_accepted(seeded, service):
    result = service.search_rooms(RoomSearchFilters(limit=1000))
    assert result.is_success
    assert result.data.limit == 1000
