import pytest

from app.core.exceptions import ErrorCode
from app.services.open_data import ComparisonService
from app.services.open_data.comparison_service import normalize_ids


@pytest.fixture
def service(repositories, config):
    return ComparisonService(repositories, config)


def test_compare_known_dormitories(seeded, service):
    result = service.compare_dorms(['d2', 'd1'])

    assert result.is_success
    comparison = result.data
    assert [entry.dormitory_id for entry in comparison.dormitories] == ['d2', 'd1']
    assert comparison.requested == 2
    assert comparison.found == 2
    assert comparison.not_found == []


def test_details_include_statistics_and_application_metrics(seeded, service):
    entry = service.compare_dorms(['d2']).data.dormitories[0]

    assert entry.found is True
    assert entry.error is None
    details = entry.details
    assert details.name == 'Dom Studentski Grad'
    assert details.statistics.overbooked_spots == 1
    assert details.room_distribution == {1: 1, 2: 1}
    assert details.amenities_offered == {'ablak': 1}
    assert details.application_metrics.total_applications == 2
    assert details.application_metrics.accepted_applications == 2
    assert details.application_metrics.acceptance_rate == 100.0


def test_unknown_ids_are_reported_per_entry(seeded, service):
    result = service.compare_dorms(['d1', 'missing'])

    assert result.is_success
    missing = result.data.dormitories[1]
    assert missing.found is False
    assert missing.details is None
    assert missing.error.code == ErrorCode.NOT_FOUND
    assert result.data.found == 1
    assert result.data.not_found == ['missing']


def test_duplicates_and_blanks_are_dropped(seeded, service):
    result = service.compare_dorms(['d1', ' ', 'd1 ', 'd3'])

    assert [entry.dormitory_id for entry in result.data.dormitories] == ['d1', 'd3']
    assert result.data.requested == 2


def test_empty_input(seeded, service):
    for ids in ([], ['', '  ']):
        result = service.compare_dorms(ids)
        assert not result.is_success
        assert result.error.code == ErrorCode.EMPTY_INPUT


def test_too_many_inputs(seeded, service):
    result = service.compare_dorms([f'd{i}' for i in range(11)])

    assert not result.is_success
    assert result.error.code == ErrorCode.TOO_MANY_INPUTS
    assert result.error.details == {'limit': 10, 'received': 11}


def test_limit_is_configurable(seeded, repositories, config):
    config.COMPARISON_MAX_DORMS = 2
    result = ComparisonService(repositories, config).compare_dorms(['d1', 'd2', 'd3'])

    assert result.error.code == ErrorCode.TOO_MANY_INPUTS


def test_normalize_ids_keeps_first_occurrence():
    assert normalize_ids(['b', 'a', 'b', None, ' a ']) == ['b', 'a']
