import pytest

from app.core.exceptions import ErrorCode
from app.models.base.enums import Amenity
from app.services.open_data import CatalogService


@pytest.fixture
def service(repositories, config):
    return CatalogService(repositories, config)


def test_dormitories_ordered_by_name(seeded, service):
    result = service.list_dormitories()

    assert result.is_success
    assert [d.name for d in result.data] == ['Dom Akademac', 'Dom Ivo Lola Ribar', 'Dom Studentski Grad']
    assert result.metadata == {'count': 3}


def test_amenities_listing(service):
    amenities = service.list_amenities().data

    assert [a.tag for a in amenities] == [amenity.value for amenity in Amenity]
    assert all(a.label for a in amenities)


def test_room_applications(seeded, service):
    result = service.get_room_applications('r3')

    assert result.is_success
    assert [a.id for a in result.data] == ['x3', 'x4']


def test_room_applications_for_unknown_room(seeded, service):
    result = service.get_room_applications('nope')

    assert not result.is_success
    assert result.error.code == ErrorCode.NOT_FOUND


def test_accepted_by_academic_year(seeded, service):
    result = service.get_accepted_by_academic_year('2023/2024')

    assert [a.id for a in result.data] == ['x2', 'x3', 'x4']


@pytest.mark.parametrize('value', ['2023', '2024/2023', ''])
def test_accepted_by_malformed_year(seeded, service, value):
    result = service.get_accepted_by_academic_year(value)

    assert not result.is_success
    assert result.error.code == ErrorCode.INVALID_VALUE
