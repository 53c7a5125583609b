import csv
import io
import json

import pytest

from app.core.exceptions import ErrorCode
from app.schemas.open_data import ExportRequest
from app.services.open_data import ExportDataset, ExportService


@pytest.fixture
def service(repositories, config):
    return ExportService(repositories, config)


def export(service, dataset, fmt='json'):
    result = service.export(ExportRequest(dataset=dataset, format=fmt))
    assert result.is_success, result.error
    return result.data


def read_csv(content):
    return list(csv.DictReader(io.StringIO(content)))


@pytest.mark.parametrize('dataset', [d.value for d in ExportDataset])
@pytest.mark.parametrize('fmt', ['json', 'csv'])
def test_every_dataset_exports(seeded, service, dataset, fmt):
    data = export(service, dataset, fmt)

    assert data.dataset == dataset
    assert data.filename == f'{dataset}.{fmt}'
    assert data.media_type == ('application/json' if fmt == 'json' else 'text/csv')
    assert data.content


def test_rooms_json(seeded, service):
    rooms = json.loads(export(service, 'rooms').content)

    assert [room['room_id'] for room in rooms] == ['r1', 'r2', 'r3', 'r4']
    assert rooms[0]['amenities'] == ['klima', 'terasa']
    assert rooms[2]['is_overbooked'] is True


def test_rooms_csv_joins_amenities(seeded, service):
    content = export(service, 'rooms', 'csv').content
    rows = read_csv(content)

    assert len(rows) == 4
    assert rows[0]['amenities'] == 'klima, terasa'
    assert rows[0]['is_available'] == 'false'
    assert rows[3]['amenities'] == ''
    assert rows[0]['dormitory_phone'] == '+381 11 000 111'
    assert rows[2]['dormitory_phone'] == ''


def test_format_is_case_insensitive(seeded, service):
    assert export(service, 'dorms', 'CSV').media_type == 'text/csv'


def test_statistics_json_is_full_document(seeded, service):
    payload = json.loads(export(service, 'statistics').content)

    assert payload['total_dorms'] == 3
    assert payload['payment_statistics']['overdue'] == 1
    assert len(payload['most_full']) == 3


def test_statistics_csv_has_one_row_per_dormitory(seeded, service):
    rows = read_csv(export(service, 'statistics', 'csv').content)

    assert [row['dormitory_id'] for row in rows] == ['d1', 'd2', 'd3']
    assert rows[0]['room_types.2'] == '1'
    assert rows[0]['amenities.klima'] == '2'


def test_amenities_report(seeded, service):
    rows = json.loads(export(service, 'amenities-report').content)

    assert rows[0] == {'amenity': 'klima', 'room_count': 2, 'percentage': 50.0}
    assert [row['amenity'] for row in rows] == ['klima', 'ablak', 'terasa']


def test_room_types_report_caps_rate(seeded, service):
    rows = {row['bed_capacity']: row for row in json.loads(export(service, 'room-types').content)}

    assert rows[1] == {
        'bed_capacity': 1,
        'rooms': 1,
        'total_capacity': 1,
        'occupied': 2,
        'available': 0,
        'occupancy_rate': 100.0,
    }
    assert rows[2]['occupied'] == 2
    assert rows[2]['occupancy_rate'] == 50.0


def test_occupancy_report(seeded, service):
    payload = json.loads(export(service, 'occupancy-report').content)
    rows = read_csv(export(service, 'occupancy-report', 'csv').content)

    assert set(payload) == {'points', 'summary'}
    assert rows[1]['status'] == 'medium'


def test_accepted_applications(seeded, service):
    rows = json.loads(export(service, 'accepted-applications').content)
    assert {row['academic_year'] for row in rows} == {'2022/2023', '2023/2024'}


def test_empty_csv_still_has_header(db_session, service):
    content = export(service, 'rooms', 'csv').content

    assert content.splitlines()[0].startswith('room_id,dormitory_id,dormitory_name')
    assert len(content.splitlines()) == 1


def test_empty_amenities_report_header(db_session, service):
    content = export(service, 'amenities-report', 'csv').content
    assert content == 'amenity,room_count,percentage\n'


def test_custom_delimiter(seeded, repositories, config):
    config.EXPORT_CSV_DELIMITER = ';'
    content = ExportService(repositories, config).export(ExportRequest(dataset='dorms', format='csv')).data.content

    assert content.splitlines()[0] == 'id;name;address;phone;email'


def test_tab_delimited_export_keeps_trailing_empty_cells(seeded, repositories, config):
    config.EXPORT_CSV_DELIMITER = '\t'
    content = ExportService(repositories, config).export(ExportRequest(dataset='dorms', format='csv')).data.content
    rows = list(csv.DictReader(io.StringIO(content), delimiter='\t'))

    assert content.endswith('\n')
    assert content.splitlines()[-1] == 'd3\tDom Akademac\tĆirila i Metodija 3\t\t'
    assert rows[-1]['phone'] == ''
    assert rows[-1]['email'] == ''


def test_tab_delimited_yearly_trends_match_json(seeded, repositories, config):
    config.EXPORT_CSV_DELIMITER = '\t'
    service = ExportService(repositories, config)
    years = json.loads(export(service, 'yearly-trends').content)
    rows = list(csv.DictReader(io.StringIO(export(service, 'yearly-trends', 'csv').content), delimiter='\t'))

    assert len(rows) == len(years)
    for row, year in zip(rows, years):
        assert set(row) == set(year)
        for key, value in year.items():
            assert row[key] == str(value)


def test_unknown_dataset(seeded, service):
    result = service.export(ExportRequest(dataset='students', format='json'))

    assert not result.is_success
    assert result.error.code == ErrorCode.UNKNOWN_DATASET
    assert 'rooms' in result.error.details['available']


def test_unknown_dataset_is_reported_before_format(seeded, service):
    result = service.export(ExportRequest(dataset='students', format='xml'))
    assert result.error.code == ErrorCode.UNKNOWN_DATASET


def test_unknown_format(seeded, service):
    result = service.export(ExportRequest(dataset='rooms', format='xml'))

    assert not result.is_success
    assert result.error.code == ErrorCode.INVALID_VALUE


def test_statistics_csv_matches_json_values(seeded, service):
    payload = json.loads(export(service, 'statistics').content)
    rows = read_csv(export(service, 'statistics', 'csv').content)

    for record, row in zip(payload['dorm_statistics'], rows):
        for key in ('total_rooms', 'total_capacity', 'occupied_spots', 'available_spots', 'occupancy_rate'):
            assert float(row[key]) == pytest.approx(record[key])
        for tag, count in record['amenities'].items():
            assert int(row[f'amenities.{tag}']) == count
