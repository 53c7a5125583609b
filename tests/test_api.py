"""HTTP surface of the open-data API."""

API = '/api/v1/open-data'


def error_code(response):
    return response.json()['error']['code']


def test_health(client):
    response = client.get('/api/v1/health')

    assert response.status_code == 200
    assert response.json()['status'] == 'healthy'


def test_request_id_and_timing_headers(client):
    response = client.get('/api/v1/health', headers={'X-Request-ID': 'abc-123'})

    assert response.headers['X-Request-ID'] == 'abc-123'
    assert 'X-Process-Time' in response.headers


def test_statistics(client, seeded):
    response = client.get(f'{API}/statistics')

    assert response.status_code == 200
    body = response.json()
    assert body['total_dorms'] == 3
    assert body['room_type_distribution'] == {'1': 1, '2': 2, '3': 1}


def test_dormitory_statistics(client, seeded):
    assert client.get(f'{API}/dorms/d1/statistics').json()['occupancy_rate'] == 40.0

    missing = client.get(f'{API}/dorms/missing/statistics')
    assert missing.status_code == 404
    assert error_code(missing) == 'NOT_FOUND'


def test_room_search(client, seeded):
    response = client.get(f'{API}/rooms/search', params={'amenities': 'klima,terasa'})

    assert response.status_code == 200
    assert [room['room_id'] for room in response.json()['rooms']] == ['r1']


def test_room_search_filters_and_pagination(client, seeded):
    response = client.get(
        f'{API}/rooms/search',
        params={'address': 'bulevar', 'min_capacity': 2, 'limit': 1, 'offset': 1},
    )

    body = response.json()
    assert body['total'] == 2
    assert [room['room_id'] for room in body['rooms']] == ['r2']


def test_room_search_conflicting_filters(client, seeded):
    response = client.get(f'{API}/rooms/search', params={'exact_capacity': 2, 'min_capacity': 1})

    assert response.status_code == 422
    assert error_code(response) == 'CONFLICTING_FILTER'


def test_room_search_invalid_range(client, seeded):
    response = client.get(f'{API}/rooms/search', params={'min_capacity': 4, 'max_capacity': 2})

    assert response.status_code == 422
    assert error_code(response) == 'INVALID_RANGE'


def test_room_applications(client, seeded):
    assert len(client.get(f'{API}/rooms/r1/applications').json()) == 2
    assert client.get(f'{API}/rooms/nope/applications').status_code == 404


def test_accepted_by_academic_year(client, seeded):
    ok = client.get(f'{API}/applications/academic-year', params={'academic_year': '2022/2023'})
    bad = client.get(f'{API}/applications/academic-year', params={'academic_year': '2022'})

    assert [a['id'] for a in ok.json()] == ['x1']
    assert bad.status_code == 422
    assert error_code(bad) == 'INVALID_VALUE'


def test_compare(client, seeded):
    response = client.get(f'{API}/dorms/compare', params={'dorm_ids': 'd1,missing'})

    body = response.json()
    assert response.status_code == 200
    assert body['found'] == 1
    assert body['dormitories'][1]['error']['code'] == 'NOT_FOUND'


def test_compare_without_ids(client, seeded):
    response = client.get(f'{API}/dorms/compare')

    assert response.status_code == 422
    assert error_code(response) == 'EMPTY_INPUT'


def test_dormitory_list(client, seeded):
    names = [d['name'] for d in client.get(f'{API}/dorms/list').json()]
    assert names == ['Dom Akademac', 'Dom Ivo Lola Ribar', 'Dom Studentski Grad']


def test_amenities(client):
    tags = [a['tag'] for a in client.get(f'{API}/amenities').json()]
    assert 'klima' in tags


def test_trends(client, seeded):
    body = client.get(f'{API}/trends/applications').json()

    assert body['metrics']['trend_direction'] == 'decreasing'
    assert len(body['yearly_trends']) == 3


def test_trends_inverted_window(client, seeded):
    response = client.get(
        f'{API}/trends/applications',
        params={'from_year': '2024/2025', 'to_year': '2022/2023'},
    )

    assert response.status_code == 422
    assert error_code(response) == 'INVALID_RANGE'


def test_heatmap(client, seeded):
    body = client.get(f'{API}/occupancy/heatmap').json()

    assert [point['status'] for point in body['points']] == ['low', 'medium', 'low']


def test_export_csv_download(client, seeded):
    response = client.get(f'{API}/export', params={'dataset': 'rooms', 'format': 'csv'})

    assert response.status_code == 200
    assert response.headers['content-type'].startswith('text/csv')
    assert response.headers['content-disposition'] == 'attachment; filename="rooms.csv"'
    assert response.text.startswith('room_id,')


def test_export_json_download(client, seeded):
    response = client.get(f'{API}/export', params={'dataset': 'dorms'})

    assert response.headers['content-type'].startswith('application/json')
    assert [d['id'] for d in response.json()] == ['d1', 'd2', 'd3']


def test_export_unknown_dataset(client, seeded):
    response = client.get(f'{API}/export', params={'dataset': 'students'})

    assert response.status_code == 400
    assert error_code(response) == 'UNKNOWN_DATASET'
