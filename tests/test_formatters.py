from datetime import date

from app.utils.formatters import collect_headers, flatten_record, round_mean, round_rate, to_csv, to_json


def test_flatten_nested_mappings():
    record = {'id': 'd1', 'stats': {'rooms': 2, 'types': {'2': 1}}, 'empty': {}}

    assert flatten_record(record) == {
        'id': 'd1',
        'stats.rooms': 2,
        'stats.types.2': 1,
        'empty': '',
    }


def test_flatten_lists():
    record = {'tags': ['klima', 'terasa'], 'points': [{'x': 1}, {'x': 2}], 'flag': True, 'none': None}

    assert flatten_record(record) == {
        'tags': 'klima, terasa',
        'points.0.x': 1,
        'points.1.x': 2,
        'flag': 'true',
        'none': '',
    }


def test_flatten_dates():
    assert flatten_record({'due': date(2024, 1, 31)}) == {'due': '2024-01-31'}


def test_collect_headers_keeps_first_seen_order():
    assert collect_headers([{'a': 1, 'b': 2}, {'c': 3, 'a': 4}]) == ['a', 'b', 'c']


def test_to_csv_fills_missing_columns():
    content = to_csv([{'a': 1}, {'a': 2, 'b': 'x,y'}])
    assert content == 'a,b\n1,\n2,"x,y"\n'


def test_to_csv_without_rows():
    assert to_csv([]) == ''
    assert to_csv([], default_headers=['a', 'b']) == 'a,b\n'


def test_to_json_keeps_non_ascii():
    assert to_json({'name': 'Ćirilo'}) == '{\n  "name": "Ćirilo"\n}'


def test_round_rate():
    assert round_rate(1, 3) == 33.33
    assert round_rate(5, 0) == 0.0
    assert round_rate(5, 4) == 100.0


def test_round_mean():
    assert round_mean([]) is None
    assert round_mean([8, 9, 9]) == 8.67
