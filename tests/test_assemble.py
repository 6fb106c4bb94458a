import json
from datetime import datetime, timedelta, timezone

import pytest

from core.assemble import build_envelope
from core.errors import EmptyResultWarning
from core.models import Cell, RecordSet, Row, Section, Table

AT = datetime(2024, 1, 5, 10, 30, tzinfo=timezone(timedelta(hours=5, minutes=30)))


def test_records_envelope():
    items = [
        Section.titled('SHIPMENT DETAILS', ({'Date': '05-Jan-24', 'Status': 'Arrived'}, )),
        RecordSet('grd1', ({'A': '1'}, {'A': '3'})),
    ]
    env = build_envelope(awb_number='05700359741', service_name='S', service_code='1', extracted_at=AT, items=items)
    assert list(env) == ['awb_number', 'service_name', 'service_code', 'extraction_time', 'granularity', 'total_tables', 'tables']
    assert env['extraction_time'] == '2024-01-05T10:30:00+05:30'
    assert env['total_tables'] == 2
    first, second = env['tables']
    assert first == {
        'table_id': 'shipment_details',
        'table_number': 1,
        'total_rows': 1,
        'section_title': 'SHIPMENT DETAILS',
        'data': [{'Date': '05-Jan-24', 'Status': 'Arrived'}],
    }
    assert second['table_number'] == 2 and 'section_title' not in second
    assert second['total_rows'] == 2
    json.dumps(env)


def test_rows_envelope():
    t = Table('grd7', (Row(3, (Cell('A', True), Cell('B'))), Row(5, (Cell('1'), ))))
    env = build_envelope(awb_number='1', service_name='S', service_code='2', extracted_at=AT, items=[t], granularity='rows')
    assert env['tables'] == [{'table_id': 'grd7', 'table_number': 1, 'total_rows': 2, 'rows': [['A', 'B'], ['1']]}]


def test_empty_result_warns_but_returns():
    with pytest.warns(EmptyResultWarning):
        env = build_envelope(awb_number='1', service_name='S', service_code='1', extracted_at=AT, items=[])
    assert env['total_tables'] == 0 and env['tables'] == []


def test_unknown_granularity():
    with pytest.raises(ValueError):
        build_envelope(awb_number='1', service_name='S', service_code='1', extracted_at=AT, items=[], granularity='cells')


def test_entries_follow_model_dicts():
    section = Section.titled('FLIGHT DETAILS', ({'Flight': 'AI 101'}, ))
    table = Table('grd1', (Row(0, (Cell('A', True), )), ))
    env = build_envelope(awb_number='1', service_name='S', service_code='1', extracted_at=AT, items=[section])
    entry = dict(env['tables'][0])
    assert entry.pop('table_number') == 1
    assert entry == section.to_dict()
    env = build_envelope(awb_number='1', service_name='S', service_code='2', extracted_at=AT, items=[table], granularity='rows')
    entry = env['tables'][0]
    assert entry['total_rows'] == table.to_dict()['total_rows']
    assert entry['rows'] == [[c['text'] for c in r['cells']] for r in table.to_dict()['rows']]
