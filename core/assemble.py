from __future__ import annotations
"""Output envelope assembly.

Pure restructuring of normalizer output (or of the raw grid) into the
plain-data envelope returned to the HTTP / CLI layers. table_number is
reassigned 1..k in output order.
"""
from datetime import datetime
from typing import Any, Dict, List, Sequence, Union
import warnings

from .errors import EmptyResultWarning
from .logger import Logger
from .models import RecordSet, Section, Table

log = Logger.bind(__name__)

GRANULARITY_RECORDS = 'records'
GRANULARITY_ROWS = 'rows'
GRANULARITIES = (GRANULARITY_RECORDS, GRANULARITY_ROWS)


def _record_entry(item: Union[Section, RecordSet], number: int) -> Dict[str, Any]:
    d = item.to_dict()
    entry: Dict[str, Any] = {
        'table_id': d['table_id'],
        'table_number': number,
        'total_rows': d['total_rows'],
    }
    if 'section_title' in d:
        entry['section_title'] = d['section_title']
    entry['data'] = d['data']
    return entry


def _row_entry(table: Table, number: int) -> Dict[str, Any]:
    d = table.to_dict()
    return {
        'table_id': d['table_id'],
        'table_number': number,
        'total_rows': d['total_rows'],
        'rows': [[c['text'] for c in row['cells']] for row in d['rows']],
    }


def build_envelope(*, awb_number: str, service_name: str, service_code: str, extracted_at: datetime, items: Sequence[Union[Section, RecordSet, Table]], granularity: str = GRANULARITY_RECORDS) -> Dict[str, Any]:
    """Build the envelope.

    items are Sections / RecordSets for the ``records`` granularity and
    extracted Tables for ``rows``.
    """
    if granularity == GRANULARITY_RECORDS:
        tables: List[Dict[str, Any]] = [_record_entry(it, n) for n, it in enumerate(items, start=1)]
    elif granularity == GRANULARITY_ROWS:
        tables = [_row_entry(it, n) for n, it in enumerate(items, start=1)]
    else:
        raise ValueError(f"unknown granularity: {granularity!r} (expected one of {', '.join(GRANULARITIES)})")
    if not tables:
        msg = f"no tables retained awb={awb_number} service={service_code}"
        log.warn(msg)
        warnings.warn(msg, EmptyResultWarning, stacklevel=2)
    return {
        'awb_number': awb_number,
        'service_name': service_name,
        'service_code': service_code,
        'extraction_time': extracted_at.isoformat(),
        'granularity': granularity,
        'total_tables': len(tables),
        'tables': tables,
    }


__all__ = ["build_envelope", "GRANULARITIES", "GRANULARITY_RECORDS", "GRANULARITY_ROWS"]
