from __future__ import annotations
"""Cargo tracking sources: DCSC (Delhi Cargo Service Centre) and GMR."""
from typing import List, Sequence

from core.models import Table
from core.normalize import HeaderInferenceNormalizer, SectionNormalizer
from providers.base import Source, register

GMR_TABLE_PREFIXES = ('Grid', 'grd')


def first_table_only(tables: Sequence[Table]) -> List[Table]:
    # DCSC renders every section inside its first table
    return list(tables[:1])


def grid_tables(tables: Sequence[Table]) -> List[Table]:
    return [t for t in tables if t.table_id.startswith(GMR_TABLE_PREFIXES)]


DCSC = Source(
    key='dcsc',
    code='1',
    label='DCSC - Delhi Cargo Service Centre',
    normalizer=SectionNormalizer(),
    table_filter=first_table_only,
)

GMR = Source(
    key='gmr',
    code='2',
    label='GMR ARGO - Cargo Tracking',
    normalizer=HeaderInferenceNormalizer(),
    table_filter=grid_tables,
)

register(DCSC)
register(GMR)
