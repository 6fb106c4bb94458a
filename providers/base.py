from __future__ import annotations
"""Tracking source abstraction and registry.

A source bundles what the pipeline needs to know about one upstream
tracking page:
 - key / code / human label (codes are what the envelope reports)
 - which extracted tables carry tracking data (table_filter)
 - the normalizer turning one Table into Sections or a RecordSet

Adding a source means registering one more Source; lookup by key or code
is the only dispatch point.
"""
from dataclasses import dataclass
from typing import Callable, Dict, List, Protocol, Sequence, Union

from core.errors import UnsupportedSourceError
from core.models import RecordSet, Section, Table


class Normalizer(Protocol):
    """Turns one extracted Table into normalized output."""

    def normalize(self, table: Table) -> List[Union[Section, RecordSet]]:
        ...


TableFilter = Callable[[Sequence[Table]], List[Table]]


def keep_all(tables: Sequence[Table]) -> List[Table]:
    return list(tables)


@dataclass(frozen=True)
class Source:
    key: str  # unique short name
    code: str  # numeric service code reported in the envelope
    label: str
    normalizer: Normalizer
    table_filter: TableFilter = keep_all

    def select_tables(self, tables: Sequence[Table]) -> List[Table]:
        return self.table_filter(tables)

    def normalize(self, tables: Sequence[Table]) -> List[Union[Section, RecordSet]]:
        out: List[Union[Section, RecordSet]] = []
        for table in tables:
            out.extend(self.normalizer.normalize(table))
        return out


# filled at import time by providers.cargo, read-only afterwards
_REGISTRY: Dict[str, Source] = {}


def register(source: Source) -> None:
    for k in (source.key.lower(), source.code.lower()):
        if k in _REGISTRY:
            raise ValueError(f"source key already registered: {k}")
    _REGISTRY[source.key.lower()] = source
    _REGISTRY[source.code.lower()] = source


def get_source(identifier: object) -> Source:
    k = str(identifier).strip().lower() if isinstance(identifier, (str, int)) else None
    if k is None or k not in _REGISTRY:
        raise UnsupportedSourceError(identifier, available_sources())
    return _REGISTRY[k]


def available_sources() -> List[str]:
    return sorted({s.key for s in _REGISTRY.values()})
