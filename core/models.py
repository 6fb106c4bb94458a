from __future__ import annotations
"""Grid and normalized-record models.

Cell / Row / Table are produced once per extraction pass, Section / RecordSet
once per normalization pass. All are frozen; ``to_dict`` gives plain data
ready for JSON.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple
import re


Record = Dict[str, str]

_re_ws = re.compile(r"\s+")


def slugify_title(title: str) -> str:
    """'SHIPMENT  DETAILS' -> 'shipment_details'"""
    return _re_ws.sub('_', title.lower())


@dataclass(frozen=True)
class Cell:
    text: str
    is_header: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {'text': self.text, 'isHeader': self.is_header}


@dataclass(frozen=True)
class Row:
    # position among all <tr> of the table, dropped rows included
    row_number: int
    cells: Tuple[Cell, ...] = ()

    @property
    def texts(self) -> List[str]:
        return [c.text for c in self.cells]

    def __len__(self) -> int:
        return len(self.cells)

    def to_dict(self) -> Dict[str, Any]:
        return {'row_number': self.row_number, 'cells': [c.to_dict() for c in self.cells]}


@dataclass(frozen=True)
class Table:
    table_id: str
    rows: Tuple[Row, ...] = ()

    @property
    def total_rows(self) -> int:
        return len(self.rows)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'table_id': self.table_id,
            'total_rows': self.total_rows,
            'rows': [r.to_dict() for r in self.rows],
        }


@dataclass(frozen=True)
class Section:
    """Titled subsection of a section-marker style table."""
    section_title: str
    table_id: str
    data: Tuple[Record, ...] = field(default_factory=tuple)

    @classmethod
    def titled(cls, title: str, data: Tuple[Record, ...] = ()) -> "Section":
        return cls(section_title=title, table_id=slugify_title(title), data=tuple(data))

    @property
    def total_rows(self) -> int:
        return len(self.data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'section_title': self.section_title,
            'table_id': self.table_id,
            'total_rows': self.total_rows,
            'data': [dict(r) for r in self.data],
        }


@dataclass(frozen=True)
class RecordSet:
    """Records of one header-row style table."""
    table_id: str
    data: Tuple[Record, ...] = field(default_factory=tuple)

    @property
    def total_rows(self) -> int:
        return len(self.data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'table_id': self.table_id,
            'total_rows': self.total_rows,
            'data': [dict(r) for r in self.data],
        }


__all__ = ["Record", "Cell", "Row", "Table", "Section", "RecordSet", "slugify_title"]
