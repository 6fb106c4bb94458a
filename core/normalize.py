from __future__ import annotations
"""Source-specific table normalizers.

Both normalizers implement ``normalize(table) -> list`` over one extracted
Table and are selected through the source registry (providers.base).

SectionNormalizer (DCSC style)
  One flat table holds several logical sections. A single-cell row whose
  text contains ``DETAILS`` opens a section; the first header-looking row
  inside it names the columns; rows of the same width become records.

HeaderInferenceNormalizer (GMR style)
  One header row per table: the first row with more than one short cell.
  Every later row becomes a record.
"""
from enum import Enum
from typing import List, Optional, Sequence
import re

from .logger import Logger
from .models import Record, RecordSet, Row, Section, Table

log = Logger.bind(__name__)

SECTION_MARKER = 'DETAILS'
SECTION_HEADER_MAX_CELLS = 20
SECTION_HEADER_MAX_TEXT = 50
INFERRED_HEADER_MAX_TEXT = 100

# 05-Jan-24 style; anchored at the cell start only
_re_date_like = re.compile(r"^\d{2}-\w{3}-\d{2}", re.ASCII)
_re_ws = re.compile(r"\s+")


def header_key(text: str) -> str:
    return _re_ws.sub(' ', text.strip())


def placeholder_key(index: int) -> str:
    return f"Column {index + 1}"


def is_section_marker(cells: Sequence[str]) -> bool:
    return len(cells) == 1 and SECTION_MARKER in cells[0]


def looks_like_section_header(cells: Sequence[str]) -> bool:
    if not 1 < len(cells) < SECTION_HEADER_MAX_CELLS:
        return False
    if not all(0 < len(c) < SECTION_HEADER_MAX_TEXT for c in cells):
        return False
    return not any(_re_date_like.match(c) for c in cells)


def looks_like_inferred_header(cells: Sequence[str]) -> bool:
    return len(cells) > 1 and all(len(c) < INFERRED_HEADER_MAX_TEXT for c in cells)


class SectionState(Enum):
    NO_SECTION = 'no_section'
    NO_HEADER = 'in_section_no_header'
    HAS_HEADER = 'in_section_has_header'


class SectionScanner:
    """Row-by-row state machine splitting one table into Sections.

    feed() consumes one row (as cell texts) and returns the Section it
    flushed, if any. finish() flushes the open section at end of table.
    """

    def __init__(self):
        self.state = SectionState.NO_SECTION
        self.headers: List[str] = []
        self._title: Optional[str] = None
        self._data: List[Record] = []

    def _flush(self) -> Optional[Section]:
        if self._title is None or not self._data:
            return None
        return Section.titled(self._title, tuple(self._data))

    def _start_section(self, title: str) -> Optional[Section]:
        done = self._flush()
        self._title = title.strip()
        self._data = []
        self.headers = []
        self.state = SectionState.NO_HEADER
        return done

    def feed(self, cells: Sequence[str]) -> Optional[Section]:
        if is_section_marker(cells):
            return self._start_section(cells[0])
        if self.state is SectionState.NO_SECTION or not cells:
            return None
        if self.state is SectionState.NO_HEADER:
            if looks_like_section_header(cells):
                self.headers = [header_key(c) for c in cells]
                self.state = SectionState.HAS_HEADER
            return None
        if len(cells) == len(self.headers):
            record: Record = {}
            for i, header in enumerate(self.headers):
                record[header or placeholder_key(i)] = cells[i] or ''
            self._data.append(record)
        return None

    def finish(self) -> Optional[Section]:
        done = self._flush()
        self._title = None
        self._data = []
        self.headers = []
        self.state = SectionState.NO_SECTION
        return done


class SectionNormalizer:

    def normalize(self, table: Table) -> List[Section]:
        scanner = SectionScanner()
        sections: List[Section] = []
        for row in table.rows:
            done = scanner.feed(row.texts)
            if done is not None:
                sections.append(done)
        done = scanner.finish()
        if done is not None:
            sections.append(done)
        log.debug(f"sections table={table.table_id} rows={table.total_rows} sections={len(sections)}")
        return sections


def find_header_index(rows: Sequence[Row]) -> int:
    """First header-looking row; 0 when none qualifies."""
    for i, row in enumerate(rows):
        if looks_like_inferred_header(row.texts):
            return i
    return 0


class HeaderInferenceNormalizer:

    def normalize(self, table: Table) -> List[RecordSet]:
        if not table.rows:
            return [RecordSet(table_id=table.table_id)]
        header_idx = find_header_index(table.rows)
        headers = [header_key(c) for c in table.rows[header_idx].texts]
        data: List[Record] = []
        for row in table.rows[header_idx + 1:]:
            cells = row.texts
            record: Record = {}
            for i, header in enumerate(headers):
                if i < len(cells):
                    record[header or placeholder_key(i)] = cells[i]
            data.append(record)
        log.debug(f"records table={table.table_id} header_row={header_idx} records={len(data)}")
        return [RecordSet(table_id=table.table_id, data=tuple(data))]


__all__ = [
    "SECTION_MARKER",
    "SectionState",
    "SectionScanner",
    "SectionNormalizer",
    "HeaderInferenceNormalizer",
    "find_header_index",
    "is_section_marker",
    "looks_like_section_header",
    "looks_like_inferred_header",
]
