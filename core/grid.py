from __future__ import annotations
"""Generic HTML table grid extraction.

Knows nothing about the tracking sources: every <table> in the document
becomes a Table of Rows of non-empty Cells.

Rules:
- table_id: the element's id attribute, else table_<n> where n counts
  retained tables only (no collision check against real ids)
- <td> cells not wrapped in a <tr> are not rows: the lxml builder does not
  synthesize the missing <tr> (an HTML5 parser would), so such a table
  yields no rows and is dropped
- row_number: index among all <tr> of the table, dropped rows included
- cell text is trimmed of whitespace and U+FEFF; empty cells, rows
  without cells and tables without rows are dropped
"""
from typing import List, Union
import re

from bs4 import BeautifulSoup

from .errors import ParseError
from .logger import Logger
from .models import Cell, Row, Table

log = Logger.bind(__name__)

_re_trim = re.compile(r"^[\s\ufeff]+|[\s\ufeff]+$")


def _parse(html: Union[str, bytes]) -> BeautifulSoup:
    if not isinstance(html, (str, bytes)):
        raise ParseError(f"html must be str or bytes, got {type(html).__name__}")
    try:
        return BeautifulSoup(html, 'lxml')
    except Exception as e:  # noqa: BLE001
        raise ParseError(f"html parse failed: {e}") from e


def _trim(text: str) -> str:
    return _re_trim.sub('', text)


def _extract_row(tr, row_number: int) -> Row:
    cells = []
    for cell in tr.find_all(['td', 'th']):
        text = _trim(cell.get_text())
        if text:
            cells.append(Cell(text=text, is_header=cell.name == 'th'))
    return Row(row_number=row_number, cells=tuple(cells))


def extract_tables(html: Union[str, bytes]) -> List[Table]:
    soup = _parse(html)
    tables: List[Table] = []
    seen = 0
    for el in soup.find_all('table'):
        seen += 1
        rows = []
        for idx, tr in enumerate(el.find_all('tr')):
            row = _extract_row(tr, idx)
            if row.cells:
                rows.append(row)
        if not rows:
            continue
        table_id = el.get('id') or f"table_{len(tables)}"
        tables.append(Table(table_id=table_id, rows=tuple(rows)))
    log.debug(f"extract tables={len(tables)} seen={seen} rows={sum(t.total_rows for t in tables)}")
    return tables


__all__ = ["extract_tables"]
