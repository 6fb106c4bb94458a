"""Error taxonomy shared by the extraction core and the outer layers.

Every fatal error carries a machine-readable ``kind`` and a human-readable
message so the HTTP and CLI layers can report it without inspecting types.
"""
from __future__ import annotations
from typing import Dict, Iterable


class ScrapeError(Exception):
    kind: str = 'scrape_error'

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, str]:
        return {'kind': self.kind, 'error': self.message}


class ParseError(ScrapeError):
    """HTML could not be decomposed into a table/row/cell grid."""
    kind = 'parse_error'


class UnsupportedSourceError(ScrapeError):
    kind = 'unsupported_source'

    def __init__(self, identifier: object, supported: Iterable[str] = ()):
        names = ', '.join(supported)
        msg = f"unsupported source: {identifier!r}"
        if names:
            msg += f" (supported: {names})"
        super().__init__(msg)
        self.identifier = identifier


class InvalidAwbError(ScrapeError):
    kind = 'invalid_awb'


class FetchError(ScrapeError):
    kind = 'fetch_error'


class NoDataFoundError(ScrapeError):
    """The tracking service itself reported that it has no data for the AWB."""
    kind = 'no_data'


class EmptyResultWarning(UserWarning):
    """Extraction succeeded but nothing survived normalization."""


__all__ = [
    "ScrapeError",
    "ParseError",
    "UnsupportedSourceError",
    "InvalidAwbError",
    "FetchError",
    "NoDataFoundError",
    "EmptyResultWarning",
]
