from __future__ import annotations
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Union
from zoneinfo import ZoneInfo

from providers import Source, get_source

from .assemble import GRANULARITY_RECORDS, GRANULARITY_ROWS, GRANULARITIES, build_envelope
from .client import AwbClient
from .config import ScrapeConfig, load_config
from .errors import InvalidAwbError, NoDataFoundError
from .grid import extract_tables
from .logger import Logger


log = Logger.bind(__name__)

NO_DATA_MARKER = 'No Data Found'


def process_html(source: Union[str, Source], html: Union[str, bytes], *, awb_number: str = '', granularity: str = GRANULARITY_RECORDS, extracted_at: Optional[datetime] = None, tz: str = 'Asia/Kolkata') -> Dict[str, Any]:
    """Extract, select, normalize and assemble one fetched document.

    Pure apart from the default timestamp: pass ``extracted_at`` for a
    byte-identical envelope across runs.
    """
    src = source if isinstance(source, Source) else get_source(source)
    tables = src.select_tables(extract_tables(html))
    items = tables if granularity == GRANULARITY_ROWS else src.normalize(tables)
    return build_envelope(
        awb_number=awb_number,
        service_name=src.label,
        service_code=src.code,
        extracted_at=extracted_at or datetime.now(ZoneInfo(tz)),
        items=items,
        granularity=granularity,
    )


class Scrape:
    """Fetch + process orchestrator used by the HTTP and CLI layers."""

    def __init__(self, config: Optional[ScrapeConfig] = None, client_factory: Callable[[ScrapeConfig], AwbClient] = AwbClient):
        self.config = config or load_config()
        self.client_factory = client_factory

    def run(self, service: str, awb_number: str, granularity: str = GRANULARITY_RECORDS) -> Dict[str, Any]:
        """Return ``{'data': envelope, 'url': request url description}``."""
        if awb_number is not None and (isinstance(awb_number, bool) or not isinstance(awb_number, (str, int))):
            raise InvalidAwbError(f"AWB number must be text or digits, got {type(awb_number).__name__}")
        awb = '' if awb_number is None else str(awb_number).strip()
        if not awb:
            raise InvalidAwbError('AWB number is required')
        src = get_source(service)
        if granularity not in GRANULARITIES:
            raise ValueError(f"unknown granularity: {granularity!r} (expected one of {', '.join(GRANULARITIES)})")
        log.info(f"Scrape start service={src.key} awb={awb}")
        done = log.time_block(f"scrape service={src.key} awb={awb}")
        with self.client_factory(self.config) as client:
            html = client.fetch(src.key, awb)
            url = client.describe_url(src.key, awb)
        envelope = process_html(src, html, awb_number=awb, granularity=granularity, tz=self.config.timezone)
        if src.key == 'dcsc' and envelope['total_tables'] == 0 and NO_DATA_MARKER in html:
            raise NoDataFoundError(f"No Data Found for this AWB number in DCSC system. Please verify the AWB number. awb={awb}")
        elapsed_ms = done()
        log.info(f"Scrape done service={src.key} awb={awb} tables={envelope['total_tables']} {elapsed_ms:.1f}ms")
        return {'data': envelope, 'url': url}
