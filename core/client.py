from __future__ import annotations
"""HTTP client for the cargo tracking pages.

DCSC: form POST, TLS verification disabled by default (see ScrapeConfig).
GMR : GET with the AWB in the query string and the tracking portal Referer.
"""
import re
from typing import Any, Dict, Optional, Tuple

import requests
import urllib3
from requests.adapters import HTTPAdapter, Retry

from .config import ScrapeConfig
from .encoding import decode_response
from .errors import FetchError, UnsupportedSourceError
from .logger import Logger


log = Logger.bind(__name__)

SUPPORTED_KEYS = ('dcsc', 'gmr')

_re_non_digit = re.compile(r"[^0-9]")


def split_awb(awb: str) -> Tuple[str, str]:
    """'057-00359741' -> ('057', '00359741'); fewer than 4 digits -> ('', digits)"""
    clean = _re_non_digit.sub('', awb or '')
    if len(clean) >= 4:
        return clean[:3], clean[3:]
    return '', clean


def gmr_params(awb: str) -> Dict[str, str]:
    prefix, number = split_awb(awb)
    return {
        'awbpfx': prefix,
        'cod_awb_num': number,
        'pageno': '0',
        'VTSrno': '0',
        'totVT': '0',
    }


def dcsc_form(awb: str) -> Dict[str, str]:
    prefix, number = split_awb(awb)
    return {'awbpfx': prefix, 'cod_awb_num': number}


class AwbClient:

    def __init__(self, config: Optional[ScrapeConfig] = None):
        self.config = config or ScrapeConfig()
        self.session = requests.Session()
        self.session.max_redirects = self.config.max_redirects
        retries = Retry(
            total=self.config.max_retries,
            backoff_factor=self.config.backoff_factor,
            status_forcelist=(429, 500, 502, 503, 504),
            allowed_methods=("GET", "POST"),
        )
        adapter = HTTPAdapter(max_retries=retries)
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)
        self.session.headers.update({
            "User-Agent": self.config.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        })
        if not self.config.verify_tls:
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    def describe_url(self, source_key: str, awb: str) -> str:
        prefix, number = split_awb(awb)
        if source_key == 'gmr':
            return requests.Request('GET', self.config.gmr_url, params=gmr_params(awb)).prepare().url
        if source_key == 'dcsc':
            return f"{self.config.dcsc_url} (POST: awbpfx={prefix}, cod_awb_num={number})"
        raise UnsupportedSourceError(source_key, SUPPORTED_KEYS)

    def fetch(self, source_key: str, awb: str) -> str:
        if source_key == 'dcsc':
            return self._send('POST', self.config.dcsc_url, data=dcsc_form(awb), verify=self.config.verify_tls)
        if source_key == 'gmr':
            return self._send('GET', self.config.gmr_url, params=gmr_params(awb), headers={'Referer': self.config.gmr_referer})
        raise UnsupportedSourceError(source_key, SUPPORTED_KEYS)

    def _send(self, method: str, url: str, **kwargs: Any) -> str:
        log.debug(f"http {method.lower()} start url={url} params={kwargs.get('params') or kwargs.get('data')}")
        done = log.time_block(f"http {method.lower()} url={url}")
        try:
            resp = self.session.request(method, url, timeout=self.config.timeout, **kwargs)
            resp.raise_for_status()
        except requests.RequestException as e:
            log.error(f"http {method.lower()} fail url={url} error={e}")
            raise FetchError(f"failed to fetch {url}: {e}") from e
        elapsed = done() / 1000.0
        log.debug(f"http {method.lower()} done url={url} final={resp.url} elapsed={elapsed:.2f}s status={resp.status_code} bytes={len(resp.content)}")
        return decode_response(resp)

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


__all__ = ["AwbClient", "split_awb", "gmr_params", "dcsc_form"]
