from __future__ import annotations
"""Runtime configuration.

Resolution order (later wins):
  1. ScrapeConfig defaults
  2. config.json at CWD or project root (unknown keys ignored)
  3. environment: AWB_TIMEOUT, AWB_VERIFY_TLS, AWB_TIMEZONE
"""
import json
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

from .logger import Logger

log = Logger.bind(__name__)

DCSC_URL = "https://dcsc.in:7002/DCSC_webportal/GetAWBExportTracking.do"
GMR_URL = "https://international.gmrgroup.in/TrackAndTrace/CARGO/CargoTrackingdetailBeforeLogin.aspx"
GMR_REFERER = "https://international.gmrgroup.in/TrackAndTrace/UserLogin/tnt.aspx"

_TRUE = ('1', 'true', 'yes', 'on')


@dataclass(frozen=True)
class ScrapeConfig:
    timeout: float = 20.0
    max_retries: int = 3
    backoff_factor: float = 0.5
    max_redirects: int = 10
    user_agent: str = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
    dcsc_url: str = DCSC_URL
    gmr_url: str = GMR_URL
    gmr_referer: str = GMR_REFERER
    # the DCSC host serves a certificate that does not validate
    verify_tls: bool = False
    timezone: str = 'Asia/Kolkata'


def _config_candidates() -> list[Path]:
    return [
        Path.cwd() / 'config.json',
        Path(__file__).resolve().parent.parent / 'config.json',
    ]


def _read_json(path: Path) -> Dict[str, Any]:
    try:
        with path.open('r', encoding='utf-8') as f:
            data = json.load(f) or {}
    except (OSError, ValueError) as e:
        log.debug(f"config.json load fail path={path} error={e}")
        return {}
    if not isinstance(data, dict):
        log.debug(f"config.json ignored path={path} reason=not an object")
        return {}
    return data


def _env_overrides(environ) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    if environ.get('AWB_TIMEOUT'):
        try:
            out['timeout'] = float(environ['AWB_TIMEOUT'])
        except ValueError:
            log.warn(f"AWB_TIMEOUT ignored value={environ['AWB_TIMEOUT']!r}")
    if environ.get('AWB_VERIFY_TLS'):
        out['verify_tls'] = environ['AWB_VERIFY_TLS'].strip().lower() in _TRUE
    if environ.get('AWB_TIMEZONE'):
        out['timezone'] = environ['AWB_TIMEZONE'].strip()
    return out


def load_config(path: Optional[Path] = None, environ=None) -> ScrapeConfig:
    known = {f.name for f in fields(ScrapeConfig)}
    values: Dict[str, Any] = {}
    candidates = [Path(path)] if path else _config_candidates()
    for p in candidates:
        if p.is_file():
            data = _read_json(p)
            values.update({k: v for k, v in data.items() if k in known})
            log.debug(f"config loaded path={p} keys={sorted(values)}")
            break
    values.update(_env_overrides(os.environ if environ is None else environ))
    return replace(ScrapeConfig(), **values)


__all__ = ["ScrapeConfig", "load_config", "DCSC_URL", "GMR_URL", "GMR_REFERER"]
