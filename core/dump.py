from __future__ import annotations
"""Envelope export helper.

Writes the envelope JSON the way the tracking UI offered it for download:
``awb_<number>_<epoch ms>.json``.
"""
import json
import time
from pathlib import Path
from typing import Any, Dict, Optional


def dump_envelope(envelope: Dict[str, Any], *, dump_dir: Path, stamp_ms: Optional[int] = None) -> Path:
    dump_dir.mkdir(parents=True, exist_ok=True)
    stamp = stamp_ms if stamp_ms is not None else int(time.time() * 1000)
    out_path = dump_dir / f"awb_{envelope.get('awb_number', '')}_{stamp}.json"
    out_path.write_text(json.dumps(envelope, ensure_ascii=False, indent=2), encoding='utf-8')
    return out_path
