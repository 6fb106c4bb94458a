from __future__ import annotations
from typing import List
import logging

from bs4.dammit import EncodingDetector


logger = logging.getLogger(__name__)

FALLBACK_ENCODINGS = ('utf-8', 'windows-1252', 'latin-1')


def _header_charset(resp) -> str | None:
    content_type = resp.headers.get('Content-Type', '') or ''
    for part in content_type.split(';'):
        part = part.strip()
        if part.lower().startswith('charset='):
            value = part.split('=', 1)[1].strip().strip('"')
            return value or None
    return None


def _candidates(resp) -> List[str]:
    candidates = [_header_charset(resp)]
    # <meta charset> / xml declaration
    candidates.append(EncodingDetector.find_declared_encoding(resp.content or b"", is_html=True))
    candidates.append(getattr(resp, 'apparent_encoding', None))
    candidates.extend(FALLBACK_ENCODINGS)
    # normalize and dedupe while preserving order
    seen = set()
    out = []
    for c in candidates:
        if not c:
            continue
        cn = str(c).lower()
        if cn in seen:
            continue
        seen.add(cn)
        out.append(c)
    return out


def decode_response(resp) -> str:
    """Decode a requests.Response body and return text.

    Strategy: Content-Type charset, then the document's declared encoding,
    then resp.apparent_encoding, then utf-8 / windows-1252 / latin-1. The
    first candidate that decodes strictly wins; resp.encoding is set to it.
    """
    content_bytes = resp.content or b''
    tried = []
    for enc in _candidates(resp):
        try:
            text = content_bytes.decode(enc, errors='strict')
        except (LookupError, UnicodeDecodeError):
            tried.append(enc)
            continue
        resp.encoding = enc
        logger.debug('decoded response encoding=%s rejected=%s url=%s', enc, tried, getattr(resp, 'url', ''))
        return text
    # unreachable with latin-1 in the list, kept for odd codec tables
    logger.warning('encoding detection failed url=%s; decoding utf-8 with replace', getattr(resp, 'url', ''))
    return content_bytes.decode('utf-8', errors='replace')
