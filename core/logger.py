from __future__ import annotations
"""Project logger wrapper and logging setup.

Policy:
  - Concise English messages, ``key=value`` pairs
  - f-string style (callers pre-format strings)
  - Console: no timestamp
  - Bound instances per module: ``log = Logger.bind(__name__)``
  - Timing helper (time_block)
"""
import logging
import time
import sys
import json
from pathlib import Path
from logging.config import dictConfig
from typing import Callable, Optional, Dict

from colorama import init as colorama_init, Fore, Style

LEVEL_STYLE: Dict[int, Dict[str, str]] = {
    logging.DEBUG: {
        "color": Fore.CYAN,
        "style": Style.DIM
    },
    logging.INFO: {
        "color": Fore.GREEN,
        "style": Style.NORMAL
    },
    logging.WARNING: {
        "color": Fore.YELLOW,
        "style": Style.NORMAL
    },
    logging.ERROR: {
        "color": Fore.RED,
        "style": Style.BRIGHT
    },
    logging.CRITICAL: {
        "color": Fore.RED,
        "style": Style.BRIGHT
    },
}


class ColorFormatter(logging.Formatter):

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        base = super().format(record)
        spec = LEVEL_STYLE.get(record.levelno)
        if not spec:
            return base
        return f"{spec['style']}{spec['color']}{base}{Style.RESET_ALL}"


def _apply_inline(level: int):
    """Color console setup without timestamp."""
    colorama_init()
    handler = logging.StreamHandler(sys.stdout)
    fmt = "[ %(levelname)5s ] %(name)s : %(message)s"
    handler.setFormatter(ColorFormatter(fmt=fmt))
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(handler)
    root.setLevel(level)


def setup_logging(level: int = logging.INFO):
    """Initialize logging.

    Priority:
      1. log.config.json at CWD or project root (dictConfig)
      2. Inline color fallback
    """
    cfg_path_candidates = [
        Path.cwd() / 'log.config.json',
        Path(__file__).resolve().parent.parent / 'log.config.json',
    ]
    for p in cfg_path_candidates:
        if p.is_file():
            try:
                with p.open('r', encoding='utf-8') as f:
                    data = json.load(f)
                dictConfig(data)
                logging.getLogger().setLevel(level)  # CLI level wins
                logging.getLogger(__name__).debug(f"{p} loaded.")
                return
            except (OSError, ValueError, TypeError) as e:
                print(f"[logging] config load fail {p}: {e}", file=sys.stderr)
                continue
    _apply_inline(level)
    logging.getLogger(__name__).debug("inline logging config active")


class Logger:
    """Thin wrapper bound to a module logger name.

        log = Logger.bind(__name__)
        log.info(f"scrape done tables={n}")
    """

    def __init__(self, name: Optional[str] = None):
        self._name = name or __name__

    @staticmethod
    def bind(name: str) -> "Logger":
        return Logger(name)

    def debug(self, msg: str) -> None:
        logging.getLogger(self._name).debug(msg)

    def info(self, msg: str) -> None:
        logging.getLogger(self._name).info(msg)

    def warn(self, msg: str) -> None:  # noqa: D401
        logging.getLogger(self._name).warning(msg)

    def error(self, msg: str) -> None:
        logging.getLogger(self._name).error(msg)

    def exception(self, msg: str) -> None:
        logging.getLogger(self._name).exception(msg)

    # --- helpers ---
    def time_block(self, label: str) -> Callable[[], float]:
        """Return a closure that logs and returns elapsed ms when invoked.

        Usage:
            done = log.time_block("dcsc fetch")
            ... work ...
            done()
        """
        start = time.perf_counter()

        def _end() -> float:
            elapsed_ms = (time.perf_counter() - start) * 1000.0
            self.debug(f"{label} {elapsed_ms:.1f}ms")
            return elapsed_ms

        return _end


__all__ = ["Logger", "setup_logging", "ColorFormatter"]
