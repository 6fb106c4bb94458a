"""Cargo tracking table extraction core.

Submodules are not imported at package-import time; import them
explicitly (for example ``from core.scrape import process_html``).
"""

__all__ = ["assemble", "client", "config", "errors", "grid", "models", "normalize", "scrape"]
