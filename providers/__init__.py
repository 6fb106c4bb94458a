"""Tracking source registry.

Importing the package registers the built-in cargo sources.
"""
from providers.base import Normalizer, Source, available_sources, get_source, register
from providers import cargo  # noqa: F401  (registers dcsc / gmr)

__all__ = ["Normalizer", "Source", "available_sources", "get_source", "register"]
