"""Sakura Cloud API access: HTTP client, pagination and per-type backends."""

from .aggregator import FetchAggregator
from .client import SakuraClient

__all__ = ["FetchAggregator", "SakuraClient"]
