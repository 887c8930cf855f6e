"""Domain ports implemented by adapters."""

from __future__ import annotations

from .fetching import OfferingFetcher, RateSource
from .publishing import CatalogStore, PublishError, PublishResult, StoreConnectionError

__all__ = [
    "CatalogStore",
    "OfferingFetcher",
    "PublishError",
    "PublishResult",
    "RateSource",
    "StoreConnectionError",
]
