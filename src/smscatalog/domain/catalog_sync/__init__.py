"""Catalog synchronization pipeline."""

from __future__ import annotations

from .context import SyncContext, SyncReport
from .merge import IdentityMerger
from .normalization import PriceNormalizer
from .orchestrator import CatalogSyncPipeline

__all__ = [
    "CatalogSyncPipeline",
    "IdentityMerger",
    "PriceNormalizer",
    "SyncContext",
    "SyncReport",
]
