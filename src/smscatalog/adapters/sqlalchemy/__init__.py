"""SQLAlchemy-backed catalog store."""

from __future__ import annotations

from .engine import connect_engine, create_catalog_engine
from .repository import SqlAlchemyCatalogRepository
from .store import SqlAlchemyCatalogStore
from .tables import LIVE_TABLE, SHADOW_PREFIX, build_catalog_table, read_path_indexes

__all__ = [
    "LIVE_TABLE",
    "SHADOW_PREFIX",
    "SqlAlchemyCatalogRepository",
    "SqlAlchemyCatalogStore",
    "build_catalog_table",
    "connect_engine",
    "create_catalog_engine",
    "read_path_indexes",
]
