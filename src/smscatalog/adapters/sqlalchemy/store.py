"""Shadow-then-swap publisher for the catalog table."""

from __future__ import annotations

import uuid
from itertools import batched
from logging import getLogger
from typing import TYPE_CHECKING, Any

from sqlalchemy import MetaData, Table, func, inspect, insert, select, text
from sqlalchemy.exc import DataError, IntegrityError

from smscatalog.domain.ports import PublishError, PublishResult

from .engine import connect_engine
from .tables import (
    LIVE_TABLE,
    SHADOW_PREFIX,
    build_catalog_table,
    entry_to_row,
    read_path_indexes,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.engine import Connection, Engine

    from smscatalog.domain.model import CatalogEntry
    from smscatalog.domain.ports import CatalogStore

log = getLogger(__name__)

DEFAULT_CHUNK_SIZE = 500
_ROW_ERRORS = (IntegrityError, DataError)


class SqlAlchemyCatalogStore:
    """Replace the live catalog table in one indivisible step.

    ``replace_catalog`` fills a brand-new shadow table, then drops the live
    table and renames the shadow into its place inside a single transaction.
    Readers on other connections see the old table until that transaction
    commits and the new one afterwards. Anything that fails before the swap
    drops the shadow and leaves the live table as it was.
    """

    def __init__(self, engine: Engine, *, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        self.engine = engine
        self.chunk_size = chunk_size

    @classmethod
    def connect(cls, database_uri: str) -> SqlAlchemyCatalogStore:
        store = cls(connect_engine(database_uri))
        log.info("Database connected")
        return store

    def close(self) -> None:
        self.engine.dispose()

    def replace_catalog(self, entries: Sequence[CatalogEntry]) -> PublishResult:
        shadow = self.prepare_shadow()
        try:
            inserted, rejected = self.load_shadow(shadow, entries)
            if inserted == 0:
                raise PublishError("Refusing to publish an empty catalog")
            live_count = self.swap(shadow)
        except Exception:
            self._drop_table(shadow.name)
            raise

        log.info(
            "Published catalog: inserted=%s, rejected=%s, live=%s", inserted, rejected, live_count
        )
        return PublishResult(
            attempted=len(entries),
            inserted=inserted,
            rejected=rejected,
            live_count=live_count,
        )

    def prepare_shadow(self) -> Table:
        """Drop shadows left by crashed runs and create an empty one for this run."""

        for name in inspect(self.engine).get_table_names():
            if name.startswith(SHADOW_PREFIX):
                log.warning("Dropping leftover shadow table %s", name)
                self._drop_table(name)

        shadow = build_catalog_table(f"{SHADOW_PREFIX}{uuid.uuid4().hex[:12]}")
        with self.engine.begin() as connection:
            shadow.create(connection)
        log.info("Created shadow table %s", shadow.name)
        return shadow

    def load_shadow(self, shadow: Table, entries: Sequence[CatalogEntry]) -> tuple[int, int]:
        """Bulk insert ``entries``; rows the database rejects are skipped and counted."""

        inserted = 0
        rejected = 0
        rows = [entry_to_row(entry) for entry in entries]
        with self.engine.begin() as connection:
            for chunk in batched(rows, self.chunk_size):
                try:
                    with connection.begin_nested():
                        connection.execute(insert(shadow), list(chunk))
                    inserted += len(chunk)
                except _ROW_ERRORS:
                    ok, failed = self._insert_rows_individually(connection, shadow, chunk)
                    inserted += ok
                    rejected += failed
        log.info("Bulk inserted %s rows into %s (%s rejected)", inserted, shadow.name, rejected)
        return inserted, rejected

    def swap(self, shadow: Table) -> int:
        """Drop the live table and rename ``shadow`` over it atomically."""

        preparer = self.engine.dialect.identifier_preparer
        live = build_catalog_table(LIVE_TABLE)
        with self.engine.begin() as connection:
            Table(LIVE_TABLE, MetaData()).drop(connection, checkfirst=True)
            connection.execute(
                text(
                    f"ALTER TABLE {preparer.quote(shadow.name)} "
                    f"RENAME TO {preparer.quote(LIVE_TABLE)}"
                )
            )
            for index in read_path_indexes(live):
                index.create(connection)
            live_count = connection.execute(select(func.count()).select_from(live)).scalar_one()
        log.info("Renamed %s to %s", shadow.name, LIVE_TABLE)
        return live_count

    def _insert_rows_individually(
        self,
        connection: Connection,
        shadow: Table,
        rows: Sequence[dict[str, Any]],
    ) -> tuple[int, int]:
        inserted = 0
        rejected = 0
        for row in rows:
            try:
                with connection.begin_nested():
                    connection.execute(insert(shadow), row)
                inserted += 1
            except _ROW_ERRORS as exc:
                rejected += 1
                log.warning("Rejected catalog row %s: %s", row.get("identity"), exc.orig)
        return inserted, rejected

    def _drop_table(self, name: str) -> None:
        with self.engine.begin() as connection:
            Table(name, MetaData()).drop(connection, checkfirst=True)


if TYPE_CHECKING:
    _store_check: CatalogStore = SqlAlchemyCatalogStore.connect("sqlite://")
