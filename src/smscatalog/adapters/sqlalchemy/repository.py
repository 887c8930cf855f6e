"""Read access to the live catalog table."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import func, inspect, select

from .tables import LIVE_TABLE, build_catalog_table, row_to_entry

if TYPE_CHECKING:
    from sqlalchemy import Select
    from sqlalchemy.engine import Connection, Engine

    from smscatalog.domain.model import CatalogEntry


class SqlAlchemyCatalogRepository:
    """Queries the published catalog the way the storefront does.

    Every method runs in its own connection, so a call observes exactly one
    published generation. Before the first publish the catalog reads as empty.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self.table = build_catalog_table(LIVE_TABLE)

    def count(self) -> int:
        with self.engine.connect() as connection:
            if not self._published(connection):
                return 0
            stmt = select(func.count()).select_from(self.table)
            return connection.execute(stmt).scalar_one()

    def get(self, identity: str) -> CatalogEntry | None:
        with self.engine.connect() as connection:
            if not self._published(connection):
                return None
            stmt = select(self.table).where(self.table.c.identity == identity)
            row = connection.execute(stmt).one_or_none()
        return row_to_entry(row) if row is not None else None

    def list_entries(
        self,
        *,
        max_priority: int | None = None,
        service_localized: str | None = None,
        country_localized: str | None = None,
        available: bool | None = None,
    ) -> list[CatalogEntry]:
        stmt: Select[tuple[object, ...]] = select(self.table)
        if max_priority is not None:
            stmt = stmt.where(self.table.c.priority <= max_priority)
        if service_localized is not None:
            stmt = stmt.where(self.table.c.service_localized == service_localized)
        if country_localized is not None:
            stmt = stmt.where(self.table.c.country_localized == country_localized)
        if available is not None:
            stmt = stmt.where(self.table.c.available == available)
        stmt = stmt.order_by(self.table.c.priority, self.table.c.price, self.table.c.identity)

        with self.engine.connect() as connection:
            if not self._published(connection):
                return []
            rows = connection.execute(stmt).all()
        return [row_to_entry(row) for row in rows]

    def _published(self, connection: Connection) -> bool:
        return inspect(connection).has_table(LIVE_TABLE)
