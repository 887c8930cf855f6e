"""Engine construction for the catalog store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import create_engine, event, select
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from smscatalog.domain.ports import StoreConnectionError

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

# the catalog swap drops and renames tables inside one transaction
TRANSACTIONAL_DDL_BACKENDS = frozenset({"postgresql", "sqlite"})


def _enable_sqlite_transactional_ddl(engine: Engine) -> None:
    """Let pysqlite run DROP/ALTER inside the surrounding transaction.

    pysqlite only opens transactions before DML by default, which would commit
    the catalog swap statement by statement. Emitting BEGIN ourselves makes the
    drop-rename-index sequence one transaction, and keeps SAVEPOINT working.
    """

    @event.listens_for(engine, "connect")
    def _do_connect(dbapi_connection: Any, connection_record: Any) -> None:  # noqa: ARG001
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _do_begin(conn: Any) -> None:
        conn.exec_driver_sql("BEGIN")


def create_catalog_engine(database_uri: str) -> Engine:
    """Build an engine for a backend that can swap the catalog atomically.

    Backends that commit DDL implicitly (MySQL, MariaDB, Oracle) would expose a
    missing catalog table between the drop and the rename, so they are refused.
    """

    url = make_url(database_uri)
    backend = url.get_backend_name()
    if backend not in TRANSACTIONAL_DDL_BACKENDS:
        supported = ", ".join(sorted(TRANSACTIONAL_DDL_BACKENDS))
        raise StoreConnectionError(
            f"Unsupported catalog backend {backend!r}; expected one of: {supported}"
        )
    if backend != "sqlite":
        return create_engine(url, future=True, pool_pre_ping=True)

    kwargs: dict[str, Any] = {"future": True}
    if url.database in (None, "", ":memory:"):
        kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}
    engine = create_engine(url, **kwargs)
    _enable_sqlite_transactional_ddl(engine)
    return engine


def connect_engine(database_uri: str) -> Engine:
    """Create an engine and prove the database is reachable."""

    engine = create_catalog_engine(database_uri)
    try:
        with engine.connect() as connection:
            connection.execute(select(1))
    except SQLAlchemyError as exc:
        engine.dispose()
        raise StoreConnectionError(f"Could not connect to catalog store: {exc}") from exc
    return engine
