"""SQLAlchemy table definitions for the published catalog.

The catalog lives in ``catalog_entry``. Each publish builds a fresh
``catalog_entry_shadow_<token>`` table and renames it over the live one, so
the table is described by a builder rather than a single module-level
``Table``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Float,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
)

from smscatalog.domain.model import CatalogEntry, Provider

if TYPE_CHECKING:
    from sqlalchemy import Row

LIVE_TABLE: Final[str] = "catalog_entry"
SHADOW_PREFIX: Final[str] = "catalog_entry_shadow_"


def build_catalog_table(name: str, metadata: MetaData | None = None) -> Table:
    """Describe a catalog table named ``name`` (live or shadow).

    Constraint names embed the table name so a renamed shadow never clashes with
    the next run's shadow.
    """

    return Table(
        name,
        metadata or MetaData(),
        Column("identity", String(255), nullable=False),
        Column("provider", String(32), nullable=False),
        Column("service", String(128), nullable=False),
        Column("service_localized", String(255), nullable=False),
        Column("country", String(128), nullable=False),
        Column("country_localized", String(255), nullable=False),
        Column("country_code", String(8), nullable=False),
        Column("operator", String(128), nullable=False),
        Column("price", Integer, nullable=False),
        Column("priority", Integer, nullable=False),
        Column("available", Boolean, nullable=False),
        Column("success_rate", Float, nullable=True),
        PrimaryKeyConstraint("identity", name=f"pk_{name}"),
        CheckConstraint("price > 0", name=f"ck_{name}_positive_price"),
    )


def read_path_indexes(table: Table) -> list[Index]:
    """Indexes the storefront queries rely on, named after ``table``."""

    name = table.name
    return [
        Index(f"ix_{name}_priority_available", table.c.priority, table.c.available),
        Index(f"ix_{name}_service_localized", table.c.service_localized),
        Index(f"ix_{name}_service", table.c.service),
        Index(
            f"ix_{name}_service_country_available",
            table.c.service_localized,
            table.c.country_localized,
            table.c.available,
        ),
    ]


def entry_to_row(entry: CatalogEntry) -> dict[str, Any]:
    return {
        "identity": entry.identity,
        "provider": entry.provider.value,
        "service": entry.service,
        "service_localized": entry.service_localized,
        "country": entry.country,
        "country_localized": entry.country_localized,
        "country_code": entry.country_code,
        "operator": entry.operator,
        "price": entry.price,
        "priority": entry.priority,
        "available": entry.available,
        "success_rate": entry.success_rate,
    }


def row_to_entry(row: Row[Any]) -> CatalogEntry:
    mapping = row._mapping  # noqa: SLF001
    return CatalogEntry(
        identity=mapping["identity"],
        provider=Provider(mapping["provider"]),
        service=mapping["service"],
        service_localized=mapping["service_localized"],
        country=mapping["country"],
        country_localized=mapping["country_localized"],
        country_code=mapping["country_code"],
        operator=mapping["operator"],
        price=mapping["price"],
        priority=mapping["priority"],
        available=bool(mapping["available"]),
        success_rate=mapping["success_rate"],
    )
