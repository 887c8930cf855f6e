"""Port for replacing the persisted catalog wholesale."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence

    from smscatalog.domain.model import CatalogEntry


class StoreConnectionError(RuntimeError):
    """Raised when the catalog store cannot be reached at all."""


class PublishError(RuntimeError):
    """Raised when a catalog replacement is abandoned before the swap."""


@dataclass(slots=True, frozen=True)
class PublishResult:
    attempted: int
    inserted: int
    rejected: int
    live_count: int


class CatalogStore(Protocol):
    """Store capability: atomically replace the named catalog dataset.

    Readers must observe either the previous complete catalog or the new one;
    if ``replace_catalog`` raises, the previous catalog stays live.
    """

    def replace_catalog(self, entries: Sequence[CatalogEntry]) -> PublishResult: ...

    def close(self) -> None: ...


__all__ = ["CatalogStore", "PublishError", "PublishResult", "StoreConnectionError"]
