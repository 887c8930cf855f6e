"""Identity merge phase."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from smscatalog.domain.catalog_sync.context import SyncContext
    from smscatalog.domain.model import CatalogEntry

log = getLogger(__name__)


class IdentityMerger:
    """Groups entries per logical offering and keeps every provider's entry.

    Entries are bucketed by (localized service, localized country) so that the
    same offering from two providers or operators sits side by side, then the
    buckets are flattened in first-seen order. Nothing is overwritten; the only
    entries removed are exact identity repeats, which are counted.
    """

    name: str = "merge"

    def run(self, entries: Iterable[CatalogEntry], *, context: SyncContext) -> list[CatalogEntry]:
        groups: dict[tuple[str, str], list[CatalogEntry]] = {}
        seen: set[str] = set()
        for entry in entries:
            if entry.identity in seen:
                context.report.duplicate_identities += 1
                log.debug("Dropping repeated identity %s", entry.identity)
                continue
            seen.add(entry.identity)
            groups.setdefault(entry.group_key, []).append(entry)

        merged = [entry for group in groups.values() for entry in group]
        log.info("Merged %s entries into %s offerings", len(merged), len(groups))
        return merged
