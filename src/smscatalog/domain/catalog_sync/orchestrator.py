"""Sequencing of a single catalog synchronization run."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from smscatalog.domain.catalog_sync.context import SyncContext, SyncReport
from smscatalog.domain.catalog_sync.merge import IdentityMerger
from smscatalog.domain.catalog_sync.normalization import PriceNormalizer
from smscatalog.domain.pricing import PricingPolicy

if TYPE_CHECKING:
    from collections.abc import Sequence

    from smscatalog.domain.canonicalization import CountryResolver, ServicePriorityTable
    from smscatalog.domain.model import RawOffering
    from smscatalog.domain.ports import CatalogStore, OfferingFetcher, RateSource

StoreFactory = Callable[[], "CatalogStore"]

log = getLogger(__name__)


@dataclass(slots=True)
class CatalogSyncPipeline:
    """Refresh rates, fetch, normalize, merge and publish the catalog.

    Every failure after the store connection is established is logged and the
    run ends without publishing, leaving the previous catalog live. Only a
    failure to connect to the store propagates to the caller.
    """

    fetchers: Sequence[OfferingFetcher]
    rate_source: RateSource
    store_factory: StoreFactory
    countries: CountryResolver
    services: ServicePriorityTable
    pricing: PricingPolicy = field(default_factory=PricingPolicy)
    normalizer: PriceNormalizer = field(default_factory=PriceNormalizer)
    merger: IdentityMerger = field(default_factory=IdentityMerger)

    def run(self) -> SyncReport:
        log.info("Starting catalog sync with %s providers", len(self.fetchers))
        rates = asyncio.run(self.rate_source.fetch_rates())
        log.info("Using %s currency rates: usd=%s, rub=%s", rates.source, rates.usd, rates.rub)
        context = SyncContext(
            rates=rates,
            countries=self.countries,
            services=self.services,
            pricing=self.pricing,
        )

        store = self.store_factory()
        try:
            self._run_stages(store, context)
        finally:
            store.close()
            log.info("Store disconnected")
        return context.report

    def _run_stages(self, store: CatalogStore, context: SyncContext) -> None:
        report = context.report
        try:
            offerings = asyncio.run(self.fetch_all())
            report.raw_count = len(offerings)
            log.info("Fetched %s raw offerings from all providers", report.raw_count)

            entries = self.normalizer.run(offerings, context=context)
            entries = self.merger.run(entries, context=context)

            result = store.replace_catalog(entries)
            report.rejected_rows = result.rejected
            report.final_count = result.live_count
            report.published = True
        except Exception:
            log.exception("Catalog sync failed; the previous catalog stays live")
        log.info("Catalog sync finished: %s", report.summary())

    async def fetch_all(self) -> list[RawOffering]:
        """Fetch every provider concurrently; any provider failure fails the run."""

        batches = await asyncio.gather(*(fetcher.fetch_offerings() for fetcher in self.fetchers))
        offerings: list[RawOffering] = []
        for fetcher, batch in zip(self.fetchers, batches, strict=True):
            log.info("Fetched %s offerings from %s", len(batch), fetcher.provider)
            offerings.extend(batch)
        return offerings
