"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from smscatalog.adapters.exchange_rates import ExchangeRateClient
from smscatalog.adapters.fivesim import FiveSimFetcher
from smscatalog.adapters.smsactivate import SmsActivateFetcher
from smscatalog.adapters.sqlalchemy import SqlAlchemyCatalogStore
from smscatalog.config import get_database_config, get_pricing_config
from smscatalog.domain.canonicalization import load_country_resolver, load_service_priorities
from smscatalog.domain.catalog_sync import CatalogSyncPipeline
from smscatalog.domain.pricing import PricingPolicy

if TYPE_CHECKING:
    from collections.abc import Sequence

    from smscatalog.domain.catalog_sync import SyncReport
    from smscatalog.domain.catalog_sync.orchestrator import StoreFactory
    from smscatalog.domain.ports import CatalogStore, OfferingFetcher, RateSource

log = getLogger(__name__)


def sync_catalog(
    *,
    fetchers: Sequence[OfferingFetcher] | None = None,
    rate_source: RateSource | None = None,
    store_factory: StoreFactory | None = None,
    pricing: PricingPolicy | None = None,
) -> SyncReport:
    """Run one catalog synchronisation using the configured adapters."""

    if pricing is None:
        pricing_config = get_pricing_config()
        pricing = PricingPolicy(
            margin=pricing_config.margin,
            rounding_unit=pricing_config.rounding_unit,
        )
    effective_fetchers = (
        fetchers if fetchers is not None else (FiveSimFetcher(), SmsActivateFetcher())
    )
    effective_rates = rate_source or ExchangeRateClient()
    effective_store_factory = store_factory or _default_store_factory
    log.info(
        "Configured catalog sync: margin=%s, rounding_unit=%s",
        pricing.margin,
        pricing.rounding_unit,
    )

    pipeline = CatalogSyncPipeline(
        fetchers=effective_fetchers,
        rate_source=effective_rates,
        store_factory=effective_store_factory,
        countries=load_country_resolver(),
        services=load_service_priorities(),
        pricing=pricing,
    )
    return pipeline.run()


def _default_store_factory() -> CatalogStore:
    return SqlAlchemyCatalogStore.connect(get_database_config().uri)
