"""Normalization phase: raw provider offerings to canonical catalog entries."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from smscatalog.domain.canonicalization import title_case_name
from smscatalog.domain.model import DEFAULT_PRIORITY, CatalogEntry, build_identity

if TYPE_CHECKING:
    from collections.abc import Iterable

    from smscatalog.domain.catalog_sync.context import SyncContext
    from smscatalog.domain.model import RawOffering

log = getLogger(__name__)


class PriceNormalizer:
    """Turns :class:`RawOffering` rows into :class:`CatalogEntry` values.

    Rows are dropped, never failed: unmapped countries, nameless services and
    non-positive prices are counted on the run report and skipped.
    """

    name: str = "normalization"

    def run(self, offerings: Iterable[RawOffering], *, context: SyncContext) -> list[CatalogEntry]:
        entries: list[CatalogEntry] = []
        for offering in offerings:
            entry = self.normalize(offering, context=context)
            if entry is not None:
                entries.append(entry)
        context.report.formatted_count = len(entries)
        if context.report.unknown_services:
            log.warning(
                "Found %s unknown service codes", len(context.report.unknown_services)
            )
        return entries

    def normalize(self, offering: RawOffering, *, context: SyncContext) -> CatalogEntry | None:
        report = context.report
        service_code = offering.service.strip().lower()
        country_token = offering.country.strip().lower()

        country = context.countries.resolve(country_token)
        if country is None:
            report.unmapped_countries += 1
            return None

        english_name = (offering.service_name or offering.service).strip()
        if not english_name:
            report.unknown_services.add(offering.service)
            return None

        info = context.services.lookup(english_name, service_code)
        if info is None:
            report.unknown_services.add(offering.service)
            service_localized = title_case_name(english_name)
            priority = DEFAULT_PRIORITY
        else:
            service_localized = info.localized_name
            priority = info.priority

        rate = context.rates.rate_for(offering.provider.settlement_currency)
        price = context.pricing.retail_price(offering.cost, rate)
        if price <= 0:
            report.non_positive_prices += 1
            return None

        return CatalogEntry(
            identity=build_identity(
                offering.provider, service_code, country_token, offering.operator
            ),
            provider=offering.provider,
            service=service_code,
            service_localized=service_localized,
            country=country_token,
            country_localized=country.localized_name,
            country_code=country.code,
            operator=offering.operator,
            price=price,
            priority=priority,
            available=offering.count > 0,
            success_rate=offering.success_rate,
        )
