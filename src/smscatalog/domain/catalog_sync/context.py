"""Per-run context shared by the catalog sync phases."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from smscatalog.domain.pricing import PricingPolicy

if TYPE_CHECKING:
    from smscatalog.domain.canonicalization import CountryResolver, ServicePriorityTable
    from smscatalog.domain.pricing import CurrencyRates


@dataclass(slots=True)
class SyncReport:
    """Observability counters for a single pipeline run."""

    raw_count: int = 0
    formatted_count: int = 0
    unknown_services: set[str] = field(default_factory=set[str])
    unmapped_countries: int = 0
    non_positive_prices: int = 0
    duplicate_identities: int = 0
    rejected_rows: int = 0
    final_count: int = 0
    published: bool = False

    def summary(self) -> str:
        return (
            f"raw={self.raw_count}, formatted={self.formatted_count}, "
            f"unknown_services={len(self.unknown_services)}, "
            f"unmapped_countries={self.unmapped_countries}, "
            f"non_positive_prices={self.non_positive_prices}, "
            f"duplicates={self.duplicate_identities}, rejected={self.rejected_rows}, "
            f"final={self.final_count}, published={self.published}"
        )


@dataclass(slots=True)
class SyncContext:
    """Everything a run reads besides the raw offerings themselves.

    Rates are resolved once at the start of a run and never change while the
    normalizer reads them.
    """

    rates: CurrencyRates
    countries: CountryResolver
    services: ServicePriorityTable
    pricing: PricingPolicy = field(default_factory=PricingPolicy)
    report: SyncReport = field(default_factory=SyncReport)
