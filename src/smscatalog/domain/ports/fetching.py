"""Ports for fetching provider offerings and currency rates."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from smscatalog.domain.model import Provider, RawOffering
    from smscatalog.domain.pricing import CurrencyRates


@runtime_checkable
class OfferingFetcher(Protocol):
    """Reads one provider's full price list; holds no state between runs."""

    provider: Provider

    async def fetch_offerings(self) -> list[RawOffering]: ...


@runtime_checkable
class RateSource(Protocol):
    """Returns fresh currency rates, or fallback constants when the source is down."""

    async def fetch_rates(self) -> CurrencyRates: ...


__all__ = ["OfferingFetcher", "RateSource"]
