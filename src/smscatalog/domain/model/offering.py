"""Provider-native offerings and the canonical catalog entries built from them."""

from __future__ import annotations

from dataclasses import dataclass

from .enums import Provider
from .primitives import ANY_OPERATOR, DEFAULT_PRIORITY, CountryCode


@dataclass(frozen=True, slots=True)
class RawOffering:
    """One provider-native price/availability row, before normalization.

    ``cost`` is kept as the provider sent it (number or numeric string) and is
    interpreted by the normalizer. Raw offerings are never persisted.
    """

    provider: Provider
    country: str
    service: str
    cost: float | str | None
    count: int = 0
    operator: str = ANY_OPERATOR
    service_name: str | None = None
    success_rate: float | None = None


def build_identity(provider: Provider, service: str, country: str, operator: str) -> str:
    """Deterministic identity of an offering; stable across pipeline runs."""

    return f"srv:{provider.value}:{service}:{country}:{operator}"


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    identity: str
    provider: Provider
    service: str
    service_localized: str
    country: str
    country_localized: str
    country_code: CountryCode
    operator: str
    price: int
    priority: int = DEFAULT_PRIORITY
    available: bool = False
    success_rate: float | None = None

    @property
    def group_key(self) -> tuple[str, str]:
        """Logical offering (service, country) shared across providers."""
        return (self.service_localized, self.country_localized)
