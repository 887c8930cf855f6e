"""Domain primitives: scalar aliases + small value objects."""

from __future__ import annotations

from dataclasses import dataclass

type CountryCode = str
type CanonicalKey = str

ANY_OPERATOR = "any"
DEFAULT_PRIORITY = 999


@dataclass(frozen=True, slots=True)
class CanonicalCountry:
    """Country record shared by every provider vocabulary."""

    key: CanonicalKey
    name: str
    localized_name: str
    code: CountryCode


@dataclass(frozen=True, slots=True)
class ServiceInfo:
    """Priority table row: localized display name and storefront rank."""

    localized_name: str
    priority: int = DEFAULT_PRIORITY
