"""Domain model for the phone-number rental catalog."""

from __future__ import annotations

from .enums import Currency, Provider
from .offering import CatalogEntry, RawOffering, build_identity
from .primitives import (
    ANY_OPERATOR,
    DEFAULT_PRIORITY,
    CanonicalCountry,
    CanonicalKey,
    CountryCode,
    ServiceInfo,
)

__all__ = [
    "ANY_OPERATOR",
    "DEFAULT_PRIORITY",
    "CanonicalCountry",
    "CanonicalKey",
    "CatalogEntry",
    "CountryCode",
    "Currency",
    "Provider",
    "RawOffering",
    "ServiceInfo",
    "build_identity",
]
