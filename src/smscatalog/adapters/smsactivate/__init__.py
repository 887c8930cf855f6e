"""Public interface for the SMS-Activate adapter."""

from __future__ import annotations

from .client import SmsActivateAPIError, SmsActivateFetcher
from .schema import (
    CountriesResponse,
    ServicePayload,
    ServicesListResponse,
    TopCountriesResponse,
    TopCountryPrice,
)
from .translator import parse_service_prices

__all__ = [
    "CountriesResponse",
    "ServicePayload",
    "ServicesListResponse",
    "SmsActivateAPIError",
    "SmsActivateFetcher",
    "TopCountriesResponse",
    "TopCountryPrice",
    "parse_service_prices",
]
