"""Public interface for the 5sim adapter."""

from __future__ import annotations

from .client import FiveSimAPIError, FiveSimFetcher
from .schema import DirectOffer, OperatorOffers, PriceLeaf, PricesResponse
from .translator import parse_offerings

__all__ = [
    "DirectOffer",
    "FiveSimAPIError",
    "FiveSimFetcher",
    "OperatorOffers",
    "PriceLeaf",
    "PricesResponse",
    "parse_offerings",
]
