"""Translate 5sim price payloads into raw offerings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from smscatalog.domain.model import ANY_OPERATOR, Provider, RawOffering

from .schema import DirectOffer, OperatorOffers, PriceLeaf

if TYPE_CHECKING:
    from .schema import PricesResponse, ServiceOffer


def _offering(country: str, service: str, operator: str, leaf: PriceLeaf) -> RawOffering:
    return RawOffering(
        provider=Provider.FIVESIM,
        country=country,
        service=service,
        operator=operator,
        cost=leaf.cost,
        count=leaf.count,
        success_rate=leaf.rate,
    )


def flatten_service_offer(country: str, service: str, offer: ServiceOffer) -> list[RawOffering]:
    match offer:
        case DirectOffer(leaf=leaf):
            return [_offering(country, service, ANY_OPERATOR, leaf)]
        case OperatorOffers(operators=operators):
            return [
                _offering(country, service, operator, leaf)
                for operator, leaf in operators.items()
            ]


def parse_offerings(response: PricesResponse) -> list[RawOffering]:
    offerings: list[RawOffering] = []
    for country, services in response.root.items():
        for service, offer in services.items():
            offerings.extend(flatten_service_offer(country, service, offer))
    return offerings
