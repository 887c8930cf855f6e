"""Translate SMS-Activate price payloads into raw offerings."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from smscatalog.domain.model import ANY_OPERATOR, Provider, RawOffering

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .schema import ServicePayload, TopCountriesResponse

log = getLogger(__name__)


def parse_service_prices(
    service: ServicePayload,
    prices: TopCountriesResponse,
    countries: Mapping[int, str],
) -> list[RawOffering]:
    offerings: list[RawOffering] = []
    for country_id, price in prices.by_country():
        country_name = countries.get(country_id)
        if country_name is None:
            log.debug("Skipping unknown country id %s for %s", country_id, service.code)
            continue
        offerings.append(
            RawOffering(
                provider=Provider.SMS_ACTIVATE,
                country=country_name,
                service=service.code,
                service_name=service.name,
                operator=ANY_OPERATOR,
                cost=price.retail_price,
                count=price.count,
            )
        )
    return offerings
