"""HTTP client for the SMS-Activate handler API."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from smscatalog.adapters.http_resilience import ResilientClient, RetryExecutor
from smscatalog.config.smsactivate import SmsActivateConfig, get_smsactivate_config
from smscatalog.domain.model import Provider

from .schema import CountriesResponse, ServicesListResponse, TopCountriesResponse
from .translator import parse_service_prices

if TYPE_CHECKING:
    from collections.abc import Callable

    from pydantic import BaseModel

    from smscatalog.config.http_resilience import ResilienceConfig
    from smscatalog.domain.model import RawOffering
    from smscatalog.domain.ports import OfferingFetcher

    from .schema import ServicePayload

log = getLogger(__name__)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


class SmsActivateAPIError(RuntimeError):
    """Raised when SMS-Activate answers with an error or an unreadable payload."""


@dataclass(slots=True)
class SmsActivateFetcher:
    """Catalog-style provider: country directory, service directory, then prices.

    Price lookups run one service at a time. A service whose lookup still fails
    after retries is logged and left out of this run; the directory calls are
    fatal for the whole fetch.
    """

    config: SmsActivateConfig = field(default_factory=get_smsactivate_config)
    executor: RetryExecutor | None = None
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    provider: Provider = Provider.SMS_ACTIVATE

    async def fetch_offerings(self) -> list[RawOffering]:
        async with self.client_factory(self.config.directory_resilience) as directory:
            retrying = self._retrying(self.config.directory_resilience)
            countries = await retrying.run(
                lambda: self._request(directory, CountriesResponse, action="getCountries"),
                "sms-countries",
            )
            services = await retrying.run(
                lambda: self._request(directory, ServicesListResponse, action="getServicesList"),
                "sms-services",
            )
        if services.status != "success":
            raise SmsActivateAPIError(
                f"Could not fetch SMS-Activate services list (status={services.status})"
            )

        country_names = countries.names_by_id()
        offerings: list[RawOffering] = []
        async with self.client_factory(self.config.resilience) as client:
            for service in services.services:
                offerings.extend(await self._fetch_service(client, service, country_names))

        log.info(
            f"Processed {len(offerings)} offerings from SMS-Activate "
            f"({len(services.services)} services)"
        )
        return offerings

    async def _fetch_service(
        self,
        client: ResilientClient,
        service: ServicePayload,
        country_names: dict[int, str],
    ) -> list[RawOffering]:
        try:
            prices = await self._retrying(self.config.resilience).run(
                lambda: self._request(
                    client,
                    TopCountriesResponse,
                    action="getTopCountriesByService",
                    service=service.code,
                ),
                f"sms-prices-{service.code}",
            )
        except (httpx.HTTPError, SmsActivateAPIError) as exc:
            log.error(f"Could not fetch prices for service {service.code}: {exc}")
            return []
        return parse_service_prices(service, prices, country_names)

    def _retrying(self, resilience: ResilienceConfig) -> RetryExecutor:
        return self.executor or RetryExecutor(policy=resilience.retry)

    async def _request[TModel: BaseModel](
        self,
        client: ResilientClient,
        model: type[TModel],
        **params: str,
    ) -> TModel:
        query = httpx.QueryParams({"api_key": self.config.api_key, **params})
        response = await client.get(self.config.base_url, params=query)
        response.raise_for_status()
        try:
            payload = response.json()
        except ValueError:
            # the API reports errors such as BAD_KEY as plain-text bodies
            raise SmsActivateAPIError(
                f"SMS-Activate {params.get('action')} failed: {response.text.strip()[:200]}"
            ) from None
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise SmsActivateAPIError(
                f"Unexpected SMS-Activate {params.get('action')} payload: {exc}"
            ) from exc


if TYPE_CHECKING:
    _fetcher_check: OfferingFetcher = SmsActivateFetcher()
