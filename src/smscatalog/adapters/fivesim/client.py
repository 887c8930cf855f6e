"""HTTP client for the 5sim guest price list."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from smscatalog.adapters.http_resilience import ResilientClient, RetryExecutor
from smscatalog.config.fivesim import FIVESIM_BASE_URL, FiveSimConfig, get_fivesim_config
from smscatalog.domain.model import Provider

from .schema import PricesResponse
from .translator import parse_offerings

if TYPE_CHECKING:
    from collections.abc import Callable

    from smscatalog.config.http_resilience import ResilienceConfig
    from smscatalog.domain.model import RawOffering
    from smscatalog.domain.ports import OfferingFetcher

log = getLogger(__name__)

PRICES_PATH = "/guest/prices"


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


class FiveSimAPIError(RuntimeError):
    """Raised when 5sim returns a payload that cannot be interpreted."""


@dataclass(slots=True)
class FiveSimFetcher:
    """Bulk-pricing provider: one retried call returns the whole price list."""

    config: FiveSimConfig = field(default_factory=get_fivesim_config)
    executor: RetryExecutor | None = None
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    provider: Provider = Provider.FIVESIM

    async def fetch_offerings(self) -> list[RawOffering]:
        async with self.client_factory(self.config.resilience) as client:
            payload = await self._retrying(self.config.resilience).run(
                lambda: self._request_prices(client), "5sim-prices"
            )

        offerings = parse_offerings(payload)
        log.info(f"Processed {len(offerings)} offerings from 5sim")
        return offerings

    def _retrying(self, resilience: ResilienceConfig) -> RetryExecutor:
        return self.executor or RetryExecutor(policy=resilience.retry)

    async def _request_prices(self, client: ResilientClient) -> PricesResponse:
        url = PRICES_PATH if self.config.resilience.base_url else FIVESIM_BASE_URL + PRICES_PATH
        payload = await client.get_json(url)
        if not isinstance(payload, dict):
            raise FiveSimAPIError("Unexpected 5sim price payload")
        try:
            return PricesResponse.model_validate(payload)
        except ValidationError as exc:
            raise FiveSimAPIError(f"Invalid 5sim price payload: {exc}") from exc


if TYPE_CHECKING:
    _fetcher_check: OfferingFetcher = FiveSimFetcher()
