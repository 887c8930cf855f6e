"""Currency-rate source with static fallback."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import BaseModel, ConfigDict, PositiveFloat

from smscatalog.adapters.http_resilience import ResilientClient, RetryExecutor
from smscatalog.config.pricing import ExchangeRateConfig, get_exchange_rate_config
from smscatalog.domain.pricing import CurrencyRates

if TYPE_CHECKING:
    from collections.abc import Callable

    from smscatalog.config.http_resilience import ResilienceConfig
    from smscatalog.domain.ports import RateSource

log = getLogger(__name__)


class RatesPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    usd1: PositiveFloat
    rub1: PositiveFloat


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class ExchangeRateClient:
    """Fetches USD and RUB rates; never fails, falling back to configured constants."""

    config: ExchangeRateConfig = field(default_factory=get_exchange_rate_config)
    executor: RetryExecutor | None = None
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def fallback_rates(self) -> CurrencyRates:
        return CurrencyRates(
            usd=self.config.fallback_usd,
            rub=self.config.fallback_rub,
            source="fallback",
        )

    async def fetch_rates(self) -> CurrencyRates:
        try:
            async with self.client_factory(self.config.resilience) as client:
                retrying = self.executor or RetryExecutor(policy=self.config.resilience.retry)
                payload = await retrying.run(lambda: client.get_json(self.config.url), "rates")
            rates = RatesPayload.model_validate(payload)
        except (httpx.HTTPError, ValueError) as exc:
            # pydantic's ValidationError and JSON decode errors are both ValueErrors
            log.error("Failed to fetch currency rates, using fallback: %s", exc)
            return self.fallback_rates()

        log.info("Updated currency rates: usd=%s, rub=%s", rates.usd1, rates.rub1)
        return CurrencyRates(usd=rates.usd1, rub=rates.rub1)


__all__ = ["ExchangeRateClient", "RatesPayload"]

if TYPE_CHECKING:
    _rate_source_check: RateSource = ExchangeRateClient()
