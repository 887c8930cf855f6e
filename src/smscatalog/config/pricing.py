"""Retail pricing and currency-rate configuration."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from .env import float_env_var, int_env_var, optional_env_var
from .errors import ConfigurationError
from .http_resilience import ResilienceConfig

RATES_URL = "https://sarfe.erfjab.com/api/prices"
RATES_TIMEOUT_SECONDS = 10.0

DEFAULT_PROFIT_MARGIN = 0.4
DEFAULT_ROUNDING_PRECISION = 100
DEFAULT_USD_RATE = 58000.0
DEFAULT_RUB_RATE = 630.0


@dataclass(frozen=True, slots=True)
class PricingConfig:
    """Margin and rounding applied to every converted provider cost."""

    margin: Decimal = Decimal(str(DEFAULT_PROFIT_MARGIN))
    rounding_unit: int = DEFAULT_ROUNDING_PRECISION


@dataclass(frozen=True, slots=True)
class ExchangeRateConfig:
    url: str
    fallback_usd: float
    fallback_rub: float
    resilience: ResilienceConfig


def get_pricing_config() -> PricingConfig:
    margin = float_env_var("PROFIT_MARGIN", DEFAULT_PROFIT_MARGIN)
    rounding_unit = int_env_var("ROUNDING_PRECISION", DEFAULT_ROUNDING_PRECISION)
    if margin < 0:
        raise ConfigurationError(f"PROFIT_MARGIN must be non-negative, got {margin}")
    if rounding_unit <= 0:
        raise ConfigurationError(f"ROUNDING_PRECISION must be positive, got {rounding_unit}")
    return PricingConfig(margin=Decimal(str(margin)), rounding_unit=rounding_unit)


def get_exchange_rate_config(*, resilience: ResilienceConfig | None = None) -> ExchangeRateConfig:
    return ExchangeRateConfig(
        url=optional_env_var("RATES_URL", RATES_URL) or RATES_URL,
        fallback_usd=float_env_var("USD_TO_TOMAN_RATE", DEFAULT_USD_RATE),
        fallback_rub=float_env_var("RUB_TO_TOMAN_RATE", DEFAULT_RUB_RATE),
        resilience=resilience
        or ResilienceConfig(name="exchange-rates", timeout_seconds=RATES_TIMEOUT_SECONDS),
    )
