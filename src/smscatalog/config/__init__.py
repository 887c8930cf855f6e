"""Application configuration helpers."""

from __future__ import annotations

from smscatalog.common.logging import configure_logging

from .env import float_env_var, int_env_var, optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .fivesim import FiveSimConfig, get_fivesim_config
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .pricing import (
    ExchangeRateConfig,
    PricingConfig,
    get_exchange_rate_config,
    get_pricing_config,
)
from .smsactivate import SmsActivateConfig, get_smsactivate_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "CacheConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "ExchangeRateConfig",
    "FiveSimConfig",
    "MissingConfigurationError",
    "PricingConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "SmsActivateConfig",
    "StorageConfig",
    "configure_logging",
    "float_env_var",
    "get_database_config",
    "get_exchange_rate_config",
    "get_fivesim_config",
    "get_pricing_config",
    "get_smsactivate_config",
    "get_storage_config",
    "int_env_var",
    "optional_env_var",
    "require_env_vars",
]
