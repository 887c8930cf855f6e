"""SMS-Activate configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig
from .storage import get_storage_config

SMS_ACTIVATE_BASE_URL = "https://api.sms-activate.ae/stubs/handler_api.php"
SMS_ACTIVATE_TIMEOUT_SECONDS = 15.0
DIRECTORY_CACHE_TTL_SECONDS = 6 * 60 * 60


@dataclass(frozen=True)
class SmsActivateConfig:
    """Holds SMS-Activate API configuration values.

    ``directory_resilience`` backs the country and service directory calls, which
    change rarely and may be served from the HTTP cache. ``resilience`` backs the
    per-service price lookups and never caches.
    """

    api_key: str
    base_url: str
    resilience: ResilienceConfig
    directory_resilience: ResilienceConfig


def _is_successful_directory(payload: object) -> bool:
    if not isinstance(payload, dict):
        return False
    status = payload.get("status")
    return status is None or status == "success"


def get_smsactivate_config(
    *,
    resilience: ResilienceConfig | None = None,
    directory_resilience: ResilienceConfig | None = None,
) -> SmsActivateConfig:
    values = require_env_vars(("SMS_ACTIVATE_API_KEY",))
    base_url = optional_env_var("SMSA_BASE_URL", SMS_ACTIVATE_BASE_URL) or SMS_ACTIVATE_BASE_URL
    ratelimit = RateLimit(max_calls=3, per_seconds=1.0)
    return SmsActivateConfig(
        api_key=values["SMS_ACTIVATE_API_KEY"],
        base_url=base_url,
        resilience=resilience
        or ResilienceConfig(
            name="smsactivate",
            timeout_seconds=SMS_ACTIVATE_TIMEOUT_SECONDS,
            ratelimit=ratelimit,
        ),
        directory_resilience=directory_resilience
        or ResilienceConfig(
            name="smsactivate-directory",
            timeout_seconds=SMS_ACTIVATE_TIMEOUT_SECONDS,
            ratelimit=ratelimit,
            cache=CacheConfig(
                backend="sqlite",
                sqlite_path=str(get_storage_config().http_cache_path()),
                default_ttl_seconds=DIRECTORY_CACHE_TTL_SECONDS,
                should_cache=_is_successful_directory,
            ),
        ),
    )
