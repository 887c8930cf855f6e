"""5sim configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var
from .http_resilience import ResilienceConfig

FIVESIM_BASE_URL = "https://5sim.net/v1"
FIVESIM_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class FiveSimConfig:
    """Holds 5sim API configuration values."""

    api_key: str | None
    resilience: ResilienceConfig


def get_fivesim_config(*, resilience: ResilienceConfig | None = None) -> FiveSimConfig:
    api_key = optional_env_var("FIVESIM_API_KEY")
    headers = {"Accept": "application/json"}
    if api_key:
        headers["Authorization"] = f"Bearer {api_key}"
    return FiveSimConfig(
        api_key=api_key,
        resilience=resilience
        or ResilienceConfig(
            name="fivesim",
            base_url=optional_env_var("FIVESIM_BASE_URL", FIVESIM_BASE_URL),
            timeout_seconds=FIVESIM_TIMEOUT_SECONDS,
            default_headers=headers,
        ),
    )
