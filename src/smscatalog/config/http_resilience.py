"""Configuration types for resilient HTTP clients."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from collections.abc import Mapping

ShouldCacheHook = Callable[[object], bool]


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    """Bounded exponential backoff: ``base_delay * 2**attempt + uniform(0, jitter)``."""

    max_attempts: int = 3
    base_delay_seconds: float = 1.0
    jitter_seconds: float = 0.2
    retryable_statuses: frozenset[int] = field(default_factory=lambda: frozenset({429}))
    retry_server_errors: bool = True

    def is_retryable_status(self, status_code: int) -> bool:
        if status_code in self.retryable_statuses:
            return True
        return self.retry_server_errors and status_code >= 500

    def delay_for(self, attempt: int, jitter: float) -> float:
        return self.base_delay_seconds * (2**attempt) + jitter


@dataclass(slots=True, frozen=True)
class RateLimit:
    max_calls: int
    per_seconds: float


@dataclass(slots=True, frozen=True)
class CacheConfig:
    enabled: bool = True
    backend: Literal["sqlite", "memory"] = "memory"
    sqlite_path: str | None = None
    default_ttl_seconds: float | None = None
    refresh_ttl_on_access: bool = True
    should_cache: ShouldCacheHook | None = None


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    name: str
    base_url: str | None = None
    timeout_seconds: float = 30.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    ratelimit: RateLimit | None = None
    cache: CacheConfig | None = None
    default_headers: Mapping[str, str] | None = None
