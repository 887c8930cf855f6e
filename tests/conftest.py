from __future__ import annotations

import os
from typing import TYPE_CHECKING

import httpx
import pytest

from smscatalog.adapters.http_resilience import ResilienceConfig, ResilientClient, RetryExecutor
from smscatalog.adapters.sqlalchemy import create_catalog_engine
from smscatalog.domain.canonicalization import load_country_resolver, load_service_priorities
from smscatalog.domain.catalog_sync import SyncContext
from smscatalog.domain.model import ANY_OPERATOR, Provider, RawOffering
from smscatalog.domain.pricing import CurrencyRates, PricingPolicy

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path

    from sqlalchemy.engine import Engine

    from smscatalog.domain.canonicalization import CountryResolver, ServicePriorityTable

    type Handler = Callable[[httpx.Request], httpx.Response]
    type ClientFactory = Callable[[ResilienceConfig], ResilientClient]


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def retry_executor(sleeps: list[float]) -> RetryExecutor:
    """Executor that records its backoff delays instead of sleeping."""

    async def record(seconds: float) -> None:
        sleeps.append(seconds)

    return RetryExecutor(sleep=record, uniform=lambda _low, _high: 0.0)


@pytest.fixture
def make_client_factory() -> Callable[[Handler], ClientFactory]:
    def build(handler: Handler) -> ClientFactory:
        def factory(resilience: ResilienceConfig) -> ResilientClient:
            return ResilientClient(resilience, transport=httpx.MockTransport(handler))

        return factory

    return build


@pytest.fixture(scope="session")
def countries() -> CountryResolver:
    return load_country_resolver()


@pytest.fixture(scope="session")
def services() -> ServicePriorityTable:
    return load_service_priorities()


@pytest.fixture
def rates() -> CurrencyRates:
    return CurrencyRates(usd=60000.0, rub=150.0)


@pytest.fixture
def sync_context(
    rates: CurrencyRates,
    countries: CountryResolver,
    services: ServicePriorityTable,
) -> SyncContext:
    return SyncContext(
        rates=rates,
        countries=countries,
        services=services,
        pricing=PricingPolicy(),
    )


@pytest.fixture
def make_offering() -> Callable[..., RawOffering]:
    def build(
        *,
        provider: Provider = Provider.FIVESIM,
        country: str = "russia",
        service: str = "telegram",
        cost: float | str | None = 10,
        count: int = 5,
        operator: str = ANY_OPERATOR,
        service_name: str | None = None,
        success_rate: float | None = None,
    ) -> RawOffering:
        return RawOffering(
            provider=provider,
            country=country,
            service=service,
            cost=cost,
            count=count,
            operator=operator,
            service_name=service_name,
            success_rate=success_rate,
        )

    return build


@pytest.fixture
def sqlite_engine(tmp_path: Path) -> Iterator[Engine]:
    """File-backed SQLite so separate connections see only committed state."""

    engine = create_catalog_engine(f"sqlite+pysqlite:///{tmp_path / 'catalog.db'}")
    try:
        yield engine
    finally:
        engine.dispose()
