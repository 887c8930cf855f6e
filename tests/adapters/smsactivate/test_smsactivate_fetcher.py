from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import httpx
import pytest

from smscatalog.adapters.smsactivate import SmsActivateAPIError, SmsActivateFetcher
from smscatalog.config.http_resilience import ResilienceConfig, RetryPolicy
from smscatalog.config.smsactivate import SmsActivateConfig
from smscatalog.domain.model import ANY_OPERATOR, Provider

if TYPE_CHECKING:
    from collections.abc import Callable

    from smscatalog.adapters.http_resilience import ResilientClient, RetryExecutor

    type Handler = Callable[[httpx.Request], httpx.Response]
    type ClientFactory = Callable[[ResilienceConfig], ResilientClient]

BASE_URL = "https://sms-activate.test/stubs/handler_api.php"

COUNTRIES: dict[str, Any] = {
    "0": {"id": 0, "rus": "Россия", "eng": "Russia"},
    "16": {"id": 16, "rus": "Англия", "eng": "England"},
    "187": {"id": 187, "eng": "USA"},
}

SERVICES: dict[str, Any] = {
    "status": "success",
    "services": [
        {"code": "tg", "name": "Telegram"},
        {"code": "wa", "name": "WhatsApp"},
    ],
}

TOP_COUNTRIES: dict[str, Any] = {
    "tg": {
        "0": {"country": 0, "count": 120, "price": 0.2, "retail_price": 0.3},
        "1": {"country": 16, "count": 0, "price": 0.4, "retail_price": 0.5},
        "2": {"country": 999, "count": 5, "price": 1.0, "retail_price": 1.5},
    },
    "wa": [
        {"country": 187, "count": 9, "price": 0.9, "retail_price": 1.1},
    ],
}


def _config() -> SmsActivateConfig:
    return SmsActivateConfig(
        api_key="secret",
        base_url=BASE_URL,
        resilience=ResilienceConfig(name="smsactivate-test"),
        directory_resilience=ResilienceConfig(name="smsactivate-directory-test"),
    )


def _fetcher(
    handler: Handler,
    executor: RetryExecutor,
    make_client_factory: Callable[[Handler], ClientFactory],
) -> SmsActivateFetcher:
    return SmsActivateFetcher(
        config=_config(),
        executor=executor,
        client_factory=make_client_factory(handler),
    )


class _Api:
    """Routes handler API calls by their ``action`` query parameter."""

    def __init__(self, overrides: dict[str, httpx.Response] | None = None) -> None:
        self.overrides = overrides or {}
        self.actions: list[str] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        assert request.url.params["api_key"] == "secret"
        action = request.url.params["action"]
        self.actions.append(action)
        service = request.url.params.get("service")
        override = self.overrides.get(f"{action}:{service}" if service else action)
        if override is not None:
            return override
        if action == "getCountries":
            return httpx.Response(200, json=COUNTRIES)
        if action == "getServicesList":
            return httpx.Response(200, json=SERVICES)
        return httpx.Response(200, json=TOP_COUNTRIES[str(service)])


def test_fetch_walks_directories_then_prices(
    retry_executor: RetryExecutor,
    make_client_factory: Callable[[Handler], ClientFactory],
) -> None:
    api = _Api()

    offerings = asyncio.run(_fetcher(api, retry_executor, make_client_factory).fetch_offerings())

    assert api.actions == [
        "getCountries",
        "getServicesList",
        "getTopCountriesByService",
        "getTopCountriesByService",
    ]
    keyed = {(o.service, o.country): o for o in offerings}
    assert set(keyed) == {("tg", "Russia"), ("tg", "England"), ("wa", "USA")}
    russia = keyed[("tg", "Russia")]
    assert russia.provider is Provider.SMS_ACTIVATE
    assert russia.cost == 0.3
    assert russia.count == 120
    assert russia.operator == ANY_OPERATOR
    assert russia.service_name == "Telegram"


def test_failed_service_is_skipped(
    retry_executor: RetryExecutor,
    sleeps: list[float],
    make_client_factory: Callable[[Handler], ClientFactory],
) -> None:
    api = _Api({"getTopCountriesByService:tg": httpx.Response(503)})

    offerings = asyncio.run(_fetcher(api, retry_executor, make_client_factory).fetch_offerings())

    assert [o.service for o in offerings] == ["wa"]
    assert api.actions.count("getTopCountriesByService") == 4
    assert sleeps == [1.0, 2.0]


def test_plain_text_error_skips_service(
    retry_executor: RetryExecutor,
    make_client_factory: Callable[[Handler], ClientFactory],
) -> None:
    api = _Api({"getTopCountriesByService:wa": httpx.Response(200, text="BAD_SERVICE")})

    offerings = asyncio.run(_fetcher(api, retry_executor, make_client_factory).fetch_offerings())

    assert {o.service for o in offerings} == {"tg"}


def test_services_list_error_status_fails_fetch(
    retry_executor: RetryExecutor,
    make_client_factory: Callable[[Handler], ClientFactory],
) -> None:
    api = _Api({"getServicesList": httpx.Response(200, json={"status": "error"})})

    with pytest.raises(SmsActivateAPIError):
        asyncio.run(_fetcher(api, retry_executor, make_client_factory).fetch_offerings())

    assert "getTopCountriesByService" not in api.actions


def test_bad_key_fails_fetch(
    retry_executor: RetryExecutor,
    make_client_factory: Callable[[Handler], ClientFactory],
) -> None:
    api = _Api({"getCountries": httpx.Response(200, text="BAD_KEY")})

    with pytest.raises(SmsActivateAPIError, match="BAD_KEY"):
        asyncio.run(_fetcher(api, retry_executor, make_client_factory).fetch_offerings())


def test_unreadable_country_row_is_kept_out_of_service(
    retry_executor: RetryExecutor,
    make_client_factory: Callable[[Handler], ClientFactory],
) -> None:
    rows = {
        "0": {"country": 0, "count": 12, "retail_price": 0.3},
        "16": {"country": "n/a", "count": "many", "retail_price": "unknown"},
        "187": "broken",
    }
    api = _Api(
        {
            "getTopCountriesByService:tg": httpx.Response(200, json=rows),
            "getTopCountriesByService:wa": httpx.Response(200, json=[{"count": 4}]),
        }
    )

    offerings = asyncio.run(_fetcher(api, retry_executor, make_client_factory).fetch_offerings())

    keyed = {o.country: o for o in offerings}
    assert set(keyed) == {"Russia", "England"}
    assert keyed["Russia"].cost == 0.3
    assert keyed["England"].cost == "unknown"
    assert keyed["England"].count == 0


def test_directory_and_price_calls_use_their_own_retry_policy(
    make_client_factory: Callable[[Handler], ClientFactory],
) -> None:
    api = _Api({"getTopCountriesByService:tg": httpx.Response(503)})
    config = SmsActivateConfig(
        api_key="secret",
        base_url=BASE_URL,
        resilience=ResilienceConfig(name="prices", retry=RetryPolicy(max_attempts=1)),
        directory_resilience=ResilienceConfig(name="directory"),
    )
    fetcher = SmsActivateFetcher(config=config, client_factory=make_client_factory(api))

    offerings = asyncio.run(fetcher.fetch_offerings())

    assert [o.service for o in offerings] == ["wa"]
    assert api.actions.count("getTopCountriesByService") == 2
