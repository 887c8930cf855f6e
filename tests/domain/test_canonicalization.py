from __future__ import annotations

import pytest

from smscatalog.domain.canonicalization import (
    CountryResolver,
    ServicePriorityTable,
    canonical_key,
    title_case_name,
)
from smscatalog.domain.model import DEFAULT_PRIORITY


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("USA (virtual)", "usavirtual"),
        ("Hong Kong", "hongkong"),
        ("google,youtube,Gmail", "googleyoutubegmail"),
        ("  TG ", "tg"),
        ("", ""),
    ],
)
def test_canonical_key(raw: str, expected: str) -> None:
    assert canonical_key(raw) == expected


def test_provider_countries_win_over_internal_table() -> None:
    resolver = CountryResolver.build(
        provider_countries={"14": "Hong Kong"},
        translations={"HongKong": "هنگ کنگ"},
        codes={"hongkong": "HK"},
    )

    country = resolver.resolve("hong kong")

    assert country is not None
    assert country.name == "Hong Kong"
    assert country.localized_name == "هنگ کنگ"
    assert country.code == "HK"
    assert len(resolver) == 1


def test_internal_table_fills_gaps() -> None:
    resolver = CountryResolver.build(
        provider_countries={"0": "Russia"},
        translations={"Russia": "روسیه", "Finland": "فنلاند"},
        codes={"russia": "RU", "finland": "FI"},
    )

    finland = resolver.resolve("finland")

    assert finland is not None
    assert finland.code == "FI"
    assert len(resolver) == 2


def test_countries_without_code_or_translation_are_excluded() -> None:
    resolver = CountryResolver.build(
        provider_countries={"0": "Russia", "99": "Atlantis"},
        translations={"Russia": "روسیه", "Iraq": "عراق"},
        codes={"russia": "RU", "atlantis": "AT"},
    )

    assert resolver.resolve("atlantis") is None
    assert resolver.resolve("iraq") is None
    assert len(resolver) == 1


def test_bundled_reference_tables_resolve_both_vocabularies(countries: CountryResolver) -> None:
    usa = countries.resolve("usa")
    virtual = countries.resolve("USA (virtual)")

    assert usa is not None
    assert usa.code == "US"
    assert virtual is not None
    assert virtual.localized_name != usa.localized_name
    assert countries.resolve("iraq") is None


def test_service_lookup_tries_candidates_in_order(services: ServicePriorityTable) -> None:
    by_name = services.lookup("Telegram", "zz")
    by_code = services.lookup("Unknown App", "wa")

    assert by_name is not None
    assert by_name.priority == 1
    assert by_code is not None
    assert by_code.priority == 2
    assert services.lookup("Unknown App", "zz") is None


def test_service_table_defaults_missing_priority() -> None:
    table = ServicePriorityTable.from_mapping(
        {"Some App": {"name": "اپ"}, "broken": {"priority": 3}}
    )

    info = table.lookup("someapp")

    assert info is not None
    assert info.priority == DEFAULT_PRIORITY
    assert table.lookup("broken") is None


def test_title_case_name() -> None:
    assert title_case_name("some NEW service") == "Some New Service"
