"""Pydantic models describing the SMS-Activate handler API payloads."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import cast

from pydantic import BaseModel, ConfigDict, RootModel, field_validator, model_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class SmsActivateBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class CountryPayload(SmsActivateBaseModel):
    id: int | None = None
    eng: str | None = None

    _normalize_eng = field_validator("eng", mode="before")(_blank_to_none)


class CountriesResponse(RootModel[dict[str, CountryPayload]]):
    def names_by_id(self) -> dict[int, str]:
        names: dict[int, str] = {}
        for key, country in self.root.items():
            if country.eng is None:
                continue
            country_id = country.id if country.id is not None else _int_or_none(key)
            if country_id is not None:
                names[country_id] = country.eng
        return names


class ServicePayload(SmsActivateBaseModel):
    code: str
    name: str | None = None

    _normalize_name = field_validator("name", mode="before")(_blank_to_none)


class ServicesListResponse(SmsActivateBaseModel):
    status: str
    services: list[ServicePayload] = []


class TopCountryPrice(SmsActivateBaseModel):
    """One country row; unreadable fields degrade instead of failing the service."""

    country: int | None = None
    count: int = 0
    price: float | str | None = None
    retail_price: float | str | None = None

    @field_validator("country", mode="before")
    @classmethod
    def _country_id(cls, value: object) -> int | None:
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        return _int_or_none(value) if isinstance(value, str) else None

    @field_validator("count", mode="before")
    @classmethod
    def _unreadable_count_is_zero(cls, value: object) -> int:
        if isinstance(value, bool) or not isinstance(value, int | float | str):
            return 0
        try:
            return int(float(value))
        except (ValueError, OverflowError):
            return 0

    @field_validator("price", "retail_price", mode="before")
    @classmethod
    def _unreadable_cost_is_none(cls, value: object) -> object:
        if isinstance(value, bool) or not isinstance(value, int | float | str):
            return None
        return value


class TopCountriesResponse(RootModel[dict[str, TopCountryPrice]]):
    """Per-service prices keyed by position or by country id.

    Entries carry their country id in ``country``; when that field is absent or
    unreadable the mapping key is the country id. Rows that are not objects are
    dropped.
    """

    @model_validator(mode="before")
    @classmethod
    def _accept_list(cls, value: object) -> object:
        if isinstance(value, Sequence) and not isinstance(value, str):
            # positional keys are not country ids, rows must carry ``country``
            return {
                f"#{index}": item
                for index, item in enumerate(cast(Sequence[object], value))
                if isinstance(item, Mapping)
            }
        if isinstance(value, Mapping):
            return {
                key: item
                for key, item in cast(Mapping[str, object], value).items()
                if isinstance(item, Mapping)
            }
        return value

    def by_country(self) -> list[tuple[int, TopCountryPrice]]:
        rows: list[tuple[int, TopCountryPrice]] = []
        for key, price in self.root.items():
            country_id = price.country if price.country is not None else _int_or_none(key)
            if country_id is not None:
                rows.append((country_id, price))
        return rows


def _int_or_none(value: str) -> int | None:
    try:
        return int(value.strip())
    except ValueError:
        return None
