"""Pydantic models describing the 5sim guest price payload.

``GET /guest/prices`` nests country -> product -> ... where the product level
comes in two shapes: a price leaf directly (``{"cost": .., "count": ..}``) or a
mapping of operator name to price leaf. The shapes are tagged explicitly while
validating so the translator never inspects types at runtime.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Literal, cast

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator, model_validator


def _count_or_zero(value: object) -> int:
    """Stock counts that cannot be read as a whole number count as zero."""

    if isinstance(value, bool) or not isinstance(value, int | float | str):
        return 0
    try:
        return int(float(value))
    except (ValueError, OverflowError):
        return 0


def _cost_or_none(value: object) -> object:
    # numeric strings are parsed later, alongside every other provider cost
    if isinstance(value, bool) or not isinstance(value, int | float | str):
        return None
    return value


class FiveSimBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class PriceLeaf(FiveSimBaseModel):
    cost: float | str | None = None
    count: int = 0
    rate: float | None = None

    _normalize_cost = field_validator("cost", mode="before")(_cost_or_none)
    _normalize_count = field_validator("count", mode="before")(_count_or_zero)

    @field_validator("rate", mode="before")
    @classmethod
    def _unreadable_rate_is_none(cls, value: object) -> float | None:
        if isinstance(value, bool) or not isinstance(value, int | float | str):
            return None
        try:
            return float(value)
        except ValueError:
            return None


class DirectOffer(FiveSimBaseModel):
    kind: Literal["direct"] = "direct"
    leaf: PriceLeaf


class OperatorOffers(FiveSimBaseModel):
    kind: Literal["operators"] = "operators"
    operators: dict[str, PriceLeaf]


ServiceOffer = Annotated[DirectOffer | OperatorOffers, Field(discriminator="kind")]


def tag_service_entry(value: Mapping[str, object]) -> dict[str, object]:
    """Wrap a raw product entry in the tagged shape the union expects."""

    if "cost" in value:
        return {"kind": "direct", "leaf": dict(value)}
    operators = {
        name: leaf for name, leaf in value.items() if isinstance(leaf, Mapping)
    }
    return {"kind": "operators", "operators": operators}


class PricesResponse(RootModel[dict[str, dict[str, ServiceOffer]]]):
    @model_validator(mode="before")
    @classmethod
    def _tag_entries(cls, value: object) -> object:
        if not isinstance(value, Mapping):
            return value
        tagged: dict[str, dict[str, object]] = {}
        for country, services in cast(Mapping[str, object], value).items():
            if not isinstance(services, Mapping):
                continue
            tagged[country] = {
                service: tag_service_entry(cast(Mapping[str, object], entry))
                for service, entry in cast(Mapping[str, object], services).items()
                if isinstance(entry, Mapping)
            }
        return tagged
