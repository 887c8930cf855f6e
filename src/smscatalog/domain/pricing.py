"""Currency conversion and retail pricing."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_CEILING, Decimal, InvalidOperation
from typing import Literal

from smscatalog.domain.model import Currency

type RateSourceKind = Literal["remote", "fallback"]


@dataclass(frozen=True, slots=True)
class CurrencyRates:
    """Local-currency value of one unit of each settlement currency."""

    usd: float
    rub: float
    source: RateSourceKind = "remote"

    def rate_for(self, currency: Currency) -> float:
        if currency is Currency.USD:
            return self.usd
        return self.rub


@dataclass(frozen=True, slots=True)
class PricingPolicy:
    """``ceil(cost * rate * (1 + margin) / rounding_unit) * rounding_unit``.

    The single retail policy used wherever a provider cost becomes a storefront
    price. Arithmetic runs on :class:`~decimal.Decimal` so that float noise
    never bumps a price into the next rounding unit.
    """

    margin: Decimal = Decimal("0.4")
    rounding_unit: int = 100

    def retail_price(self, cost: object, rate: float) -> int:
        native = parse_cost(cost)
        converted = native * Decimal(str(rate)) * (1 + self.margin)
        unit = Decimal(self.rounding_unit)
        units = (converted / unit).to_integral_value(rounding=ROUND_CEILING)
        return int(units * unit)


def parse_cost(value: object) -> Decimal:
    """Interpret a provider cost; anything unparseable counts as zero."""

    if value is None or isinstance(value, bool):
        return Decimal(0)
    if isinstance(value, int | float | Decimal):
        text = str(value)
    elif isinstance(value, str):
        text = value.strip()
    else:
        return Decimal(0)
    try:
        parsed = Decimal(text)
    except InvalidOperation:
        return Decimal(0)
    if not parsed.is_finite():
        return Decimal(0)
    return parsed
