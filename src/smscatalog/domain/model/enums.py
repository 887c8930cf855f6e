"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class Currency(StrEnum):
    USD = "usd"
    RUB = "rub"


class Provider(StrEnum):
    FIVESIM = "5sim"
    SMS_ACTIVATE = "sms-activate"

    @property
    def settlement_currency(self) -> Currency:
        """Currency the provider quotes its native costs in."""
        if self is Provider.FIVESIM:
            return Currency.RUB
        return Currency.USD
