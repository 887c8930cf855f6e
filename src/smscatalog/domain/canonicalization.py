"""Canonical keys and the lookups that join provider vocabularies on them.

Both providers spell countries and services differently ("USA" vs "usa",
"Telegram" vs "tg"). Every join in the catalog goes through
:func:`canonical_key`, which lowercases a name and strips everything outside
``[a-z0-9]``.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from importlib import resources
from logging import getLogger
from typing import TYPE_CHECKING, cast

from smscatalog.domain.model import CanonicalCountry, ServiceInfo

if TYPE_CHECKING:
    from collections.abc import Mapping

    from smscatalog.domain.model import CanonicalKey

log = getLogger(__name__)

_NON_ALNUM = re.compile(r"[^a-z0-9]")
_REFERENCE_PACKAGE = "smscatalog.reference"


def canonical_key(name: str) -> CanonicalKey:
    return _NON_ALNUM.sub("", name.lower())


@dataclass(frozen=True, slots=True)
class CountryResolver:
    """Immutable lookup from any provider's country token to a canonical country."""

    countries: Mapping[CanonicalKey, CanonicalCountry] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        *,
        provider_countries: Mapping[str, str],
        translations: Mapping[str, str],
        codes: Mapping[str, str],
    ) -> CountryResolver:
        """Merge the provider country list with the internal translation table.

        Provider entries are processed first and win on key collisions; internal
        entries only fill keys that are still missing. A country needs both a
        localized name and a code to be included.
        """

        localized_by_key = {canonical_key(name): value for name, value in translations.items()}
        code_by_key = {canonical_key(key): value for key, value in codes.items()}

        countries: dict[CanonicalKey, CanonicalCountry] = {}
        for name in provider_countries.values():
            key = canonical_key(name)
            localized = localized_by_key.get(key)
            code = code_by_key.get(key)
            if localized and code:
                countries[key] = CanonicalCountry(
                    key=key, name=name, localized_name=localized, code=code
                )

        for name, localized in translations.items():
            key = canonical_key(name)
            if key in countries:
                continue
            code = code_by_key.get(key)
            if code:
                countries[key] = CanonicalCountry(
                    key=key, name=name, localized_name=localized, code=code
                )

        log.debug("Built country resolver with %s countries", len(countries))
        return cls(countries=countries)

    def resolve(self, token: str) -> CanonicalCountry | None:
        return self.countries.get(canonical_key(token))

    def __len__(self) -> int:
        return len(self.countries)


@dataclass(frozen=True, slots=True)
class ServicePriorityTable:
    """Localized names and storefront ranks keyed by canonical service key."""

    services: Mapping[CanonicalKey, ServiceInfo] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Mapping[str, object]]) -> ServicePriorityTable:
        services: dict[CanonicalKey, ServiceInfo] = {}
        for key, row in raw.items():
            name = row.get("name")
            if not isinstance(name, str) or not name:
                continue
            priority = row.get("priority")
            if isinstance(priority, int):
                services[canonical_key(key)] = ServiceInfo(localized_name=name, priority=priority)
            else:
                services[canonical_key(key)] = ServiceInfo(localized_name=name)
        return cls(services=services)

    def lookup(self, *candidates: str) -> ServiceInfo | None:
        """Return the first entry matching any candidate name, in order."""

        for candidate in candidates:
            if not candidate:
                continue
            info = self.services.get(canonical_key(candidate))
            if info is not None:
                return info
        return None


def _load_reference(name: str) -> dict[str, object]:
    text = resources.files(_REFERENCE_PACKAGE).joinpath(name).read_text(encoding="utf-8")
    return cast(dict[str, object], json.loads(text))


def load_country_resolver() -> CountryResolver:
    """Build the resolver from the reference tables bundled with the package."""

    return CountryResolver.build(
        provider_countries=cast("dict[str, str]", _load_reference("provider_countries.json")),
        translations=cast("dict[str, str]", _load_reference("country_translations.json")),
        codes=cast("dict[str, str]", _load_reference("country_codes.json")),
    )


def load_service_priorities() -> ServicePriorityTable:
    raw = cast("dict[str, dict[str, object]]", _load_reference("service_priority.json"))
    return ServicePriorityTable.from_mapping(raw)


def title_case_name(name: str) -> str:
    """Capitalise each whitespace-separated word, lowercasing the rest."""

    return " ".join(word[:1].upper() + word[1:].lower() for word in name.split(" "))
