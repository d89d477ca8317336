"""Prioritized rule chain mapping traits to a style id.

Rules are evaluated top to bottom and the first match wins:

1. IP continent code     -> ``continent_styles``
2. timezone prefix       -> ``timezone_styles``
3. mobile user agent     -> ``mobile_style``
4. seed modulo fallback  -> ``fallback_styles[seed % n]``

Every outcome carries a human-readable reason for the debug surfaces.
The tables live in a frozen ``StyleRules`` value that can be loaded from
JSON and validated against the registry once, at start-up.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from datart.core.traits import UserTraits

MOBILE_PATTERN = r"Android|iPhone|iPad|iPod"


@dataclass(frozen=True)
class StyleDecision:
    style_id: str
    reason: str


def _frozen(mapping) -> MappingProxyType:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class StyleRules:
    continent_styles: MappingProxyType = field(default_factory=lambda: _frozen({
        "NA": "orbits",
        "EU": "strata",
        "AS": "constellation",
    }))
    timezone_styles: MappingProxyType = field(default_factory=lambda: _frozen({
        "America/": "orbits",
        "Europe/": "strata",
    }))
    mobile_pattern: str = MOBILE_PATTERN
    mobile_style: str = "constellation"
    fallback_styles: tuple[str, ...] = ("orbits", "strata", "constellation")

    def __post_init__(self):
        if not self.fallback_styles:
            raise ValueError("fallback_styles must not be empty")
        object.__setattr__(self, "continent_styles", _frozen(self.continent_styles))
        object.__setattr__(self, "timezone_styles", _frozen(self.timezone_styles))
        object.__setattr__(self, "fallback_styles", tuple(self.fallback_styles))
        object.__setattr__(self, "_mobile_re",
                           re.compile(self.mobile_pattern, re.IGNORECASE))

    def referenced_styles(self) -> set[str]:
        ids = set(self.continent_styles.values())
        ids.update(self.timezone_styles.values())
        ids.add(self.mobile_style)
        ids.update(self.fallback_styles)
        return ids

    def validate(self, known_styles: Iterable[str]) -> StyleRules:
        """Raise ``ValueError`` if a rule names an unregistered style."""
        known = set(known_styles)
        unknown = sorted(self.referenced_styles() - known)
        if unknown:
            raise ValueError(
                f"Style rules reference unknown style ids: {unknown}. "
                f"Registered: {sorted(known)}"
            )
        return self

    def is_mobile(self, user_agent: str) -> bool:
        return self._mobile_re.search(user_agent or "") is not None

    def to_dict(self) -> dict:
        return {
            "continent_styles": dict(self.continent_styles),
            "timezone_styles": dict(self.timezone_styles),
            "mobile_pattern": self.mobile_pattern,
            "mobile_style": self.mobile_style,
            "fallback_styles": list(self.fallback_styles),
        }

    @classmethod
    def from_dict(cls, d: dict) -> StyleRules:
        base = cls()
        return cls(
            continent_styles=d.get("continent_styles", base.continent_styles),
            timezone_styles=d.get("timezone_styles", base.timezone_styles),
            mobile_pattern=d.get("mobile_pattern", base.mobile_pattern),
            mobile_style=d.get("mobile_style", base.mobile_style),
            fallback_styles=tuple(d.get("fallback_styles", base.fallback_styles)),
        )


DEFAULT_RULES = StyleRules()


def load_rules(path: str | Path) -> StyleRules:
    path = Path(path)
    return StyleRules.from_dict(json.loads(path.read_text()))


def choose_style(traits: UserTraits, seed: int,
                 rules: StyleRules = DEFAULT_RULES) -> StyleDecision:
    continent = ""
    if traits.ip_info is not None:
        continent = traits.ip_info.continent_code or ""

    if continent in rules.continent_styles:
        style = rules.continent_styles[continent]
        return StyleDecision(style, f"IP continent {continent} -> {style}")

    for prefix, style in rules.timezone_styles.items():
        if traits.timezone.startswith(prefix):
            return StyleDecision(
                style, f"time zone {traits.timezone} matches {prefix!r} -> {style}")

    if rules.is_mobile(traits.user_agent):
        return StyleDecision(
            rules.mobile_style, f"mobile user agent -> {rules.mobile_style}")

    n = len(rules.fallback_styles)
    idx = seed % n
    style = rules.fallback_styles[idx]
    return StyleDecision(style, f"fallback: seed {seed} mod {n} = {idx} -> {style}")
