"""Shared helpers for the style generators."""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import ClassVar

from datart.utils.numbers import js_round

# float overrides feed coordinates and angles; beyond this they only overflow
MAX_OPTION_MAGNITUDE = 1e6


def clamp01(x: float) -> float:
    return max(0.0, min(1.0, x))


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def complexity_t(complexity: float) -> float:
    return clamp01(complexity / 100)


def override(value, default):
    return default if value is None else value


def _is_count(f) -> bool:
    return str(f.type).startswith("int")


@dataclass(frozen=True)
class StyleOptions:
    """Base for per-style option records.

    Every field defaults to ``None``, meaning "derive from complexity".
    Set values must be finite numbers: counts non-negative, floats within
    ``MAX_OPTION_MAGNITUDE`` and any range a subclass lists in ``LIMITS``
    (closed ``(lo, hi)`` per field). Anything else raises ``ValueError``.
    """

    LIMITS: ClassVar[dict] = {}

    def __post_init__(self):
        name = type(self).__name__
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{name}.{f.name} must be a number, got {value!r}")
            if not math.isfinite(value):
                raise ValueError(f"{name}.{f.name} must be finite, got {value!r}")
            if _is_count(f):
                if value < 0:
                    raise ValueError(f"{name}.{f.name} must be >= 0, got {value!r}")
            elif abs(value) > MAX_OPTION_MAGNITUDE:
                raise ValueError(
                    f"{name}.{f.name} must be within +/-{MAX_OPTION_MAGNITUDE:g}, got {value!r}")
            if f.name in self.LIMITS:
                lo, hi = self.LIMITS[f.name]
                if not lo <= value <= hi:
                    raise ValueError(
                        f"{name}.{f.name} must be in [{lo}, {hi}], got {value!r}")

    @classmethod
    def from_dict(cls, d: dict | None):
        d = d or {}
        names = {f.name for f in fields(cls)}
        unknown = set(d) - names
        if unknown:
            raise ValueError(
                f"Unknown options for {cls.__name__}: {sorted(unknown)}")
        return cls(**{k: v for k, v in d.items() if v is not None})

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def resolve_count(value, default: int, minimum: int, maximum: int) -> int:
    """Override-or-default count, clamped to the style's ``[minimum, maximum]``."""
    value = override(value, default)
    if not math.isfinite(value):
        raise ValueError(f"count must be finite, got {value!r}")
    return int(max(minimum, min(maximum, value)))
