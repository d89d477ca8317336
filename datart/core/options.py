"""Generation options and their coercion at the configuration boundary.

Pure generation code assumes sanitized input; everything arriving from a
CLI flag, a JSON body or a UI control passes through
:func:`sanitize_options` first.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass

from datart.utils.numbers import js_round

logger = logging.getLogger(__name__)

MODES = ("auto", "manual")
DEFAULT_COMPLEXITY = 50.0
DIAL_RANGE = (0, 100)
COMPLEXITY_RANGE = (0.0, 100.0)


@dataclass(frozen=True)
class GenerationOptions:
    mode: str = "auto"
    manual_seed: int | None = None
    manual_style: str | None = None
    complexity: float = DEFAULT_COMPLEXITY
    palette_shift: int = 0

    def to_dict(self) -> dict:
        return {
            "mode": self.mode,
            "manual_seed": self.manual_seed,
            "manual_style": self.manual_style,
            "complexity": self.complexity,
            "palette_shift": self.palette_shift,
        }

    @classmethod
    def from_dict(cls, d: dict) -> GenerationOptions:
        return cls(
            mode=d.get("mode", "auto"),
            manual_seed=d.get("manual_seed"),
            manual_style=d.get("manual_style"),
            complexity=d.get("complexity", DEFAULT_COMPLEXITY),
            palette_shift=d.get("palette_shift", 0),
        )


def _finite(value) -> float | None:
    try:
        f = float(value)
    except (TypeError, ValueError):
        return None
    return f if math.isfinite(f) else None


def _clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


def sanitize_options(options: GenerationOptions,
                     known_styles: Iterable[str] | None = None) -> GenerationOptions:
    """Coerce malformed values to defaults and clamp ranges."""
    mode = options.mode if options.mode in MODES else "auto"
    if mode != options.mode:
        logger.warning("Unknown mode %r, using 'auto'", options.mode)

    complexity = _finite(options.complexity)
    if complexity is None:
        logger.warning("Invalid complexity %r, using %s",
                       options.complexity, DEFAULT_COMPLEXITY)
        complexity = DEFAULT_COMPLEXITY
    complexity = _clamp(complexity, *COMPLEXITY_RANGE)

    dial = None
    if options.manual_seed is not None:
        f = _finite(options.manual_seed)
        if f is None:
            logger.warning("Invalid seed dial %r, ignoring", options.manual_seed)
        else:
            dial = js_round(_clamp(f, *DIAL_RANGE))

    shift = _finite(options.palette_shift)
    shift = int(shift) if shift is not None else 0

    style = options.manual_style or None
    if style is not None and known_styles is not None and style not in set(known_styles):
        logger.warning("Unknown manual style %r, ignoring", style)
        style = None

    return GenerationOptions(
        mode=mode,
        manual_seed=dial,
        manual_style=style,
        complexity=complexity,
        palette_shift=shift,
    )
