"""Seeded HSL palettes.

A palette is five ``hsl(...)`` strings whose hues step 40 degrees around a
random base hue. Consumers index it positionally, so order is part of the
contract, as is the exact number of draws taken from the shared RNG.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence

from datart.utils.numbers import js_str

PALETTE_SIZE = 5
HUE_STEP = 40
SATURATION_RANGE = (40.0, 80.0)
LIGHTNESS_RANGE = (30.0, 80.0)


def hsl(hue, saturation, lightness) -> str:
    return f"hsl({js_str(hue)}, {js_str(saturation)}%, {js_str(lightness)}%)"


def generate_palette(rng: Callable[[], float]) -> tuple[str, ...]:
    """Draw one base hue, then saturation and lightness per entry (11 draws)."""
    base_hue = math.floor(rng() * 360)
    s_lo, s_hi = SATURATION_RANGE
    l_lo, l_hi = LIGHTNESS_RANGE

    colors = []
    for i in range(PALETTE_SIZE):
        hue = (base_hue + i * HUE_STEP) % 360
        sat = s_lo + rng() * (s_hi - s_lo)
        light = l_lo + rng() * (l_hi - l_lo)
        colors.append(hsl(hue, sat, light))

    return tuple(colors)


def shift_palette(palette: Sequence[str], shift: int) -> tuple[str, ...]:
    """Rotate left by ``shift mod len(palette)``."""
    n = len(palette)
    if n == 0:
        return tuple(palette)
    k = shift % n
    return tuple(palette[k:]) + tuple(palette[:k])
