"""Horizontal and vertical band styles: strata, waves, aurora curtains."""

from __future__ import annotations

import math
from dataclasses import dataclass

from datart.core.rng import make_rng
from datart.styles.common import (
    StyleOptions, complexity_t, js_round, lerp, override, resolve_count,
)
from datart.styles.primitives import (
    Artwork, Background, Band, Curtain, Glow,
)

STRATA_OFFSET = 202
WAVES_OFFSET = 505
AURORA_OFFSET = 1313


# ======================================================================
# Strata
# ======================================================================

@dataclass(frozen=True)
class StrataOptions(StyleOptions):
    band_count: int | None = None
    max_tilt: float | None = None


MIN_BANDS = 4
MAX_BANDS = 120
MIN_BAND_THICKNESS = 6.0


def generate_strata(seed: int, palette, complexity: float,
                    options: StrataOptions | None = None) -> Artwork:
    """Sediment layers multiplied over a diagonal palette gradient."""
    opts = options or StrataOptions()
    rng = make_rng(seed + STRATA_OFFSET)
    t = complexity_t(complexity)

    band_count = resolve_count(opts.band_count, js_round(lerp(6, 26, t)), MIN_BANDS, MAX_BANDS)
    # thick bands when simple, thin when complex
    thickness_base = lerp(80, 14, t)
    max_tilt = override(opts.max_tilt, lerp(2, 14, t ** 1.2))

    min_opacity = lerp(0.15, 0.25, t)
    max_opacity = lerp(0.5, 0.85, t)

    bands = []
    for _ in range(band_count):
        jitter = (rng() - 0.5) * 0.4 * thickness_base
        thickness = max(MIN_BAND_THICKNESS, thickness_base + jitter)
        top = rng() * 100
        angle = (rng() - 0.5) * 2 * max_tilt
        color = rng.choice(palette)
        opacity = min_opacity + rng() * (max_opacity - min_opacity)
        bands.append(Band(top=top, thickness=thickness, angle=angle,
                          color=color, opacity=opacity))

    background = Background(gradient=tuple(palette), gradient_angle=135.0)
    return Artwork(style_id="strata", primitives=tuple(bands),
                   frame="viewport", blend="multiply", background=background)


# ======================================================================
# Waves
# ======================================================================

@dataclass(frozen=True)
class WavesOptions(StyleOptions):
    band_count: int | None = None
    max_tilt: float | None = None
    max_offset_x: float | None = None


MIN_WAVE_THICKNESS = 4.0


def generate_waves(seed: int, palette, complexity: float,
                   options: WavesOptions | None = None) -> Artwork:
    opts = options or WavesOptions()
    rng = make_rng(seed + WAVES_OFFSET)
    t = complexity_t(complexity)

    band_count = resolve_count(opts.band_count, js_round(lerp(6, 32, t ** 0.8)),
                               MIN_BANDS, MAX_BANDS)
    base_thickness = lerp(40, 6, t)
    max_tilt = override(opts.max_tilt, lerp(2, 18, t ** 1.2))
    max_offset_x = override(opts.max_offset_x, lerp(10, 40, t))

    min_opacity = lerp(0.12, 0.2, t)
    max_opacity = lerp(0.35, 0.6, t)
    blur = lerp(4, 18, t ** 0.9)

    bands = []
    for _ in range(band_count):
        top = rng() * 100
        jitter = (rng() - 0.5) * base_thickness * 0.5
        thickness = max(MIN_WAVE_THICKNESS, base_thickness + jitter)
        angle = (rng() - 0.5) * 2 * max_tilt
        offset_x = (rng() - 0.5) * 2 * max_offset_x
        color = rng.choice(palette)
        opacity = min_opacity + rng() * (max_opacity - min_opacity)
        bands.append(Band(top=top, thickness=thickness, angle=angle,
                          color=color, opacity=opacity, left=-20.0,
                          span=140.0, offset_x=offset_x, blur=blur))

    background = Background(gradient=tuple(palette), gradient_angle=180.0)
    return Artwork(style_id="waves", primitives=tuple(bands),
                   frame="viewport", background=background)


# ======================================================================
# Aurora
# ======================================================================

@dataclass(frozen=True)
class AuroraOptions(StyleOptions):
    curtain_count: int | None = None
    max_skew: float | None = None


MIN_CURTAINS = 3
MAX_CURTAINS = 80


def generate_aurora(seed: int, palette, complexity: float,
                    options: AuroraOptions | None = None) -> Artwork:
    """Vertical curtains spread across lanes, skewed and wavy."""
    opts = options or AuroraOptions()
    rng = make_rng(seed + AURORA_OFFSET)
    t = complexity_t(complexity)

    count = resolve_count(opts.curtain_count, js_round(lerp(5, 20, t ** 0.9)),
                          MIN_CURTAINS, MAX_CURTAINS)
    base_width = lerp(120, 30, t)
    base_height = lerp(70, 110, t)
    max_skew = override(opts.max_skew, lerp(4, 20, t ** 1.2))
    max_amp = lerp(20, 80, t ** 1.1)

    min_opacity = lerp(0.25, 0.4, t)
    max_opacity = lerp(0.6, 0.9, t)
    blur = lerp(6, 24, t ** 0.9)

    curtains = []
    for i in range(count):
        lane = i / count
        x = 10 + lane * 80 + (rng() - 0.5) * 10
        width = base_width * (0.7 + rng() * 0.6)
        height = base_height * (0.85 + rng() * 0.4)
        skew = (rng() - 0.5) * 2 * max_skew
        wave_phase = rng() * math.pi * 2
        wave_amp = max_amp * (0.5 + rng() * 0.7)
        color_a = rng.choice(palette)
        color_b = rng.choice(palette)
        opacity = min_opacity + rng() * (max_opacity - min_opacity)
        curtains.append(Curtain(
            x=x, width=width, height=height, skew=skew,
            wave_phase=wave_phase, wave_amp=wave_amp,
            color=color_a, color_b=color_b, opacity=opacity, blur=blur,
        ))

    background = Background(base="#020617", glows=(
        Glow(50, 120, 0.08, 70),
        Glow(50, 100, 0.14, 40),
    ))
    return Artwork(style_id="aurora", primitives=tuple(curtains),
                   frame="viewport", background=background)
