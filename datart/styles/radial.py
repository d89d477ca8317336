"""Centre-weighted styles: orbits, bubbles, crystal shards, nebula clouds.

Orbits, bubbles and crystal place primitives as pixel offsets from the
canvas centre; nebula scatters clouds in viewport percent around it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from datart.core.rng import make_rng
from datart.styles.common import (
    StyleOptions, complexity_t, js_round, lerp, override, resolve_count,
)
from datart.styles.primitives import (
    Artwork, Background, Bubble, Cloud, Disc, Glow, Ring, Shard,
)

ORBITS_OFFSET = 101
BUBBLES_OFFSET = 404
CRYSTAL_OFFSET = 808
NEBULA_OFFSET = 2024


# ======================================================================
# Orbits
# ======================================================================

@dataclass(frozen=True)
class OrbitsOptions(StyleOptions):
    ring_count: int | None = None
    max_offset: float | None = None


MIN_RINGS = 3
MAX_RINGS = 120
PLANET_RADIUS = 40.0


def generate_orbits(seed: int, palette, complexity: float,
                    options: OrbitsOptions | None = None) -> Artwork:
    opts = options or OrbitsOptions()
    rng = make_rng(seed + ORBITS_OFFSET)
    t = complexity_t(complexity)

    ring_count = resolve_count(opts.ring_count, js_round(lerp(6, 30, t)), MIN_RINGS, MAX_RINGS)
    # how far rings drift from the centre
    max_offset = override(opts.max_offset, lerp(20, 120, t ** 1.2))

    shapes = []
    for _ in range(ring_count):
        size = 80 + rng() * 420
        thickness = 1 + rng() * 6
        color = rng.choice(palette)
        rotation = rng() * 360
        ox = (rng() - 0.5) * max_offset
        oy = (rng() - 0.5) * max_offset
        shapes.append(Ring(x=ox, y=oy, size=size, thickness=thickness,
                           rotation=rotation, color=color, opacity=0.4))

    # central planet
    shapes.append(Disc(x=0.0, y=0.0, radius=PLANET_RADIUS, color=palette[0],
                       opacity=1.0, glow=60.0))

    return Artwork(style_id="orbits", primitives=tuple(shapes), frame="center")


# ======================================================================
# Bubbles
# ======================================================================

@dataclass(frozen=True)
class BubblesOptions(StyleOptions):
    bubble_count: int | None = None
    spread: float | None = None


MIN_BUBBLES = 6
MAX_BUBBLES = 200
MIN_BUBBLE_SIZE = 18.0


def generate_bubbles(seed: int, palette, complexity: float,
                     options: BubblesOptions | None = None) -> Artwork:
    opts = options or BubblesOptions()
    rng = make_rng(seed + BUBBLES_OFFSET)
    t = complexity_t(complexity)

    count = resolve_count(opts.bubble_count, js_round(lerp(6, 30, t)), MIN_BUBBLES, MAX_BUBBLES)
    # bigger bubbles when simple, smaller and more numerous when complex
    base_size = lerp(180, 30, t)
    spread = override(opts.spread, lerp(40, 180, t ** 1.2))

    min_opacity = lerp(0.12, 0.22, t)
    max_opacity = lerp(0.35, 0.5, t)
    highlight = lerp(0.4, 0.7, 1 - t)
    rim = lerp(0.3, 0.6, t)

    bubbles = []
    for _ in range(count):
        # polar placement biased toward the centre
        r = math.sqrt(rng()) * spread
        theta = rng() * math.pi * 2
        jitter = (rng() - 0.5) * base_size * 0.4
        size = max(MIN_BUBBLE_SIZE, base_size + jitter)
        color = rng.choice(palette)
        opacity = min_opacity + rng() * (max_opacity - min_opacity)
        bubbles.append(Bubble(
            x=r * math.cos(theta), y=r * math.sin(theta), size=size,
            color=color, opacity=opacity, highlight=highlight, rim=rim,
        ))

    background = Background(glows=(
        Glow(50, 40, 0.18, 65),
        Glow(20, 80, 0.12, 70),
        Glow(50, 50, 0.25, 25),
    ))
    return Artwork(style_id="bubbles", primitives=tuple(bubbles),
                   frame="center", background=background)


# ======================================================================
# Crystal
# ======================================================================

@dataclass(frozen=True)
class CrystalOptions(StyleOptions):
    shard_count: int | None = None
    max_skew: float | None = None


MIN_SHARDS = 6
MAX_SHARDS = 300
CORE_RADIUS = 110.0


def generate_crystal(seed: int, palette, complexity: float,
                     options: CrystalOptions | None = None) -> Artwork:
    opts = options or CrystalOptions()
    rng = make_rng(seed + CRYSTAL_OFFSET)
    t = complexity_t(complexity)

    count = resolve_count(opts.shard_count, js_round(lerp(16, 70, t ** 0.85)),
                          MIN_SHARDS, MAX_SHARDS)
    base_length = lerp(120, 260, t ** 0.8)
    base_width = lerp(18, 40, 1 - t)
    max_skew = override(opts.max_skew, lerp(4, 22, t ** 1.2))

    min_opacity = lerp(0.45, 0.6, t)
    max_opacity = lerp(0.75, 0.95, t)
    glow = lerp(10, 26, t)

    shards = []
    for _ in range(count):
        rotation = rng() * 360
        length = base_length * (0.75 + rng() * 0.6)
        width = base_width * (0.7 + rng() * 0.7)
        skew = (rng() - 0.5) * 2 * max_skew
        color = rng.choice(palette)
        opacity = min_opacity + rng() * (max_opacity - min_opacity)
        shards.append(Shard(x=0.0, y=0.0, length=length, width=width,
                            rotation=rotation, skew=skew, color=color,
                            opacity=opacity, glow=glow))

    # core disc ties the shards together
    shards.append(Disc(x=0.0, y=0.0, radius=CORE_RADIUS, color="#ffffff",
                       opacity=0.35, blur=40.0))

    background = Background(base="#020617", glows=(Glow(50, 50, 0.12, 55),))
    return Artwork(style_id="crystal", primitives=tuple(shards),
                   frame="center", background=background)


# ======================================================================
# Nebula
# ======================================================================

@dataclass(frozen=True)
class NebulaOptions(StyleOptions):
    cloud_count: int | None = None
    spread: float | None = None


MIN_CLOUDS = 6
MAX_CLOUDS = 200


def generate_nebula(seed: int, palette, complexity: float,
                    options: NebulaOptions | None = None) -> Artwork:
    opts = options or NebulaOptions()
    rng = make_rng(seed + NEBULA_OFFSET)
    t = complexity_t(complexity)

    count = resolve_count(opts.cloud_count, js_round(lerp(10, 40, t)), MIN_CLOUDS, MAX_CLOUDS)
    blur_base = lerp(5, 40, t ** 0.6)
    base_size = lerp(280, 80, t)
    spread = override(opts.spread, lerp(20, 70, t))

    min_opacity = lerp(0.25, 0.35, t)
    max_opacity = lerp(0.75, 0.85, t)

    clouds = []
    for _ in range(count):
        r = math.sqrt(rng()) * spread
        theta = rng() * math.pi * 2
        x = 50 + r * math.cos(theta)
        y = 50 + r * math.sin(theta) * 0.55

        # elongated ellipses give the nebula direction
        w = base_size * (0.6 + rng() * 0.8)
        h = w * (0.3 + rng() * 0.4)
        angle = rng() * 360
        color = rng.choice(palette)
        opacity = min_opacity + rng() * (max_opacity - min_opacity)
        blur = blur_base * (0.6 + rng() * 0.4)
        clouds.append(Cloud(x=x, y=y, w=w, h=h, angle=angle, color=color,
                            opacity=opacity, blur=blur))

    background = Background(glows=(Glow(50, 20, 0.12, 45),))
    return Artwork(style_id="nebula", primitives=tuple(clouds),
                   frame="viewport", background=background)
