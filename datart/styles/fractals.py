"""Mathematical styles: supershape, Barnsley fern, Koch snowflake,
recursive tree and flow field.

All of them draw in user units: the supershape in a 520-unit box centred
on the origin, the rest in a 0-100 square.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from datart.core.rng import make_rng
from datart.styles.common import (
    StyleOptions, complexity_t, js_round, lerp, override, resolve_count,
)
from datart.styles.primitives import (
    Artwork, Background, Disc, Polyline, Segment,
)

SUPERSHAPE_OFFSET = 606
FERN_OFFSET = 4242
KOCH_OFFSET = 5151
TREE_OFFSET = 7777
FLOWFIELD_OFFSET = 9898

TAU = math.pi * 2


# ======================================================================
# Supershape
# ======================================================================

@dataclass(frozen=True)
class SupershapeOptions(StyleOptions):
    # n1 > 0 keeps the exponent defined; the caps keep the radius finite
    LIMITS = {"n1": (0.1, 10.0), "n2": (0.0, 10.0), "n3": (0.0, 10.0)}

    m: int | None = None
    n1: float | None = None
    n2: float | None = None
    n3: float | None = None


SUPERSHAPE_STEPS = 360
MAX_SUPERSHAPE_LOBES = 64
SUPERSHAPE_VIEWBOX = (-260.0, -260.0, 520.0, 520.0)


def superformula(theta: float, m: float, n1: float, n2: float, n3: float,
                 a: float = 1.0, b: float = 1.0) -> float:
    """Gielis superformula radius at angle ``theta``."""
    t1 = abs(math.cos(m * theta / 4)) / a
    t2 = abs(math.sin(m * theta / 4)) / b
    return (t1 ** n2 + t2 ** n3) ** (-1 / n1)


def generate_supershape(seed: int, palette, complexity: float,
                        options: SupershapeOptions | None = None) -> Artwork:
    opts = options or SupershapeOptions()
    rng = make_rng(seed + SUPERSHAPE_OFFSET)
    t = complexity_t(complexity)

    # m sets the lobe count, n1..n3 roundness versus spikiness
    m = resolve_count(opts.m, js_round(lerp(3, 12, t ** 0.7)), 1, MAX_SUPERSHAPE_LOBES)
    n1 = override(opts.n1, lerp(0.3, 2.2, t))
    n2 = override(opts.n2, lerp(0.3, 1.8, t ** 1.5))
    n3 = override(opts.n3, lerp(0.3, 1.8, t ** 1.5))
    radius = lerp(120, 240, 1 - t)

    points = []
    for i in range(SUPERSHAPE_STEPS):
        theta = i / SUPERSHAPE_STEPS * TAU
        r = superformula(theta, m, n1, n2, n3)
        points.append((radius * r * math.cos(theta), radius * r * math.sin(theta)))

    stroke = rng.choice(palette)
    fill = rng.choice(palette)

    shape = Polyline(points=tuple(points), color=stroke, opacity=1.0, width=2.0,
                     closed=True, fill=fill, fill_opacity=0.2)
    return Artwork(style_id="supershape", primitives=(shape,), frame="viewbox",
                   viewbox=SUPERSHAPE_VIEWBOX)


# ======================================================================
# Barnsley fern
# ======================================================================

@dataclass(frozen=True)
class FernOptions(StyleOptions):
    iterations: int | None = None


MIN_FERN_POINTS = 100
MAX_FERN_POINTS = 50_000
FERN_SETTLE = 20
FERN_DOT = 0.25

# attractor bounds, mapped onto the 0-100 square
FERN_X_RANGE = (-2.5, 2.5)
FERN_Y_RANGE = (0.0, 10.5)


def barnsley_step(x: float, y: float, r: float) -> tuple[float, float]:
    """One step of the Barnsley IFS, picking the map by cumulative weight."""
    if r < 0.01:
        # stem
        return 0.0, 0.16 * y
    if r < 0.86:
        # successively smaller leaflets
        return 0.85 * x + 0.04 * y, -0.04 * x + 0.85 * y + 1.6
    if r < 0.93:
        # left leaflet
        return 0.2 * x - 0.26 * y, 0.23 * x + 0.22 * y + 1.6
    # right leaflet
    return -0.15 * x + 0.28 * y, 0.26 * x + 0.24 * y + 0.44


def generate_fern(seed: int, palette, complexity: float,
                  options: FernOptions | None = None) -> Artwork:
    opts = options or FernOptions()
    rng = make_rng(seed + FERN_OFFSET)
    t = complexity_t(complexity)

    iterations = resolve_count(opts.iterations,
                               js_round(lerp(2500, 14000, t ** 0.9)),
                               MIN_FERN_POINTS, MAX_FERN_POINTS)
    base_opacity = lerp(0.45, 0.9, t)
    min_x, max_x = FERN_X_RANGE
    min_y, max_y = FERN_Y_RANGE
    n = len(palette)

    dots = []
    x = y = 0.0
    for i in range(iterations + FERN_SETTLE):
        x, y = barnsley_step(x, y, rng())
        if i < FERN_SETTLE:
            continue

        nx = (x - min_x) / (max_x - min_x) * 100
        ny = (y - min_y) / (max_y - min_y) * 100

        # colour climbs the palette with height
        height = ny / 100
        index = math.floor(math.fmod(height * (n - 1) + rng() * 0.8, n))
        opacity = base_opacity * (0.7 + rng() * 0.4)
        dots.append(Disc(x=nx, y=100 - ny, radius=FERN_DOT,
                         color=palette[index], opacity=opacity))

    return Artwork(style_id="fern", primitives=tuple(dots), frame="viewbox",
                   background=Background(horizon=120.0))


# ======================================================================
# Koch snowflake
# ======================================================================

@dataclass(frozen=True)
class KochOptions(StyleOptions):
    depth: int | None = None


MAX_KOCH_DEPTH = 7
KOCH_EXTENT = 80.0

_SIN60 = math.sqrt(3) / 2


def koch_iterate(points: list[tuple[float, float]]) -> list[tuple[float, float]]:
    """Replace every edge of a closed polygon with four, bumping the middle."""
    out = []
    n = len(points)
    for i in range(n):
        px, py = points[i]
        qx, qy = points[(i + 1) % n]
        dx = (qx - px) / 3
        dy = (qy - py) / 3
        ax, ay = px + dx, py + dy
        # middle third rotated by 60 degrees
        peak = (ax + dx * 0.5 - dy * _SIN60, ay + dx * _SIN60 + dy * 0.5)
        out.extend(((px, py), (ax, ay), peak, (px + 2 * dx, py + 2 * dy)))
    return out


def koch_snowflake(depth: int) -> list[tuple[float, float]]:
    """Unit-radius snowflake with ``3 * 4**depth`` vertices."""
    points = [
        (0.0, 1.0),
        (math.sin(TAU / 3), math.cos(TAU / 3)),
        (math.sin(2 * TAU / 3), math.cos(2 * TAU / 3)),
    ]
    for _ in range(depth):
        points = koch_iterate(points)
    return points


def generate_koch(seed: int, palette, complexity: float,
                  options: KochOptions | None = None) -> Artwork:
    opts = options or KochOptions()
    rng = make_rng(seed + KOCH_OFFSET)
    t = complexity_t(complexity)

    depth = resolve_count(opts.depth, js_round(lerp(1, 4, t ** 0.9)), 0, MAX_KOCH_DEPTH)
    points = koch_snowflake(depth)

    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    min_x, max_x = min(xs), max(xs)
    min_y, max_y = min(ys), max(ys)
    scale = KOCH_EXTENT / max(max_x - min_x, max_y - min_y) * (0.95 + rng() * 0.1)
    cx = (min_x + max_x) / 2
    cy = (min_y + max_y) / 2
    scaled = tuple(((x - cx) * scale + 50, (y - cy) * scale + 50) for x, y in points)

    stroke = rng.choice(palette)
    fill = rng.choice(palette)
    # thinner outline with more detail
    width = lerp(0.4, 1.2, 1 - t)

    flake = Polyline(points=scaled, color=stroke, opacity=1.0, width=width,
                     closed=True, fill=fill, fill_opacity=0.2)
    return Artwork(style_id="koch", primitives=(flake,), frame="viewbox",
                   background=Background(horizon=130.0))


# ======================================================================
# Recursive tree
# ======================================================================

@dataclass(frozen=True)
class TreeOptions(StyleOptions):
    depth: int | None = None
    spread: float | None = None


MAX_TREE_DEPTH = 10
THIRD_BRANCH_CHANCE = 0.2


def generate_tree(seed: int, palette, complexity: float,
                  options: TreeOptions | None = None) -> Artwork:
    """Branching tree grown with an explicit stack from the bottom centre.

    Children sprout part-way up their parent, not at its tip.
    """
    opts = options or TreeOptions()
    rng = make_rng(seed + TREE_OFFSET)
    t = complexity_t(complexity)

    depth = resolve_count(opts.depth, js_round(lerp(3, 8, t ** 0.8)), 1, MAX_TREE_DEPTH)
    spread = override(opts.spread, lerp(16, 38, t ** 1.1))
    # quicker taper at high complexity
    decay = lerp(0.78, 0.63, t)
    base_width = lerp(1.6, 3.4, 1 - t)

    # (x, y, length, angle in degrees, level)
    stack = [(50.0, 100.0, lerp(22, 32, t), -90.0, 0)]
    branches = []
    while stack:
        x, y, length, angle, level = stack.pop()
        rad = math.radians(angle)
        x2 = x + length * math.cos(rad)
        y2 = y + length * math.sin(rad)

        width = base_width * 0.75 ** level * (0.9 + rng() * 0.2)
        color = rng.choice(palette)
        opacity = lerp(0.6, 0.9, 1 - level / (depth + 1)) * (0.8 + rng() * 0.4)
        branches.append(Segment(x1=x, y1=y, x2=x2, y2=y2, width=width,
                                color=color, opacity=opacity))

        if level >= depth:
            continue

        children = 3 if rng() < THIRD_BRANCH_CHANCE else 2
        for i in range(children):
            sign = -1 if i == 0 else 1
            jitter = (rng() - 0.5) * 10
            child_angle = angle + sign * spread * (0.7 + rng() * 0.5) + jitter
            child_length = length * decay * (0.8 + rng() * 0.35)
            attach = 0.3 + rng() * 0.5
            stack.append((x + (x2 - x) * attach, y + (y2 - y) * attach,
                          child_length, child_angle, level + 1))

    return Artwork(style_id="tree", primitives=tuple(branches), frame="viewbox",
                   background=Background(horizon=115.0))


# ======================================================================
# Flow field
# ======================================================================

@dataclass(frozen=True)
class FlowFieldOptions(StyleOptions):
    path_count: int | None = None
    steps: int | None = None
    step_length: float | None = None


MIN_PATHS = 10
MIN_STEPS = 2
MAX_PATHS = 1000
MAX_STEPS = 400


def flow_angle(x: float, y: float, phase: float) -> float:
    """Heading of the field at (x, y), roughly within -pi..pi."""
    nx = x / 100
    ny = y / 100
    a = (math.sin((nx * 4.0 + phase) * TAU) * 0.8
         + math.cos((ny * 3.0 - phase) * TAU) * 0.6
         + math.sin((nx + ny * 0.7 + phase * 0.5) * TAU) * 0.4)
    return a * math.pi


def generate_flowfield(seed: int, palette, complexity: float,
                       options: FlowFieldOptions | None = None) -> Artwork:
    opts = options or FlowFieldOptions()
    rng = make_rng(seed + FLOWFIELD_OFFSET)
    t = complexity_t(complexity)

    path_count = resolve_count(opts.path_count,
                               js_round(lerp(60, 260, t ** 0.9)), MIN_PATHS, MAX_PATHS)
    steps = resolve_count(opts.steps, js_round(lerp(18, 70, t)), MIN_STEPS, MAX_STEPS)
    step_length = override(opts.step_length, lerp(0.4, 1.4, 1 - t))
    phase = (seed % 1000) / 997

    paths = []
    for _ in range(path_count):
        x = 50 + (rng() - 0.5) * 80
        y = 50 + (rng() - 0.5) * 80
        points = [(x, y)]

        # one colour per path
        color = rng.choice(palette)
        width = lerp(0.18, 0.65, 1 - t) * (0.8 + rng() * 0.4)
        opacity = lerp(0.3, 0.8, t) * (0.7 + rng() * 0.4)

        for _ in range(steps):
            a = flow_angle(x, y, phase) + (rng() - 0.5) * 0.2
            x += math.cos(a) * step_length
            y += math.sin(a) * step_length
            if x < 0 or x > 100 or y < 0 or y > 100:
                break
            points.append((x, y))

        if len(points) > 1:
            paths.append(Polyline(points=tuple(points), color=color,
                                  opacity=opacity, width=width))

    return Artwork(style_id="flowfield", primitives=tuple(paths),
                   frame="viewbox", background=Background(horizon=110.0))
