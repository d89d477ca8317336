"""Point-and-link styles: constellation, lattice, isometric grid, voronoi bloom."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from datart.core.rng import make_rng
from datart.styles.common import (
    StyleOptions, complexity_t, js_round, lerp, override, resolve_count,
)
from datart.styles.primitives import (
    Artwork, Background, Cell, Disc, Glow, Segment, Tile,
)

CONSTELLATION_OFFSET = 303
ISOGRID_OFFSET = 707
LATTICE_OFFSET = 909
VORONOI_OFFSET = 1717

STARLIGHT = "#ffffff"


# ======================================================================
# Constellation
# ======================================================================

@dataclass(frozen=True)
class ConstellationOptions(StyleOptions):
    point_count: int | None = None
    connection_chance: float | None = None


MIN_STARS = 6
MAX_STARS = 300
MAX_LINK_REACH = 3


def generate_constellation(seed: int, palette, complexity: float,
                           options: ConstellationOptions | None = None) -> Artwork:
    """Scattered stars, each optionally linked to one of the next few."""
    opts = options or ConstellationOptions()
    rng = make_rng(seed + CONSTELLATION_OFFSET)
    t = complexity_t(complexity)

    n = resolve_count(opts.point_count, js_round(lerp(12, 40, t)), MIN_STARS, MAX_STARS)
    chance = override(opts.connection_chance, lerp(0.4, 0.75, t))

    stars = []
    for _ in range(n):
        x = rng() * 100
        y = rng() * 100
        size = 2 + rng() * 5
        color = rng.choice(palette)
        glow = 0.3 + rng() * 0.7
        stars.append(Disc(x=x, y=y, radius=size / 2, color=color,
                          opacity=1.0, glow=12 * glow))

    links = []
    for i in range(n - 1):
        if rng() < chance:
            j = i + 1 + math.floor(rng() * MAX_LINK_REACH)
            if j < n:
                a, b = stars[i], stars[j]
                links.append(Segment(x1=a.x, y1=a.y, x2=b.x, y2=b.y, width=1.0,
                                     color=STARLIGHT, opacity=0.33))

    background = Background(glows=(
        Glow(50, 10, 0.12, 60),
        Glow(20, 80, 0.08, 55),
        Glow(80, 70, 0.15, 50),
    ))
    # links under the stars
    return Artwork(style_id="constellation", primitives=tuple(links + stars),
                   frame="viewport", background=background)


# ======================================================================
# IsoGrid
# ======================================================================

@dataclass(frozen=True)
class IsoGridOptions(StyleOptions):
    rows: int | None = None
    cols: int | None = None
    max_skew: float | None = None


MIN_TILE_SIZE = 18.0
MAX_ROWS = 40
MAX_COLS = 60


def generate_isogrid(seed: int, palette, complexity: float,
                     options: IsoGridOptions | None = None) -> Artwork:
    """Staggered lattice of rotated, skewed tiles centred on the screen."""
    opts = options or IsoGridOptions()
    rng = make_rng(seed + ISOGRID_OFFSET)
    t = complexity_t(complexity)

    rows = resolve_count(opts.rows, js_round(lerp(3, 9, t)), 2, MAX_ROWS)
    cols = resolve_count(opts.cols, js_round(lerp(6, 16, t)), 3, MAX_COLS)

    base_size = lerp(80, 26, t)

    row_spacing = lerp(9, 6, t)
    start_y = 50 - (rows - 1) * row_spacing / 2

    start_x, end_x = 15, 85
    col_spacing = (end_x - start_x) / max(1, cols - 1)

    max_skew = override(opts.max_skew, lerp(8, 18, t ** 1.2))
    jitter_scale = lerp(0.25, 0.9, t)
    base_opacity = lerp(0.55, 0.9, t)

    tiles = []
    for row in range(rows):
        # odd rows stagger by half a column
        row_offset = 0 if row % 2 == 0 else col_spacing / 2

        for col in range(cols):
            base_x = start_x + col * col_spacing + row_offset
            base_y = start_y + row * row_spacing

            x = base_x + (rng() - 0.5) * col_spacing * jitter_scale
            y = base_y + (rng() - 0.5) * row_spacing * jitter_scale

            size_jitter = (rng() - 0.5) * base_size * 0.3
            size = max(MIN_TILE_SIZE, base_size + size_jitter)

            rotation = 45 + (rng() - 0.5) * 5
            skew = (rng() - 0.5) * 2 * max_skew
            color_a = rng.choice(palette)
            color_b = rng.choice(palette)
            opacity = base_opacity * (0.85 + rng() * 0.3)
            elevation = rng()

            tiles.append(Tile(x=x, y=y, size=size, rotation=rotation, skew=skew,
                              color=color_a, color_b=color_b, opacity=opacity,
                              elevation=elevation))

    background = Background(glows=(Glow(50, 10, 0.10, 55),))
    return Artwork(style_id="isogrid", primitives=tuple(tiles),
                   frame="viewport", background=background)


# ======================================================================
# Lattice
# ======================================================================

@dataclass(frozen=True)
class LatticeOptions(StyleOptions):
    node_count: int | None = None
    connect_radius: float | None = None
    connect_probability: float | None = None


MIN_NODES = 6
MAX_NODES = 300
NODE_MARGIN = 8


def generate_lattice(seed: int, palette, complexity: float,
                     options: LatticeOptions | None = None) -> Artwork:
    opts = options or LatticeOptions()
    rng = make_rng(seed + LATTICE_OFFSET)
    t = complexity_t(complexity)

    n = resolve_count(opts.node_count, js_round(lerp(12, 70, t ** 0.8)), MIN_NODES, MAX_NODES)
    radius = override(opts.connect_radius, lerp(8, 32, t ** 0.9))
    radius_sq = radius * radius
    probability = override(opts.connect_probability, lerp(0.1, 0.5, t))

    base_r = lerp(1.8, 0.4, t)
    node_opacity = lerp(0.4, 0.85, t)
    link_width = lerp(0.12, 0.5, t)
    link_opacity = lerp(0.18, 0.5, t)

    span = 100 - 2 * NODE_MARGIN
    nodes = []
    for _ in range(n):
        x = NODE_MARGIN + rng() * span
        y = NODE_MARGIN + rng() * span
        r = base_r * (0.7 + rng() * 0.6)
        color = rng.choice(palette)
        opacity = node_opacity * (0.8 + rng() * 0.4)
        nodes.append(Disc(x=x, y=y, radius=r, color=color, opacity=opacity))

    links = []
    for i in range(n):
        a = nodes[i]
        for j in range(i + 1, n):
            b = nodes[j]
            dx = a.x - b.x
            dy = a.y - b.y
            if dx * dx + dy * dy > radius_sq:
                continue
            if rng() > probability:
                continue
            width = link_width * (0.8 + rng() * 0.4)
            opacity = link_opacity * (0.8 + rng() * 0.5)
            color = rng.choice(palette)
            links.append(Segment(x1=a.x, y1=a.y, x2=b.x, y2=b.y, width=width,
                                 color=color, opacity=opacity))

    background = Background(glows=(Glow(50, 0, 0.08, 55),))
    return Artwork(style_id="lattice", primitives=tuple(links + nodes),
                   frame="viewbox", background=background)


# ======================================================================
# Voronoi bloom
# ======================================================================

@dataclass(frozen=True)
class VoronoiOptions(StyleOptions):
    site_count: int | None = None
    resolution: int | None = None


MIN_SITES = 3
MIN_RESOLUTION = 6
MAX_SITES = 200
MAX_RESOLUTION = 120
SITE_MARGIN = 8


def nearest_sites(site_xy: np.ndarray, resolution: int) -> np.ndarray:
    """Index of the nearest site for every sample-grid centre, row-major.

    Brute force O(resolution^2 * sites); ties resolve to the lowest index.
    """
    cell = 100 / resolution
    centres = np.arange(resolution, dtype=np.float64) * cell + cell * 0.5
    sy, sx = np.meshgrid(centres, centres, indexing="ij")
    dx = site_xy[np.newaxis, :, 0] - sx.reshape(-1, 1)
    dy = site_xy[np.newaxis, :, 1] - sy.reshape(-1, 1)
    dist = dx * dx + dy * dy
    return np.argmin(dist, axis=1)


def generate_voronoi(seed: int, palette, complexity: float,
                     options: VoronoiOptions | None = None) -> Artwork:
    """Sample a grid, colour each sample by its nearest site, blur into cells."""
    opts = options or VoronoiOptions()
    rng = make_rng(seed + VORONOI_OFFSET)
    t = complexity_t(complexity)

    site_count = resolve_count(opts.site_count,
                               js_round(lerp(6, 32, t ** 0.8)), MIN_SITES, MAX_SITES)
    span = 100 - SITE_MARGIN * 2
    sites = []
    for _ in range(site_count):
        x = SITE_MARGIN + rng() * span
        y = SITE_MARGIN + rng() * span
        sites.append((x, y, rng.choice(palette)))

    resolution = resolve_count(opts.resolution,
                               js_round(lerp(12, 35, t ** 1.1)), MIN_RESOLUTION, MAX_RESOLUTION)
    cell = 100 / resolution

    site_xy = np.array([(x, y) for x, y, _ in sites], dtype=np.float64)
    owners = nearest_sites(site_xy, resolution)

    base_opacity = lerp(0.25, 0.7, t)
    blur = lerp(4, 22, t * 0.8)

    cells = []
    for idx, owner in enumerate(owners):
        gy, gx = divmod(idx, resolution)
        color = sites[int(owner)][2]
        opacity = base_opacity * (0.8 + rng() * 0.4)
        cells.append(Cell(left=gx * cell, top=gy * cell, width=cell, height=cell,
                          color=color, opacity=opacity, blur=blur))

    background = Background(glows=(Glow(50, 0, 0.10, 55),))
    return Artwork(style_id="voronoi", primitives=tuple(cells),
                   frame="viewport", background=background)
