"""Rasterize an Artwork to a PIL Image for local previews.

The renderer holds no generation logic: it maps each primitive through the
artwork's frame, draws it on an RGBA layer, and blends the finished layer
over the painted background with the artwork's blend mode.

Primitives that share a blur radius are drawn on one layer and blurred
together, so a voronoi grid costs one GaussianBlur, not one per cell.
"""

from __future__ import annotations

import math
from functools import lru_cache

import numpy as np
from PIL import Image, ImageColor, ImageDraw, ImageFilter

from datart.styles.primitives import (
    Artwork, Background, Band, Bubble, Cell, Cloud, Curtain, Disc, Polyline,
    Ring, Segment, Shard, Tile,
)

DEFAULT_SIZE = 512
# sizes in "reference pixels" are relative to this canvas edge
REFERENCE_SIZE = 900.0

_SUPERSAMPLE = 2
_ELLIPSE_STEPS = 48
_CURTAIN_STEPS = 24


@lru_cache(maxsize=256)
def _rgb(color: str) -> tuple[int, int, int]:
    return ImageColor.getrgb(color)[:3]


def _rgba(color: str, opacity: float) -> tuple[int, int, int, int]:
    a = int(round(max(0.0, min(1.0, opacity)) * 255))
    return _rgb(color) + (a,)


def _blend(base: np.ndarray, top: np.ndarray, mode: str) -> np.ndarray:
    if mode == "multiply":
        return base * top
    if mode == "screen":
        return 1.0 - (1.0 - base) * (1.0 - top)
    return top


def _rotate(points, cx: float, cy: float, degrees: float):
    rad = math.radians(degrees)
    c, s = math.cos(rad), math.sin(rad)
    return [(cx + (x - cx) * c - (y - cy) * s, cy + (x - cx) * s + (y - cy) * c)
            for x, y in points]


# ------------------------------------------------------------------
# Frames
# ------------------------------------------------------------------

class _Frame:
    """Maps artwork coordinates and lengths to canvas pixels."""

    def __init__(self, artwork: Artwork, width: int, height: int):
        self.width = width
        self.height = height
        self.kind = artwork.frame
        self.unit = min(width, height) / REFERENCE_SIZE

        if self.kind == "viewbox":
            vx, vy, vw, vh = artwork.viewbox
            self.unit = min(width / vw, height / vh)
            self.ox = (width - vw * self.unit) / 2 - vx * self.unit
            self.oy = (height - vh * self.unit) / 2 - vy * self.unit

    def point(self, x: float, y: float) -> tuple[float, float]:
        if self.kind == "viewport":
            return x / 100 * self.width, y / 100 * self.height
        if self.kind == "center":
            return self.width / 2 + x * self.unit, self.height / 2 + y * self.unit
        return self.ox + x * self.unit, self.oy + y * self.unit

    def length(self, v: float) -> float:
        return v * self.unit

    def vw(self, pct: float) -> float:
        return pct / 100 * self.width

    def vh(self, pct: float) -> float:
        return pct / 100 * self.height


# ------------------------------------------------------------------
# Primitive drawing
# ------------------------------------------------------------------

def _ellipse_points(cx, cy, rx, ry, angle=0.0):
    pts = [(cx + rx * math.cos(a), cy + ry * math.sin(a))
           for a in (i / _ELLIPSE_STEPS * math.tau for i in range(_ELLIPSE_STEPS))]
    return _rotate(pts, cx, cy, angle) if angle else pts


def _circle(draw, cx, cy, r, fill=None, outline=None, width=1):
    draw.ellipse([cx - r, cy - r, cx + r, cy + r], fill=fill, outline=outline,
                 width=max(1, int(round(width))))


def _draw_ring(draw, p: Ring, frame: _Frame):
    cx, cy = frame.point(p.x, p.y)
    _circle(draw, cx, cy, frame.length(p.size / 2),
            outline=_rgba(p.color, p.opacity), width=frame.length(p.thickness))


def _draw_disc(draw, p: Disc, frame: _Frame):
    cx, cy = frame.point(p.x, p.y)
    _circle(draw, cx, cy, max(0.5, frame.length(p.radius)),
            fill=_rgba(p.color, p.opacity))


def _draw_halo(draw, p: Disc, frame: _Frame):
    cx, cy = frame.point(p.x, p.y)
    _circle(draw, cx, cy, frame.length(p.radius + p.glow / 2),
            fill=_rgba(p.color, p.opacity * 0.35))


def _draw_bubble(draw, p: Bubble, frame: _Frame):
    cx, cy = frame.point(p.x, p.y)
    r = frame.length(p.size / 2)
    _circle(draw, cx, cy, r, fill=_rgba(p.color, p.opacity),
            outline=_rgba("#ffffff", p.opacity * p.rim), width=max(1.0, r * 0.04))
    # specular highlight toward the top left
    _circle(draw, cx - r * 0.35, cy - r * 0.35, r * 0.25,
            fill=_rgba("#ffffff", p.opacity * p.highlight))


def _draw_band(draw, p: Band, frame: _Frame):
    x0 = frame.vw(p.left + p.offset_x)
    x1 = x0 + frame.vw(p.span)
    y0 = frame.vh(p.top)
    y1 = y0 + frame.length(p.thickness)
    corners = [(x0, y0), (x1, y0), (x1, y1), (x0, y1)]
    draw.polygon(_rotate(corners, (x0 + x1) / 2, (y0 + y1) / 2, p.angle),
                 fill=_rgba(p.color, p.opacity))


def _draw_segment(draw, p: Segment, frame: _Frame):
    draw.line([frame.point(p.x1, p.y1), frame.point(p.x2, p.y2)],
              fill=_rgba(p.color, p.opacity),
              width=max(1, int(round(frame.length(p.width)))))


def _draw_polyline(draw, p: Polyline, frame: _Frame):
    pts = [frame.point(x, y) for x, y in p.points]
    if p.closed and p.fill is not None and len(pts) > 2:
        draw.polygon(pts, fill=_rgba(p.fill, p.fill_opacity))
    if p.closed:
        pts = pts + pts[:1]
    draw.line(pts, fill=_rgba(p.color, p.opacity),
              width=max(1, int(round(frame.length(p.width)))), joint="curve")


def _draw_tile(draw, p: Tile, frame: _Frame):
    cx, cy = frame.point(p.x, p.y)
    h = frame.length(p.size) / 2
    shear = math.tan(math.radians(p.skew))
    corners = [(cx - h + shear * h, cy - h), (cx + h + shear * h, cy - h),
               (cx + h - shear * h, cy + h), (cx - h - shear * h, cy + h)]
    face = _rotate(corners, cx, cy, p.rotation)
    # raised tiles cast their second colour as a side wall
    lift = frame.length(p.size) * 0.12 * p.elevation
    draw.polygon([(x, y + lift) for x, y in face], fill=_rgba(p.color_b, p.opacity * 0.6))
    draw.polygon(face, fill=_rgba(p.color, p.opacity))


def _shard_points(p: Shard, frame: _Frame):
    cx, cy = frame.point(p.x, p.y)
    length = frame.length(p.length)
    half = frame.length(p.width) / 2
    lean = math.tan(math.radians(p.skew)) * half
    pts = [(cx, cy), (cx + length * 0.5 + lean, cy - half),
           (cx + length, cy), (cx + length * 0.5 - lean, cy + half)]
    return _rotate(pts, cx, cy, p.rotation)


def _draw_shard(draw, p: Shard, frame: _Frame):
    draw.polygon(_shard_points(p, frame), fill=_rgba(p.color, p.opacity))


def _draw_shard_glow(draw, p: Shard, frame: _Frame):
    draw.polygon(_shard_points(p, frame), fill=_rgba(p.color, p.opacity * 0.4))


def _draw_cloud(draw, p: Cloud, frame: _Frame):
    cx, cy = frame.point(p.x, p.y)
    draw.polygon(_ellipse_points(cx, cy, frame.length(p.w / 2), frame.length(p.h / 2),
                                 p.angle),
                 fill=_rgba(p.color, p.opacity))


def _draw_curtain(draw, p: Curtain, frame: _Frame):
    cx = frame.vw(p.x)
    half = frame.length(p.width) / 2
    height = frame.vh(p.height)
    amp = frame.length(p.wave_amp) * 0.25
    shear = math.tan(math.radians(p.skew))

    left, right = [], []
    for i in range(_CURTAIN_STEPS + 1):
        k = i / _CURTAIN_STEPS
        y = k * height
        sway = math.sin(p.wave_phase + k * math.tau) * amp + shear * y
        left.append((cx - half + sway, y))
        right.append((cx + half + sway, y))

    top, bottom = _rgba(p.color, p.opacity), _rgba(p.color_b, p.opacity)
    # two-tone: upper half in the first colour, lower half in the second
    mid = _CURTAIN_STEPS // 2
    draw.polygon(left[:mid + 1] + right[mid::-1], fill=top)
    draw.polygon(left[mid:] + right[:mid - 1:-1], fill=bottom)


def _draw_cell(draw, p: Cell, frame: _Frame):
    x0, y0 = frame.vw(p.left), frame.vh(p.top)
    # overlap neighbours by a pixel so no seams show
    x1, y1 = frame.vw(p.left + p.width) + 1, frame.vh(p.top + p.height) + 1
    draw.rectangle([x0, y0, x1, y1], fill=_rgba(p.color, p.opacity))


_DRAWERS = {
    "ring": _draw_ring,
    "disc": _draw_disc,
    "bubble": _draw_bubble,
    "band": _draw_band,
    "segment": _draw_segment,
    "polyline": _draw_polyline,
    "tile": _draw_tile,
    "shard": _draw_shard,
    "cloud": _draw_cloud,
    "curtain": _draw_curtain,
    "cell": _draw_cell,
}


def _operations(artwork: Artwork, frame: _Frame):
    """Yield ``(blur_px, drawer, primitive)`` in paint order."""
    for p in artwork.primitives:
        if isinstance(p, Disc) and p.glow > 0:
            yield frame.length(p.glow) / 2, _draw_halo, p
        elif isinstance(p, Shard) and p.glow > 0:
            yield frame.length(p.glow) / 2, _draw_shard_glow, p
        blur = getattr(p, "blur", 0.0)
        yield frame.length(blur) if blur else 0.0, _DRAWERS[p.kind], p


def _paint_primitives(artwork: Artwork, width: int, height: int) -> Image.Image:
    frame = _Frame(artwork, width, height)
    canvas = Image.new("RGBA", (width, height), (0, 0, 0, 0))

    layer = None
    layer_blur = None

    def flush():
        nonlocal canvas
        if layer is None:
            return
        finished = layer.filter(ImageFilter.GaussianBlur(layer_blur)) if layer_blur else layer
        canvas = Image.alpha_composite(canvas, finished)

    for blur, drawer, prim in _operations(artwork, frame):
        if layer is None or blur != layer_blur:
            flush()
            layer = Image.new("RGBA", (width, height), (0, 0, 0, 0))
            layer_blur = blur
            draw = ImageDraw.Draw(layer, "RGBA")
        drawer(draw, prim, frame)
    flush()

    return canvas


# ------------------------------------------------------------------
# Background
# ------------------------------------------------------------------

def _paint_background(bg: Background, width: int, height: int) -> np.ndarray:
    """Float RGB array in [0, 1]: base, gradient, horizon wash, then glows."""
    out = np.empty((height, width, 3), dtype=np.float32)
    out[:] = np.array(_rgb(bg.base), dtype=np.float32) / 255.0

    ys = np.linspace(0.0, 100.0, height, dtype=np.float32)
    xs = np.linspace(0.0, 100.0, width, dtype=np.float32)
    yy, xx = np.meshgrid(ys, xs, indexing="ij")

    if bg.gradient:
        # CSS angles: 0deg points up, 90deg right
        rad = math.radians(bg.gradient_angle)
        proj = (xx - 50) * math.sin(rad) - (yy - 50) * math.cos(rad)
        proj = (proj - proj.min()) / max(1e-6, float(proj.max() - proj.min()))
        stops = np.array([_rgb(c) for c in bg.gradient], dtype=np.float32) / 255.0
        positions = np.linspace(0.0, 1.0, len(stops))
        for c in range(3):
            out[:, :, c] = np.interp(proj, positions, stops[:, c])

    if bg.horizon is not None:
        r = np.sqrt((xx - 50) ** 2 + (yy - bg.horizon) ** 2)
        mix = np.clip(1.0 - r / 70.0, 0.0, 1.0)[:, :, None]
        slate = np.array(_rgb(bg.horizon_color), dtype=np.float32) / 255.0
        out = out * (1.0 - mix) + slate * mix

    for glow in bg.glows:
        r = np.sqrt((xx - glow.cx) ** 2 + (yy - glow.cy) ** 2)
        a = (glow.strength * np.clip(1.0 - r / glow.reach, 0.0, 1.0))[:, :, None]
        out = out * (1.0 - a) + a

    return out


# ------------------------------------------------------------------
# Public API
# ------------------------------------------------------------------

def render_artwork(artwork: Artwork, width: int = DEFAULT_SIZE,
                   height: int | None = None) -> Image.Image:
    """Render ``artwork`` to an RGB image of ``width`` x ``height`` pixels."""
    if height is None:
        height = width

    iw = width * _SUPERSAMPLE
    ih = height * _SUPERSAMPLE

    base = _paint_background(artwork.background, iw, ih)
    layer = np.asarray(_paint_primitives(artwork, iw, ih), dtype=np.float32) / 255.0

    top = layer[:, :, :3]
    alpha = layer[:, :, 3:4]
    blended = _blend(base, top, artwork.blend)
    canvas = np.clip(base * (1.0 - alpha) + blended * alpha, 0.0, 1.0)

    result = Image.fromarray((canvas * 255).astype(np.uint8), "RGB")
    if _SUPERSAMPLE > 1:
        result = result.resize((width, height), Image.LANCZOS)
    return result
