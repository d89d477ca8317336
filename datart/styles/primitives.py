"""Drawable primitives emitted by the style generators.

Every primitive is an immutable record with a colour, an opacity and the
geometry of its kind. Coordinates are interpreted through the owning
``Artwork.frame``:

  viewport : x in percent of width (vw), y in percent of height (vh),
             sizes in reference pixels
  center   : pixel offsets from the canvas centre
  viewbox  : user units inside ``Artwork.viewbox`` (fit, centred)
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import ClassVar

FRAMES = ("viewport", "center", "viewbox")
BLENDS = ("normal", "screen", "multiply")

NIGHT_SKY = "#020617"
SLATE = "#0f172a"


@dataclass(frozen=True)
class Primitive:
    kind: ClassVar[str] = "primitive"

    def to_dict(self) -> dict:
        d = {"kind": self.kind}
        d.update(asdict(self))
        return d


# ------------------------------------------------------------------
# Primitive kinds
# ------------------------------------------------------------------

@dataclass(frozen=True)
class Ring(Primitive):
    kind: ClassVar[str] = "ring"
    x: float
    y: float
    size: float
    thickness: float
    rotation: float
    color: str
    opacity: float


@dataclass(frozen=True)
class Disc(Primitive):
    kind: ClassVar[str] = "disc"
    x: float
    y: float
    radius: float
    color: str
    opacity: float
    glow: float = 0.0
    blur: float = 0.0


@dataclass(frozen=True)
class Bubble(Primitive):
    kind: ClassVar[str] = "bubble"
    x: float
    y: float
    size: float
    color: str
    opacity: float
    highlight: float
    rim: float


@dataclass(frozen=True)
class Band(Primitive):
    kind: ClassVar[str] = "band"
    top: float
    thickness: float
    angle: float
    color: str
    opacity: float
    left: float = -10.0
    span: float = 120.0
    offset_x: float = 0.0
    blur: float = 0.0


@dataclass(frozen=True)
class Segment(Primitive):
    kind: ClassVar[str] = "segment"
    x1: float
    y1: float
    x2: float
    y2: float
    width: float
    color: str
    opacity: float


@dataclass(frozen=True)
class Polyline(Primitive):
    kind: ClassVar[str] = "polyline"
    points: tuple[tuple[float, float], ...]
    color: str
    opacity: float
    width: float
    closed: bool = False
    fill: str | None = None
    fill_opacity: float = 0.0


@dataclass(frozen=True)
class Tile(Primitive):
    kind: ClassVar[str] = "tile"
    x: float
    y: float
    size: float
    rotation: float
    skew: float
    color: str
    color_b: str
    opacity: float
    elevation: float


@dataclass(frozen=True)
class Shard(Primitive):
    kind: ClassVar[str] = "shard"
    x: float
    y: float
    length: float
    width: float
    rotation: float
    skew: float
    color: str
    opacity: float
    glow: float


@dataclass(frozen=True)
class Cloud(Primitive):
    kind: ClassVar[str] = "cloud"
    x: float
    y: float
    w: float
    h: float
    angle: float
    color: str
    opacity: float
    blur: float


@dataclass(frozen=True)
class Curtain(Primitive):
    kind: ClassVar[str] = "curtain"
    x: float
    width: float
    height: float
    skew: float
    wave_phase: float
    wave_amp: float
    color: str
    color_b: str
    opacity: float
    blur: float


@dataclass(frozen=True)
class Cell(Primitive):
    kind: ClassVar[str] = "cell"
    left: float
    top: float
    width: float
    height: float
    color: str
    opacity: float
    blur: float


# ------------------------------------------------------------------
# Background + Artwork
# ------------------------------------------------------------------

@dataclass(frozen=True)
class Glow:
    """Soft white radial highlight, centre in percent of the canvas."""
    cx: float
    cy: float
    strength: float
    reach: float


@dataclass(frozen=True)
class Background:
    base: str = NIGHT_SKY
    gradient: tuple[str, ...] = ()
    gradient_angle: float = 180.0
    glows: tuple[Glow, ...] = ()
    # slate radial wash centred at (50%, horizon%), fading into base by 70%
    horizon: float | None = None
    horizon_color: str = SLATE

    def to_dict(self) -> dict:
        return {
            "base": self.base,
            "gradient": list(self.gradient),
            "gradient_angle": self.gradient_angle,
            "glows": [asdict(g) for g in self.glows],
            "horizon": self.horizon,
            "horizon_color": self.horizon_color,
        }


@dataclass(frozen=True)
class Artwork:
    style_id: str
    primitives: tuple[Primitive, ...]
    frame: str = "viewport"
    viewbox: tuple[float, float, float, float] = (0.0, 0.0, 100.0, 100.0)
    blend: str = "screen"
    background: Background = field(default_factory=Background)

    def __len__(self) -> int:
        return len(self.primitives)

    def count(self, kind: str) -> int:
        return sum(1 for p in self.primitives if p.kind == kind)

    def to_dict(self) -> dict:
        return {
            "style_id": self.style_id,
            "frame": self.frame,
            "viewbox": list(self.viewbox),
            "blend": self.blend,
            "background": self.background.to_dict(),
            "primitives": [p.to_dict() for p in self.primitives],
        }
