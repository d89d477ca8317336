"""Style registry: id -> label, generator and options type.

The registry is built once and is read-only afterwards. Unknown ids never
fail at dispatch; they fall back to the first registered style.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable

from datart.styles import bands, fractals, networks, radial
from datart.styles.common import StyleOptions
from datart.styles.primitives import Artwork

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StyleEntry:
    id: str
    label: str
    generate: Callable[..., Artwork]
    options_type: type[StyleOptions]
    offset: int

    def to_dict(self) -> dict:
        return {"id": self.id, "label": self.label, "offset": self.offset}


class StyleRegistry:
    """Read-only, ordered collection of style entries."""

    def __init__(self, entries):
        table = {}
        for entry in entries:
            if entry.id in table:
                raise ValueError(f"Duplicate style id: {entry.id!r}")
            table[entry.id] = entry
        if not table:
            raise ValueError("A style registry needs at least one style")
        self._entries = MappingProxyType(table)

    def __contains__(self, style_id) -> bool:
        return style_id in self._entries

    def __iter__(self):
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def ids(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def labels(self) -> dict[str, str]:
        return {e.id: e.label for e in self._entries.values()}

    @property
    def default(self) -> StyleEntry:
        return next(iter(self._entries.values()))

    def resolve(self, style_id: str) -> StyleEntry:
        entry = self._entries.get(style_id)
        if entry is None:
            fallback = self.default
            logger.warning("Unknown style id %r, falling back to %r (available: %s)",
                           style_id, fallback.id, ", ".join(self._entries))
            return fallback
        return entry

    def options_from_dict(self, style_id: str, data: dict | None) -> StyleOptions:
        return self.resolve(style_id).options_type.from_dict(data)

    def generate(self, state, options: StyleOptions | dict | None = None) -> Artwork:
        """Render the state's style; ``options`` may be a record or a plain dict."""
        entry = self.resolve(state.style_id)
        if isinstance(options, dict):
            options = entry.options_type.from_dict(options)
        elif options is not None and not isinstance(options, entry.options_type):
            raise TypeError(
                f"{entry.id} expects {entry.options_type.__name__}, "
                f"got {type(options).__name__}")
        return entry.generate(state.seed, state.palette, state.complexity, options)


def build_registry() -> StyleRegistry:
    return StyleRegistry([
        StyleEntry("orbits", "Orbits", radial.generate_orbits,
                   radial.OrbitsOptions, radial.ORBITS_OFFSET),
        StyleEntry("strata", "Strata", bands.generate_strata,
                   bands.StrataOptions, bands.STRATA_OFFSET),
        StyleEntry("constellation", "Constellation", networks.generate_constellation,
                   networks.ConstellationOptions, networks.CONSTELLATION_OFFSET),
        StyleEntry("bubbles", "Bubbles", radial.generate_bubbles,
                   radial.BubblesOptions, radial.BUBBLES_OFFSET),
        StyleEntry("waves", "Waves", bands.generate_waves,
                   bands.WavesOptions, bands.WAVES_OFFSET),
        StyleEntry("supershape", "Supershape Stars", fractals.generate_supershape,
                   fractals.SupershapeOptions, fractals.SUPERSHAPE_OFFSET),
        StyleEntry("isogrid", "IsoGrid", networks.generate_isogrid,
                   networks.IsoGridOptions, networks.ISOGRID_OFFSET),
        StyleEntry("crystal", "Crystal", radial.generate_crystal,
                   radial.CrystalOptions, radial.CRYSTAL_OFFSET),
        StyleEntry("lattice", "Lattice", networks.generate_lattice,
                   networks.LatticeOptions, networks.LATTICE_OFFSET),
        StyleEntry("nebula", "Nebula", radial.generate_nebula,
                   radial.NebulaOptions, radial.NEBULA_OFFSET),
        StyleEntry("aurora", "Aurora", bands.generate_aurora,
                   bands.AuroraOptions, bands.AURORA_OFFSET),
        StyleEntry("voronoi", "Voronoi Bloom", networks.generate_voronoi,
                   networks.VoronoiOptions, networks.VORONOI_OFFSET),
        StyleEntry("fern", "Barnsley Fern", fractals.generate_fern,
                   fractals.FernOptions, fractals.FERN_OFFSET),
        StyleEntry("koch", "Koch Snowflake", fractals.generate_koch,
                   fractals.KochOptions, fractals.KOCH_OFFSET),
        StyleEntry("tree", "Recursive Tree", fractals.generate_tree,
                   fractals.TreeOptions, fractals.TREE_OFFSET),
        StyleEntry("flowfield", "Flow Field", fractals.generate_flowfield,
                   fractals.FlowFieldOptions, fractals.FLOWFIELD_OFFSET),
    ])
