"""Tests for the Pillow preview renderer."""
from __future__ import annotations

import numpy as np
import pytest

from datart.render import render_artwork
from datart.styles.primitives import Artwork, Background, Cell, Glow

STYLE_IDS = [
    "orbits", "strata", "constellation", "bubbles", "waves", "supershape",
    "isogrid", "crystal", "lattice", "nebula", "aurora", "voronoi",
    "fern", "koch", "tree", "flowfield",
]


class TestRenderArtwork:

    @pytest.mark.parametrize("style_id", STYLE_IDS)
    def test_every_style_renders(self, registry, palette, style_id):
        artwork = registry.resolve(style_id).generate(7, palette, 30)
        img = render_artwork(artwork, 48)
        assert img.size == (48, 48)
        assert img.mode == "RGB"

    def test_rectangular_canvas(self, registry, palette):
        artwork = registry.resolve("orbits").generate(7, palette, 30)
        assert render_artwork(artwork, 64, 32).size == (64, 32)

    def test_empty_artwork_is_background(self):
        img = render_artwork(Artwork(style_id="x", primitives=(),
                                     background=Background(base="#ff0000")), 16)
        arr = np.asarray(img)
        assert (arr[:, :, 0] > 250).all()
        assert (arr[:, :, 1] < 5).all()

    def test_glow_brightens_background(self):
        bg = Background(base="#000000", glows=(Glow(50, 50, 0.5, 40),))
        arr = np.asarray(render_artwork(Artwork(style_id="x", primitives=(), background=bg), 32))
        assert arr[16, 16].mean() > arr[0, 0].mean()

    def test_cell_paints_its_colour(self):
        cell = Cell(left=0, top=0, width=100, height=100, color="#00ff00", opacity=1.0, blur=0.0)
        art = Artwork(style_id="x", primitives=(cell,), blend="normal",
                      background=Background(base="#000000"))
        arr = np.asarray(render_artwork(art, 16))
        assert arr[8, 8, 1] > 250
        assert arr[8, 8, 0] < 5

    def test_multiply_darkens(self):
        cell = Cell(left=0, top=0, width=100, height=100, color="#808080", opacity=1.0, blur=0.0)
        art = Artwork(style_id="x", primitives=(cell,), blend="multiply",
                      background=Background(base="#ffffff"))
        arr = np.asarray(render_artwork(art, 16))
        assert 120 <= arr[8, 8, 0] <= 136
