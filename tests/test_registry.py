"""Tests for the style registry and its dispatch fallback."""
from __future__ import annotations

import logging
from dataclasses import replace

import pytest

from datart.core.generation import build_generation_state
from datart.core.options import GenerationOptions
from datart.styles import radial
from datart.styles.registry import StyleEntry, StyleRegistry


class TestStyleRegistry:

    def test_sixteen_styles_in_order(self, registry):
        ids = registry.ids()
        assert len(ids) == 16
        assert ids[:3] == ("orbits", "strata", "constellation")

    def test_offsets_unique(self, registry):
        offsets = [entry.offset for entry in registry]
        assert len(set(offsets)) == len(offsets)

    def test_labels(self, registry):
        labels = registry.labels()
        assert labels["supershape"] == "Supershape Stars"
        assert labels["voronoi"] == "Voronoi Bloom"
        assert labels["fern"] == "Barnsley Fern"

    def test_read_only(self, registry):
        with pytest.raises(TypeError):
            registry._entries["x"] = registry.default

    def test_duplicate_ids_rejected(self):
        entry = StyleEntry("orbits", "Orbits", radial.generate_orbits,
                           radial.OrbitsOptions, radial.ORBITS_OFFSET)
        with pytest.raises(ValueError):
            StyleRegistry([entry, entry])

    def test_unknown_style_falls_back_to_first(self, registry, caplog):
        with caplog.at_level(logging.WARNING, logger="datart"):
            entry = registry.resolve("stata")
        assert entry.id == "orbits"
        assert "stata" in caplog.text

    def test_generate_dispatches_on_state(self, registry, berlin_traits):
        state = build_generation_state(berlin_traits, GenerationOptions())
        artwork = registry.generate(state)
        assert artwork.style_id == state.style_id == "strata"

    def test_generate_with_unknown_style_draws_orbits(self, registry, berlin_traits):
        state = replace(build_generation_state(berlin_traits, GenerationOptions()),
                        style_id="nope")
        assert registry.generate(state).style_id == "orbits"

    def test_generate_accepts_dict_options(self, registry, berlin_traits):
        state = build_generation_state(
            berlin_traits, GenerationOptions(mode="manual", manual_style="orbits", complexity=0))
        artwork = registry.generate(state, {"ring_count": 9})
        assert artwork.count("ring") == 9

    def test_generate_rejects_mismatched_options(self, registry, berlin_traits):
        state = build_generation_state(berlin_traits, GenerationOptions())
        with pytest.raises(TypeError):
            registry.generate(state, radial.OrbitsOptions())

    def test_options_from_dict(self, registry):
        opts = registry.options_from_dict("bubbles", {"bubble_count": 11})
        assert opts == radial.BubblesOptions(bubble_count=11)
