"""
Tests for the generation state builder.

Covers:
- End-to-end auto generation from traits
- Manual dial re-hashing and manual style override
- Palette shift and purity of the builder
"""
from __future__ import annotations

from dataclasses import replace

from datart.core.generation import (
    MANUAL_OVERRIDE_REASON, build_generation_state, dial_seed,
)
from datart.core.options import GenerationOptions
from datart.core.palette import generate_palette, shift_palette
from datart.core.rng import hash_string_to_int, make_rng
from datart.core.rules import StyleRules
from datart.core.traits import build_fingerprint


class TestAutoMode:

    def test_berlin_visitor_gets_strata(self, berlin_traits):
        state = build_generation_state(berlin_traits, GenerationOptions())
        fp = build_fingerprint(berlin_traits)

        assert state.fingerprint == fp
        assert state.base_seed == state.seed == hash_string_to_int(fp)
        assert state.seed_source == "auto"
        assert state.seed_dial is None
        assert state.style_id == "strata"
        assert "Europe/" in state.style_reason
        assert state.palette == generate_palette(make_rng(state.seed))
        assert state.complexity == 50.0

    def test_manual_fields_ignored_in_auto_mode(self, berlin_traits):
        opts = GenerationOptions(mode="auto", manual_seed=7, manual_style="fern")
        auto = build_generation_state(berlin_traits, GenerationOptions())
        assert build_generation_state(berlin_traits, opts) == auto

    def test_ip_arrival_changes_seed_and_style(self, berlin_traits, berlin_with_ip):
        before = build_generation_state(berlin_traits, GenerationOptions())
        after = build_generation_state(berlin_with_ip, GenerationOptions())
        assert after.fingerprint != before.fingerprint
        assert after.style_id == "constellation"

    def test_builder_is_pure(self, berlin_with_ip):
        opts = GenerationOptions(complexity=33.0, palette_shift=2)
        assert build_generation_state(berlin_with_ip, opts) == build_generation_state(berlin_with_ip, opts)

    def test_custom_rules(self, berlin_traits):
        rules = StyleRules(timezone_styles={"Europe/": "aurora"})
        state = build_generation_state(berlin_traits, GenerationOptions(), rules)
        assert state.style_id == "aurora"


class TestManualMode:

    def test_dial_rehashes_fingerprint(self, berlin_traits):
        state = build_generation_state(berlin_traits, GenerationOptions(mode="manual", manual_seed=7))
        fp = build_fingerprint(berlin_traits)

        assert state.seed == hash_string_to_int(fp + "|dial:7") == dial_seed(fp, 7)
        assert state.base_seed == hash_string_to_int(fp)
        assert state.seed_source == "manualDial"
        assert state.seed_dial == 7
        assert state.palette == generate_palette(make_rng(state.seed))

    def test_dial_zero_is_a_real_dial(self, berlin_traits):
        state = build_generation_state(berlin_traits, GenerationOptions(mode="manual", manual_seed=0))
        assert state.seed_source == "manualDial"
        assert state.seed == dial_seed(state.fingerprint, 0)

    def test_manual_without_dial_keeps_base_seed(self, berlin_traits):
        state = build_generation_state(berlin_traits, GenerationOptions(mode="manual"))
        assert state.seed == state.base_seed
        assert state.seed_source == "auto"

    def test_manual_style_override(self, berlin_traits):
        state = build_generation_state(
            berlin_traits, GenerationOptions(mode="manual", manual_style="fern"))
        assert state.style_id == "fern"
        assert state.style_reason == MANUAL_OVERRIDE_REASON

    def test_fallback_uses_effective_seed(self, berlin_traits):
        traits = replace(berlin_traits, timezone="UTC")
        state = build_generation_state(traits, GenerationOptions(mode="manual", manual_seed=42))
        assert state.style_reason.startswith(f"fallback: seed {state.seed} ")


class TestPaletteShift:

    def test_shift_rotates_generated_palette(self, berlin_traits):
        base = build_generation_state(berlin_traits, GenerationOptions())
        shifted = build_generation_state(berlin_traits, GenerationOptions(palette_shift=2))
        assert shifted.palette == shift_palette(base.palette, 2)
        assert shifted.palette_shift == 2
        assert shifted.seed == base.seed

    def test_to_dict(self, berlin_with_ip):
        d = build_generation_state(berlin_with_ip, GenerationOptions()).to_dict()
        assert d["traits"]["ip_info"]["continent_code"] == "AS"
        assert len(d["palette"]) == 5
        assert d["seed_source"] == "auto"
