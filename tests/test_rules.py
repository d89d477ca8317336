"""
Tests for the style rule chain.

Covers:
- Priority order: continent, time zone, mobile, seed fallback
- Reasons attached to each decision
- Rule configuration loading and validation against the registry
"""
from __future__ import annotations

import json
from dataclasses import replace

import pytest

from datart.core.rules import DEFAULT_RULES, StyleRules, choose_style, load_rules
from datart.core.traits import IpInfo, apply_ip_info, default_traits


def _traits(**kw):
    return replace(default_traits(), **kw)


class TestChooseStyle:

    def test_continent_wins_over_timezone(self, berlin_with_ip):
        decision = choose_style(berlin_with_ip, seed=0)
        assert decision.style_id == "constellation"
        assert decision.reason == "IP continent AS -> constellation"

    @pytest.mark.parametrize("code,style", [("NA", "orbits"), ("EU", "strata"), ("AS", "constellation")])
    def test_continent_table(self, code, style):
        traits = apply_ip_info(default_traits(), IpInfo(ip="x", continent_code=code))
        assert choose_style(traits, seed=1).style_id == style

    def test_unknown_continent_falls_through(self):
        traits = apply_ip_info(_traits(timezone="America/Chicago"),
                               IpInfo(ip="x", continent_code="OC"))
        assert choose_style(traits, seed=1).style_id == "orbits"

    def test_timezone_prefix(self, berlin_traits):
        decision = choose_style(berlin_traits, seed=0)
        assert decision.style_id == "strata"
        assert "Europe/Berlin" in decision.reason

    def test_timezone_beats_mobile(self):
        traits = _traits(timezone="America/New_York", user_agent="Mozilla (iPhone)")
        assert choose_style(traits, seed=2).style_id == "orbits"

    @pytest.mark.parametrize("ua", ["Mozilla (iPhone; CPU OS 17)", "Linux; ANDROID 14", "iPad", "ipod touch"])
    def test_mobile_user_agents(self, ua):
        decision = choose_style(_traits(user_agent=ua), seed=0)
        assert decision.style_id == "constellation"
        assert decision.reason == "mobile user agent -> constellation"

    @pytest.mark.parametrize("seed,style", [(0, "orbits"), (1, "strata"), (2, "constellation"), (3002, "constellation")])
    def test_seed_fallback(self, seed, style):
        decision = choose_style(default_traits(), seed=seed)
        assert decision.style_id == style
        assert decision.reason.startswith(f"fallback: seed {seed} mod 3")

    def test_first_matching_prefix_wins(self):
        rules = StyleRules(timezone_styles={"Europe/": "strata", "Europe/Ber": "waves"})
        assert choose_style(_traits(timezone="Europe/Berlin"), 0, rules).style_id == "strata"


class TestStyleRules:

    def test_default_rules_validate(self, registry):
        assert DEFAULT_RULES.validate(registry.ids()) is DEFAULT_RULES

    def test_misspelt_style_rejected(self, registry):
        rules = StyleRules(continent_styles={"EU": "stata"})
        with pytest.raises(ValueError, match="stata"):
            rules.validate(registry.ids())

    def test_empty_fallback_rejected(self):
        with pytest.raises(ValueError):
            StyleRules(fallback_styles=())

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_RULES.continent_styles["EU"] = "waves"

    def test_dict_round_trip(self):
        assert StyleRules.from_dict(DEFAULT_RULES.to_dict()).to_dict() == DEFAULT_RULES.to_dict()

    def test_load_rules_merges_defaults(self, tmp_path):
        path = tmp_path / "rules.json"
        path.write_text(json.dumps({"fallback_styles": ["fern", "koch"]}))
        rules = load_rules(path)
        assert rules.fallback_styles == ("fern", "koch")
        assert rules.mobile_style == DEFAULT_RULES.mobile_style
        assert choose_style(default_traits(), 3, rules).style_id == "koch"
