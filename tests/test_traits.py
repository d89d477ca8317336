"""
Tests for visitor traits and fingerprints.

Covers:
- Positional fingerprint layout with and without IP info
- Order sensitivity and stringification of numbers
- Dict round trip through the JSON boundary
"""
from __future__ import annotations

from dataclasses import replace

from datart.core.traits import (
    IpInfo, UserTraits, apply_ip_info, build_fingerprint, default_traits,
)


class TestFingerprint:

    def test_default_traits(self):
        assert build_fingerprint(default_traits()) == "unknown|en-US|UTC|0|0|1|light"

    def test_field_order(self, berlin_traits):
        fp = build_fingerprint(berlin_traits)
        assert fp == "Mozilla/5.0 (X11; Linux x86_64)|de-DE|Europe/Berlin|1920|1080|1|dark"

    def test_without_ip_has_seven_parts(self, berlin_traits):
        assert len(build_fingerprint(berlin_traits).split("|")) == 7

    def test_with_ip_has_twelve_parts(self, berlin_with_ip):
        parts = build_fingerprint(berlin_with_ip).split("|")
        assert len(parts) == 12
        assert parts[7:] == ["203.0.113.7", "Japan", "Tokyo", "Tokyo", "AS"]

    def test_missing_ip_fields_become_empty(self, berlin_traits):
        traits = apply_ip_info(berlin_traits, IpInfo(ip="198.51.100.1"))
        assert build_fingerprint(traits).endswith("|198.51.100.1||||")

    def test_fractional_pixel_ratio(self, berlin_traits):
        traits = replace(berlin_traits, device_pixel_ratio=2.5)
        assert "|2.5|" in build_fingerprint(traits)

    def test_swapping_dimensions_changes_fingerprint(self, berlin_traits):
        swapped = replace(berlin_traits, screen_width=1080, screen_height=1920)
        assert build_fingerprint(swapped) != build_fingerprint(berlin_traits)

    def test_ip_arrival_changes_fingerprint(self, berlin_traits, berlin_with_ip):
        assert build_fingerprint(berlin_with_ip) != build_fingerprint(berlin_traits)
        assert build_fingerprint(berlin_with_ip).startswith(build_fingerprint(berlin_traits))


class TestTraitsDicts:

    def test_round_trip(self, berlin_with_ip):
        assert UserTraits.from_dict(berlin_with_ip.to_dict()) == berlin_with_ip

    def test_from_dict_fills_defaults(self):
        traits = UserTraits.from_dict({"timezone": "Asia/Tokyo"})
        assert traits.timezone == "Asia/Tokyo"
        assert traits.language == default_traits().language
        assert traits.ip_info is None

    def test_ip_info_from_api_payload(self):
        info = IpInfo.from_api({
            "ip": "192.0.2.4", "city": "Lyon", "region": "Auvergne-Rhone-Alpes",
            "country_name": "France", "continent_code": "EU",
        })
        assert info.country == "France"
        assert info.continent_code == "EU"

    def test_apply_ip_info_leaves_input_untouched(self, berlin_traits, tokyo_ip):
        updated = apply_ip_info(berlin_traits, tokyo_ip)
        assert berlin_traits.ip_info is None
        assert updated.ip_info == tokyo_ip
