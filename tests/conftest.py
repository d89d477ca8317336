"""Shared fixtures: the style registry, a fixed palette and sample traits."""
from __future__ import annotations

import pytest

from datart.core.palette import generate_palette
from datart.core.rng import make_rng
from datart.core.traits import IpInfo, UserTraits, apply_ip_info
from datart.styles.registry import build_registry


@pytest.fixture(scope="session")
def registry():
    return build_registry()


@pytest.fixture
def palette():
    return generate_palette(make_rng(12345))


@pytest.fixture
def berlin_traits():
    return UserTraits(
        timezone="Europe/Berlin",
        user_agent="Mozilla/5.0 (X11; Linux x86_64)",
        language="de-DE",
        screen_width=1920,
        screen_height=1080,
        device_pixel_ratio=1,
        dark_mode=True,
    )


@pytest.fixture
def tokyo_ip():
    return IpInfo(ip="203.0.113.7", city="Tokyo", region="Tokyo",
                  country="Japan", continent_code="AS")


@pytest.fixture
def berlin_with_ip(berlin_traits, tokyo_ip):
    return apply_ip_info(berlin_traits, tokyo_ip)
