"""Visitor traits and the positional fingerprint built from them.

Traits are immutable snapshots. When IP information arrives later, the
caller swaps in a whole new ``UserTraits`` via :func:`apply_ip_info`; the
fingerprint then grows by five parts, so pre-IP and post-IP art differ.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from datart.utils.numbers import js_str

FINGERPRINT_SEPARATOR = "|"


# ------------------------------------------------------------------
# IpInfo
# ------------------------------------------------------------------

@dataclass(frozen=True)
class IpInfo:
    ip: str
    city: str | None = None
    region: str | None = None
    country: str | None = None
    continent_code: str | None = None

    def to_dict(self) -> dict:
        return {
            "ip": self.ip, "city": self.city, "region": self.region,
            "country": self.country, "continent_code": self.continent_code,
        }

    @classmethod
    def from_dict(cls, d: dict) -> IpInfo:
        return cls(
            ip=str(d.get("ip", "")),
            city=d.get("city"), region=d.get("region"),
            country=d.get("country"),
            continent_code=d.get("continent_code"),
        )

    @classmethod
    def from_api(cls, payload: dict) -> IpInfo:
        """Map an ipapi.co ``/json`` response onto an ``IpInfo``."""
        return cls(
            ip=str(payload.get("ip", "")),
            city=payload.get("city"),
            region=payload.get("region"),
            country=payload.get("country_name"),
            continent_code=payload.get("continent_code"),
        )


# ------------------------------------------------------------------
# UserTraits
# ------------------------------------------------------------------

@dataclass(frozen=True)
class UserTraits:
    timezone: str
    user_agent: str
    language: str
    screen_width: int
    screen_height: int
    device_pixel_ratio: float
    dark_mode: bool
    ip_info: IpInfo | None = None

    def to_dict(self) -> dict:
        return {
            "timezone": self.timezone,
            "user_agent": self.user_agent,
            "language": self.language,
            "screen_width": self.screen_width,
            "screen_height": self.screen_height,
            "device_pixel_ratio": self.device_pixel_ratio,
            "dark_mode": self.dark_mode,
            "ip_info": self.ip_info.to_dict() if self.ip_info else None,
        }

    @classmethod
    def from_dict(cls, d: dict) -> UserTraits:
        base = default_traits()
        ip = d.get("ip_info")
        return cls(
            timezone=d.get("timezone", base.timezone),
            user_agent=d.get("user_agent", base.user_agent),
            language=d.get("language", base.language),
            screen_width=d.get("screen_width", base.screen_width),
            screen_height=d.get("screen_height", base.screen_height),
            device_pixel_ratio=d.get("device_pixel_ratio", base.device_pixel_ratio),
            dark_mode=bool(d.get("dark_mode", base.dark_mode)),
            ip_info=IpInfo.from_dict(ip) if ip else None,
        )


def default_traits() -> UserTraits:
    """Traits used when no environment is available to read from."""
    return UserTraits(
        timezone="UTC",
        user_agent="unknown",
        language="en-US",
        screen_width=0,
        screen_height=0,
        device_pixel_ratio=1,
        dark_mode=False,
    )


def apply_ip_info(traits: UserTraits, ip_info: IpInfo | None) -> UserTraits:
    return replace(traits, ip_info=ip_info)


def _part(value) -> str:
    return "" if value is None else js_str(value)


def build_fingerprint(traits: UserTraits) -> str:
    parts = [
        traits.user_agent,
        traits.language,
        traits.timezone,
        traits.screen_width,
        traits.screen_height,
        traits.device_pixel_ratio,
        "dark" if traits.dark_mode else "light",
    ]

    if traits.ip_info is not None:
        ip = traits.ip_info
        parts.extend([ip.ip, ip.country, ip.region, ip.city, ip.continent_code])

    return FINGERPRINT_SEPARATOR.join(_part(p) for p in parts)
