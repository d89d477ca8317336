"""Number formatting that matches how a browser stringifies numbers.

Fingerprints and palette strings embed numbers, and they must read the same
as the strings a JavaScript client would build (``1`` rather than ``1.0``).
"""

from __future__ import annotations

import math
from decimal import Decimal


def js_str(value) -> str:
    """Format *value* the way JavaScript's ``String(value)`` does."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if not isinstance(value, float):
        return str(value)

    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))

    text = repr(value)
    if "e" not in text:
        return text

    magnitude = abs(value)
    if 1e-6 <= magnitude < 1e21:
        # repr switched to exponent notation where JS stays positional
        return format(Decimal(text), "f")
    mantissa, exponent = text.split("e")
    exp = int(exponent)
    return f"{mantissa}e{'+' if exp > 0 else '-'}{abs(exp)}"


def js_round(x: float) -> int:
    """Round half up, as ``Math.round`` does (``round()`` rounds half to even)."""
    return math.floor(x + 0.5)
