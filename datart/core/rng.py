"""String hashing and the seeded LCG every generator draws from.

Both primitives are bit-compatible with a JavaScript runtime: the hash wraps
like a 32-bit signed ``| 0`` and walks UTF-16 code units, and the LCG uses
the Numerical Recipes constants with exact integer arithmetic.
"""

from __future__ import annotations

_UINT32 = 0x1_0000_0000
_INT32_MAX = 0x7FFF_FFFF

LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223
LCG_MODULUS = _UINT32


def _utf16_units(s: str):
    for ch in s:
        cp = ord(ch)
        if cp > 0xFFFF:
            cp -= 0x10000
            yield 0xD800 + (cp >> 10)
            yield 0xDC00 + (cp & 0x3FF)
        else:
            yield cp


def _to_int32(v: int) -> int:
    v &= 0xFFFF_FFFF
    return v - _UINT32 if v > _INT32_MAX else v


def hash_string_to_int(s: str, max_value: int = 1_000_000) -> int:
    """Return ``abs(h) % max_value`` where ``h = int32(h * 31 + unit)``."""
    h = 0
    for unit in _utf16_units(s):
        h = _to_int32(h * 31 + unit)
    return abs(h) % max_value


def lcg_step(state: int) -> tuple[float, int]:
    """Pure LCG transition: ``(value, new_state)``."""
    new_state = (state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
    return new_state / LCG_MODULUS, new_state


class Lcg:
    """Linear congruential generator yielding floats in [0, 1).

    The instance owns its state; each call advances it exactly once before
    emitting, so generators sharing nothing never share a stream.
    """

    __slots__ = ("state",)

    def __init__(self, seed: int):
        self.state = int(seed)

    def next(self) -> float:
        value, self.state = lcg_step(self.state)
        return value

    __call__ = next

    def choice(self, seq):
        """``seq[floor(rng() * len(seq))]``, the palette lookup idiom."""
        return seq[int(self.next() * len(seq))]


def make_rng(seed: int) -> Lcg:
    return Lcg(seed)
