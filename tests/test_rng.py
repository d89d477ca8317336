"""
Tests for string hashing and the seeded LCG.

Covers:
- 32-bit wraparound and UTF-16 code-unit hashing
- LCG constants, reproducibility and state ownership
"""
from __future__ import annotations

from datart.core.rng import (
    LCG_INCREMENT, LCG_MODULUS, LCG_MULTIPLIER, Lcg, hash_string_to_int,
    lcg_step, make_rng,
)


class TestHashStringToInt:
    """Test the 31-multiplier string hash."""

    def test_empty_string_is_zero(self):
        assert hash_string_to_int("") == 0

    def test_short_strings(self):
        assert hash_string_to_int("a") == 97
        assert hash_string_to_int("ab") == 97 * 31 + 98
        assert hash_string_to_int("abc") == 96354

    def test_reduced_modulo_max_value(self):
        # 99162322 before reduction
        assert hash_string_to_int("hello") == 162322
        assert hash_string_to_int("hello", max_value=1000) == 322

    def test_wraps_to_int32_min(self):
        """This string hashes to exactly -2**31; abs() keeps it positive."""
        assert hash_string_to_int("polygenelubricants") == 2147483648 % 1_000_000

    def test_astral_characters_hash_as_surrogate_pairs(self):
        # U+1F600 -> 0xD83D 0xDE00
        assert hash_string_to_int("\U0001F600") == (0xD83D * 31 + 0xDE00) % 1_000_000

    def test_always_in_range(self):
        for s in ["x" * 500, "Europe/Berlin|de-DE", "éè" * 40]:
            assert 0 <= hash_string_to_int(s) < 1_000_000

    def test_stable(self):
        s = "Mozilla/5.0|en-US|UTC|1920|1080|2|dark"
        assert hash_string_to_int(s) == hash_string_to_int(s)


class TestLcg:
    """Test the linear congruential generator."""

    def test_constants(self):
        assert (LCG_MULTIPLIER, LCG_INCREMENT, LCG_MODULUS) == (1664525, 1013904223, 2 ** 32)

    def test_first_value_from_zero(self):
        assert make_rng(0)() == 1013904223 / 2 ** 32

    def test_step_is_pure(self):
        value, state = lcg_step(42)
        assert lcg_step(42) == (value, state)
        assert state == (42 * 1664525 + 1013904223) % 2 ** 32
        assert value == state / 2 ** 32

    def test_same_seed_same_sequence(self):
        a, b = make_rng(777), make_rng(777)
        assert [a() for _ in range(50)] == [b() for _ in range(50)]

    def test_different_seeds_diverge(self):
        a, b = make_rng(1), make_rng(2)
        assert [a() for _ in range(5)] != [b() for _ in range(5)]

    def test_values_in_unit_interval(self):
        rng = make_rng(99)
        for _ in range(1000):
            v = rng()
            assert 0.0 <= v < 1.0

    def test_instances_do_not_share_state(self):
        a, b = make_rng(5), make_rng(5)
        a()
        a()
        assert b() == make_rng(5)()

    def test_next_and_call_agree(self):
        a, b = Lcg(3), Lcg(3)
        assert [a.next() for _ in range(4)] == [b() for _ in range(4)]

    def test_choice_uses_one_draw(self):
        items = ("a", "b", "c", "d", "e")
        rng, ref = make_rng(11), make_rng(11)
        picked = rng.choice(items)
        assert picked == items[int(ref() * len(items))]
        assert rng.state == ref.state
