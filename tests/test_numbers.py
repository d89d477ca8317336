"""Tests for JavaScript-compatible number formatting."""
from __future__ import annotations

import math

from datart.utils.numbers import js_round, js_str


class TestJsStr:

    def test_integral_floats_drop_decimal(self):
        assert js_str(1.0) == "1"
        assert js_str(-3.0) == "-3"
        assert js_str(0.0) == "0"

    def test_ints_and_strings_pass_through(self):
        assert js_str(1920) == "1920"
        assert js_str("UTC") == "UTC"

    def test_fractions(self):
        assert js_str(1.5) == "1.5"
        assert js_str(2.625) == "2.625"

    def test_small_values_stay_positional(self):
        assert js_str(1.5e-05) == "0.000015"

    def test_exponent_form(self):
        assert js_str(1e21) == "1e+21"
        assert js_str(1e-7) == "1e-7"

    def test_specials(self):
        assert js_str(True) == "true"
        assert js_str(False) == "false"
        assert js_str(math.nan) == "NaN"
        assert js_str(math.inf) == "Infinity"
        assert js_str(-math.inf) == "-Infinity"


class TestJsRound:

    def test_half_rounds_up(self):
        assert js_round(2.5) == 3
        assert js_round(41.5) == 42
        assert round(2.5) == 2

    def test_negative_half_rounds_toward_positive(self):
        assert js_round(-2.5) == -2
