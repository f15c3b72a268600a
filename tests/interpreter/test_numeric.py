"""
Tests for number parsing and formatting helpers.
"""

import math

import pytest

from rpnlisp.interpreter.numeric import (
    INF, NAN, count_ones, divide, factorial, format_number, gcd, parse_float,
    parse_int, power, round_half_up, to_int32, to_radix, to_uint16, to_uint32,
)


class TestFormatNumber:
    """Tests for format_number."""

    @pytest.mark.parametrize("value,expected", [
        (3.0, "3"),
        (-3.0, "-3"),
        (0.0, "0"),
        (-0.0, "0"),
        (0.25, "0.25"),
        (1e20, "100000000000000000000"),
        (1e21, "1e+21"),
        (1.5e21, "1.5e+21"),
        (1e-6, "0.000001"),
        (1.5e-5, "0.000015"),
        (1e-7, "1e-7"),
        (1.5e-7, "1.5e-7"),
        (123456789012345680000.0, "123456789012345680000"),
        (NAN, "NaN"),
        (INF, "Infinity"),
        (-INF, "-Infinity"),
    ])
    def test_format(self, value, expected):
        assert format_number(value) == expected

    def test_integers(self):
        assert format_number(42) == "42"
        assert format_number(10 ** 400) == "Infinity"


class TestParseFloat:
    """Tests for parse_float."""

    @pytest.mark.parametrize("token,expected", [
        ("3", 3.0),
        ("-2.5", -2.5),
        ("+4", 4.0),
        (".5", 0.5),
        ("5.", 5.0),
        ("1e3", 1000.0),
        ("12px", 12.0),
        ("1e", 1.0),
        ("  7", 7.0),
        ("Infinity", INF),
        ("-Infinity", -INF),
    ])
    def test_parse(self, token, expected):
        assert parse_float(token) == expected

    @pytest.mark.parametrize("token", ["", "abc", "\u0663", "-", ".", "e5", "NaN", "nan", None])
    def test_no_number(self, token):
        assert math.isnan(parse_float(token))

    def test_formatted_values_read_back(self):
        for value in (0.1, -123.456, 1e-7, 1.5e21, 2 ** 60):
            assert parse_float(format_number(value)) == value


class TestParseInt:
    """Tests for parse_int."""

    def test_bases(self):
        assert parse_int("ff", 16) == 255
        assert parse_int("FF", 16) == 255
        assert parse_int("777", 8) == 511
        assert parse_int("101", 2) == 5

    def test_hex_prefix(self):
        assert parse_int("0x10", 16) == 16
        assert parse_int("-0x10", 16) == -16

    def test_prefix_only_for_hex(self):
        assert parse_int("0x10", 2) == 0

    def test_stops_at_invalid_digit(self):
        assert parse_int("12z", 10) == 12

    def test_no_digits(self):
        assert math.isnan(parse_int("", 16))
        assert math.isnan(parse_int("g", 16))
        assert math.isnan(parse_int(None, 16))


class TestToRadix:
    """Tests for to_radix."""

    def test_integers(self):
        assert to_radix(255, 16) == "ff"
        assert to_radix(5, 2) == "101"
        assert to_radix(0, 8) == "0"
        assert to_radix(-8, 8) == "-10"

    def test_fractions(self):
        assert to_radix(0.75, 2) == "0.11"
        assert to_radix(2.5, 16) == "2.8"

    def test_base_10_uses_number_formatting(self):
        assert to_radix(3.0, 10) == "3"

    def test_non_finite(self):
        assert to_radix(NAN, 16) == "NaN"
        assert to_radix(-INF, 2) == "-Infinity"


class TestIntegerCoercion:
    """Tests for the 32-bit and 16-bit integer conversions."""

    def test_to_int32(self):
        assert to_int32(5.9) == 5
        assert to_int32(-5.9) == -5
        assert to_int32(2 ** 31) == -2 ** 31
        assert to_int32(2 ** 32 + 1) == 1
        assert to_int32(NAN) == 0
        assert to_int32(INF) == 0

    def test_to_uint32(self):
        assert to_uint32(-1) == 0xFFFFFFFF

    def test_to_uint16(self):
        assert to_uint16(65536 + 65) == 65


class TestArithmeticHelpers:
    """Tests for the IEEE arithmetic helpers."""

    def test_divide(self):
        assert divide(1, 0) == INF
        assert divide(-1, 0) == -INF
        assert divide(1, -0.0) == -INF
        assert math.isnan(divide(0, 0))

    def test_power(self):
        assert power(2, 10) == 1024
        assert power(0, -2) == INF
        assert math.isnan(power(-8, 1 / 3))
        assert power(-10, 401) == -INF
        assert math.isnan(power(1, NAN))
        assert math.isnan(power(-1, INF))
        assert power(NAN, 0) == 1

    def test_round_half_up(self):
        assert round_half_up(0.5) == 1
        assert round_half_up(-0.5) == 0
        assert round_half_up(1.49) == 1
        assert math.isnan(round_half_up(NAN))

    def test_factorial(self):
        assert factorial(0) == 1
        assert factorial(-3) == 1
        assert factorial(6) == 720
        assert factorial(1000) == INF

    def test_gcd(self):
        assert gcd(48, 36) == 12
        assert gcd(0, 5) == 5
        assert math.isnan(gcd(INF, 5))

    def test_count_ones(self):
        assert count_ones(0) == 0
        assert count_ones(255) == 8
        assert count_ones(-2) == 31
