#!/usr/bin/env python3
"""Unit tests for the data block helpers (map, constrain, convert, ASCII)."""

import math
import sys

import pytest

from utilities.data_utils import constrain, convert, map_value, to_char, to_code, to_number
from utilities.errors import ArgumentError, ConversionError


def test_map_value_uses_linear_formula():
    """map(50, 1, 100, 1, 1000) follows out_min + (v - in_min) * span_out / span_in."""
    result = map_value(50, 1, 100, 1, 1000)
    assert math.isclose(result, 1 + 49 * 999 / 99), f"Unexpected map result {result}"
    assert math.isclose(result, 495.4545, rel_tol=1e-5)


def test_map_value_endpoints_and_extrapolation():
    """Endpoints map exactly, values outside the range are not clamped."""
    assert map_value(1, 1, 100, 1, 1000) == 1
    assert map_value(100, 1, 100, 1, 1000) == 1000
    assert map_value(0, 0, 10, 0, 100) == 0
    assert map_value(20, 0, 10, 0, 100) == 200
    # Inverted output range
    assert map_value(2, 0, 10, 100, 0) == 80


def test_map_value_empty_input_range_raises():
    """in_min == in_max has no defined mapping."""
    with pytest.raises(ArgumentError):
        map_value(5, 3, 3, 0, 10)


def test_map_value_accepts_numeric_strings():
    assert map_value("5", "0", "10", "0", "100") == 50


def test_map_value_identical_ranges_return_value_unchanged():
    for value in [i / 10 for i in range(31)] + [-0.7, 3.3, 1e-9]:
        assert map_value(value, 0, 3, 0, 3) == value
    for value in (0.1, 12.34, 99.99):
        assert map_value(value, 1, 100, 1, 100) == value
    assert map_value("0.1", "0", "3", "0", "3") == 0.1


def test_constrain_clamps():
    """Values below, inside and above the bounds."""
    assert constrain(150, 1, 100) == 100
    assert constrain(-4, 1, 100) == 1
    assert constrain(50, 1, 100) == 50
    assert constrain(2.5, 1, 100) == 2.5


def test_constrain_result_always_within_bounds():
    for value in (-1000, -1, 0, 0.5, 7, 99.9, 100, 1e6):
        result = constrain(value, 0, 100)
        assert 0 <= result <= 100, f"constrain({value}) escaped bounds: {result}"


def test_constrain_inverted_bounds_raise():
    with pytest.raises(ArgumentError):
        constrain(5, 10, 1)


def test_convert_integer():
    """Integral text converts as-is, decimal text truncates toward zero."""
    assert convert("123", "INTEGER") == 123
    assert convert("12.9", "INTEGER") == 12
    assert convert("-12.9", "INTEGER") == -12
    assert convert(7.0, "INTEGER") == 7
    assert isinstance(convert("123", "INTEGER"), int)


def test_convert_decimal():
    assert convert("1.5", "DECIMAL") == 1.5
    assert convert("3", "DECIMAL") == 3.0
    assert isinstance(convert("3", "DECIMAL"), float)


def test_convert_string_renders_integral_numbers_without_point():
    assert convert(5, "STRING") == "5"
    assert convert(5.0, "STRING") == "5"
    assert convert(2.5, "STRING") == "2.5"
    assert convert("abc", "STRING") == "abc"


def test_convert_integer_string_roundtrip():
    for n in (0, 1, -1, 42, 65535, -32768):
        assert convert(convert(n, "STRING"), "INTEGER") == n


def test_convert_huge_integer_to_string():
    """Ints past the interpreter's digit limit fail as a conversion, not a bare ValueError."""
    huge = 10 ** 5000
    if hasattr(sys, "set_int_max_str_digits") and sys.get_int_max_str_digits():
        with pytest.raises(ConversionError):
            convert(huge, "STRING")
    else:
        assert convert(huge, "STRING") == "1" + "0" * 5000


def test_convert_unparsable_raises_conversion_error():
    """Unparsable input surfaces as ConversionError, never a silent number."""
    for bad in ("abc", "", "12abc", "nan", "inf"):
        with pytest.raises(ConversionError):
            convert(bad, "INTEGER")
    with pytest.raises(ConversionError):
        convert("abc", "DECIMAL")


def test_conversion_error_is_argument_error():
    with pytest.raises(ArgumentError):
        convert("abc", "INTEGER")


def test_convert_unknown_type_raises():
    with pytest.raises(ArgumentError):
        convert("1", "BINARY")


def test_ascii_helpers():
    assert to_char(97) == "a"
    assert to_char("65") == "A"
    assert to_code("a") == 97
    assert to_code(to_char(0)) == 0


def test_ascii_helpers_reject_out_of_range():
    for bad in (-1, 128, 97.5):
        with pytest.raises(ArgumentError):
            to_char(bad)
    for bad in ("", "ab", "é", 5):
        with pytest.raises(ArgumentError):
            to_code(bad)


def test_to_number_normalises_integral_values():
    assert to_number("4") == 4 and isinstance(to_number("4"), int)
    assert to_number(4.0) == 4 and isinstance(to_number(4.0), int)
    assert to_number(" 2.5 ") == 2.5
    assert to_number(True) == 1


def test_to_number_rejects_non_numbers():
    for bad in ("x", None, [1], float("nan"), float("inf")):
        with pytest.raises(ArgumentError):
            to_number(bad)


def test_ascii_printable_range_round_trips():
    for code in range(32, 127):
        assert to_code(to_char(code)) == code
