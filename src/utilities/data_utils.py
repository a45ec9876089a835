# File: src/utilities/data_utils.py
"""Local numeric and text helpers behind the data category blocks.

These run without any board round trip. Contract violations raise
``ArgumentError`` (or ``ConversionError``) instead of returning a number
that only looks valid.
"""

import math

from .errors import ArgumentError, ConversionError

DATA_TYPE_INTEGER = "INTEGER"
DATA_TYPE_DECIMAL = "DECIMAL"
DATA_TYPE_STRING = "STRING"

ASCII_MAX = 127


def to_number(value, name="value"):
    """Coerce an int, float or numeric string into a number.

    Integral values come back as ``int`` so that ``"4"`` and ``4.0`` both
    yield ``4``.

    Raises:
        ArgumentError: If the value is not numeric or not finite.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            raise ArgumentError(f"{name} must be a number, got {value!r}", name, value) from None
    else:
        raise ArgumentError(f"{name} must be a number, got {type(value).__name__}", name, value)

    if not math.isfinite(number):
        raise ArgumentError(f"{name} must be finite, got {value!r}", name, value)
    if number.is_integer():
        return int(number)
    return number


def map_value(value, in_min, in_max, out_min, out_max):
    """Linearly remap ``value`` from ``[in_min, in_max]`` to ``[out_min, out_max]``.

    The input is not clamped, values outside the input range extrapolate.
    Identical ranges hand the value back untouched.

    Raises:
        ArgumentError: If the input range is empty (``in_min == in_max``).
    """
    value = to_number(value, "value")
    in_min = to_number(in_min, "in_min")
    in_max = to_number(in_max, "in_max")
    out_min = to_number(out_min, "out_min")
    out_max = to_number(out_max, "out_max")

    if in_max == in_min:
        raise ArgumentError(
            f"Cannot map from an empty input range [{in_min}, {in_max}]", "in_max", in_max
        )
    if (in_min, in_max) == (out_min, out_max):
        return value
    return out_min + (value - in_min) * (out_max - out_min) / (in_max - in_min)


def constrain(value, low, high):
    """Clamp ``value`` into ``[low, high]``.

    Raises:
        ArgumentError: If the bounds are inverted (``low > high``).
    """
    value = to_number(value, "value")
    low = to_number(low, "low")
    high = to_number(high, "high")

    if low > high:
        raise ArgumentError(f"Inverted bounds: low {low} > high {high}", "low", low)
    if value < low:
        return low
    if value > high:
        return high
    return value


def convert(value, target_type):
    """Convert ``value`` to an INTEGER, DECIMAL or STRING representation.

    INTEGER accepts integral text as-is and truncates decimal text toward
    zero (``"12.9"`` -> ``12``). STRING renders integral numbers without a
    decimal point so that ``convert(convert(n, "STRING"), "INTEGER") == n``.

    Raises:
        ConversionError: On unparsable or non-finite input.
        ArgumentError: On an unknown target type.
    """
    target = str(target_type).upper()

    if target == DATA_TYPE_STRING:
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        try:
            return str(value)
        except ValueError as e:
            # Ints past the interpreter's digit limit refuse to render
            raise ConversionError(
                f"Cannot convert {type(value).__name__} to string: {e}", "value", value
            ) from e

    if target not in (DATA_TYPE_INTEGER, DATA_TYPE_DECIMAL):
        raise ArgumentError(f"Unknown data type: {target_type!r}", "type", target_type)

    try:
        number = to_number(value, "value")
    except ArgumentError as e:
        raise ConversionError(
            f"Cannot convert {value!r} to {target.lower()}", "value", value
        ) from e

    if target == DATA_TYPE_INTEGER:
        return int(number)
    return float(number)


def to_char(code):
    """Return the ASCII character for a code point in 0-127."""
    number = to_number(code, "code")
    if not isinstance(number, int) or not 0 <= number <= ASCII_MAX:
        raise ArgumentError(f"ASCII code must be an integer in 0-{ASCII_MAX}, got {code!r}", "code", code)
    return chr(number)


def to_code(char):
    """Return the ASCII code of a single character."""
    if not isinstance(char, str) or len(char) != 1:
        raise ArgumentError(f"Expected exactly one character, got {char!r}", "char", char)
    code = ord(char)
    if code > ASCII_MAX:
        raise ArgumentError(f"{char!r} is not an ASCII character", "char", char)
    return code
