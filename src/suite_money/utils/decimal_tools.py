from __future__ import annotations

import math
import re
from decimal import (
    Decimal,
    ROUND_CEILING,
    ROUND_DOWN,
    ROUND_FLOOR,
    ROUND_HALF_DOWN,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    ROUND_UP,
)
from enum import Enum
from typing import TypeAlias

from suite_money.errors import InvalidAmountError, MoneyArithmeticError, NullValueError

# Use where optimal type is `Decimal`, but other types are also acceptable (and will be converted to `Decimal`)
DecimalLike: TypeAlias = Decimal | int | str | float

# Plain decimal literal: optional sign, digits with an optional fraction, or a bare fraction ("123.", ".99")
_AMOUNT_PATTERN = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")

INT32_BITS = 32
INT64_BITS = 64

# Whole floats from this magnitude up get scale 0 instead of the ".0" placeholder of `repr`
_FLOAT_WHOLE_NORMALISE_FROM = 1e7


class RoundingMode(Enum):
    """Rounding behaviour applied when a value loses decimal places.

    Values mirror the `decimal` module constants so that a `RoundingMode` can be built
    from them (see `as_rounding_mode`). `UNNECESSARY` asserts that no rounding happens
    and raises `MoneyArithmeticError` otherwise.
    """

    UP = ROUND_UP  # Away from zero
    DOWN = ROUND_DOWN  # Towards zero
    CEILING = ROUND_CEILING  # Towards positive infinity
    FLOOR = ROUND_FLOOR  # Towards negative infinity
    HALF_UP = ROUND_HALF_UP
    HALF_DOWN = ROUND_HALF_DOWN
    HALF_EVEN = ROUND_HALF_EVEN  # Banker's rounding
    UNNECESSARY = "ROUND_UNNECESSARY"


def as_rounding_mode(value: RoundingMode | str | None) -> RoundingMode:
    """Converts a `RoundingMode` or a `decimal` rounding constant into `RoundingMode`.

    Raises:
        NullValueError: If $value is None.
        ValueError: If $value is not a known rounding constant.
    """
    # Raise: rounding mode is mandatory wherever this helper is called
    if value is None:
        raise NullValueError("Rounding mode must not be None")

    if isinstance(value, RoundingMode):
        return value

    return RoundingMode(value)


def to_unscaled(value: DecimalLike) -> tuple[int, int]:
    """Splits a Decimal-like scalar into an unscaled integer and a non-negative scale.

    Strings must be plain decimal literals; exponents are rejected. Floats convert through
    their shortest `repr`, so `2.361` becomes `(2361, 3)` and not its binary expansion.
    From 1e7 upwards the `.0` that `repr` keeps on whole floats is dropped, so `1e10` becomes
    `(10000000000, 0)` while `2.0` stays `(20, 1)`.
    A `Decimal` with a positive exponent (e.g. `Decimal("1E+2")`) is normalised to scale 0.

    Args:
        value: Input value as Decimal, int, str or float.

    Returns:
        Pair `(unscaled, scale)` such that `value == unscaled * 10**-scale`.

    Raises:
        NullValueError: If $value is None.
        InvalidAmountError: If $value is malformed, uses an exponent or is not finite.
        TypeError: If $value has an unsupported type.
    """
    # Raise: None is never a valid amount
    if value is None:
        raise NullValueError("Amount must not be None")

    # Raise: bool is an int subclass, but never a meaningful amount
    if isinstance(value, bool):
        raise TypeError(f"Amount must be Decimal, int, str or float, but provided value is: {value!r}")

    if isinstance(value, int):
        return value, 0

    if isinstance(value, str):
        # Raise: only plain literals are accepted; no exponent, no whitespace, no separators
        if not _AMOUNT_PATTERN.fullmatch(value):
            raise InvalidAmountError(f"Amount '{value}' is not a plain decimal literal")
        decimal_value = Decimal(value)
    elif isinstance(value, float):
        # Raise: NaN and infinities have no monetary meaning
        if not math.isfinite(value):
            raise InvalidAmountError(f"Amount must be finite, but provided value is: {value}")
        decimal_value = Decimal(repr(value))
    elif isinstance(value, Decimal):
        decimal_value = value
    else:
        raise TypeError(f"Amount must be Decimal, int, str or float, but provided value is: {value!r} (type '{type(value).__name__}')")

    # Raise: NaN and infinities have no monetary meaning
    if not decimal_value.is_finite():
        raise InvalidAmountError(f"Amount must be finite, but provided value is: {decimal_value}")

    sign, digits, exponent = decimal_value.as_tuple()
    unscaled = int("".join(str(digit) for digit in digits)) if digits else 0
    if sign:
        unscaled = -unscaled

    if exponent > 0:
        return unscaled * 10**exponent, 0
    if isinstance(value, float) and abs(value) >= _FLOAT_WHOLE_NORMALISE_FROM:
        return strip_trailing_zeros(unscaled, -exponent)
    return unscaled, -exponent


def to_decimal(unscaled: int, scale: int) -> Decimal:
    """Builds the exact `Decimal` for `unscaled * 10**-scale` without touching the context precision."""
    digits = tuple(int(digit) for digit in str(abs(unscaled)))
    return Decimal((1 if unscaled < 0 else 0, digits, -scale))


def as_decimal(value: DecimalLike) -> Decimal:
    """Converts input to `Decimal` safely, with the same rules as `to_unscaled`.

    Args:
        value: Input value as `DecimalLike`.

    Returns:
        Value converted to `Decimal` with a non-negative scale.
    """
    return to_decimal(*to_unscaled(value))


def format_plain(unscaled: int, scale: int) -> str:
    """Formats `unscaled * 10**-scale` without exponent, keeping all `scale` digits.

    Examples:
        >>> format_plain(234, 2)
        '2.34'
        >>> format_plain(-5, 3)
        '-0.005'
        >>> format_plain(423, 0)
        '423'
    """
    digits = str(abs(unscaled))
    if scale > 0:
        digits = digits.rjust(scale + 1, "0")
        digits = f"{digits[:-scale]}.{digits[-scale:]}"
    return f"-{digits}" if unscaled < 0 else digits


def _should_round_away(rounding: RoundingMode, negative: bool, quotient: int, half_comparison: int) -> bool:
    # $half_comparison is sign(2 * remainder - divisor): <0 below half, 0 exactly half, >0 above
    if rounding is RoundingMode.UP:
        return True
    if rounding is RoundingMode.DOWN:
        return False
    if rounding is RoundingMode.CEILING:
        return not negative
    if rounding is RoundingMode.FLOOR:
        return negative
    if rounding is RoundingMode.HALF_UP:
        return half_comparison >= 0
    if rounding is RoundingMode.HALF_DOWN:
        return half_comparison > 0
    if rounding is RoundingMode.HALF_EVEN:
        return half_comparison > 0 or (half_comparison == 0 and quotient % 2 == 1)
    raise ValueError(f"Unsupported $rounding: {rounding}")


def divide_and_round(numerator: int, denominator: int, rounding: RoundingMode) -> int:
    """Divides two integers and rounds the quotient to an integer with $rounding.

    Raises:
        MoneyArithmeticError: If $denominator is zero, or if rounding is needed and
            $rounding is `UNNECESSARY`.
    """
    # Raise: division by zero is undefined
    if denominator == 0:
        raise MoneyArithmeticError("Division by zero")

    if denominator < 0:
        numerator, denominator = -numerator, -denominator

    negative = numerator < 0
    quotient, remainder = divmod(abs(numerator), denominator)
    if remainder:
        # Raise: UNNECESSARY promises an exact result
        if rounding is RoundingMode.UNNECESSARY:
            raise MoneyArithmeticError("Rounding necessary")

        twice_remainder = 2 * remainder
        half_comparison = (twice_remainder > denominator) - (twice_remainder < denominator)
        if _should_round_away(rounding, negative, quotient, half_comparison):
            quotient += 1

    return -quotient if negative else quotient


def rescale(unscaled: int, scale: int, new_scale: int, rounding: RoundingMode) -> int:
    """Returns the unscaled value of `unscaled * 10**-scale` expressed at $new_scale.

    Widening is always exact; narrowing applies $rounding.
    """
    if new_scale >= scale:
        return unscaled * 10 ** (new_scale - scale)
    return divide_and_round(unscaled, 10 ** (scale - new_scale), rounding)


def divide_to_scale(
    dividend_unscaled: int,
    dividend_scale: int,
    divisor_unscaled: int,
    divisor_scale: int,
    result_scale: int,
    rounding: RoundingMode,
) -> int:
    """Divides two scaled values and returns the unscaled quotient at $result_scale."""
    exponent = result_scale - dividend_scale + divisor_scale
    numerator = dividend_unscaled * 10 ** max(exponent, 0)
    denominator = divisor_unscaled * 10 ** max(-exponent, 0)
    return divide_and_round(numerator, denominator, rounding)


def strip_trailing_zeros(unscaled: int, scale: int) -> tuple[int, int]:
    """Returns the same value with the smallest non-negative scale (`(12500, 4)` -> `(125, 2)`)."""
    while scale > 0 and unscaled % 10 == 0:
        unscaled //= 10
        scale -= 1
    return unscaled, scale


def compare_scaled(first_unscaled: int, first_scale: int, second_unscaled: int, second_scale: int) -> int:
    """Compares two scaled values by numeric value; returns -1, 0 or 1."""
    scale = max(first_scale, second_scale)
    first = first_unscaled * 10 ** (scale - first_scale)
    second = second_unscaled * 10 ** (scale - second_scale)
    return (first > second) - (first < second)


def to_checked_int(value: int, bits: int) -> int:
    """Returns $value if it fits into a signed integer of $bits width.

    Raises:
        MoneyArithmeticError: If $value overflows the requested width.
    """
    limit = 1 << (bits - 1)
    # Raise: narrowing accessors never wrap around
    if not -limit <= value < limit:
        raise MoneyArithmeticError(f"Value {value} does not fit into a {bits}-bit signed integer")
    return value
