from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

import pytest

from suite_money.errors import InvalidAmountError, MoneyArithmeticError, NullValueError
from suite_money.utils.decimal_tools import (
    INT32_BITS,
    RoundingMode,
    as_decimal,
    as_rounding_mode,
    compare_scaled,
    divide_and_round,
    divide_to_scale,
    format_plain,
    rescale,
    strip_trailing_zeros,
    to_checked_int,
    to_decimal,
    to_unscaled,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (5, (5, 0)),
        (-12, (-12, 0)),
        ("2.34", (234, 2)),
        ("-0.005", (-5, 3)),
        ("123.", (123, 0)),
        (".99", (99, 2)),
        ("-.99", (-99, 2)),
        ("+7.10", (710, 2)),
        (Decimal("2.340"), (2340, 3)),
        (Decimal("1E+2"), (100, 0)),
        (2.361, (2361, 3)),
        (0.1, (1, 1)),
        (2.0, (20, 1)),
        (9999999.0, (99999990, 1)),
        (1e10, (10000000000, 0)),
        (-1.5e7, (-15000000, 0)),
        (12345678.9, (123456789, 1)),
    ],
)
def test_to_unscaled_keeps_natural_scale(value, expected):
    assert to_unscaled(value) == expected


@pytest.mark.parametrize("value", ["1E+2", "1e5", "abc", "", " 1", "1,000", "1.2.3", "--1", ".", "\u0661\u0662", "\u0967.5"])
def test_to_unscaled_rejects_non_plain_literals(value):
    with pytest.raises(InvalidAmountError):
        to_unscaled(value)


@pytest.mark.parametrize("value", [float("nan"), float("inf"), Decimal("NaN"), Decimal("-Infinity")])
def test_to_unscaled_rejects_non_finite(value):
    with pytest.raises(InvalidAmountError):
        to_unscaled(value)


def test_to_unscaled_rejects_none_and_bool():
    with pytest.raises(NullValueError):
        to_unscaled(None)
    with pytest.raises(TypeError):
        to_unscaled(True)
    with pytest.raises(TypeError):
        to_unscaled([1])


def test_to_decimal_is_exact_and_keeps_scale():
    assert str(to_decimal(234, 2)) == "2.34"
    assert str(to_decimal(-5, 3)) == "-0.005"
    assert str(to_decimal(0, 2)) == "0.00"
    # Far beyond the default context precision of 28 digits
    huge = 10**40 + 1
    assert to_decimal(huge, 0) == Decimal(str(huge))
    assert as_decimal("1.50") == Decimal("1.50")


def test_format_plain():
    assert format_plain(234, 2) == "2.34"
    assert format_plain(-5, 3) == "-0.005"
    assert format_plain(423, 0) == "423"
    assert format_plain(0, 2) == "0.00"


@pytest.mark.parametrize(
    "rounding, expected",
    [
        (RoundingMode.UP, [3, 2, 2, -2, -2, -3]),
        (RoundingMode.DOWN, [2, 2, 1, -1, -2, -2]),
        (RoundingMode.CEILING, [3, 2, 2, -1, -2, -2]),
        (RoundingMode.FLOOR, [2, 2, 1, -2, -2, -3]),
        (RoundingMode.HALF_UP, [3, 2, 2, -1, -2, -3]),
        (RoundingMode.HALF_DOWN, [2, 2, 2, -1, -2, -2]),
        (RoundingMode.HALF_EVEN, [2, 2, 2, -1, -2, -2]),
    ],
)
def test_divide_and_round_matches_decimal_rounding(rounding, expected):
    # Values 2.5, 2.0, 1.6, -1.1, -2.0, -2.5
    numerators = [25, 20, 16, -11, -20, -25]
    assert [divide_and_round(n, 10, rounding) for n in numerators] == expected
    # Same results as the decimal module
    assert [int((Decimal(n) / 10).quantize(Decimal(1), rounding=rounding.value)) for n in numerators] == expected


def test_divide_and_round_unnecessary():
    assert divide_and_round(30, 10, RoundingMode.UNNECESSARY) == 3
    with pytest.raises(MoneyArithmeticError):
        divide_and_round(31, 10, RoundingMode.UNNECESSARY)
    with pytest.raises(MoneyArithmeticError):
        divide_and_round(1, 0, RoundingMode.HALF_UP)


def test_divide_and_round_negative_denominator():
    assert divide_and_round(7, -2, RoundingMode.DOWN) == -3
    assert divide_and_round(-7, -2, RoundingMode.UP) == 4


def test_rescale():
    assert rescale(234, 2, 4, RoundingMode.UNNECESSARY) == 23400
    assert rescale(2345, 3, 2, RoundingMode.HALF_EVEN) == 234
    assert rescale(2355, 3, 2, RoundingMode.HALF_EVEN) == 236
    assert rescale(2345, 3, -1, RoundingMode.DOWN) == 0
    assert rescale(12345, 0, -2, RoundingMode.HALF_UP) == 123
    with pytest.raises(MoneyArithmeticError):
        rescale(2345, 3, 2, RoundingMode.UNNECESSARY)


def test_divide_to_scale():
    # 2.34 / 2 at scale 2
    assert divide_to_scale(234, 2, 2, 0, 2, RoundingMode.UNNECESSARY) == 117
    # 10.00 / 3 at scale 2
    assert divide_to_scale(1000, 2, 3, 0, 2, RoundingMode.HALF_UP) == 333
    # 1.00 / 0.03 at scale 2
    assert divide_to_scale(100, 2, 3, 2, 2, RoundingMode.DOWN) == 3333
    with pytest.raises(MoneyArithmeticError):
        divide_to_scale(1000, 2, 3, 0, 2, RoundingMode.UNNECESSARY)


def test_compare_scaled_ignores_scale():
    assert compare_scaled(23, 1, 230, 2) == 0
    assert compare_scaled(-1, 0, 0, 5) == -1
    assert compare_scaled(101, 2, 1, 0) == 1


def test_strip_trailing_zeros():
    assert strip_trailing_zeros(12500, 4) == (125, 2)
    assert strip_trailing_zeros(100, 0) == (100, 0)
    assert strip_trailing_zeros(0, 3) == (0, 0)


def test_to_checked_int():
    assert to_checked_int(2**31 - 1, INT32_BITS) == 2**31 - 1
    assert to_checked_int(-(2**31), INT32_BITS) == -(2**31)
    with pytest.raises(MoneyArithmeticError):
        to_checked_int(2**31, INT32_BITS)


def test_as_rounding_mode():
    assert as_rounding_mode(RoundingMode.FLOOR) is RoundingMode.FLOOR
    assert as_rounding_mode(ROUND_HALF_UP) is RoundingMode.HALF_UP
    with pytest.raises(NullValueError):
        as_rounding_mode(None)
    with pytest.raises(ValueError):
        as_rounding_mode("ROUND_SIDEWAYS")
