"""None-tolerant helpers for money values.

Every helper accepts `BigMoney`, `FixedMoney` or `Money` and treats None as "no value",
which is convenient when summing optional columns or fields.
"""

from __future__ import annotations

from typing import TypeVar

from suite_money.domain.monetary.currency import CurrencyUnit
from suite_money.domain.monetary.money import Money
from suite_money.errors import NullValueError

M = TypeVar("M")


def is_zero(money) -> bool:
    """Check if $money is None or zero."""
    return money is None or money.is_zero


def default_to_zero(money: M | None, currency: CurrencyUnit | str, money_type: type = Money) -> M:
    """Return $money, or `money_type.zero(currency)` if $money is None.

    Raises:
        NullValueError: If $currency is None.
    """
    # Raise: the zero needs a currency even when $money is present
    if currency is None:
        raise NullValueError("Cannot call `default_to_zero` because $currency is None")
    return money if money is not None else money_type.zero(currency)


def max_money(money1: M | None, money2: M | None) -> M | None:
    """Return the larger amount; None loses against any value.

    Raises:
        CurrencyMismatchError: If both are present and the currencies differ.
    """
    if money1 is None:
        return money2
    if money2 is None:
        return money1
    return money1 if money1.compare_to(money2) > 0 else money2


def min_money(money1: M | None, money2: M | None) -> M | None:
    """Return the smaller amount; None loses against any value.

    Raises:
        CurrencyMismatchError: If both are present and the currencies differ.
    """
    if money1 is None:
        return money2
    if money2 is None:
        return money1
    return money1 if money1.compare_to(money2) < 0 else money2


def add(money1: M | None, money2: M | None) -> M | None:
    """Add two amounts; None counts as zero (None + None is None)."""
    if money1 is None:
        return money2
    if money2 is None:
        return money1
    return money1.plus(money2)


def subtract(money1: M | None, money2: M | None) -> M | None:
    """Subtract $money2 from $money1; None counts as zero (None - None is None)."""
    if money2 is None:
        return money1
    if money1 is None:
        return money2.negated()
    return money1.minus(money2)
