"""Exceptions raised by the monetary domain.

Every exception derives from `MoneyError` and from the built-in exception category
that callers would catch without knowing this package (`ValueError`, `LookupError`,
`ArithmeticError`, `TypeError`).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from suite_money.domain.monetary.currency import CurrencyUnit


class MoneyError(Exception):
    """Base class for all errors raised by this package."""


class UnknownCurrencyError(MoneyError, LookupError):
    """Raised when a currency code, numeric code, country or locale cannot be resolved."""

    def __init__(self, message: str, code: object = None):
        self.code = code
        super().__init__(message)


class CurrencyMismatchError(MoneyError, ValueError):
    """Raised when a binary operation combines two different currencies."""

    def __init__(self, first_currency: CurrencyUnit | None, second_currency: CurrencyUnit | None):
        self.first_currency = first_currency
        self.second_currency = second_currency
        first_code = first_currency.code if first_currency is not None else "None"
        second_code = second_currency.code if second_currency is not None else "None"
        super().__init__(f"Currencies differ: {first_code}/{second_code}")


class InvalidArgumentError(MoneyError, ValueError):
    """Raised for malformed input such as bad registration data or a negative conversion rate."""


class AlreadyRegisteredError(MoneyError, ValueError):
    """Raised when a currency code, numeric code or country code is registered twice."""


class MoneyArithmeticError(MoneyError, ArithmeticError):
    """Raised on precision loss without a rounding mode or on integer overflow."""


class InvalidAmountError(MoneyError, ValueError):
    """Raised when a numeric literal cannot be used as a monetary amount."""


class NullValueError(MoneyError, TypeError):
    """Raised when a required value (or an element of a sequence) is None."""


class InvalidatedRecordError(MoneyError, ValueError):
    """Raised when a serialized record no longer matches the current currency metadata."""


class NotExchangeableError(InvalidArgumentError):
    """Raised when money cannot be exchanged with a rate that does not involve its currency."""

    def __init__(self, money: object, exchange_rate: object):
        self.money = money
        self.exchange_rate = exchange_rate
        super().__init__(f"{money} is not exchangeable using {exchange_rate}")


class NoCommonCurrencyError(InvalidArgumentError):
    """Raised when two exchange rates cannot be combined because they share no currency."""

    def __init__(self, first: object, second: object):
        self.first = first
        self.second = second
        super().__init__(f"Exchange rates have no common currency: {first} vs {second}")
