from __future__ import annotations

import re
from decimal import Decimal
from typing import TypeVar

from suite_money.domain.monetary.big_money import BigMoney
from suite_money.domain.monetary.currency import CurrencyUnit
from suite_money.domain.monetary.currency_registry import CurrencyRegistry, resolve_currency
from suite_money.domain.monetary.fixed_money import FixedMoney
from suite_money.domain.monetary.money import Money
from suite_money.domain.monetary.protocol import BigMoneyProvider
from suite_money.errors import InvalidArgumentError, NoCommonCurrencyError, NotExchangeableError, NullValueError
from suite_money.utils.decimal_tools import (
    DecimalLike,
    RoundingMode,
    as_rounding_mode,
    compare_scaled,
    divide_and_round,
    divide_to_scale,
    format_plain,
    strip_trailing_zeros,
    to_decimal,
    to_unscaled,
)

DEFAULT_OPERATIONS_SCALE = 16
DEFAULT_OPERATIONS_ROUNDING = RoundingMode.HALF_EVEN

# "1 GBP = 1.25 USD": one unit of the source currency is worth `rate` units of the target currency
_EXCHANGE_RATE_PATTERN = re.compile(r"1 +([A-Z]{3}) += +(\+?[0-9]+(?:\.[0-9]+)?) +([A-Z]{3})")

M = TypeVar("M", bound=BigMoneyProvider)


class ExchangeRate:
    """Rate between two currencies: one unit of $source is worth $rate units of $target.

    The rate is stored without trailing zeros, so `ExchangeRate("1.250", GBP, USD)` equals
    `ExchangeRate("1.25", GBP, USD)`. Exchange logic lives in `ExchangeRateOperations`
    (see `operations`).
    """

    __slots__ = ("_rate_unscaled", "_rate_scale", "_source", "_target")

    def __init__(self, rate: DecimalLike, source: CurrencyUnit | str, target: CurrencyUnit | str) -> None:
        """Initialize ExchangeRate.

        Raises:
            NullValueError: If any argument is None.
            InvalidArgumentError: If $rate is not positive, or $source equals $target and $rate is not 1.
        """
        rate_unscaled, rate_scale = strip_trailing_zeros(*to_unscaled(rate))
        source = resolve_currency(source)
        target = resolve_currency(target)

        # Raise: a rate of zero or below cannot convert money
        if rate_unscaled <= 0:
            raise InvalidArgumentError(f"Cannot create ExchangeRate because $rate ({rate}) is not greater than 0")

        # Raise: a currency is always worth exactly itself
        if source == target and compare_scaled(rate_unscaled, rate_scale, 1, 0) != 0:
            raise InvalidArgumentError(f"Cannot create ExchangeRate because $rate ({rate}) must be 1 when $source and $target are the same ({source})")

        self._rate_unscaled = rate_unscaled
        self._rate_scale = rate_scale
        self._source = source
        self._target = target

    @classmethod
    def identity(cls, currency: CurrencyUnit | str) -> ExchangeRate:
        """Create the rate 1 from $currency to itself."""
        currency = resolve_currency(currency)
        return cls(1, currency, currency)

    @classmethod
    def parse(cls, text: str, registry: CurrencyRegistry | None = None) -> ExchangeRate:
        """Parse text like "1 GBP = 1.25 USD" (source GBP, target USD, rate 1.25).

        Raises:
            NullValueError: If $text is None.
            InvalidArgumentError: If $text does not match the format.
            UnknownCurrencyError: If a code is not registered.
        """
        # Raise: text is mandatory
        if text is None:
            raise NullValueError("Cannot call `parse` because $text is None")

        match = _EXCHANGE_RATE_PATTERN.fullmatch(text.strip(" "))

        # Raise: only the "1 SRC = rate TGT" form is accepted
        if match is None:
            raise InvalidArgumentError(f"Exchange rate '{text}' cannot be parsed")

        source_code, rate, target_code = match.groups()
        return cls(rate, resolve_currency(source_code, registry), resolve_currency(target_code, registry))

    # region Properties

    @property
    def rate(self) -> Decimal:
        return to_decimal(self._rate_unscaled, self._rate_scale)

    @property
    def source(self) -> CurrencyUnit:
        return self._source

    @property
    def target(self) -> CurrencyUnit:
        return self._target

    # endregion

    def with_rate(self, rate: DecimalLike) -> ExchangeRate:
        """Return a rate between the same currencies with a new $rate."""
        return ExchangeRate(rate, self._source, self._target)

    def operations(self, scale: int = DEFAULT_OPERATIONS_SCALE, rounding: RoundingMode = DEFAULT_OPERATIONS_ROUNDING) -> ExchangeRateOperations:
        """Get exchange operations that divide at $scale decimal places using $rounding."""
        return ExchangeRateOperations(self, scale, rounding)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ExchangeRate):
            return False
        return (
            self._rate_unscaled == other._rate_unscaled
            and self._rate_scale == other._rate_scale
            and self._source == other._source
            and self._target == other._target
        )

    def __hash__(self) -> int:
        return hash((self._rate_unscaled, self._rate_scale, self._source, self._target))

    def __reduce__(self):
        return ExchangeRate, (self.rate, self._source, self._target)

    def __str__(self) -> str:
        """Return string like '1 GBP = 1.25 USD'; `parse` reads it back."""
        return f"1 {self._source.code} = {format_plain(self._rate_unscaled, self._rate_scale)} {self._target.code}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self})"


class ExchangeRateOperations:
    """Exchange, invert and combine one `ExchangeRate`.

    Multiplying by the rate is exact. Dividing by it (exchanging from target to source,
    inverting, combining) happens at `scale` decimal places with `rounding`.
    """

    __slots__ = ("_exchange_rate", "_scale", "_rounding")

    def __init__(self, exchange_rate: ExchangeRate, scale: int = DEFAULT_OPERATIONS_SCALE, rounding: RoundingMode = DEFAULT_OPERATIONS_ROUNDING) -> None:
        # Raise: operations need a rate to work with
        if exchange_rate is None:
            raise NullValueError("Cannot create ExchangeRateOperations because $exchange_rate is None")

        # Raise: division scale must be a non-negative int
        if not isinstance(scale, int) or isinstance(scale, bool) or scale < 0:
            raise InvalidArgumentError(f"Cannot create ExchangeRateOperations because $scale must be an int >= 0, but provided value is: {scale!r}")

        self._exchange_rate = exchange_rate
        self._scale = scale
        self._rounding = as_rounding_mode(rounding)

    @property
    def exchange_rate(self) -> ExchangeRate:
        return self._exchange_rate

    @property
    def scale(self) -> int:
        return self._scale

    @property
    def rounding(self) -> RoundingMode:
        return self._rounding

    def exchange(self, money: M) -> M:
        """Exchange $money into the other currency of the rate.

        Money in the source currency is multiplied by the rate; money in the target currency is
        divided by it at `max(money scale, scale)` decimal places. `Money` and `FixedMoney`
        results are rounded back to their fixed scale with `rounding`; other providers give `BigMoney`.

        Raises:
            NullValueError: If $money is None.
            NotExchangeableError: If the currency of $money is neither side of the rate.
            MoneyArithmeticError: If rounding is needed and `rounding` is `UNNECESSARY`.
        """
        big_money = BigMoney.from_provider(money)
        rate = self._exchange_rate

        if big_money.currency == rate.source:
            exchanged = big_money.converted_to(rate.target, rate.rate)
        elif big_money.currency == rate.target:
            result_scale = max(big_money.scale, self._scale)
            quotient = divide_to_scale(big_money.unscaled_value, big_money.scale, rate._rate_unscaled, rate._rate_scale, result_scale, self._rounding)
            exchanged = BigMoney(rate.source, quotient, result_scale)
        else:
            raise NotExchangeableError(money, rate)

        if isinstance(money, Money):
            return Money.from_provider(exchanged, self._rounding)
        if isinstance(money, FixedMoney):
            return FixedMoney.from_provider(exchanged, money.scale, self._rounding)
        return exchanged

    def invert(self) -> ExchangeRateOperations:
        """Get operations for the reverse rate (`1 GBP = 1.25 USD` -> `1 USD = 0.8 GBP`)."""
        rate = self._exchange_rate
        inverted = self._rate_from_fraction(10**rate._rate_scale, rate._rate_unscaled)
        return ExchangeRateOperations(ExchangeRate(inverted, rate.target, rate.source), self._scale, self._rounding)

    def combine(self, other: ExchangeRate) -> ExchangeRateOperations:
        """Chain this rate with $other through the currency they share.

        The result converts from the currency of this rate that is not shared to the currency of
        $other that is not shared, e.g. `1 EUR = 1.1 USD` combined with `1 USD = 150 JPY` gives
        `1 EUR = 165 JPY`.

        Raises:
            NullValueError: If $other is None.
            NoCommonCurrencyError: If the two rates share no currency.
        """
        # Raise: combination needs a second rate
        if other is None:
            raise NullValueError("Cannot call `combine` because $other is None")

        rate = self._exchange_rate
        other_currencies = (other.source, other.target)
        if rate.target in other_currencies:
            common = rate.target
        elif rate.source in other_currencies:
            common = rate.source
        else:
            raise NoCommonCurrencyError(rate, other)

        # Express both rates as fractions: this rate as `start -> common`, $other as `common -> end`
        if rate.target == common:
            start = rate.source
            first_numerator, first_denominator = rate._rate_unscaled, 10**rate._rate_scale
        else:
            start = rate.target
            first_numerator, first_denominator = 10**rate._rate_scale, rate._rate_unscaled

        if other.source == common:
            end = other.target
            second_numerator, second_denominator = other._rate_unscaled, 10**other._rate_scale
        else:
            end = other.source
            second_numerator, second_denominator = 10**other._rate_scale, other._rate_unscaled

        if start == end:
            return ExchangeRateOperations(ExchangeRate.identity(start), self._scale, self._rounding)

        combined = self._rate_from_fraction(first_numerator * second_numerator, first_denominator * second_denominator)
        return ExchangeRateOperations(ExchangeRate(combined, start, end), self._scale, self._rounding)

    def _rate_from_fraction(self, numerator: int, denominator: int) -> Decimal:
        unscaled = divide_and_round(numerator * 10**self._scale, denominator, self._rounding)
        return to_decimal(*strip_trailing_zeros(unscaled, self._scale))

    def __eq__(self, other) -> bool:
        if not isinstance(other, ExchangeRateOperations):
            return False
        return self._exchange_rate == other._exchange_rate and self._scale == other._scale and self._rounding == other._rounding

    def __hash__(self) -> int:
        return hash((self._exchange_rate, self._scale, self._rounding))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._exchange_rate}, scale={self._scale}, rounding={self._rounding.name})"
