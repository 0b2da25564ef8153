from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from suite_money.domain.monetary.currency import CurrencyUnit
from suite_money.domain.monetary.currency_registry import CurrencyRegistry, resolve_currency
from suite_money.domain.monetary.protocol import BigMoneyProvider
from suite_money.errors import (
    CurrencyMismatchError,
    InvalidAmountError,
    InvalidArgumentError,
    MoneyArithmeticError,
    NullValueError,
)
from suite_money.utils.decimal_tools import (
    INT32_BITS,
    INT64_BITS,
    DecimalLike,
    RoundingMode,
    as_rounding_mode,
    compare_scaled,
    divide_to_scale,
    format_plain,
    rescale,
    to_checked_int,
    to_decimal,
    to_unscaled,
)

# Shortest parsable text: 3-letter code followed by one digit ("JPY5")
PARSE_MIN_LENGTH = 4

_MISSING = object()

# Scalars accepted by the arithmetic operators; `str` is accepted by the named methods only
_OPERATOR_SCALARS = (Decimal, int, float)


def _check_int(value: object, name: str, method: str) -> int:
    # Raise: major/minor amounts and scales are whole numbers
    if value is None:
        raise NullValueError(f"Cannot call `{method}` because ${name} is None")
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"Cannot call `{method}` because ${name} is not int (got type '{type(value).__name__}')")
    return value


class BigMoney:
    """Monetary amount of arbitrary scale bound to a currency.

    The value is `unscaled_value * 10**-scale`, kept as a Python `int` and a non-negative
    `int` scale, so arithmetic is exact and never goes through floats or a bounded `decimal`
    context. Operations that could lose precision take a `RoundingMode`.

    Equality (`==`) is scale-sensitive: `GBP 2.3` != `GBP 2.30`. Ordering (`<`, `compare_to`,
    `is_equal`) compares numeric values and requires the same currency.

    Construct with the factories (`of`, `of_scale`, `of_unscaled`, `of_major`, `of_minor`,
    `zero`, `parse`, `total`); every operation returns a new instance.
    """

    __slots__ = ("_currency", "_unscaled", "_scale")

    def __init__(self, currency: CurrencyUnit, unscaled: int, scale: int = 0) -> None:
        """Initialize BigMoney from an unscaled integer and a scale.

        A negative $scale is normalised to scale 0 (e.g., `(1, -2)` becomes `(100, 0)`).

        Args:
            currency: Currency of the amount.
            unscaled: Unscaled integer value.
            scale: Number of decimal places of $unscaled.

        Raises:
            NullValueError: If $currency is None.
            TypeError: If $currency is not CurrencyUnit or $unscaled / $scale are not int.
        """
        # Raise: currency is mandatory
        if currency is None:
            raise NullValueError("Cannot call `BigMoney.__init__` because $currency is None")

        # Raise: keep the domain model typed; resolve codes at the boundary with the factories
        if not isinstance(currency, CurrencyUnit):
            raise TypeError(f"Cannot call `BigMoney.__init__` because $currency is not CurrencyUnit (got type '{type(currency).__name__}')")

        _check_int(unscaled, "unscaled", "BigMoney.__init__")
        _check_int(scale, "scale", "BigMoney.__init__")

        if scale < 0:
            unscaled *= 10**-scale
            scale = 0

        self._currency = currency
        self._unscaled = unscaled
        self._scale = scale

    # region Factories

    @classmethod
    def of(cls, currency: CurrencyUnit | str, amount: DecimalLike) -> BigMoney:
        """Create BigMoney keeping the natural scale of $amount.

        Args:
            currency: Currency or currency code.
            amount: Decimal-like amount; strings must be plain literals (no exponent).

        Raises:
            InvalidAmountError: If $amount is malformed or not finite.
        """
        unscaled, scale = to_unscaled(amount)
        return cls(resolve_currency(currency), unscaled, scale)

    @classmethod
    def of_scale(cls, currency: CurrencyUnit | str, amount: DecimalLike, scale: int, rounding: RoundingMode = RoundingMode.UNNECESSARY) -> BigMoney:
        """Create BigMoney with $amount rescaled to $scale.

        Raises:
            MoneyArithmeticError: If rounding is needed and $rounding is `UNNECESSARY`.
        """
        _check_int(scale, "scale", "of_scale")
        rounding = as_rounding_mode(rounding)
        unscaled, natural_scale = to_unscaled(amount)
        return cls(resolve_currency(currency), rescale(unscaled, natural_scale, scale, rounding), scale)

    @classmethod
    def of_unscaled(cls, currency: CurrencyUnit | str, unscaled: int, scale: int) -> BigMoney:
        """Create BigMoney worth `unscaled * 10**-scale`; a negative $scale is normalised to 0."""
        return cls(resolve_currency(currency), unscaled, scale)

    @classmethod
    def of_currency_scale(cls, currency: CurrencyUnit | str, amount: DecimalLike, rounding: RoundingMode = RoundingMode.UNNECESSARY) -> BigMoney:
        """Create BigMoney with $amount rescaled to the currency's decimal places."""
        currency = resolve_currency(currency)
        return cls.of_scale(currency, amount, currency.decimal_places, rounding)

    @classmethod
    def of_major(cls, currency: CurrencyUnit | str, amount_major: int) -> BigMoney:
        """Create BigMoney from a whole number of major units (scale 0), e.g. `of_major(GBP, 25)` -> `GBP 25`."""
        return cls(resolve_currency(currency), _check_int(amount_major, "amount_major", "of_major"), 0)

    @classmethod
    def of_minor(cls, currency: CurrencyUnit | str, amount_minor: int) -> BigMoney:
        """Create BigMoney from minor units at currency scale, e.g. `of_minor(GBP, 2595)` -> `GBP 25.95`."""
        currency = resolve_currency(currency)
        return cls(currency, _check_int(amount_minor, "amount_minor", "of_minor"), currency.decimal_places)

    @classmethod
    def zero(cls, currency: CurrencyUnit | str, scale: int = 0) -> BigMoney:
        """Create a zero amount at $scale."""
        return cls(resolve_currency(currency), 0, _check_int(scale, "scale", "zero"))

    @classmethod
    def from_provider(cls, provider: BigMoneyProvider) -> BigMoney:
        """Get the BigMoney behind $provider.

        Raises:
            NullValueError: If $provider is None or returns None.
            TypeError: If $provider does not implement `to_big_money`.
        """
        # Raise: provider is mandatory
        if provider is None:
            raise NullValueError("Money must not be None")

        if isinstance(provider, BigMoney):
            return provider

        # Raise: only money providers can be converted
        if not isinstance(provider, BigMoneyProvider):
            raise TypeError(f"Expected a BigMoneyProvider, but provided value is: {provider!r} (type '{type(provider).__name__}')")

        money = provider.to_big_money()

        # Raise: a provider must produce a value
        if money is None:
            raise NullValueError(f"BigMoneyProvider {provider!r} returned None")
        return money

    @classmethod
    def total(cls, monies: Iterable[BigMoneyProvider], currency: CurrencyUnit | str | None = None) -> BigMoney:
        """Sum same-currency amounts exactly.

        Args:
            monies: Amounts to sum; iterated once.
            currency: Expected currency. Required to total an empty iterable; the result is
                then zero at scale 0.

        Raises:
            InvalidArgumentError: If $monies is empty and $currency is None.
            NullValueError: If an element is None or its provider returns None.
            CurrencyMismatchError: On the first element whose currency differs.
        """
        # Raise: the iterable itself is mandatory
        if monies is None:
            raise NullValueError("Cannot call `total` because $monies is None")

        iterator = iter(monies)
        if currency is None:
            first = next(iterator, _MISSING)

            # Raise: the currency of an empty total is ambiguous
            if first is _MISSING:
                raise InvalidArgumentError("Cannot call `total` because $monies is empty and no $currency was provided")
            result = cls.from_provider(first)
        else:
            result = cls.zero(currency)

        for money in iterator:
            result = result.plus(cls.from_provider(money))
        return result

    @classmethod
    def parse(cls, text: str, registry: CurrencyRegistry | None = None) -> BigMoney:
        """Parse text like "GBP 2.43", "JPY 423", "GBP -.99" or "EUR 43.".

        Format: three-letter code, any number of spaces, optional sign, digits with an optional
        fraction. Exponents are rejected.

        Args:
            text: Text to parse.
            registry: Registry resolving the code. If None, the default registry is used.

        Raises:
            NullValueError: If $text is None.
            InvalidAmountError: If $text is too short or the amount is malformed.
            UnknownCurrencyError: If the code is not registered.
        """
        # Raise: text is mandatory
        if text is None:
            raise NullValueError("Cannot call `parse` because $text is None")

        if not isinstance(text, str):
            raise TypeError(f"Cannot call `parse` because $text is not str (got type '{type(text).__name__}')")

        # Raise: code plus at least one digit
        if len(text) < PARSE_MIN_LENGTH:
            raise InvalidAmountError(f"Money '{text}' cannot be parsed")

        code, amount_text = text[:3], text[3:].lstrip(" ")
        try:
            unscaled, scale = to_unscaled(amount_text)
        except InvalidAmountError as e:
            raise InvalidAmountError(f"Money '{text}' cannot be parsed") from e

        return cls(resolve_currency(code, registry), unscaled, scale)

    # endregion

    # region Accessors

    @property
    def currency(self) -> CurrencyUnit:
        """Get the currency."""
        return self._currency

    @property
    def scale(self) -> int:
        """Get the number of decimal places."""
        return self._scale

    @property
    def unscaled_value(self) -> int:
        """Get the unscaled integer, e.g. 234 for `GBP 2.34`."""
        return self._unscaled

    @property
    def amount(self) -> Decimal:
        """Get the exact amount as Decimal (same scale as this money)."""
        return to_decimal(self._unscaled, self._scale)

    @property
    def amount_major(self) -> int:
        """Get the major-unit part, truncated towards zero (`GBP -5.78` -> -5)."""
        return rescale(self._unscaled, self._scale, 0, RoundingMode.DOWN)

    @property
    def amount_major_long(self) -> int:
        """Get `amount_major`, checked to fit a 64-bit signed integer."""
        return to_checked_int(self.amount_major, INT64_BITS)

    @property
    def amount_major_int(self) -> int:
        """Get `amount_major`, checked to fit a 32-bit signed integer."""
        return to_checked_int(self.amount_major, INT32_BITS)

    @property
    def amount_minor(self) -> int:
        """Get the amount in minor units; extra decimal places are truncated (`GBP 2.345` -> 234)."""
        return rescale(self._unscaled, self._scale, self._currency.decimal_places, RoundingMode.DOWN)

    @property
    def amount_minor_long(self) -> int:
        """Get `amount_minor`, checked to fit a 64-bit signed integer."""
        return to_checked_int(self.amount_minor, INT64_BITS)

    @property
    def amount_minor_int(self) -> int:
        """Get `amount_minor`, checked to fit a 32-bit signed integer."""
        return to_checked_int(self.amount_minor, INT32_BITS)

    @property
    def minor_part(self) -> int:
        """Get the minor units within the major unit (`GBP 2.34` -> 34, `GBP -5.78` -> -78)."""
        return self.amount_minor - self.amount_major * 10**self._currency.decimal_places

    @property
    def is_currency_scale(self) -> bool:
        """Check if the scale equals the currency's decimal places."""
        return self._scale == self._currency.decimal_places

    @property
    def is_zero(self) -> bool:
        return self._unscaled == 0

    @property
    def is_positive(self) -> bool:
        return self._unscaled > 0

    @property
    def is_positive_or_zero(self) -> bool:
        return self._unscaled >= 0

    @property
    def is_negative(self) -> bool:
        return self._unscaled < 0

    @property
    def is_negative_or_zero(self) -> bool:
        return self._unscaled <= 0

    def to_big_money(self) -> BigMoney:
        return self

    # endregion

    # region With

    def with_currency_unit(self, currency: CurrencyUnit | str) -> BigMoney:
        """Return the same amount in another currency (no conversion)."""
        currency = resolve_currency(currency)
        if currency == self._currency:
            return self
        return BigMoney(currency, self._unscaled, self._scale)

    def with_scale(self, scale: int, rounding: RoundingMode = RoundingMode.UNNECESSARY) -> BigMoney:
        """Return this amount rescaled to $scale.

        Raises:
            MoneyArithmeticError: If rounding is needed and $rounding is `UNNECESSARY`.
        """
        _check_int(scale, "scale", "with_scale")
        rounding = as_rounding_mode(rounding)
        if scale == self._scale:
            return self
        return BigMoney(self._currency, rescale(self._unscaled, self._scale, scale, rounding), scale)

    def with_currency_scale(self, rounding: RoundingMode = RoundingMode.UNNECESSARY) -> BigMoney:
        """Return this amount rescaled to the currency's decimal places."""
        return self.with_scale(self._currency.decimal_places, rounding)

    def with_amount(self, amount: DecimalLike) -> BigMoney:
        """Return money of the same currency with $amount at its natural scale."""
        unscaled, scale = to_unscaled(amount)
        if unscaled == self._unscaled and scale == self._scale:
            return self
        return BigMoney(self._currency, unscaled, scale)

    # endregion

    # region Arithmetic

    def _check_currency_equal(self, money: BigMoneyProvider) -> BigMoney:
        other = BigMoney.from_provider(money)

        # Raise: no silent cross-currency arithmetic
        if other._currency != self._currency:
            raise CurrencyMismatchError(self._currency, other._currency)
        return other

    def _operand(self, value: BigMoneyProvider | DecimalLike) -> tuple[int, int]:
        if isinstance(value, (Decimal, int, float, str)):
            return to_unscaled(value)
        other = self._check_currency_equal(value)
        return other._unscaled, other._scale

    def _add(self, unscaled: int, scale: int) -> BigMoney:
        result_scale = max(self._scale, scale)
        result = self._unscaled * 10 ** (result_scale - self._scale) + unscaled * 10 ** (result_scale - scale)
        return BigMoney(self._currency, result, result_scale)

    def plus(self, other: BigMoneyProvider | DecimalLike) -> BigMoney:
        """Add money of the same currency or a raw amount; the result scale is the larger of both scales.

        Raises:
            CurrencyMismatchError: If $other is money in a different currency.
        """
        unscaled, scale = self._operand(other)
        if unscaled == 0 and scale <= self._scale:
            return self
        return self._add(unscaled, scale)

    def minus(self, other: BigMoneyProvider | DecimalLike) -> BigMoney:
        """Subtract money of the same currency or a raw amount; the result scale is the larger of both scales.

        Raises:
            CurrencyMismatchError: If $other is money in a different currency.
        """
        unscaled, scale = self._operand(other)
        if unscaled == 0 and scale <= self._scale:
            return self
        return self._add(-unscaled, scale)

    def plus_major(self, amount: int) -> BigMoney:
        """Add a whole number of major units."""
        if _check_int(amount, "amount", "plus_major") == 0:
            return self
        return self._add(amount, 0)

    def plus_minor(self, amount: int) -> BigMoney:
        """Add a whole number of minor units."""
        if _check_int(amount, "amount", "plus_minor") == 0:
            return self
        return self._add(amount, self._currency.decimal_places)

    def minus_major(self, amount: int) -> BigMoney:
        """Subtract a whole number of major units."""
        if _check_int(amount, "amount", "minus_major") == 0:
            return self
        return self._add(-amount, 0)

    def minus_minor(self, amount: int) -> BigMoney:
        """Subtract a whole number of minor units."""
        if _check_int(amount, "amount", "minus_minor") == 0:
            return self
        return self._add(-amount, self._currency.decimal_places)

    def plus_retain_scale(self, other: BigMoneyProvider | DecimalLike, rounding: RoundingMode = RoundingMode.UNNECESSARY) -> BigMoney:
        """Add $other keeping this scale; excess precision in $other is rounded with $rounding.

        Raises:
            CurrencyMismatchError: If $other is money in a different currency.
            MoneyArithmeticError: If rounding is needed and $rounding is `UNNECESSARY`.
        """
        rounding = as_rounding_mode(rounding)
        unscaled, scale = self._operand(other)
        if unscaled == 0:
            return self
        return self._add(unscaled, scale).with_scale(self._scale, rounding)

    def minus_retain_scale(self, other: BigMoneyProvider | DecimalLike, rounding: RoundingMode = RoundingMode.UNNECESSARY) -> BigMoney:
        """Subtract $other keeping this scale; excess precision in $other is rounded with $rounding.

        Raises:
            CurrencyMismatchError: If $other is money in a different currency.
            MoneyArithmeticError: If rounding is needed and $rounding is `UNNECESSARY`.
        """
        rounding = as_rounding_mode(rounding)
        unscaled, scale = self._operand(other)
        if unscaled == 0:
            return self
        return self._add(-unscaled, scale).with_scale(self._scale, rounding)

    def multiplied_by(self, factor: DecimalLike) -> BigMoney:
        """Multiply exactly; the result scale is `scale + factor scale` (`GBP 2.34 * 1.5` -> `GBP 3.510`)."""
        factor_unscaled, factor_scale = to_unscaled(factor)
        if factor_unscaled == 1 and factor_scale == 0:
            return self
        return BigMoney(self._currency, self._unscaled * factor_unscaled, self._scale + factor_scale)

    def multiply_retain_scale(self, factor: DecimalLike, rounding: RoundingMode = RoundingMode.UNNECESSARY) -> BigMoney:
        """Multiply and round the product back to this scale.

        Raises:
            MoneyArithmeticError: If rounding is needed and $rounding is `UNNECESSARY`.
        """
        rounding = as_rounding_mode(rounding)
        return self.multiplied_by(factor).with_scale(self._scale, rounding)

    def divided_by(self, divisor: DecimalLike, rounding: RoundingMode) -> BigMoney:
        """Divide at this scale. A rounding mode is always required because division is rarely exact.

        Raises:
            NullValueError: If $rounding is None.
            MoneyArithmeticError: If $divisor is zero, or if the quotient needs rounding and
                $rounding is `UNNECESSARY`.
        """
        rounding = as_rounding_mode(rounding)
        divisor_unscaled, divisor_scale = to_unscaled(divisor)

        # Raise: division by zero is undefined
        if divisor_unscaled == 0:
            raise MoneyArithmeticError(f"Cannot call `divided_by` because $divisor ({divisor}) is zero")

        if divisor_unscaled == 1 and divisor_scale == 0:
            return self
        quotient = divide_to_scale(self._unscaled, self._scale, divisor_unscaled, divisor_scale, self._scale, rounding)
        return BigMoney(self._currency, quotient, self._scale)

    def negated(self) -> BigMoney:
        if self._unscaled == 0:
            return self
        return BigMoney(self._currency, -self._unscaled, self._scale)

    def abs(self) -> BigMoney:
        return self.negated() if self._unscaled < 0 else self

    def rounded(self, scale: int, rounding: RoundingMode) -> BigMoney:
        """Round to $scale decimal places while keeping the current scale.

        `GBP 2.34` rounded to 1 with UP is `GBP 2.40`; a negative $scale rounds to tens, hundreds, etc.
        Rounding to the current scale or a wider one returns this money unchanged.

        Raises:
            MoneyArithmeticError: If rounding is needed and $rounding is `UNNECESSARY`.
        """
        _check_int(scale, "scale", "rounded")
        rounding = as_rounding_mode(rounding)
        if scale >= self._scale:
            return self
        rounded_unscaled = rescale(self._unscaled, self._scale, scale, rounding)
        return BigMoney(self._currency, rescale(rounded_unscaled, scale, self._scale, RoundingMode.UNNECESSARY), self._scale)

    def converted_to(self, currency: CurrencyUnit | str, conversion_rate: DecimalLike, rounding: RoundingMode | None = None) -> BigMoney:
        """Convert into $currency by multiplying with $conversion_rate.

        Without $rounding the result is exact with scale `scale + rate scale`; with $rounding it is
        rounded back to this scale (see `convert_retain_scale`).

        Raises:
            InvalidArgumentError: If $conversion_rate is negative, or $currency is this currency and
                the rate is not exactly 1.
            MoneyArithmeticError: If rounding is needed and $rounding is `UNNECESSARY`.
        """
        currency = resolve_currency(currency)
        rate_unscaled, rate_scale = to_unscaled(conversion_rate)

        # Raise: a negative rate would flip the sign of money
        if rate_unscaled < 0:
            raise InvalidArgumentError(f"Cannot call `converted_to` because $conversion_rate ({conversion_rate}) is negative")

        if currency == self._currency:
            # Raise: converting into the same currency with rate != 1 is almost certainly a bug
            if compare_scaled(rate_unscaled, rate_scale, 1, 0) != 0:
                raise InvalidArgumentError(f"Cannot call `converted_to` because $currency is the same as this currency ({currency}) and $conversion_rate ({conversion_rate}) is not 1")
            return self

        converted = BigMoney(currency, self._unscaled * rate_unscaled, self._scale + rate_scale)
        if rounding is None:
            return converted
        return converted.with_scale(self._scale, as_rounding_mode(rounding))

    def convert_retain_scale(self, currency: CurrencyUnit | str, conversion_rate: DecimalLike, rounding: RoundingMode = RoundingMode.UNNECESSARY) -> BigMoney:
        """Convert into $currency and round the result back to this scale."""
        return self.converted_to(currency, conversion_rate, as_rounding_mode(rounding))

    # endregion

    # region Comparison

    def is_same_currency(self, money: BigMoneyProvider) -> bool:
        return BigMoney.from_provider(money)._currency == self._currency

    def compare_to(self, other: BigMoneyProvider) -> int:
        """Compare numeric values (scale-insensitive); returns -1, 0 or 1.

        Raises:
            CurrencyMismatchError: If the currencies differ.
        """
        other_money = self._check_currency_equal(other)
        return compare_scaled(self._unscaled, self._scale, other_money._unscaled, other_money._scale)

    def is_equal(self, other: BigMoneyProvider) -> bool:
        """Check numeric equality ignoring scale (`GBP 2.3` equals `GBP 2.30`)."""
        return self.compare_to(other) == 0

    def is_greater_than(self, other: BigMoneyProvider) -> bool:
        return self.compare_to(other) > 0

    def is_greater_than_or_equal(self, other: BigMoneyProvider) -> bool:
        return self.compare_to(other) >= 0

    def is_less_than(self, other: BigMoneyProvider) -> bool:
        return self.compare_to(other) < 0

    def is_less_than_or_equal(self, other: BigMoneyProvider) -> bool:
        return self.compare_to(other) <= 0

    def __eq__(self, other) -> bool:
        """Check equality of currency, unscaled value and scale."""
        if not isinstance(other, BigMoney):
            return False
        return self._currency == other._currency and self._unscaled == other._unscaled and self._scale == other._scale

    def __hash__(self) -> int:
        return hash((self._currency.code, self._unscaled, self._scale))

    def __lt__(self, other) -> bool:
        if not isinstance(other, BigMoneyProvider):
            return NotImplemented
        return self.compare_to(other) < 0

    def __le__(self, other) -> bool:
        if not isinstance(other, BigMoneyProvider):
            return NotImplemented
        return self.compare_to(other) <= 0

    def __gt__(self, other) -> bool:
        if not isinstance(other, BigMoneyProvider):
            return NotImplemented
        return self.compare_to(other) > 0

    def __ge__(self, other) -> bool:
        if not isinstance(other, BigMoneyProvider):
            return NotImplemented
        return self.compare_to(other) >= 0

    # endregion

    # region Operators

    def __add__(self, other):
        """Add money of the same currency or a number; exact."""
        if isinstance(other, bool) or not isinstance(other, (*_OPERATOR_SCALARS, BigMoneyProvider)):
            return NotImplemented
        return self.plus(other)

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        """Subtract money of the same currency or a number; exact."""
        if isinstance(other, bool) or not isinstance(other, (*_OPERATOR_SCALARS, BigMoneyProvider)):
            return NotImplemented
        return self.minus(other)

    def __rsub__(self, other):
        """Right subtraction: number - BigMoney."""
        if isinstance(other, bool) or not isinstance(other, _OPERATOR_SCALARS):
            return NotImplemented
        return self.negated().plus(other)

    def __mul__(self, other):
        """Multiply by a number (exact). BigMoney * BigMoney is not supported."""
        if isinstance(other, bool) or not isinstance(other, _OPERATOR_SCALARS):
            return NotImplemented
        return self.multiplied_by(other)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __neg__(self) -> BigMoney:
        return self.negated()

    def __pos__(self) -> BigMoney:
        return self

    def __abs__(self) -> BigMoney:
        return self.abs()

    # endregion

    def __reduce__(self):
        return BigMoney, (self._currency, self._unscaled, self._scale)

    def __str__(self) -> str:
        """Return string like 'GBP 2.34'; `parse` reads it back."""
        return f"{self._currency.code} {format_plain(self._unscaled, self._scale)}"

    def __repr__(self) -> str:
        """Return string like 'BigMoney(2.34, GBP)'."""
        return f"{self.__class__.__name__}({format_plain(self._unscaled, self._scale)}, {self._currency.code})"
