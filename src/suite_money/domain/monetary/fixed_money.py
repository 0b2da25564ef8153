from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from decimal import Decimal

from suite_money.domain.monetary.big_money import BigMoney
from suite_money.domain.monetary.currency import CurrencyUnit
from suite_money.domain.monetary.currency_registry import CurrencyRegistry, resolve_currency
from suite_money.domain.monetary.protocol import BigMoneyProvider
from suite_money.errors import CurrencyMismatchError, InvalidArgumentError, NullValueError
from suite_money.utils.decimal_tools import DecimalLike, RoundingMode, as_rounding_mode, format_plain

_OPERATOR_SCALARS = (Decimal, int, float)


def _check_fixed_scale(scale: object, method: str) -> int:
    # Raise: a fixed scale is a non-negative whole number
    if not isinstance(scale, int) or isinstance(scale, bool):
        raise TypeError(f"Cannot call `{method}` because $scale is not int (got type '{type(scale).__name__}')")
    if scale < 0:
        raise InvalidArgumentError(f"Cannot call `{method}` because $scale ({scale}) is negative")
    return scale


class FixedScaleMoney(ABC):
    """Base for money whose scale never changes across operations.

    Wraps a `BigMoney`, delegates every operation to it and rescales the result back to the
    fixed scale. Operations that could need rounding take `rounding` (default `UNNECESSARY`),
    so a lossy result raises `MoneyArithmeticError` unless a rounding mode is supplied.

    Subclasses choose the fixed scale through `_scale_for`.
    """

    __slots__ = ("_money",)

    def __init__(self, money: BigMoney) -> None:
        """Initialize from a BigMoney that already has the fixed scale.

        Raises:
            NullValueError: If $money is None.
            TypeError: If $money is not BigMoney.
            InvalidArgumentError: If the scale of $money is not allowed for this type.
        """
        # Raise: wrapped value is mandatory
        if money is None:
            raise NullValueError(f"Cannot create {self.__class__.__name__} because $money is None")

        if not isinstance(money, BigMoney):
            raise TypeError(f"Cannot create {self.__class__.__name__} because $money is not BigMoney (got type '{type(money).__name__}')")

        self._validate(money)
        self._money = money

    def _validate(self, money: BigMoney) -> None:
        """Hook to reject a BigMoney whose scale breaks the subclass invariant."""

    @abstractmethod
    def _scale_for(self, currency: CurrencyUnit) -> int:
        """Scale that results of this instance must have in $currency."""
        ...

    def _rebuild(self, money: BigMoney, rounding: RoundingMode = RoundingMode.UNNECESSARY):
        rescaled = money.with_scale(self._scale_for(money.currency), as_rounding_mode(rounding))
        if rescaled is self._money:
            return self
        return self.__class__(rescaled)

    # region Accessors

    @property
    def currency(self) -> CurrencyUnit:
        return self._money.currency

    @property
    def scale(self) -> int:
        return self._money.scale

    @property
    def unscaled_value(self) -> int:
        return self._money.unscaled_value

    @property
    def amount(self) -> Decimal:
        return self._money.amount

    @property
    def amount_major(self) -> int:
        return self._money.amount_major

    @property
    def amount_major_long(self) -> int:
        return self._money.amount_major_long

    @property
    def amount_major_int(self) -> int:
        return self._money.amount_major_int

    @property
    def amount_minor(self) -> int:
        return self._money.amount_minor

    @property
    def amount_minor_long(self) -> int:
        return self._money.amount_minor_long

    @property
    def amount_minor_int(self) -> int:
        return self._money.amount_minor_int

    @property
    def minor_part(self) -> int:
        return self._money.minor_part

    @property
    def is_currency_scale(self) -> bool:
        return self._money.is_currency_scale

    @property
    def is_zero(self) -> bool:
        return self._money.is_zero

    @property
    def is_positive(self) -> bool:
        return self._money.is_positive

    @property
    def is_positive_or_zero(self) -> bool:
        return self._money.is_positive_or_zero

    @property
    def is_negative(self) -> bool:
        return self._money.is_negative

    @property
    def is_negative_or_zero(self) -> bool:
        return self._money.is_negative_or_zero

    def to_big_money(self) -> BigMoney:
        """Get the wrapped BigMoney (same value and scale)."""
        return self._money

    # endregion

    # region With

    def with_amount(self, amount: DecimalLike, rounding: RoundingMode = RoundingMode.UNNECESSARY):
        """Return money of the same currency and scale with $amount."""
        return self._rebuild(self._money.with_amount(amount), rounding)

    def with_currency_unit(self, currency: CurrencyUnit | str, rounding: RoundingMode = RoundingMode.UNNECESSARY):
        """Return the same amount in another currency (no conversion), at the fixed scale of that currency."""
        return self._rebuild(self._money.with_currency_unit(currency), rounding)

    # endregion

    # region Arithmetic

    def plus(self, other: BigMoneyProvider | DecimalLike, rounding: RoundingMode = RoundingMode.UNNECESSARY):
        """Add money of the same currency or a raw amount, keeping the fixed scale.

        Raises:
            CurrencyMismatchError: If $other is money in a different currency.
            MoneyArithmeticError: If $other has excess precision and $rounding is `UNNECESSARY`.
        """
        return self._rebuild(self._money.plus(other), rounding)

    def minus(self, other: BigMoneyProvider | DecimalLike, rounding: RoundingMode = RoundingMode.UNNECESSARY):
        """Subtract money of the same currency or a raw amount, keeping the fixed scale.

        Raises:
            CurrencyMismatchError: If $other is money in a different currency.
            MoneyArithmeticError: If $other has excess precision and $rounding is `UNNECESSARY`.
        """
        return self._rebuild(self._money.minus(other), rounding)

    def plus_major(self, amount: int):
        return self._rebuild(self._money.plus_major(amount))

    def minus_major(self, amount: int):
        return self._rebuild(self._money.minus_major(amount))

    def plus_minor(self, amount: int):
        """Add minor units; fails if the fixed scale is narrower than the currency scale and rounding would be needed."""
        return self._rebuild(self._money.plus_minor(amount))

    def minus_minor(self, amount: int):
        """Subtract minor units; fails if the fixed scale is narrower than the currency scale and rounding would be needed."""
        return self._rebuild(self._money.minus_minor(amount))

    def multiplied_by(self, factor: DecimalLike, rounding: RoundingMode = RoundingMode.UNNECESSARY):
        """Multiply and round back to the fixed scale (`GBP 2.34 * 1.5` -> `GBP 3.51`)."""
        return self._rebuild(self._money.multiplied_by(factor), rounding)

    def divided_by(self, divisor: DecimalLike, rounding: RoundingMode):
        """Divide at the fixed scale; $rounding is mandatory."""
        return self._rebuild(self._money.divided_by(divisor, rounding))

    def negated(self):
        return self._rebuild(self._money.negated())

    def abs(self):
        return self._rebuild(self._money.abs())

    def rounded(self, scale: int, rounding: RoundingMode):
        """Round to $scale decimal places while keeping the fixed scale (`GBP 2.34` -> `GBP 2.40` for 1 and UP)."""
        return self._rebuild(self._money.rounded(scale, rounding))

    def converted_to(self, currency: CurrencyUnit | str, conversion_rate: DecimalLike, rounding: RoundingMode = RoundingMode.UNNECESSARY):
        """Convert into $currency and round to the fixed scale of the result.

        Raises:
            InvalidArgumentError: If $conversion_rate is negative, or $currency is this currency and
                the rate is not exactly 1.
            MoneyArithmeticError: If rounding is needed and $rounding is `UNNECESSARY`.
        """
        return self._rebuild(self._money.converted_to(currency, conversion_rate), rounding)

    # endregion

    # region Comparison

    def is_same_currency(self, money: BigMoneyProvider) -> bool:
        return self._money.is_same_currency(money)

    def compare_to(self, other: BigMoneyProvider) -> int:
        """Compare numeric values; returns -1, 0 or 1.

        Raises:
            CurrencyMismatchError: If the currencies differ.
        """
        return self._money.compare_to(other)

    def is_equal(self, other: BigMoneyProvider) -> bool:
        return self._money.is_equal(other)

    def is_greater_than(self, other: BigMoneyProvider) -> bool:
        return self._money.is_greater_than(other)

    def is_greater_than_or_equal(self, other: BigMoneyProvider) -> bool:
        return self._money.is_greater_than_or_equal(other)

    def is_less_than(self, other: BigMoneyProvider) -> bool:
        return self._money.is_less_than(other)

    def is_less_than_or_equal(self, other: BigMoneyProvider) -> bool:
        return self._money.is_less_than_or_equal(other)

    def __eq__(self, other) -> bool:
        """Check equality of type, currency, unscaled value and scale."""
        if type(other) is not type(self):
            return False
        return self._money == other._money

    def __hash__(self) -> int:
        return hash((self.__class__.__name__, self._money))

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
        if isinstance(other, bool) or not isinstance(other, (*_OPERATOR_SCALARS, BigMoneyProvider)):
            return NotImplemented
        return self.plus(other)

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        if isinstance(other, bool) or not isinstance(other, (*_OPERATOR_SCALARS, BigMoneyProvider)):
            return NotImplemented
        return self.minus(other)

    def __rsub__(self, other):
        if isinstance(other, bool) or not isinstance(other, _OPERATOR_SCALARS):
            return NotImplemented
        return self.negated().plus(other)

    def __mul__(self, other):
        """Multiply by a number; the product must fit the fixed scale without rounding."""
        if isinstance(other, bool) or not isinstance(other, _OPERATOR_SCALARS):
            return NotImplemented
        return self.multiplied_by(other)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __neg__(self):
        return self.negated()

    def __pos__(self):
        return self

    def __abs__(self):
        return self.abs()

    # endregion

    def __reduce__(self):
        return self.__class__, (self._money,)

    def __str__(self) -> str:
        return str(self._money)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({format_plain(self._money.unscaled_value, self._money.scale)}, {self._money.currency.code})"


class FixedMoney(FixedScaleMoney):
    """Money with a fixed scale chosen at construction.

    The scale defaults to the currency's decimal places but can be any non-negative value,
    e.g. 4 decimal places for unit prices. Every result keeps that scale, also after
    `converted_to` into another currency.
    """

    __slots__ = ()

    def _scale_for(self, currency: CurrencyUnit) -> int:
        return self._money.scale

    # region Factories

    @classmethod
    def of(cls, currency: CurrencyUnit | str, amount: DecimalLike, scale: int | None = None, rounding: RoundingMode = RoundingMode.UNNECESSARY) -> FixedMoney:
        """Create FixedMoney with $amount at $scale.

        Args:
            currency: Currency or currency code.
            amount: Decimal-like amount.
            scale: Fixed scale. If None, the currency's decimal places are used.
            rounding: Applied when $amount has more decimal places than $scale.

        Raises:
            InvalidArgumentError: If $scale is negative.
            MoneyArithmeticError: If rounding is needed and $rounding is `UNNECESSARY`.
        """
        currency = resolve_currency(currency)
        scale = currency.decimal_places if scale is None else _check_fixed_scale(scale, "of")
        return cls(BigMoney.of_scale(currency, amount, scale, rounding))

    @classmethod
    def of_scaled(cls, currency: CurrencyUnit | str, unscaled: int, scale: int) -> FixedMoney:
        """Create FixedMoney worth `unscaled * 10**-scale` with fixed $scale."""
        return cls(BigMoney.of_unscaled(currency, unscaled, _check_fixed_scale(scale, "of_scaled")))

    @classmethod
    def of_major(cls, currency: CurrencyUnit | str, amount_major: int, scale: int | None = None) -> FixedMoney:
        """Create FixedMoney from whole major units (`of_major(GBP, 25)` -> `GBP 25.00`)."""
        currency = resolve_currency(currency)
        scale = currency.decimal_places if scale is None else _check_fixed_scale(scale, "of_major")
        return cls(BigMoney.of_major(currency, amount_major).with_scale(scale))

    @classmethod
    def zero(cls, currency: CurrencyUnit | str, scale: int | None = None) -> FixedMoney:
        """Create a zero amount; $scale defaults to the currency's decimal places."""
        currency = resolve_currency(currency)
        scale = currency.decimal_places if scale is None else _check_fixed_scale(scale, "zero")
        return cls(BigMoney.zero(currency, scale))

    @classmethod
    def parse(cls, text: str, registry: CurrencyRegistry | None = None) -> FixedMoney:
        """Parse text like "GBP 2.4300"; the fixed scale is the scale written in $text."""
        return cls(BigMoney.parse(text, registry))

    @classmethod
    def from_provider(cls, provider: BigMoneyProvider, scale: int | None = None, rounding: RoundingMode = RoundingMode.UNNECESSARY) -> FixedMoney:
        """Create FixedMoney from any money value.

        Args:
            provider: Money value to convert.
            scale: Fixed scale. If None, the scale of $provider is kept.
            rounding: Applied when $provider has more decimal places than $scale.
        """
        money = BigMoney.from_provider(provider)
        if scale is None:
            return cls(money)
        return cls(money.with_scale(_check_fixed_scale(scale, "from_provider"), rounding))

    @classmethod
    def total(cls, monies: Iterable[BigMoneyProvider], currency: CurrencyUnit | str | None = None) -> FixedMoney:
        """Sum same-currency amounts; the result has the largest scale among them.

        An empty $monies with a $currency totals to `zero(currency)`.

        Raises:
            InvalidArgumentError: If $monies is empty and $currency is None.
            NullValueError: If an element is None.
            CurrencyMismatchError: On the first element whose currency differs.
        """
        # Raise: the iterable itself is mandatory
        if monies is None:
            raise NullValueError("Cannot call `total` because $monies is None")

        monies = list(monies)
        if not monies and currency is not None:
            return cls.zero(currency)
        return cls(BigMoney.total(monies, currency))

    @classmethod
    def non_null(cls, money: FixedMoney | None, currency: CurrencyUnit | str, scale: int | None = None) -> FixedMoney:
        """Return $money, or zero of $currency at $scale if $money is None.

        Raises:
            CurrencyMismatchError: If $money is not in $currency.
        """
        currency = resolve_currency(currency)
        if money is None:
            return cls.zero(currency, scale)

        # Raise: a present value must already be in the expected currency
        if money.currency != currency:
            raise CurrencyMismatchError(currency, money.currency)
        return money

    # endregion

    def with_scale(self, scale: int, rounding: RoundingMode = RoundingMode.UNNECESSARY) -> FixedMoney:
        """Return this amount with a new fixed scale.

        Raises:
            InvalidArgumentError: If $scale is negative.
            MoneyArithmeticError: If rounding is needed and $rounding is `UNNECESSARY`.
        """
        rescaled = self._money.with_scale(_check_fixed_scale(scale, "with_scale"), rounding)
        if rescaled is self._money:
            return self
        return FixedMoney(rescaled)
