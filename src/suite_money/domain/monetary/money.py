from __future__ import annotations

from collections.abc import Iterable

from suite_money.domain.monetary.big_money import BigMoney
from suite_money.domain.monetary.currency import CurrencyUnit
from suite_money.domain.monetary.currency_registry import CurrencyRegistry, resolve_currency
from suite_money.domain.monetary.fixed_money import FixedScaleMoney
from suite_money.domain.monetary.protocol import BigMoneyProvider
from suite_money.errors import CurrencyMismatchError, InvalidArgumentError
from suite_money.utils.decimal_tools import DecimalLike, RoundingMode


class Money(FixedScaleMoney):
    """Money at the currency's own scale, e.g. `GBP 2.34`, `JPY 423`, `BHD 1.250`.

    This is the type to use for amounts that are paid, booked or displayed. The scale always
    equals `currency.decimal_places`; `converted_to` and `with_currency_unit` move to the scale
    of the target currency.

    Examples:
        Money.of("GBP", "2.3")                            # GBP 2.30
        Money.of("GBP", "2.345")                          # MoneyArithmeticError, rounding needed
        Money.of("GBP", "2.345", RoundingMode.HALF_EVEN)  # GBP 2.34
    """

    __slots__ = ()

    def _validate(self, money: BigMoney) -> None:
        # Raise: Money always has the currency scale
        if not money.is_currency_scale:
            raise InvalidArgumentError(f"Cannot create Money because $money scale ({money.scale}) differs from decimal places of {money.currency} ({money.currency.decimal_places})")

    def _scale_for(self, currency: CurrencyUnit) -> int:
        return currency.decimal_places

    # region Factories

    @classmethod
    def of(cls, currency: CurrencyUnit | str, amount: DecimalLike, rounding: RoundingMode = RoundingMode.UNNECESSARY) -> Money:
        """Create Money with $amount at the currency scale.

        Raises:
            MoneyArithmeticError: If $amount has more decimal places than the currency and
                $rounding is `UNNECESSARY`.
        """
        return cls(BigMoney.of_currency_scale(currency, amount, rounding))

    @classmethod
    def of_major(cls, currency: CurrencyUnit | str, amount_major: int) -> Money:
        """Create Money from whole major units (`of_major(GBP, 25)` -> `GBP 25.00`)."""
        return cls(BigMoney.of_major(currency, amount_major).with_currency_scale())

    @classmethod
    def of_minor(cls, currency: CurrencyUnit | str, amount_minor: int) -> Money:
        """Create Money from minor units (`of_minor(GBP, 2595)` -> `GBP 25.95`)."""
        return cls(BigMoney.of_minor(currency, amount_minor))

    @classmethod
    def zero(cls, currency: CurrencyUnit | str) -> Money:
        currency = resolve_currency(currency)
        return cls(BigMoney.zero(currency, currency.decimal_places))

    @classmethod
    def parse(cls, text: str, registry: CurrencyRegistry | None = None) -> Money:
        """Parse text like "GBP 2.43"; fewer decimal places are padded, more raise `MoneyArithmeticError`."""
        return cls(BigMoney.parse(text, registry).with_currency_scale())

    @classmethod
    def from_provider(cls, provider: BigMoneyProvider, rounding: RoundingMode = RoundingMode.UNNECESSARY) -> Money:
        """Create Money from any money value, rounding to the currency scale with $rounding."""
        return cls(BigMoney.from_provider(provider).with_currency_scale(rounding))

    @classmethod
    def total(cls, monies: Iterable[BigMoneyProvider], currency: CurrencyUnit | str | None = None) -> Money:
        """Sum same-currency amounts; an empty $monies with a $currency totals to `zero(currency)`.

        Raises:
            InvalidArgumentError: If $monies is empty and $currency is None.
            NullValueError: If an element is None.
            CurrencyMismatchError: On the first element whose currency differs.
            MoneyArithmeticError: If the total has more decimal places than the currency.
        """
        return cls.from_provider(BigMoney.total(monies, currency))

    @classmethod
    def non_null(cls, money: Money | None, currency: CurrencyUnit | str) -> Money:
        """Return $money, or zero of $currency if $money is None.

        Raises:
            CurrencyMismatchError: If $money is not in $currency.
        """
        currency = resolve_currency(currency)
        if money is None:
            return cls.zero(currency)

        # Raise: a present value must already be in the expected currency
        if money.currency != currency:
            raise CurrencyMismatchError(currency, money.currency)
        return money

    # endregion
