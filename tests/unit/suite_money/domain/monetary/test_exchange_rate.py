from __future__ import annotations

import pickle
from decimal import Decimal

import pytest

from suite_money.domain.monetary.big_money import BigMoney
from suite_money.domain.monetary.currency_registry import default_registry
from suite_money.domain.monetary.exchange_rate import DEFAULT_OPERATIONS_SCALE, ExchangeRate, ExchangeRateOperations
from suite_money.domain.monetary.fixed_money import FixedMoney
from suite_money.domain.monetary.money import Money
from suite_money.errors import (
    InvalidArgumentError,
    MoneyArithmeticError,
    NoCommonCurrencyError,
    NotExchangeableError,
    NullValueError,
    UnknownCurrencyError,
)
from suite_money.utils.decimal_tools import RoundingMode
from tests.helpers.test_assistant import TEST_ASSISTANT

GBP = default_registry().of("GBP")
USD = default_registry().of("USD")
EUR = default_registry().of("EUR")
JPY = default_registry().of("JPY")

gbp = TEST_ASSISTANT.money.gbp
usd = TEST_ASSISTANT.money.usd
eur = TEST_ASSISTANT.money.eur


# region ExchangeRate


def test_rate_properties_and_str():
    rate = ExchangeRate("1.25", GBP, "USD")

    assert rate.rate == Decimal("1.25")
    assert rate.source == GBP
    assert rate.target == USD
    assert str(rate) == "1 GBP = 1.25 USD"
    assert repr(rate) == "ExchangeRate(1 GBP = 1.25 USD)"


def test_trailing_zeros_are_stripped():
    assert ExchangeRate("1.2500", GBP, USD) == ExchangeRate(Decimal("1.25"), GBP, USD)
    assert hash(ExchangeRate("1.2500", GBP, USD)) == hash(ExchangeRate("1.25", GBP, USD))
    assert str(ExchangeRate("2.000", GBP, USD)) == "1 GBP = 2 USD"
    assert ExchangeRate("1.25", GBP, USD) != ExchangeRate("1.25", USD, GBP)


@pytest.mark.parametrize("rate", ["0", "0.000", "-1.25", -3])
def test_rate_must_be_positive(rate):
    with pytest.raises(InvalidArgumentError):
        ExchangeRate(rate, GBP, USD)


def test_same_currency_needs_rate_one():
    assert ExchangeRate("1.000", GBP, GBP) == ExchangeRate.identity(GBP)
    assert str(ExchangeRate.identity("JPY")) == "1 JPY = 1 JPY"
    with pytest.raises(InvalidArgumentError):
        ExchangeRate("1.01", GBP, GBP)


def test_missing_arguments():
    with pytest.raises(NullValueError):
        ExchangeRate(None, GBP, USD)
    with pytest.raises(NullValueError):
        ExchangeRate("1.25", None, USD)


def test_with_rate():
    rate = ExchangeRate("1.25", GBP, USD)

    assert rate.with_rate("1.3") == ExchangeRate("1.3", GBP, USD)
    assert rate.rate == Decimal("1.25")


def test_parse():
    assert ExchangeRate.parse("1 GBP = 1.25 USD") == ExchangeRate("1.25", GBP, USD)
    assert ExchangeRate.parse("  1  EUR  =  +0.85   GBP ") == ExchangeRate("0.85", EUR, GBP)
    rate = ExchangeRate("151.37", USD, JPY)
    assert ExchangeRate.parse(str(rate)) == rate


@pytest.mark.parametrize(
    "text",
    [
        "",
        "GBP = 1.25 USD",
        "2 GBP = 1.25 USD",
        "1 GBP = -1.25 USD",
        "1 GBP = 1.25e2 USD",
        "1 GBP=1.25 USD",
        "1 gbp = 1.25 USD",
        "1 GBP = 1.25",
        "1 GBP = \u0661 USD",
        "\u0661 GBP = 1.25 USD",
        "1 GBP = 1.\u0662\u0665 USD",
        "1\tGBP = 1.25 USD",
        "1\u00a0GBP = 1.25 USD",
        "1 GBP = 1.25 USD\n",
    ],
)
def test_parse_rejects_malformed_text(text):
    with pytest.raises(InvalidArgumentError):
        ExchangeRate.parse(text)


def test_parse_unknown_currency_and_registry():
    registry = TEST_ASSISTANT.currency.create_registry()

    with pytest.raises(UnknownCurrencyError):
        ExchangeRate.parse("1 GBP = 1.25 QQQ")
    assert ExchangeRate.parse("1 GBP = 1.25 USD", registry).source is registry.of("GBP")
    with pytest.raises(UnknownCurrencyError):
        ExchangeRate.parse("1 GBP = 1.25 CHF", registry)
    with pytest.raises(NullValueError):
        ExchangeRate.parse(None)


def test_pickle():
    rate = ExchangeRate("1.25", GBP, USD)
    assert pickle.loads(pickle.dumps(rate)) == rate


# endregion

# region ExchangeRateOperations


def test_operations_defaults_and_validation():
    operations = ExchangeRate("1.25", GBP, USD).operations()

    assert operations.scale == DEFAULT_OPERATIONS_SCALE
    assert operations.rounding == RoundingMode.HALF_EVEN
    assert operations == ExchangeRateOperations(ExchangeRate("1.25", GBP, USD))
    assert repr(operations) == "ExchangeRateOperations(1 GBP = 1.25 USD, scale=16, rounding=HALF_EVEN)"
    with pytest.raises(InvalidArgumentError):
        ExchangeRate("1.25", GBP, USD).operations(-1)
    with pytest.raises(NullValueError):
        ExchangeRateOperations(None)


def test_exchange_big_money_forward_is_exact():
    operations = ExchangeRate("1.25", GBP, USD).operations()

    assert operations.exchange(gbp("2.34")) == usd("2.9250")


def test_exchange_big_money_backward_divides_at_operations_scale():
    operations = ExchangeRate("1.25", GBP, USD).operations(4)

    assert operations.exchange(usd("2.50")) == gbp("2.0000")
    assert operations.exchange(usd("1")) == gbp("0.8000")
    assert ExchangeRate("3", GBP, USD).operations(2, RoundingMode.DOWN).exchange(usd("1.000")) == gbp("0.333")


def test_exchange_money_rounds_to_currency_scale():
    operations = ExchangeRate("1.25", GBP, USD).operations()

    assert operations.exchange(Money.of(GBP, "2.34")) == Money.of(USD, "2.92")
    assert ExchangeRate("1.25", GBP, USD).operations(rounding=RoundingMode.HALF_UP).exchange(Money.of(GBP, "2.34")) == Money.of(USD, "2.93")
    assert operations.exchange(Money.of(USD, "2.50")) == Money.of(GBP, "2.00")
    assert ExchangeRate("150.5", USD, JPY).operations().exchange(Money.of(USD, "1")) == Money.of(JPY, 150)


def test_exchange_fixed_money_keeps_scale():
    operations = ExchangeRate("1.25", GBP, USD).operations()

    assert operations.exchange(FixedMoney.of(GBP, "2.34", 4)) == FixedMoney.of(USD, "2.925", 4)
    assert operations.exchange(FixedMoney.of(USD, "1", 4)) == FixedMoney.of(GBP, "0.8", 4)


def test_exchange_without_rounding_fails_on_excess_precision():
    operations = ExchangeRate("1.25", GBP, USD).operations(rounding=RoundingMode.UNNECESSARY)

    with pytest.raises(MoneyArithmeticError):
        operations.exchange(Money.of(GBP, "2.34"))


def test_exchange_other_currency_fails():
    operations = ExchangeRate("1.25", GBP, USD).operations()

    with pytest.raises(NotExchangeableError):
        operations.exchange(eur("1"))
    with pytest.raises(InvalidArgumentError):
        operations.exchange(Money.of(JPY, 1))
    with pytest.raises(NullValueError):
        operations.exchange(None)


def test_invert():
    operations = ExchangeRate("1.25", GBP, USD).operations()

    inverted = operations.invert()

    assert inverted.exchange_rate == ExchangeRate("0.8", USD, GBP)
    assert str(inverted.exchange_rate) == "1 USD = 0.8 GBP"
    assert inverted.scale == operations.scale
    assert operations.exchange_rate == ExchangeRate("1.25", GBP, USD)


def test_invert_rounds_at_operations_scale():
    inverted = ExchangeRate("3", GBP, USD).operations(4, RoundingMode.HALF_UP).invert()

    assert inverted.exchange_rate.rate == Decimal("0.3333")
    assert ExchangeRate("1.5", GBP, USD).operations(4, RoundingMode.HALF_UP).invert().exchange_rate.rate == Decimal("0.6667")


def test_combine_through_shared_currency():
    operations = ExchangeRate("1.1", EUR, USD).operations()

    combined = operations.combine(ExchangeRate("150", USD, JPY))

    assert combined.exchange_rate == ExchangeRate("165", EUR, JPY)
    assert combined.scale == operations.scale


def test_combine_when_shared_currency_is_on_other_sides():
    operations = ExchangeRate("1.25", GBP, USD).operations()

    assert operations.combine(ExchangeRate("1.2", GBP, EUR)).exchange_rate == ExchangeRate("0.96", USD, EUR)
    assert operations.combine(ExchangeRate("0.625", EUR, USD)).exchange_rate == ExchangeRate("2", GBP, EUR)


def test_combine_back_to_start_gives_identity():
    operations = ExchangeRate("1.25", GBP, USD).operations()

    assert operations.combine(ExchangeRate("0.7", USD, GBP)).exchange_rate == ExchangeRate.identity(GBP)


def test_combine_without_shared_currency_fails():
    with pytest.raises(NoCommonCurrencyError):
        ExchangeRate("1.25", GBP, USD).operations().combine(ExchangeRate("160", EUR, JPY))
    with pytest.raises(NullValueError):
        ExchangeRate("1.25", GBP, USD).operations().combine(None)


def test_exchange_with_other_provider_returns_big_money():
    class Price:
        def to_big_money(self) -> BigMoney:
            return gbp("10")

    assert ExchangeRate("1.25", GBP, USD).operations().exchange(Price()) == usd("12.50")


# endregion
