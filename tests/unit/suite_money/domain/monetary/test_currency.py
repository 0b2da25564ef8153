from __future__ import annotations

import pickle

import pytest

from suite_money.domain.monetary.currency import CurrencyUnit
from suite_money.domain.monetary.currency_registry import default_registry
from suite_money.errors import InvalidArgumentError
from tests.helpers.test_assistant import TEST_ASSISTANT


def test_currency_properties():
    registry = TEST_ASSISTANT.currency.create_registry()
    gbp = registry.of("GBP")

    assert gbp.code == "GBP"
    assert gbp.numeric_code == 826
    assert gbp.numeric_3_code == "826"
    assert gbp.decimal_places == 2
    assert gbp.default_fraction_digits == 2
    assert not gbp.is_pseudo_currency
    assert str(gbp) == "GBP"
    assert repr(gbp) == "CurrencyUnit('GBP', 826, 2)"


def test_numeric_3_code_is_zero_padded():
    registry = TEST_ASSISTANT.currency.create_registry()
    registry.register("ALL", 8, 2)
    assert registry.of("ALL").numeric_3_code == "008"


def test_pseudo_currency_uses_scale_zero():
    xxx = TEST_ASSISTANT.currency.create_registry().of("XXX")

    assert xxx.is_pseudo_currency
    assert xxx.default_fraction_digits == -1
    assert xxx.decimal_places == 0


def test_equality_and_hash_by_code():
    # Units from two independent registries with the same code are interchangeable
    first = TEST_ASSISTANT.currency.create_registry().of("GBP")
    second = TEST_ASSISTANT.currency.create_registry().of("GBP")

    assert first == second
    assert hash(first) == hash(second)
    assert first != TEST_ASSISTANT.currency.create_registry().of("EUR")
    assert first != "GBP"
    assert len({first, second}) == 1


def test_ordering_by_code():
    registry = TEST_ASSISTANT.currency.create_registry()
    eur, gbp, usd = registry.of("EUR"), registry.of("GBP"), registry.of("USD")

    assert eur < gbp < usd
    assert usd >= gbp
    assert gbp <= gbp
    assert sorted([usd, eur, gbp]) == [eur, gbp, usd]


def test_pickle_resolves_against_default_registry():
    gbp = default_registry().of("GBP")

    restored = pickle.loads(pickle.dumps(gbp))

    assert restored is gbp
    assert isinstance(restored, CurrencyUnit)


@pytest.mark.parametrize(
    "code, numeric_code, decimal_places",
    [
        ("FOO", 1, 99),
        ("FOO", 1, -2),
        ("FOO", 1000, 2),
        ("FOO", -2, 2),
        ("FOO", True, 2),
        ("foo", 1, 2),
        ("FOOD", 1, 2),
        (None, 1, 2),
        ("FOO", "1", 2),
    ],
)
def test_direct_construction_validates_arguments(code, numeric_code, decimal_places):
    with pytest.raises(InvalidArgumentError):
        CurrencyUnit(code, numeric_code, decimal_places)


def test_direct_construction_accepts_valid_values():
    currency = CurrencyUnit("ZZY", -1, -1)

    assert currency.is_pseudo_currency
    assert currency.decimal_places == 0
