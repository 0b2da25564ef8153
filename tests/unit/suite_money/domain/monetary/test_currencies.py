from __future__ import annotations

from suite_money.domain.monetary import currencies
from suite_money.domain.monetary.currency_registry import default_registry


def test_constants_come_from_default_registry():
    assert currencies.GBP is default_registry().of("GBP")
    assert currencies.JPY.decimal_places == 0
    assert currencies.BHD.decimal_places == 3
    assert currencies.BTC.decimal_places == 8
    assert currencies.XAU.is_pseudo_currency
