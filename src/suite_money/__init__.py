__version__ = "0.0.1"

from suite_money.domain.monetary.big_money import BigMoney
from suite_money.domain.monetary.currency import CurrencyUnit
from suite_money.domain.monetary.currency_registry import CurrencyRegistry, default_registry
from suite_money.domain.monetary.exchange_rate import ExchangeRate
from suite_money.domain.monetary.fixed_money import FixedMoney
from suite_money.domain.monetary.money import Money
from suite_money.utils.decimal_tools import RoundingMode

__all__ = [
    "BigMoney",
    "CurrencyRegistry",
    "CurrencyUnit",
    "ExchangeRate",
    "FixedMoney",
    "Money",
    "RoundingMode",
    "default_registry",
]
