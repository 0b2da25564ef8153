from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from suite_money.domain.monetary.big_money import BigMoney


# region Interface


@runtime_checkable
class BigMoneyProvider(Protocol):
    """Anything that can present itself as a `BigMoney`.

    `BigMoney`, `FixedMoney` and `Money` all implement it, so they can be mixed in `total`,
    comparisons and arithmetic with a money argument.
    """

    def to_big_money(self) -> BigMoney:
        """Returns the monetary value as `BigMoney` (never loses precision)."""
        ...


# endregion
