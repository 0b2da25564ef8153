from __future__ import annotations

import re

from suite_money.errors import InvalidArgumentError

MIN_NUMERIC_CODE = -1
MAX_NUMERIC_CODE = 999
MIN_DECIMAL_PLACES = -1
MAX_DECIMAL_PLACES = 30

CURRENCY_CODE_PATTERN = re.compile(r"[A-Z]{3}")


class CurrencyUnit:
    """Represents a currency registered in a `CurrencyRegistry`.

    Instances are created by the registry and never mutated. Two units are equal when
    their codes are equal; ordering is lexicographic by code.

    Attributes:
        code (str): Three-letter ISO-4217 style code (e.g., "GBP", "JPY").
        numeric_code (int): Numeric code 0-999, or -1 when the currency has none.
        decimal_places (int): Decimal places used for arithmetic (0-30); pseudo-currencies report 0.
    """

    __slots__ = ("_code", "_numeric_code", "_decimal_places")

    def __init__(self, code: str, numeric_code: int, decimal_places: int) -> None:
        """Initialize a CurrencyUnit.

        Use `CurrencyRegistry.register` to obtain units; a unit created directly is not
        known to any registry, so code lookups (e.g. unpickling) cannot find it.

        Args:
            code: Three-letter upper-case code.
            numeric_code: Numeric code (0-999) or -1.
            decimal_places: Decimal places (0-30) or -1 for a pseudo-currency.

        Raises:
            InvalidArgumentError: If any argument is out of range or malformed.
        """
        # Raise: code is exactly three upper-case ASCII letters
        if not isinstance(code, str) or not CURRENCY_CODE_PATTERN.fullmatch(code):
            raise InvalidArgumentError(f"Cannot create CurrencyUnit because $code must be 3 upper-case ASCII letters, but provided value is: {code!r}")

        # Raise: numeric code and decimal places are ints in range
        if not isinstance(numeric_code, int) or isinstance(numeric_code, bool) or not MIN_NUMERIC_CODE <= numeric_code <= MAX_NUMERIC_CODE:
            raise InvalidArgumentError(f"Cannot create CurrencyUnit because $numeric_code must be an int between {MIN_NUMERIC_CODE} and {MAX_NUMERIC_CODE}, but provided value is: {numeric_code!r}")
        if not isinstance(decimal_places, int) or isinstance(decimal_places, bool) or not MIN_DECIMAL_PLACES <= decimal_places <= MAX_DECIMAL_PLACES:
            raise InvalidArgumentError(f"Cannot create CurrencyUnit because $decimal_places must be an int between {MIN_DECIMAL_PLACES} and {MAX_DECIMAL_PLACES}, but provided value is: {decimal_places!r}")

        self._code = code
        self._numeric_code = numeric_code
        self._decimal_places = decimal_places

    @property
    def code(self) -> str:
        """Get the three-letter currency code."""
        return self._code

    @property
    def numeric_code(self) -> int:
        """Get the numeric currency code, or -1 if there is none."""
        return self._numeric_code

    @property
    def numeric_3_code(self) -> str:
        """Get the numeric code zero-padded to three digits (e.g., "008"), or "" if there is none."""
        if self._numeric_code < 0:
            return ""
        return f"{self._numeric_code:03d}"

    @property
    def decimal_places(self) -> int:
        """Get the decimal places used for arithmetic; pseudo-currencies report 0."""
        return max(self._decimal_places, 0)

    @property
    def default_fraction_digits(self) -> int:
        """Get the registered decimal places, including -1 for pseudo-currencies."""
        return self._decimal_places

    @property
    def is_pseudo_currency(self) -> bool:
        """Check if the currency has no defined decimal places (e.g., "XDR", "XXX")."""
        return self._decimal_places < 0

    # region Comparison

    def __eq__(self, other) -> bool:
        """Check equality with another CurrencyUnit."""
        if not isinstance(other, CurrencyUnit):
            return False
        return self._code == other._code

    def __hash__(self) -> int:
        """Hash based on currency code."""
        return hash(self._code)

    def __lt__(self, other) -> bool:
        if not isinstance(other, CurrencyUnit):
            return NotImplemented
        return self._code < other._code

    def __le__(self, other) -> bool:
        if not isinstance(other, CurrencyUnit):
            return NotImplemented
        return self._code <= other._code

    def __gt__(self, other) -> bool:
        if not isinstance(other, CurrencyUnit):
            return NotImplemented
        return self._code > other._code

    def __ge__(self, other) -> bool:
        if not isinstance(other, CurrencyUnit):
            return NotImplemented
        return self._code >= other._code

    # endregion

    # region Pickling

    def __reduce__(self):
        # Units resolve against the default registry on load, so metadata is always current
        return _resolve_currency_code, (self._code,)

    # endregion

    def __str__(self) -> str:
        """Return the currency code."""
        return self._code

    def __repr__(self) -> str:
        """Return detailed string representation."""
        return f"{self.__class__.__name__}('{self._code}', {self._numeric_code}, {self._decimal_places})"


def _resolve_currency_code(code: str) -> CurrencyUnit:
    from suite_money.domain.monetary.currency_registry import default_registry

    return default_registry().of(code)
