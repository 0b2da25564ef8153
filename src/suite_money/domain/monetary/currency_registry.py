from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from threading import Lock

from bidict import DuplicationError, bidict, frozenbidict

from suite_money.config import MoneySettings
from suite_money.domain.monetary.currency import (
    CURRENCY_CODE_PATTERN,
    MAX_DECIMAL_PLACES,
    MAX_NUMERIC_CODE,
    MIN_DECIMAL_PLACES,
    MIN_NUMERIC_CODE,
    CurrencyUnit,
)
from suite_money.domain.monetary.currency_data import load_currency_data
from suite_money.errors import AlreadyRegisteredError, InvalidArgumentError, NullValueError, UnknownCurrencyError

logger = logging.getLogger(__name__)

_COUNTRY_CODE_PATTERN = re.compile(r"[A-Z]{2}")
_NUMERIC_CODE_PATTERN = re.compile(r"[0-9]{1,3}")
_LOCALE_PART_SEPARATOR = re.compile(r"[_-]")


@dataclass(frozen=True)
class _RegistrySnapshot:
    """All registry indexes at one point in time. Never mutated; replaced as a whole."""

    currencies_by_code: Mapping[str, CurrencyUnit]
    codes_by_numeric_code: frozenbidict[int, str]
    currencies_by_country: Mapping[str, CurrencyUnit]


_EMPTY_SNAPSHOT = _RegistrySnapshot({}, frozenbidict(), {})


class CurrencyRegistry:
    """Single source of truth mapping currency codes, numeric codes and countries to `CurrencyUnit`.

    The registry is append-only: a code, numeric code or country can be registered once and
    never removed or replaced. Registrations are serialized by a lock and published by swapping
    one immutable snapshot, so lookups never lock and never observe a half-applied registration.

    Use `CurrencyRegistry.bundled()` for a registry loaded with the bundled dataset, or
    `default_registry()` for the process-wide instance.
    """

    def __init__(self) -> None:
        self._snapshot = _EMPTY_SNAPSHOT
        self._lock = Lock()

    @classmethod
    def bundled(cls, settings: MoneySettings | None = None) -> CurrencyRegistry:
        """Create a registry loaded with the bundled dataset and any configured extension files.

        Args:
            settings: Extension file configuration. If None, only the bundled files are loaded.

        Returns:
            New, independent CurrencyRegistry.
        """
        registry = cls()
        load_currency_data(registry, settings if settings is not None else MoneySettings())
        return registry

    # region Registration

    def register(
        self,
        code: str,
        numeric_code: int,
        decimal_places: int,
        country_codes: Iterable[str] = (),
    ) -> CurrencyUnit:
        """Register a new currency together with the countries that use it.

        Either every index is updated or none is.

        Args:
            code: Three upper-case ASCII letters (e.g., "GBP").
            numeric_code: Numeric code 0-999, or -1 if the currency has none.
            decimal_places: Decimal places 0-30, or -1 for a pseudo-currency.
            country_codes: Two-letter upper-case country codes using this currency.

        Returns:
            The registered CurrencyUnit.

        Raises:
            InvalidArgumentError: If any argument is malformed.
            AlreadyRegisteredError: If the code, numeric code or a country is already registered.
        """
        countries = self._validate_registration(code, numeric_code, decimal_places, country_codes)

        with self._lock:
            snapshot = self._snapshot

            # Raise: codes are never overwritten
            if code in snapshot.currencies_by_code:
                raise AlreadyRegisteredError(f"Cannot call `register` because currency $code '{code}' is already registered")

            codes_by_numeric_code = bidict(snapshot.codes_by_numeric_code)
            if numeric_code >= 0:
                try:
                    codes_by_numeric_code.put(numeric_code, code)
                except DuplicationError as e:
                    existing_code = snapshot.codes_by_numeric_code.get(numeric_code)
                    raise AlreadyRegisteredError(f"Cannot call `register` because $numeric_code {numeric_code} is already registered for currency '{existing_code}'") from e

            # Raise: a country maps to at most one currency
            for country_code in countries:
                existing = snapshot.currencies_by_country.get(country_code)
                if existing is not None:
                    raise AlreadyRegisteredError(f"Cannot call `register` because country '{country_code}' is already registered for currency '{existing.code}'")

            currency = CurrencyUnit(code, numeric_code, decimal_places)
            currencies_by_country = dict(snapshot.currencies_by_country)
            for country_code in countries:
                currencies_by_country[country_code] = currency

            self._snapshot = _RegistrySnapshot(
                currencies_by_code={**snapshot.currencies_by_code, code: currency},
                codes_by_numeric_code=frozenbidict(codes_by_numeric_code),
                currencies_by_country=currencies_by_country,
            )

        logger.debug(f"Registered currency '{code}' (numeric {numeric_code}, decimal places {decimal_places}) for {len(countries)} country(ies)")
        return currency

    @staticmethod
    def _validate_registration(code, numeric_code, decimal_places, country_codes) -> list[str]:
        # Raise: $code must be exactly three upper-case ASCII letters
        if not isinstance(code, str) or not CURRENCY_CODE_PATTERN.fullmatch(code):
            raise InvalidArgumentError(f"Cannot call `register` because $code must be 3 upper-case ASCII letters, but provided value is: {code!r}")

        # Raise: $numeric_code must be an int in range
        if not isinstance(numeric_code, int) or isinstance(numeric_code, bool) or not MIN_NUMERIC_CODE <= numeric_code <= MAX_NUMERIC_CODE:
            raise InvalidArgumentError(f"Cannot call `register` because $numeric_code must be an int between {MIN_NUMERIC_CODE} and {MAX_NUMERIC_CODE}, but provided value is: {numeric_code!r}")

        # Raise: $decimal_places must be an int in range
        if not isinstance(decimal_places, int) or isinstance(decimal_places, bool) or not MIN_DECIMAL_PLACES <= decimal_places <= MAX_DECIMAL_PLACES:
            raise InvalidArgumentError(f"Cannot call `register` because $decimal_places must be an int between {MIN_DECIMAL_PLACES} and {MAX_DECIMAL_PLACES}, but provided value is: {decimal_places!r}")

        # Raise: $country_codes must be provided (may be empty)
        if country_codes is None or isinstance(country_codes, str):
            raise InvalidArgumentError(f"Cannot call `register` because $country_codes must be an iterable of country codes, but provided value is: {country_codes!r}")

        countries = list(country_codes)
        for country_code in countries:
            # Raise: every country code must be two upper-case ASCII letters
            if not isinstance(country_code, str) or not _COUNTRY_CODE_PATTERN.fullmatch(country_code):
                raise InvalidArgumentError(f"Cannot call `register` because $country_codes contains an invalid country code: {country_code!r}")

        # Raise: the same country cannot be listed twice
        if len(set(countries)) != len(countries):
            raise AlreadyRegisteredError(f"Cannot call `register` because $country_codes contains duplicates: {countries}")

        return countries

    # endregion

    # region Lookup

    def of(self, code: str) -> CurrencyUnit:
        """Get the currency registered under $code.

        Raises:
            NullValueError: If $code is None.
            UnknownCurrencyError: If $code is malformed or not registered.
        """
        # Raise: lookup key is mandatory
        if code is None:
            raise NullValueError("Currency code must not be None")

        # Raise: anything other than 3 upper-case letters is simply unknown
        if not isinstance(code, str) or not CURRENCY_CODE_PATTERN.fullmatch(code):
            raise UnknownCurrencyError(f"Unknown currency '{code}'", code)

        currency = self._snapshot.currencies_by_code.get(code)
        if currency is None:
            raise UnknownCurrencyError(f"Unknown currency '{code}'", code)
        return currency

    def of_numeric_code(self, numeric_code: int | str) -> CurrencyUnit:
        """Get the currency registered under $numeric_code.

        Args:
            numeric_code: Integer 0-999, or a string of one to three digits ("8", "08", "008").

        Raises:
            NullValueError: If $numeric_code is None.
            UnknownCurrencyError: If $numeric_code is malformed, out of range or not registered.
        """
        # Raise: lookup key is mandatory
        if numeric_code is None:
            raise NullValueError("Numeric currency code must not be None")

        if isinstance(numeric_code, str):
            if not _NUMERIC_CODE_PATTERN.fullmatch(numeric_code):
                raise UnknownCurrencyError(f"Unknown currency for numeric code '{numeric_code}'", numeric_code)
            numeric_value = int(numeric_code)
        elif isinstance(numeric_code, int) and not isinstance(numeric_code, bool):
            numeric_value = numeric_code
        else:
            raise UnknownCurrencyError(f"Unknown currency for numeric code {numeric_code!r}", numeric_code)

        code = self._snapshot.codes_by_numeric_code.get(numeric_value)
        if code is None:
            raise UnknownCurrencyError(f"Unknown currency for numeric code {numeric_code!r}", numeric_code)
        return self._snapshot.currencies_by_code[code]

    def of_country(self, country_code: str) -> CurrencyUnit:
        """Get the currency used by $country_code (e.g., "GB" -> GBP).

        Raises:
            NullValueError: If $country_code is None.
            UnknownCurrencyError: If no currency is registered for the country.
        """
        # Raise: lookup key is mandatory
        if country_code is None:
            raise NullValueError("Country code must not be None")

        currency = self._snapshot.currencies_by_country.get(country_code) if isinstance(country_code, str) else None
        if currency is None:
            raise UnknownCurrencyError(f"Unknown currency for country '{country_code}'", country_code)
        return currency

    def of_locale(self, locale: str) -> CurrencyUnit:
        """Get the currency of the country named by $locale (e.g., "en_GB", "de-DE", "fr_FR.UTF-8").

        Raises:
            NullValueError: If $locale is None.
            UnknownCurrencyError: If the locale has no country or no currency is registered for it.
        """
        # Raise: lookup key is mandatory
        if locale is None:
            raise NullValueError("Locale must not be None")

        country_code = _country_from_locale(locale) if isinstance(locale, str) else None
        if country_code is None:
            raise UnknownCurrencyError(f"Unknown currency for locale '{locale}'", locale)

        currency = self._snapshot.currencies_by_country.get(country_code)
        if currency is None:
            raise UnknownCurrencyError(f"Unknown currency for locale '{locale}'", locale)
        return currency

    def numeric_code_of(self, code: str) -> int:
        """Get the numeric code currently registered for currency $code, or -1 if it has none.

        Raises:
            UnknownCurrencyError: If $code is not registered.
        """
        currency = self.of(code)
        return self._snapshot.codes_by_numeric_code.inverse.get(currency.code, -1)

    def registered_currencies(self) -> list[CurrencyUnit]:
        """Get all registered currencies sorted by code."""
        return sorted(self._snapshot.currencies_by_code.values())

    def registered_countries(self) -> list[str]:
        """Get all country codes that have a currency, sorted."""
        return sorted(self._snapshot.currencies_by_country)

    def country_codes_for(self, currency: CurrencyUnit) -> list[str]:
        """Get the sorted country codes that use $currency."""
        return sorted(country for country, registered in self._snapshot.currencies_by_country.items() if registered == currency)

    def __contains__(self, code: object) -> bool:
        return code in self._snapshot.currencies_by_code

    def __len__(self) -> int:
        return len(self._snapshot.currencies_by_code)

    # endregion

    def __repr__(self) -> str:
        snapshot = self._snapshot
        return f"{self.__class__.__name__}({len(snapshot.currencies_by_code)} currencies, {len(snapshot.currencies_by_country)} countries)"


def _country_from_locale(locale: str) -> str | None:
    # Drop encoding and modifier ("sr_RS.UTF-8@latin"), then take the first two-letter region after the language
    base = locale.split(".", 1)[0].split("@", 1)[0]
    for part in _LOCALE_PART_SEPARATOR.split(base)[1:]:
        if len(part) == 2 and part.isascii() and part.isalpha():
            return part.upper()
    return None


# region Process-wide registry

_default_registry: CurrencyRegistry | None = None
_default_registry_lock = Lock()


def default_registry() -> CurrencyRegistry:
    """Get the process-wide registry, loading it on first use.

    The registry is loaded from the bundled dataset plus the extension files configured in the
    environment (see `MoneySettings.from_env`). Loading happens once, even under concurrent first use.
    """
    global _default_registry
    registry = _default_registry
    if registry is None:
        with _default_registry_lock:
            if _default_registry is None:
                _default_registry = CurrencyRegistry.bundled(MoneySettings.from_env())
                logger.info(f"Initialized default {_default_registry!r}")
            registry = _default_registry
    return registry


def resolve_currency(currency: CurrencyUnit | str, registry: CurrencyRegistry | None = None) -> CurrencyUnit:
    """Return $currency as CurrencyUnit, looking up string codes in $registry (default registry if None).

    Raises:
        NullValueError: If $currency is None.
        UnknownCurrencyError: If a string code is not registered.
        TypeError: If $currency is neither CurrencyUnit nor str.
    """
    # Raise: currency is mandatory on every money value
    if currency is None:
        raise NullValueError("Currency must not be None")

    if isinstance(currency, CurrencyUnit):
        return currency

    if isinstance(currency, str):
        return (registry if registry is not None else default_registry()).of(currency)

    raise TypeError(f"$currency must be a CurrencyUnit or a currency code, but provided value is: {currency!r} (type '{type(currency).__name__}')")


# endregion
