"""Loader for the currency and country CSV files used to bootstrap a `CurrencyRegistry`.

File formats (UTF-8, `#` starts a comment, blank lines are ignored):

- currencies: `code,numeric_code,decimal_places` (e.g., `GBP,826,2`)
- countries: `country_code,currency_code` (e.g., `GB,GBP`)
"""

from __future__ import annotations

import csv
import logging
import re
from collections.abc import Iterable
from importlib.resources import files
from pathlib import Path
from typing import TYPE_CHECKING, NamedTuple, TextIO

from suite_money.config import MoneySettings
from suite_money.errors import AlreadyRegisteredError

if TYPE_CHECKING:
    from suite_money.domain.monetary.currency_registry import CurrencyRegistry

logger = logging.getLogger(__name__)

CURRENCY_DATA_FILE = "currency_data.csv"
COUNTRY_DATA_FILE = "country_data.csv"

_CURRENCY_CODE_PATTERN = re.compile(r"[A-Z]{3}")
_COUNTRY_CODE_PATTERN = re.compile(r"[A-Z]{2}")
_NUMERIC_CODE_PATTERN = re.compile(r"-1|[0-9]{1,3}")
_DECIMAL_PLACES_PATTERN = re.compile(r"-1|[0-9]|[12][0-9]|30")


class CurrencyDataRow(NamedTuple):
    """One currency line of a data file."""

    code: str
    numeric_code: int
    decimal_places: int


class CountryDataRow(NamedTuple):
    """One country line of a data file."""

    country_code: str
    currency_code: str


def _data_rows(lines: Iterable[str]) -> Iterable[tuple[int, list[str]]]:
    for line_number, line in enumerate(lines, start=1):
        content = line.split("#", 1)[0].strip()
        if not content:
            continue
        fields = next(csv.reader([content]))
        yield line_number, [field.strip() for field in fields]


def read_currency_rows(lines: Iterable[str], source: str = "<lines>") -> list[CurrencyDataRow]:
    """Parse currency lines; malformed lines are logged and skipped."""
    rows = []
    for line_number, fields in _data_rows(lines):
        if len(fields) != 3 or not _CURRENCY_CODE_PATTERN.fullmatch(fields[0]) or not _NUMERIC_CODE_PATTERN.fullmatch(fields[1]) or not _DECIMAL_PLACES_PATTERN.fullmatch(fields[2]):
            logger.warning(f"Skipped malformed currency line {line_number} in '{source}': {fields}")
            continue
        rows.append(CurrencyDataRow(fields[0], int(fields[1]), int(fields[2])))
    return rows


def read_country_rows(lines: Iterable[str], source: str = "<lines>") -> list[CountryDataRow]:
    """Parse country lines; malformed lines are logged and skipped."""
    rows = []
    for line_number, fields in _data_rows(lines):
        if len(fields) != 2 or not _COUNTRY_CODE_PATTERN.fullmatch(fields[0]) or not _CURRENCY_CODE_PATTERN.fullmatch(fields[1]):
            logger.warning(f"Skipped malformed country line {line_number} in '{source}': {fields}")
            continue
        rows.append(CountryDataRow(fields[0], fields[1]))
    return rows


def _open_bundled(file_name: str) -> TextIO:
    return (files("suite_money") / "data" / file_name).open("r", encoding="utf-8")


def _open_extension(path: Path) -> TextIO:
    return path.open("r", encoding="utf-8")


def load_currency_data(registry: CurrencyRegistry, settings: MoneySettings) -> int:
    """Register the bundled currencies, plus configured extension files, into $registry.

    Country rows are grouped by currency first, so every currency is registered exactly once
    together with all of its countries.

    Args:
        registry: Registry to populate.
        settings: Extension file configuration.

    Returns:
        Number of currencies registered.

    Raises:
        FileNotFoundError: If a bundled file, or a configured extension file, does not exist.
        AlreadyRegisteredError: If the data assigns a code, numeric code or country twice.
    """
    with _open_bundled(CURRENCY_DATA_FILE) as f:
        currency_rows = read_currency_rows(f, CURRENCY_DATA_FILE)
    with _open_bundled(COUNTRY_DATA_FILE) as f:
        country_rows = read_country_rows(f, COUNTRY_DATA_FILE)

    if settings.currency_data_extension is not None:
        with _open_extension(settings.currency_data_extension) as f:
            currency_rows += read_currency_rows(f, str(settings.currency_data_extension))
    if settings.country_data_extension is not None:
        with _open_extension(settings.country_data_extension) as f:
            country_rows += read_country_rows(f, str(settings.country_data_extension))

    countries_by_currency: dict[str, list[str]] = {}
    currency_by_country: dict[str, str] = {}
    for row in country_rows:
        # Raise: a country maps to at most one currency, also across bundled and extension files
        existing = currency_by_country.get(row.country_code)
        if existing is not None:
            raise AlreadyRegisteredError(f"Country '{row.country_code}' is assigned to both '{existing}' and '{row.currency_code}'")
        currency_by_country[row.country_code] = row.currency_code
        countries_by_currency.setdefault(row.currency_code, []).append(row.country_code)

    for row in currency_rows:
        registry.register(row.code, row.numeric_code, row.decimal_places, countries_by_currency.pop(row.code, []))

    for currency_code, country_codes in countries_by_currency.items():
        logger.warning(f"Skipped countries {country_codes} because currency '{currency_code}' is not in the currency data")

    logger.info(f"Loaded {len(currency_rows)} currency row(s) and {len(country_rows)} country row(s); registry is now {registry!r}")
    return len(currency_rows)
