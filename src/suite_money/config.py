from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import dotenv_values, find_dotenv

CURRENCY_DATA_EXTENSION_ENV = "SUITE_MONEY_CURRENCY_DATA_EXTENSION"
COUNTRY_DATA_EXTENSION_ENV = "SUITE_MONEY_COUNTRY_DATA_EXTENSION"


@dataclass(frozen=True)
class MoneySettings:
    """Configuration used when the currency registry is bootstrapped.

    Attributes:
        currency_data_extension: Optional CSV file with extra currencies (`code,numeric_code,decimal_places`).
        country_data_extension: Optional CSV file with extra countries (`country_code,currency_code`).
    """

    currency_data_extension: Path | None = None
    country_data_extension: Path | None = None

    @classmethod
    def from_env(cls, dotenv_path: str | os.PathLike | None = None, environ: Mapping[str, str] | None = None) -> MoneySettings:
        """Read settings from a `.env` file and the process environment.

        Environment variables win over values from the `.env` file. The environment is not modified.

        Args:
            dotenv_path: Path to a `.env` file. If None, the nearest `.env` from the current working
                directory upwards is used (if any).
            environ: Environment mapping to read. If None, `os.environ` is used.

        Returns:
            MoneySettings built from the merged values.
        """
        if dotenv_path is None:
            dotenv_path = find_dotenv(usecwd=True)

        values = {**dotenv_values(dotenv_path), **(os.environ if environ is None else environ)}
        return cls(
            currency_data_extension=_optional_path(values.get(CURRENCY_DATA_EXTENSION_ENV)),
            country_data_extension=_optional_path(values.get(COUNTRY_DATA_EXTENSION_ENV)),
        )


def _optional_path(value: str | None) -> Path | None:
    if value is None or not value.strip():
        return None
    return Path(value.strip())
