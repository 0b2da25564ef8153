from __future__ import annotations

import os
from pathlib import Path

from suite_money.config import COUNTRY_DATA_EXTENSION_ENV, CURRENCY_DATA_EXTENSION_ENV, MoneySettings


def test_defaults_without_configuration(tmp_path):
    settings = MoneySettings.from_env(dotenv_path=tmp_path / "missing.env", environ={})

    assert settings == MoneySettings()
    assert settings.currency_data_extension is None
    assert settings.country_data_extension is None


def test_reads_environment(tmp_path):
    settings = MoneySettings.from_env(
        dotenv_path=tmp_path / "missing.env",
        environ={CURRENCY_DATA_EXTENSION_ENV: "/data/currencies.csv", COUNTRY_DATA_EXTENSION_ENV: "  "},
    )

    assert settings.currency_data_extension == Path("/data/currencies.csv")
    assert settings.country_data_extension is None


def test_reads_dotenv_file_and_environment_wins(tmp_path):
    dotenv_file = tmp_path / ".env"
    dotenv_file.write_text(
        f"{CURRENCY_DATA_EXTENSION_ENV}=/from/dotenv/currencies.csv\n{COUNTRY_DATA_EXTENSION_ENV}=/from/dotenv/countries.csv\n",
        encoding="utf-8",
    )

    settings = MoneySettings.from_env(dotenv_path=dotenv_file, environ={CURRENCY_DATA_EXTENSION_ENV: "/from/env/currencies.csv"})

    assert settings.currency_data_extension == Path("/from/env/currencies.csv")
    assert settings.country_data_extension == Path("/from/dotenv/countries.csv")


def test_does_not_modify_process_environment(tmp_path, monkeypatch):
    monkeypatch.delenv(CURRENCY_DATA_EXTENSION_ENV, raising=False)
    dotenv_file = tmp_path / ".env"
    dotenv_file.write_text(f"{CURRENCY_DATA_EXTENSION_ENV}=/from/dotenv/currencies.csv\n", encoding="utf-8")

    MoneySettings.from_env(dotenv_path=dotenv_file)

    assert CURRENCY_DATA_EXTENSION_ENV not in os.environ


def test_uses_process_environment_by_default(tmp_path, monkeypatch):
    monkeypatch.setenv(COUNTRY_DATA_EXTENSION_ENV, "/from/os/countries.csv")

    settings = MoneySettings.from_env(dotenv_path=tmp_path / "missing.env")

    assert settings.country_data_extension == Path("/from/os/countries.csv")
