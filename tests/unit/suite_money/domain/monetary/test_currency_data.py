from __future__ import annotations

import logging

import pytest

from suite_money.config import MoneySettings
from suite_money.domain.monetary.currency_data import CountryDataRow, CurrencyDataRow, load_currency_data, read_country_rows, read_currency_rows
from suite_money.domain.monetary.currency_registry import CurrencyRegistry
from suite_money.errors import AlreadyRegisteredError
from tests.helpers.test_assistant import TEST_ASSISTANT


def test_read_currency_rows_skips_comments_and_blank_lines():
    lines = [
        "# header",
        "",
        "GBP,826,2",
        "XAU, 959, -1  # gold",
        "BTC,-1,8",
    ]
    assert read_currency_rows(lines) == [
        CurrencyDataRow("GBP", 826, 2),
        CurrencyDataRow("XAU", 959, -1),
        CurrencyDataRow("BTC", -1, 8),
    ]


def test_read_currency_rows_logs_and_skips_malformed(caplog):
    lines = ["GBP,826,2", "gbp,826,2", "EUR,978", "USD,8400,2", "JPY,392,31"]

    with caplog.at_level(logging.WARNING, logger="suite_money.domain.monetary.currency_data"):
        rows = read_currency_rows(lines, "test.csv")

    assert rows == [CurrencyDataRow("GBP", 826, 2)]
    assert len(caplog.records) == 4
    assert "line 2 in 'test.csv'" in caplog.records[0].getMessage()


def test_read_country_rows():
    lines = ["# countries", "GB,GBP", "gb,GBP", "DE,EUR"]
    assert read_country_rows(lines) == [CountryDataRow("GB", "GBP"), CountryDataRow("DE", "EUR")]


def test_load_bundled_data():
    registry = CurrencyRegistry()

    count = load_currency_data(registry, MoneySettings())

    assert count == len(registry)
    assert registry.of("EUR").numeric_code == 978
    assert registry.of_country("DE").code == "EUR"
    assert registry.of_country("US").code == "USD"
    assert registry.of("XAU").is_pseudo_currency
    assert registry.of("BTC").decimal_places == 8


def test_load_extension_files(tmp_path):
    currency_file = TEST_ASSISTANT.currency.write_lines(tmp_path / "currencies.csv", ["# extra", "ZZA,-1,4", "ZZB,-1,0"])
    country_file = TEST_ASSISTANT.currency.write_lines(tmp_path / "countries.csv", ["QZ,ZZA"])
    registry = CurrencyRegistry()

    load_currency_data(registry, MoneySettings(currency_data_extension=currency_file, country_data_extension=country_file))

    assert registry.of("ZZA").decimal_places == 4
    assert registry.of("ZZB").decimal_places == 0
    # Extension rows are merged before registration, so an extra country joins its currency
    assert "QZ" in registry.country_codes_for(registry.of("ZZA"))


def test_load_extension_reassigning_country_fails(tmp_path):
    country_file = TEST_ASSISTANT.currency.write_lines(tmp_path / "countries.csv", ["GB,EUR"])

    with pytest.raises(AlreadyRegisteredError):
        load_currency_data(CurrencyRegistry(), MoneySettings(country_data_extension=country_file))


def test_load_extension_duplicate_currency_fails(tmp_path):
    currency_file = TEST_ASSISTANT.currency.write_lines(tmp_path / "currencies.csv", ["GBP,826,3"])

    with pytest.raises(AlreadyRegisteredError):
        load_currency_data(CurrencyRegistry(), MoneySettings(currency_data_extension=currency_file))


def test_load_missing_extension_file_fails(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_currency_data(CurrencyRegistry(), MoneySettings(currency_data_extension=tmp_path / "missing.csv"))


def test_orphan_countries_are_logged(tmp_path, caplog):
    country_file = TEST_ASSISTANT.currency.write_lines(tmp_path / "countries.csv", ["QY,ZZQ"])

    with caplog.at_level(logging.WARNING, logger="suite_money.domain.monetary.currency_data"):
        load_currency_data(CurrencyRegistry(), MoneySettings(country_data_extension=country_file))

    assert any("ZZQ" in record.getMessage() for record in caplog.records)
