from __future__ import annotations

from decimal import Decimal

import pytest

from fxconvert.services.money import MoneyFormatter


@pytest.fixture()
def formatter():
    return MoneyFormatter()


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (Decimal("11.0"), "11.00"),
        (Decimal("1234567.891"), "1,234,567.89"),
        (Decimal("0.005"), "0.01"),
        (0, "0.00"),
        (2.5, "2.50"),
        ("19.999", "20.00"),
    ],
)
def test_format_uses_fixed_precision(formatter, value, expected):
    assert formatter.format(value) == expected


@pytest.mark.parametrize("value", [None, float("nan"), Decimal("Infinity"), "abc", True])
def test_format_returns_placeholder_for_non_numbers(formatter, value):
    assert formatter.format(value) == "-"


def test_format_drops_negative_zero(formatter):
    assert formatter.format(Decimal("-0.001")) == "0.00"


def test_format_with_custom_separators():
    formatter = MoneyFormatter(decimal_places=3, decimal_separator=",", group_separator=" ")
    assert formatter.format(Decimal("1234.5")) == "1 234,500"


def test_format_with_zero_decimal_places():
    assert MoneyFormatter(decimal_places=0).format(Decimal("149.5")) == "150"


def test_from_config_reads_money_settings():
    formatter = MoneyFormatter.from_config(
        {
            "MONEY_DECIMAL_PLACES": "1",
            "MONEY_DECIMAL_SEPARATOR": ",",
            "MONEY_GROUP_SEPARATOR": ".",
            "MONEY_PLACEHOLDER": "n/a",
        }
    )
    assert formatter.format(Decimal("1234.56")) == "1.234,6"
    assert formatter.format(None) == "n/a"


def test_formatter_rejects_identical_separators():
    with pytest.raises(ValueError):
        MoneyFormatter(decimal_separator=".", group_separator=".")


def test_format_keeps_values_wider_than_decimal_precision(formatter):
    assert formatter.format(Decimal("1e27")) == "1" + ",000" * 9 + ".00"
    assert formatter.format(Decimal("123456789012345678901234567890.125")) == (
        "123,456,789,012,345,678,901,234,567,890.13"
    )
