from __future__ import annotations

from decimal import Decimal

import pytest

from fxconvert.errors import ValidationError
from fxconvert.services.currency_registry import CurrencySymbols
from fxconvert.validation import parse_amount, validate_currency_code


@pytest.fixture()
def symbols():
    return CurrencySymbols(("EUR", "USD"))


def test_validate_currency_accepts_catalog_code(symbols):
    assert validate_currency_code(" usd ", symbols, field="from") == "USD"


def test_validate_currency_rejects_unknown_code(symbols):
    with pytest.raises(ValidationError) as exc_info:
        validate_currency_code("xyz", symbols, field="to")

    error = exc_info.value
    assert error.status_code == 422
    assert error.payload == {"field": "to", "code": "XYZ"}
    assert "Unsupported currency code" in error.message
    assert "EUR, USD" in error.message


def test_validate_currency_requires_value(symbols):
    with pytest.raises(ValidationError) as exc_info:
        validate_currency_code(None, symbols, field="from")

    assert "is required" in exc_info.value.message


@pytest.mark.parametrize(
    ("text", "expected"),
    [("10", Decimal("10")), (" 2.50 ", Decimal("2.50")), ("3,75", Decimal("3.75")), (0, Decimal("0"))],
)
def test_parse_amount_accepts_numbers(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "  ", None, "abc", "1,000.5", "-1", "inf", "NaN"])
def test_parse_amount_rejects_invalid_input(text):
    with pytest.raises(ValidationError) as exc_info:
        parse_amount(text)

    assert exc_info.value.payload["field"] == "amount"
