"""Validation helpers for request payloads."""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from fxconvert.errors import ValidationError
from fxconvert.services.currency_registry import CurrencySymbols
from fxconvert.services.fx_conversion import to_decimal


def _preview_codes(codes: Sequence[str], max_items: int = 10) -> str:
    subset = list(codes)[:max_items]
    preview = ", ".join(subset)
    if len(codes) > max_items:
        preview += ", ..."
    return preview


def validate_currency_code(
    value: str | None, symbols: CurrencySymbols, *, field: str = "currency_code"
) -> str:
    """Ensure the provided currency code exists in the catalog."""

    if value is None or not str(value).strip():
        raise ValidationError(f"'{field}' is required.", payload={"field": field})

    normalized = str(value).strip().upper()
    if not symbols.is_allowed(normalized):
        raise ValidationError(
            f"Unsupported currency code '{normalized}'. Allowed codes: "
            f"{_preview_codes(symbols.symbols)}.",
            payload={"field": field, "code": normalized},
        )

    return normalized


def parse_amount(value: str | int | float | None, *, field: str = "amount") -> Decimal:
    """Parse user-entered amount text into a non-negative Decimal.

    A comma is accepted as the decimal separator when no dot is present.
    """

    if value is None or isinstance(value, bool) or not str(value).strip():
        raise ValidationError(f"'{field}' is required.", payload={"field": field})

    text = str(value).strip()
    if "," in text and "." not in text:
        text = text.replace(",", ".")

    try:
        amount = to_decimal(text)
    except ValueError as exc:
        raise ValidationError(
            f"'{field}' must be a number, got '{value}'.", payload={"field": field}
        ) from exc

    if not amount.is_finite():
        raise ValidationError(f"'{field}' must be a finite number.", payload={"field": field})
    if amount < 0:
        raise ValidationError(f"'{field}' cannot be negative.", payload={"field": field})
    return amount
