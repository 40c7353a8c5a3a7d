"""Rate snapshot converter and shared Decimal helpers for FX conversions."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation, getcontext, localcontext
from types import MappingProxyType

ROUNDING_PRECISION = 28


def get_decimal_context():
    """Return the shared Decimal context used across FX conversions."""

    context = getcontext().copy()
    context.prec = ROUNDING_PRECISION
    context.rounding = ROUND_HALF_EVEN
    return context


def normalize_currency(code: str) -> str:
    """Normalize a currency code to canonical uppercase form."""

    if not code or not str(code).strip():
        raise ValueError("Currency code cannot be blank.")
    normalized = str(code).strip().upper()
    if not normalized.isascii():
        raise ValueError(f"Currency code must be ASCII: {code!r}")
    return normalized


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """Convert input into a Decimal using the shared context."""

    context = get_decimal_context()
    with localcontext(context):
        try:
            return Decimal(str(value))
        except InvalidOperation as exc:
            raise ValueError(f"Invalid numeric value: {value!r}") from exc


class MissingRateError(ValueError):
    """Raised when a conversion involves a currency absent from the snapshot."""

    def __init__(self, code: str) -> None:
        super().__init__(f"No exchange rate available for '{code}'.")
        self.code = code


@dataclass(frozen=True)
class CurrencyConverter:
    """Immutable rate snapshot able to convert amounts between two currencies.

    Rates are expressed against `base_currency`, whose own rate is always 1.
    """

    base_currency: str
    rates: Mapping[str, Decimal] = field(default_factory=dict)
    timestamp: datetime | None = None

    def __post_init__(self) -> None:
        base = normalize_currency(self.base_currency)
        normalized: dict[str, Decimal] = {}
        for code, value in self.rates.items():
            rate = to_decimal(value)
            if not rate.is_finite() or rate <= 0:
                raise ValueError(f"Rate for {code} must be a positive number, got {value!r}.")
            normalized[normalize_currency(code)] = rate
        normalized[base] = Decimal("1")

        object.__setattr__(self, "base_currency", base)
        object.__setattr__(self, "rates", MappingProxyType(normalized))

    @classmethod
    def from_snapshot(cls, snapshot) -> CurrencyConverter:
        return cls(
            base_currency=snapshot.base_currency,
            rates=snapshot.rates,
            timestamp=snapshot.timestamp,
        )

    @property
    def currencies(self) -> frozenset[str]:
        return frozenset(self.rates)

    def rate_for(self, code: str) -> Decimal:
        """Return the rate for `code` against the base currency."""

        normalized = normalize_currency(code)
        try:
            return self.rates[normalized]
        except KeyError as exc:
            raise MissingRateError(normalized) from exc

    def convert(
        self,
        from_code: str,
        to_code: str,
        amount: Decimal | int | float | str,
    ) -> Decimal:
        """Convert `amount` expressed in `from_code` into `to_code`.

        Raises:
            MissingRateError: If either currency is absent from the snapshot.
            ValueError: If the amount is negative or not a finite number.
        """

        from_rate = self.rate_for(from_code)
        to_rate = self.rate_for(to_code)

        context = get_decimal_context()
        with localcontext(context):
            amount_dec = to_decimal(amount)
            if not amount_dec.is_finite():
                raise ValueError(f"Amount must be a finite number, got {amount!r}.")
            if amount_dec < 0:
                raise ValueError(f"Amount cannot be negative, got {amount!r}.")
            return amount_dec * (to_rate / from_rate)
