"""Display formatting for converted amounts."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any

from .fx_conversion import get_decimal_context, to_decimal


@dataclass(frozen=True)
class MoneyFormatter:
    """Render amounts with fixed precision and configurable separators."""

    decimal_places: int = 2
    decimal_separator: str = "."
    group_separator: str = ","
    placeholder: str = "-"

    def __post_init__(self) -> None:
        if self.decimal_places < 0:
            raise ValueError("decimal_places cannot be negative.")
        if self.decimal_separator == self.group_separator:
            raise ValueError("Decimal and group separators must differ.")

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> MoneyFormatter:
        return cls(
            decimal_places=int(config.get("MONEY_DECIMAL_PLACES", 2)),
            decimal_separator=str(config.get("MONEY_DECIMAL_SEPARATOR", ".")),
            group_separator=str(config.get("MONEY_GROUP_SEPARATOR", ",")),
            placeholder=str(config.get("MONEY_PLACEHOLDER", "-")),
        )

    def format(self, value: Decimal | int | float | str | None) -> str:
        """Return `value` as a display string, or the placeholder if it is not a number."""

        if value is None or isinstance(value, bool):
            return self.placeholder
        try:
            amount = to_decimal(value)
        except ValueError:
            return self.placeholder
        if not amount.is_finite():
            return self.placeholder

        exponent = Decimal(1).scaleb(-self.decimal_places)
        context = get_decimal_context()
        # quantize needs room for every integer digit plus the fraction.
        context.prec = max(context.prec, amount.adjusted() + self.decimal_places + 2)
        with localcontext(context):
            quantized = amount.quantize(exponent, rounding=ROUND_HALF_UP)
        if quantized.is_zero():
            quantized = abs(quantized)

        rendered = f"{quantized:,.{self.decimal_places}f}"
        return "".join(self._swap_separator(char) for char in rendered)

    def _swap_separator(self, char: str) -> str:
        if char == ",":
            return self.group_separator
        if char == ".":
            return self.decimal_separator
        return char
