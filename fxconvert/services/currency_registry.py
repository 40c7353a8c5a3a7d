"""Ordered catalog of supported currency codes and picker index helpers."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

DEFAULT_SYMBOLS: tuple[str, ...] = (
    "EUR",
    "USD",
    "GBP",
    "CHF",
    "JPY",
    "CAD",
    "AUD",
    "CNY",
    "SEK",
    "NZD",
)

SOURCE = "source"
TARGET = "target"


def _normalize(code: str | None) -> str | None:
    if code is None:
        return None
    normalized = str(code).strip().upper()
    if not normalized or not normalized.isascii():
        return None
    return normalized


@dataclass(frozen=True)
class CurrencySymbols:
    """Fixed, ordered set of currency codes used to back currency pickers."""

    symbols: tuple[str, ...] = DEFAULT_SYMBOLS

    def __post_init__(self) -> None:
        normalized: list[str] = []
        for code in self.symbols:
            value = _normalize(code)
            if value is None:
                raise ValueError(f"Invalid currency code in catalog: {code!r}")
            normalized.append(value)

        if not normalized:
            raise ValueError("Currency catalog cannot be empty.")

        seen: set[str] = set()
        duplicates: list[str] = []
        for code in normalized:
            if code in seen:
                duplicates.append(code)
            seen.add(code)
        if duplicates:
            raise ValueError(f"Currency catalog contains duplicates: {', '.join(duplicates)}")

        object.__setattr__(self, "symbols", tuple(normalized))

    @classmethod
    def from_config(cls, value: str | Iterable[str] | None) -> CurrencySymbols:
        """Build a catalog from a comma-separated string or an iterable of codes."""

        if value is None:
            return cls()
        if isinstance(value, str):
            codes = [part for part in value.split(",") if part.strip()]
        else:
            codes = list(value)
        return cls(tuple(codes))

    def __len__(self) -> int:
        return len(self.symbols)

    def __iter__(self) -> Iterator[str]:
        return iter(self.symbols)

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and self.is_allowed(code)

    def is_allowed(self, code: str | None) -> bool:
        return self.index_of(code) is not None

    def index_of(self, code: str | None) -> int | None:
        """Return the catalog position of `code`, or None if it is not listed."""

        normalized = _normalize(code)
        if normalized is None:
            return None
        try:
            return self.symbols.index(normalized)
        except ValueError:
            return None

    def next_index(self, after: int) -> int:
        """Return the index following `after`, wrapping around to the start."""

        return (after + 1) % len(self.symbols)

    def symbol_at(self, index: int) -> str:
        self._check_index(index)
        return self.symbols[index]

    def resolve_selection(self, source_index: int, target_index: int, changed: str) -> tuple[int, int]:
        """Apply the picker collision rule after one picker changed row.

        When the picker that changed lands on the row selected by the other
        picker, the changed picker moves on to the next row so the two never
        resolve to the same currency.
        """

        self._check_index(source_index)
        self._check_index(target_index)

        side = str(changed).strip().lower()
        if side not in {SOURCE, TARGET}:
            raise ValueError(f"Invalid picker '{changed}'. Expected '{SOURCE}' or '{TARGET}'.")

        if source_index != target_index:
            return source_index, target_index
        if side == SOURCE:
            return self.next_index(source_index), target_index
        return source_index, self.next_index(target_index)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.symbols):
            raise IndexError(f"Index {index} is outside the catalog (size {len(self.symbols)}).")


def init_symbols(app) -> CurrencySymbols:
    """Build the catalog from configuration and attach it to the Flask app."""

    symbols = CurrencySymbols.from_config(app.config.get("SUPPORTED_CURRENCIES"))
    app.extensions["currency_symbols"] = symbols
    return symbols
