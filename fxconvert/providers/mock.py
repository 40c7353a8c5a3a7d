"""Mock provider implementation for testing and local development."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from .base import BaseRateProvider
from .schemas import RateSnapshot

MOCK_RATES: dict[str, Decimal] = {
    "USD": Decimal("1.0772"),
    "GBP": Decimal("0.8691"),
    "CHF": Decimal("0.9721"),
    "JPY": Decimal("150.12"),
    "CAD": Decimal("1.4655"),
    "AUD": Decimal("1.6402"),
    "CNY": Decimal("7.6651"),
    "SEK": Decimal("11.6521"),
    "NZD": Decimal("1.7810"),
}


class MockRateProvider(BaseRateProvider):
    """Deterministic provider returning synthetic EUR-based FX data."""

    name = "mock"

    def __init__(self, rates: Mapping[str, Decimal] | None = None, base_currency: str = "EUR") -> None:
        self._rates = dict(MOCK_RATES if rates is None else rates)
        self._base_currency = base_currency

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> MockRateProvider:
        return cls()

    def get_latest(self) -> RateSnapshot:
        return RateSnapshot(
            base_currency=self._base_currency,
            source=self.name,
            timestamp=datetime.now(UTC),
            rates=self._rates,
        )
