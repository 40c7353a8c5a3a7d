"""Service layer modules."""

from __future__ import annotations

from .converter_slot import ConverterSlot, SlotState
from .currency_registry import CurrencySymbols, init_symbols
from .currency_service import (
    CurrencyService,
    CurrencyServiceError,
    CurrencyServiceException,
    FetchResult,
    init_currency_service,
)
from .fx_conversion import CurrencyConverter, MissingRateError
from .money import MoneyFormatter


def init_conversion(app) -> None:
    """Composition root: build the catalog, formatter, service and slot."""

    init_symbols(app)
    app.extensions["money_formatter"] = MoneyFormatter.from_config(app.config)
    service = init_currency_service(app)
    slot = ConverterSlot()
    app.extensions["converter_slot"] = slot

    if app.config.get("FETCH_ON_STARTUP", False):
        service.get_currency_converter(slot.accept)


__all__ = [
    "ConverterSlot",
    "CurrencyConverter",
    "CurrencyService",
    "CurrencyServiceError",
    "CurrencyServiceException",
    "CurrencySymbols",
    "FetchResult",
    "MissingRateError",
    "MoneyFormatter",
    "SlotState",
    "init_conversion",
    "init_currency_service",
    "init_symbols",
]
