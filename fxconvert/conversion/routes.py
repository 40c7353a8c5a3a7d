"""Routes for currency selection, conversion and manual rate refresh."""

from __future__ import annotations

from flask import current_app
from flask.views import MethodView

from fxconvert.errors import ServiceUnavailableError, UpstreamError, ValidationError
from fxconvert.schemas import (
    ConversionRequestSchema,
    ConversionResponseSchema,
    CurrencyCatalogSchema,
    RefreshResponseSchema,
    SelectionRequestSchema,
    SelectionResponseSchema,
)
from fxconvert.services import (
    ConverterSlot,
    CurrencyConverter,
    CurrencyService,
    CurrencySymbols,
    MissingRateError,
    MoneyFormatter,
)
from fxconvert.validation import parse_amount, validate_currency_code

from . import blp

DEFAULT_REFRESH_WAIT_SECONDS = 10.0


def _symbols() -> CurrencySymbols:
    return current_app.extensions["currency_symbols"]


def _slot() -> ConverterSlot:
    return current_app.extensions["converter_slot"]


def _require_converter() -> CurrencyConverter:
    slot = _slot()
    converter = slot.converter
    if converter is not None:
        return converter

    error = slot.last_error
    if error is not None:
        raise ServiceUnavailableError(error.message, payload={"error": error.value})
    raise ServiceUnavailableError("Exchange rates are still loading. Please retry in a moment.")


def _default_index(symbols: CurrencySymbols, key: str) -> int:
    index = symbols.index_of(current_app.config.get(key))
    return index if index is not None else 0


@blp.route("/currencies")
class CurrencyCatalog(MethodView):
    @blp.response(200, CurrencyCatalogSchema())
    def get(self):
        symbols = _symbols()
        source_index, target_index = symbols.resolve_selection(
            _default_index(symbols, "DEFAULT_SOURCE_CURRENCY"),
            _default_index(symbols, "DEFAULT_TARGET_CURRENCY"),
            "target",
        )
        return {
            "currencies": list(symbols),
            "default_source": symbols.symbol_at(source_index),
            "default_source_index": source_index,
            "default_target": symbols.symbol_at(target_index),
            "default_target_index": target_index,
        }


@blp.route("/selection")
class CurrencySelection(MethodView):
    @blp.arguments(SelectionRequestSchema)
    @blp.response(200, SelectionResponseSchema())
    def post(self, data):
        symbols = _symbols()
        try:
            source_index, target_index = symbols.resolve_selection(
                data["source_index"], data["target_index"], data["changed"]
            )
        except IndexError as exc:
            raise ValidationError(str(exc), payload={"field": data["changed"] + "_index"}) from exc

        return {
            "source_index": source_index,
            "source": symbols.symbol_at(source_index),
            "target_index": target_index,
            "target": symbols.symbol_at(target_index),
        }


@blp.route("")
class Conversion(MethodView):
    @blp.arguments(ConversionRequestSchema)
    @blp.response(200, ConversionResponseSchema())
    def post(self, data):
        symbols = _symbols()
        source = validate_currency_code(data.get("source"), symbols, field="from")
        target = validate_currency_code(data.get("target"), symbols, field="to")
        amount = parse_amount(data.get("amount"))

        converter = _require_converter()
        try:
            result = converter.convert(source, target, amount)
        except MissingRateError as exc:
            raise UpstreamError(str(exc), payload={"code": exc.code}) from exc

        formatter: MoneyFormatter = current_app.extensions["money_formatter"]
        return {
            "source": source,
            "target": target,
            "amount": amount,
            "result": result,
            "formatted": formatter.format(result),
            "base_currency": converter.base_currency,
            "as_of": converter.timestamp.isoformat() if converter.timestamp else None,
        }


@blp.route("/refresh")
class ConversionRefresh(MethodView):
    @blp.response(200, RefreshResponseSchema())
    def post(self):
        service: CurrencyService = current_app.extensions["currency_service"]
        slot = _slot()
        wait_seconds = float(
            current_app.config.get("REFRESH_WAIT_SECONDS", DEFAULT_REFRESH_WAIT_SECONDS)
        )

        future = service.get_currency_converter(slot.accept)
        try:
            result = future.result(timeout=wait_seconds)
        except TimeoutError:
            state = slot.state()
            return {
                "message": "Refresh started; rates are still loading.",
                "sequence": state.sequence,
                "base_currency": state.base_currency,
                "as_of": state.as_of.isoformat() if state.as_of else None,
            }, 202

        if result.error is not None:
            raise UpstreamError(
                result.error.message,
                payload={"error": result.error.value, "sequence": result.sequence},
            )

        converter = result.converter
        return {
            "message": "Exchange rates refreshed.",
            "sequence": result.sequence,
            "base_currency": converter.base_currency,
            "as_of": converter.timestamp.isoformat() if converter.timestamp else None,
        }
