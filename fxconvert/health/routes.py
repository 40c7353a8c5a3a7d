"""Route handlers for health checks."""

from __future__ import annotations

from flask import current_app
from flask.views import MethodView

from fxconvert.schemas import HealthRatesSchema, HealthStatusSchema
from fxconvert.services.converter_slot import ConverterSlot

from . import blp


@blp.route("")
class HealthStatus(MethodView):
    @blp.response(200, HealthStatusSchema())
    def get(self):
        return {
            "status": "ok",
            "app": current_app.config.get("APP_NAME", "fx-converter"),
        }


@blp.route("/rates")
class HealthRates(MethodView):
    @blp.response(200, HealthRatesSchema())
    def get(self):
        slot: ConverterSlot | None = current_app.extensions.get("converter_slot")  # type: ignore[assignment]
        if slot is None:
            return {"status": "uninitialized", "sequence": 0}

        state = slot.state()
        return {
            "status": state.status,
            "sequence": state.sequence,
            "base_currency": state.base_currency,
            "last_updated": state.as_of.isoformat() if state.as_of else None,
            "error": state.error.value if state.error else None,
            "message": state.error.message if state.error else None,
        }
