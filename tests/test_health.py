"""Smoke tests for health endpoints."""

from __future__ import annotations

from fxconvert import create_app
from fxconvert.services import CurrencyServiceError, FetchResult


def test_health_endpoint_returns_ok(client):
    response = client.get("/health")
    assert response.status_code == 200
    payload = response.get_json()
    assert payload == {"status": "ok", "app": "fx-converter"}


def test_health_rates_reports_loading_before_first_fetch(client):
    response = client.get("/health/rates")
    assert response.status_code == 200
    payload = response.get_json()
    assert payload["status"] == "loading"
    assert payload["sequence"] == 0
    assert payload["base_currency"] is None


def test_health_rates_reports_loaded_converter(client, loaded_app, converter):
    response = client.get("/health/rates")
    payload = response.get_json()
    assert payload["status"] == "ready"
    assert payload["base_currency"] == "EUR"
    assert payload["last_updated"] == converter.timestamp.isoformat()
    assert payload["error"] is None


def test_health_rates_reports_fetch_error(client):
    slot = client.application.extensions["converter_slot"]
    slot.accept(FetchResult(sequence=1, error=CurrencyServiceError.WRONG_STATUS_CODE))

    payload = client.get("/health/rates").get_json()

    assert payload["status"] == "error"
    assert payload["error"] == "wrongStatusCode"
    assert payload["message"] == CurrencyServiceError.WRONG_STATUS_CODE.message


def test_startup_fetch_loads_converter():
    app = create_app(
        "development",
        overrides={"TESTING": True, "FETCH_ON_STARTUP": True, "FX_RATE_PROVIDER": "mock"},
    )
    app.extensions["currency_service"].shutdown(wait=True)

    payload = app.test_client().get("/health/rates").get_json()

    assert payload["status"] == "ready"
    assert payload["sequence"] == 1
    assert payload["base_currency"] == "EUR"
