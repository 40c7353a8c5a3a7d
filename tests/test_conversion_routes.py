from __future__ import annotations

from fxconvert.services import CurrencyServiceError, FetchResult


def test_currencies_lists_catalog_with_default_selection(client):
    response = client.get("/conversion/currencies")

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["currencies"][:2] == ["EUR", "USD"]
    assert payload["default_source"] == "EUR"
    assert payload["default_source_index"] == 0
    assert payload["default_target"] == "USD"
    assert payload["default_target_index"] == 1


def test_currencies_falls_back_to_first_row_for_unknown_default(app, client):
    app.config["DEFAULT_SOURCE_CURRENCY"] = "XXX"
    app.config["DEFAULT_TARGET_CURRENCY"] = "EUR"

    payload = client.get("/conversion/currencies").get_json()

    assert payload["default_source"] == "EUR"
    assert payload["default_target_index"] == 1


def test_selection_moves_colliding_picker(client):
    response = client.post(
        "/conversion/selection",
        json={"source_index": 1, "target_index": 1, "changed": "source"},
    )

    assert response.status_code == 200
    assert response.get_json() == {
        "source_index": 2,
        "source": "GBP",
        "target_index": 1,
        "target": "USD",
    }


def test_selection_rejects_out_of_range_index(client):
    response = client.post(
        "/conversion/selection",
        json={"source_index": 0, "target_index": 99, "changed": "target"},
    )

    assert response.status_code == 422


def test_convert_returns_formatted_result(client, loaded_app):
    response = client.post("/conversion", json={"from": "EUR", "to": "USD", "amount": "10"})

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["from"] == "EUR"
    assert payload["to"] == "USD"
    assert payload["amount"] == "10"
    assert payload["result"] == "11.0"
    assert payload["formatted"] == "11.00"
    assert payload["base_currency"] == "EUR"


def test_convert_accepts_comma_decimal_separator(client, loaded_app):
    payload = client.post(
        "/conversion", json={"from": "usd", "to": "eur", "amount": "5,5"}
    ).get_json()

    assert payload["formatted"] == "5.00"


def test_convert_rejects_unknown_currency(client, loaded_app):
    response = client.post("/conversion", json={"from": "EUR", "to": "XYZ", "amount": "1"})

    assert response.status_code == 422
    payload = response.get_json()
    assert payload["field"] == "to"
    assert "to" in payload["field_errors"]


def test_convert_rejects_unparsable_amount(client, loaded_app):
    response = client.post("/conversion", json={"from": "EUR", "to": "USD", "amount": "ten"})

    assert response.status_code == 422
    assert response.get_json()["field"] == "amount"


def test_convert_rejects_negative_amount(client, loaded_app):
    response = client.post("/conversion", json={"from": "EUR", "to": "USD", "amount": "-3"})

    assert response.status_code == 422


def test_convert_requires_all_fields(client, loaded_app):
    response = client.post("/conversion", json={"from": "EUR"})

    assert response.status_code == 422


def test_convert_reports_missing_rate(client, loaded_app):
    response = client.post("/conversion", json={"from": "EUR", "to": "CHF", "amount": "1"})

    assert response.status_code == 502
    payload = response.get_json()
    assert payload["code"] == "CHF"


def test_convert_before_rates_loaded_is_unavailable(client):
    response = client.post("/conversion", json={"from": "EUR", "to": "USD", "amount": "1"})

    assert response.status_code == 503
    assert "loading" in response.get_json()["message"]


def test_convert_after_failed_fetch_reports_error_message(client):
    slot = client.application.extensions["converter_slot"]
    slot.accept(FetchResult(sequence=1, error=CurrencyServiceError.NO_DATA))

    response = client.post("/conversion", json={"from": "EUR", "to": "USD", "amount": "1"})

    assert response.status_code == 503
    payload = response.get_json()
    assert payload["error"] == "noData"
    assert payload["message"] == CurrencyServiceError.NO_DATA.message
