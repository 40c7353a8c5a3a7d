from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal

import pytest
import responses
from responses import matchers

from fxconvert.providers import (
    DecodingError,
    FixerClient,
    FixerClientConfig,
    FixerProvider,
    NoDataError,
    WrongStatusCodeError,
)

BASE_URL = "https://rates.example.com/api"
LATEST_URL = f"{BASE_URL}/latest"


@pytest.fixture()
def provider():
    config = FixerClientConfig(base_url=BASE_URL, api_key="secret", timeout=2)
    return FixerProvider(FixerClient(config), symbols=["usd", "gbp"])


@responses.activate
def test_provider_decodes_latest_payload(provider, load_json_fixture):
    responses.add(
        responses.GET,
        LATEST_URL,
        json=load_json_fixture("fixer_latest.json"),
        match=[matchers.query_param_matcher({"access_key": "secret", "symbols": "USD,GBP"})],
        status=200,
    )

    snapshot = provider.get_latest()

    assert snapshot.base_currency == "EUR"
    assert snapshot.source == "fixer"
    assert snapshot.rates["USD"] == Decimal("1.073869")
    assert snapshot.timestamp == datetime.fromtimestamp(1685016243, tz=UTC)


@responses.activate
def test_provider_accepts_minimal_payload(provider):
    responses.add(responses.GET, LATEST_URL, json={"base": "EUR", "rates": {"USD": 1.1}})

    snapshot = provider.get_latest()

    assert snapshot.base_currency == "EUR"
    assert snapshot.rates == {"USD": Decimal("1.1")}


@responses.activate
def test_provider_uses_date_when_timestamp_missing(provider):
    responses.add(
        responses.GET,
        LATEST_URL,
        json={"base": "EUR", "date": "2023-05-25", "rates": {"USD": 1.1}},
    )

    snapshot = provider.get_latest()

    assert snapshot.timestamp == datetime(2023, 5, 25, tzinfo=UTC)


@responses.activate
def test_provider_reports_unsuccessful_payload_as_status_error(provider, load_json_fixture):
    responses.add(responses.GET, LATEST_URL, json=load_json_fixture("fixer_error.json"))

    with pytest.raises(WrongStatusCodeError) as exc_info:
        provider.get_latest()

    assert exc_info.value.status_code == 101


@responses.activate
def test_provider_raises_on_http_error(provider):
    responses.add(responses.GET, LATEST_URL, status=500)

    with pytest.raises(WrongStatusCodeError):
        provider.get_latest()


@responses.activate
def test_provider_raises_on_empty_body(provider):
    responses.add(responses.GET, LATEST_URL, body="", status=200)

    with pytest.raises(NoDataError):
        provider.get_latest()


@responses.activate
@pytest.mark.parametrize(
    "payload",
    [
        {"base": "EUR"},
        {"rates": {"USD": 1.1}},
        {"base": "EUR", "rates": {"USD": "abc"}},
        {"base": "EUR", "rates": {"USD": -1}},
        {"base": "EUR", "rates": ["USD"]},
    ],
)
def test_provider_rejects_payloads_that_do_not_match_schema(provider, payload):
    responses.add(responses.GET, LATEST_URL, json=payload)

    with pytest.raises(DecodingError):
        provider.get_latest()


def test_from_config_reads_endpoint_key_and_catalog():
    provider = FixerProvider.from_config(
        {
            "RATES_API_BASE_URL": BASE_URL,
            "RATES_API_KEY": "secret",
            "REQUEST_TIMEOUT_SECONDS": 3,
            "SUPPORTED_CURRENCIES": "EUR,USD",
        }
    )

    assert provider.name == "fixer"
    assert provider._symbols == ("EUR", "USD")  # type: ignore[attr-defined]
