"""Shared pytest fixtures."""

from __future__ import annotations

import json
import sys
from collections.abc import Callable, Iterator
from datetime import UTC, datetime
from decimal import Decimal
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from fxconvert import create_app  # noqa: E402
from fxconvert.services import CurrencyConverter, FetchResult  # noqa: E402


@pytest.fixture()
def app() -> Iterator:
    """Flask application using the mock provider with no startup fetch."""

    flask_app = create_app(
        "development",
        overrides={
            "TESTING": True,
            "FETCH_ON_STARTUP": False,
            "FX_RATE_PROVIDER": "mock",
        },
    )

    yield flask_app

    flask_app.extensions["currency_service"].shutdown(wait=True)


@pytest.fixture()
def client(app):
    """Provide a Flask test client."""

    with app.test_client() as client:
        yield client


@pytest.fixture()
def converter() -> CurrencyConverter:
    """EUR-based converter covering a few catalog currencies."""

    return CurrencyConverter(
        base_currency="EUR",
        rates={"USD": Decimal("1.1"), "GBP": Decimal("0.8"), "JPY": Decimal("150")},
        timestamp=datetime(2023, 5, 25, 12, 0, tzinfo=UTC),
    )


@pytest.fixture()
def loaded_app(app, converter):
    """Application whose converter slot already holds `converter`."""

    app.extensions["converter_slot"].accept(FetchResult(sequence=1, converter=converter))
    return app


@pytest.fixture(scope="session")
def fixtures_dir() -> Path:
    """Return the path to bundled JSON fixtures."""

    return ROOT_DIR / "tests" / "fixtures"


@pytest.fixture()
def load_json_fixture(fixtures_dir: Path) -> Callable[[str], dict]:
    """Load a JSON fixture by filename."""

    def _loader(filename: str) -> dict:
        path = fixtures_dir / filename
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)

    return _loader
