"""fixer.io provider implementation."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from marshmallow import ValidationError

from .base import BaseRateProvider, DecodingError
from .fixer_client import FixerClient, FixerClientConfig
from .schemas import RateSnapshot, load_snapshot

DEFAULT_BASE_URL = "http://data.fixer.io/api"


class FixerProvider(BaseRateProvider):
    """Provider that fetches the latest rates from a fixer.io style API."""

    name = "fixer"

    def __init__(self, client: FixerClient, symbols: Iterable[str] | None = None) -> None:
        self._client = client
        self._symbols = tuple(code.upper() for code in symbols or ())

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> FixerProvider:
        base_url_value = config.get("RATES_API_BASE_URL")
        if not isinstance(base_url_value, str) or not base_url_value.strip():
            base_url = DEFAULT_BASE_URL
        else:
            base_url = base_url_value
        client_config = FixerClientConfig(
            base_url=base_url,
            api_key=str(config.get("RATES_API_KEY") or ""),
            timeout=float(config.get("REQUEST_TIMEOUT_SECONDS", 5)),
        )
        symbols = [
            code.strip()
            for code in str(config.get("SUPPORTED_CURRENCIES") or "").split(",")
            if code.strip()
        ]
        return cls(FixerClient(client_config), symbols=symbols)

    def get_latest(self) -> RateSnapshot:
        params = {"symbols": ",".join(self._symbols)} if self._symbols else None
        payload = self._client.get("/latest", params=params)
        try:
            return load_snapshot(payload, source=self.name)
        except ValidationError as exc:
            raise DecodingError(f"Unexpected response payload from rate provider: {exc.messages}") from exc
