from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .base import WrongStatusCodeError
from .http_client import HTTPClient, HTTPClientConfig

logger = logging.getLogger(__name__)


class FixerClientConfig:
    """Configuration parameters for the fixer.io client."""

    def __init__(self, base_url: str, api_key: str, timeout: float = 5.0) -> None:
        self.base_url = base_url
        self.api_key = api_key
        self.timeout = timeout


class FixerClient:
    """HTTP client for fixer.io style endpoints built on the shared wrapper."""

    def __init__(self, config: FixerClientConfig, client: HTTPClient | None = None) -> None:
        self._config = config
        self._client = client or HTTPClient(
            HTTPClientConfig(base_url=config.base_url, timeout=config.timeout)
        )

    def get(self, path: str, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        query: dict[str, Any] = dict(params or {})
        if self._config.api_key:
            query["access_key"] = self._config.api_key

        payload = self._client.get(path, params=query)

        if payload.get("success", True) is False:
            error_info = payload.get("error") or {}
            status_code = error_info.get("code") if isinstance(error_info, dict) else None
            raise WrongStatusCodeError(
                f"Rate provider rejected the request: {error_info}",
                status_code=status_code if isinstance(status_code, int) else None,
            )

        return payload
