"""Shared single-attempt HTTP client for rate providers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import requests
from requests import Response, Session
from requests.exceptions import RequestException

from .base import DecodingError, NoDataError, WrongStatusCodeError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HTTPClientConfig:
    """Configuration for the shared HTTP client."""

    base_url: str
    timeout: float = 5.0


class HTTPClient:
    """Small HTTP client that classifies failures into provider errors.

    Each call performs exactly one request; retrying is left to the caller.
    """

    def __init__(
        self,
        config: HTTPClientConfig,
        session: Optional[Session] = None,
    ) -> None:
        self._config = config
        self._session = session or requests.Session()

    def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        url = self._build_url(path)
        try:
            response = self._session.get(url, params=params, timeout=self._config.timeout)
        except RequestException as exc:
            logger.warning("HTTP request to %s failed: %s", url, exc)
            raise NoDataError(f"Failed to fetch {url}: {exc}") from exc

        return self._handle_response(url, response)

    def _build_url(self, path: str) -> str:
        base = self._config.base_url.rstrip("/")
        suffix = path.lstrip("/")
        return f"{base}/{suffix}"

    @staticmethod
    def _handle_response(url: str, response: Response) -> Dict[str, Any]:
        status = response.status_code
        if not 200 <= status < 300:
            raise WrongStatusCodeError(f"Unexpected status {status} from {url}", status_code=status)

        body = response.content or b""
        if not body.strip():
            raise NoDataError(f"Empty response body from {url}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise DecodingError(f"Invalid JSON response from {url}") from exc

        if not isinstance(payload, dict):
            raise DecodingError(f"Expected a JSON object from {url}, got {type(payload).__name__}")

        return payload
