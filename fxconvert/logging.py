"""Logging setup for the FX converter.

Request logs and rate fetch logs share a correlation id. A fetch started while
a request is being handled carries that request's id onto the worker thread,
so a refresh call and the upstream fetch it triggered can be matched.
"""

from __future__ import annotations

import json
import logging
import time
import uuid
from datetime import UTC, datetime
from typing import Any

from flask import Flask, g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
FETCH_EVENT = "rates.fetch"
DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_STANDARD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JSONLogFormatter(logging.Formatter):
    """One JSON object per record; `extra=` fields become top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _STANDARD_ATTRS and not key.startswith("_")
        )
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, separators=(",", ":"))


def setup_logging(app: Flask) -> None:
    """Install a single root handler, JSON formatted when LOG_JSON_ENABLED is set."""

    level = logging.getLevelName(str(app.config.get("LOG_LEVEL", "INFO")).upper())
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler()
    if app.config.get("LOG_JSON_ENABLED"):
        handler.setFormatter(JSONLogFormatter())
    else:
        handler.setFormatter(logging.Formatter(app.config.get("LOG_FORMAT", DEFAULT_FORMAT)))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)

    # Everything propagates to the root handler.
    logging.getLogger("werkzeug").handlers = []
    app.logger.handlers = []
    app.logger.setLevel(level)


def init_request_logging(app: Flask) -> None:
    """Tag each request with a correlation id and log how it ended.

    Responses with a 5xx status (rates unavailable, upstream failure) are
    logged at WARNING.
    """

    @app.before_request
    def _assign_request_id():
        g.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        g.request_start = time.perf_counter()

    @app.after_request
    def _log_response(response):
        request_id = g.get("request_id")
        if request_id:
            response.headers.setdefault(REQUEST_ID_HEADER, request_id)
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        app.logger.log(
            level,
            "Request handled",
            extra=_request_extra("request.completed", response.status_code),
        )
        g.request_logged = True
        return response

    @app.teardown_request
    def _log_unhandled(exc: BaseException | None):
        if exc is None or g.get("request_logged"):
            return
        app.logger.error(
            "Request failed",
            extra=_request_extra("request.failed", 500, error=str(exc)),
        )


def current_request_id() -> str | None:
    """Correlation id of the request being handled, if any."""

    if not has_request_context():
        return None
    return g.get("request_id")


def fetch_log_extra(
    *,
    provider: str,
    sequence: int,
    status: str,
    duration_ms: float | None,
    error: str | None = None,
    request_id: str | None = None,
) -> dict[str, Any]:
    """Structured fields attached to rate fetch log records."""

    return _compact(
        {
            "event": FETCH_EVENT,
            "provider": provider,
            "sequence": sequence,
            "status": status,
            "duration_ms": _round_ms(duration_ms),
            "error": error or None,
            "request_id": request_id,
        }
    )


def _request_extra(event: str, status: int, error: str | None = None) -> dict[str, Any]:
    start = g.get("request_start")
    duration_ms = (time.perf_counter() - start) * 1000 if start is not None else None
    return _compact(
        {
            "event": event,
            "request_id": g.get("request_id"),
            "method": request.method,
            "route": request.url_rule.rule if request.url_rule else request.path,
            "status": status,
            "duration_ms": _round_ms(duration_ms),
            "error": error,
        }
    )


def _round_ms(value: float | None) -> float | None:
    return round(value, 3) if value is not None else None


def _compact(payload: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in payload.items() if value is not None}
