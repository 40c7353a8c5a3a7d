"""Asynchronous rate fetching that produces CurrencyConverter snapshots."""

from __future__ import annotations

import atexit
import itertools
import logging
import threading
from collections.abc import Callable
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from time import perf_counter
from typing import Any

from fxconvert.logging import current_request_id, fetch_log_extra
from fxconvert.providers import (
    BaseRateProvider,
    DecodingError,
    ProviderError,
    WrongStatusCodeError,
    get_provider,
)

from .fx_conversion import CurrencyConverter

logger = logging.getLogger(__name__)


class CurrencyServiceError(Enum):
    """Ways a rate fetch can fail, as reported to the caller."""

    NO_DATA = "noData"
    WRONG_STATUS_CODE = "wrongStatusCode"
    DECODING_ERROR = "decodingError"

    @property
    def message(self) -> str:
        return _ERROR_MESSAGES[self]


_ERROR_MESSAGES = {
    CurrencyServiceError.NO_DATA: "An error occurred while receiving the exchange rates.",
    CurrencyServiceError.WRONG_STATUS_CODE: "The exchange rate server reported an error.",
    CurrencyServiceError.DECODING_ERROR: "An error occurred while decoding the exchange rates.",
}


class CurrencyServiceException(RuntimeError):
    """Raised by the synchronous fetch path; wraps a CurrencyServiceError."""

    def __init__(self, error: CurrencyServiceError, detail: str | None = None) -> None:
        super().__init__(detail or error.message)
        self.error = error


@dataclass(frozen=True)
class FetchResult:
    """Outcome of one fetch; exactly one of `converter` and `error` is set."""

    sequence: int
    converter: CurrencyConverter | None = None
    error: CurrencyServiceError | None = None

    def __post_init__(self) -> None:
        if (self.converter is None) == (self.error is None):
            raise ValueError("FetchResult needs exactly one of converter or error.")

    @property
    def ok(self) -> bool:
        return self.converter is not None


Completion = Callable[[FetchResult], None]
Dispatch = Callable[[Callable[[], None]], None]


def _call_inline(callback: Callable[[], None]) -> None:
    callback()


def _classify(exc: ProviderError) -> CurrencyServiceError:
    if isinstance(exc, WrongStatusCodeError):
        return CurrencyServiceError.WRONG_STATUS_CODE
    if isinstance(exc, DecodingError):
        return CurrencyServiceError.DECODING_ERROR
    return CurrencyServiceError.NO_DATA


class CurrencyService:
    """Fetch fresh rate snapshots and hand them out as CurrencyConverters.

    The service keeps no snapshot between calls: every call performs one
    provider request. Each call is tagged with a monotonically increasing
    sequence number so callers can discard completions that arrive out of
    order.
    """

    def __init__(
        self,
        provider: BaseRateProvider,
        executor: Executor | None = None,
        dispatch: Dispatch | None = None,
    ) -> None:
        self._provider = provider
        self._executor = executor or ThreadPoolExecutor(max_workers=2, thread_name_prefix="rates-fetch")
        self._dispatch = dispatch or _call_inline
        self._sequence = itertools.count(1)
        self._sequence_lock = threading.Lock()

    @property
    def provider_name(self) -> str:
        return getattr(self._provider, "name", self._provider.__class__.__name__)

    def next_sequence(self) -> int:
        with self._sequence_lock:
            return next(self._sequence)

    def get_currency_converter(self, completion: Completion) -> Future[FetchResult]:
        """Start a fetch and report its FetchResult to `completion` exactly once.

        Returns a future resolving to the same FetchResult once the
        completion has been dispatched.
        """

        sequence = self.next_sequence()
        return self._executor.submit(self._run, sequence, completion, current_request_id())

    def fetch_converter(self) -> CurrencyConverter:
        """Fetch synchronously.

        Raises:
            CurrencyServiceException: If the fetch fails.
        """

        result = self._resolve(self.next_sequence(), current_request_id())
        if result.error is not None:
            raise CurrencyServiceException(result.error)
        converter = result.converter
        if converter is None:
            raise CurrencyServiceException(CurrencyServiceError.DECODING_ERROR)
        return converter

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def _run(self, sequence: int, completion: Completion, request_id: str | None) -> FetchResult:
        result = self._resolve(sequence, request_id)
        self._dispatch(lambda: completion(result))
        return result

    def _resolve(self, sequence: int, request_id: str | None = None) -> FetchResult:
        start = perf_counter()

        def log_extra(status: str, error: str | None = None) -> dict[str, Any]:
            return fetch_log_extra(
                provider=self.provider_name,
                sequence=sequence,
                status=status,
                duration_ms=(perf_counter() - start) * 1000,
                error=error,
                request_id=request_id,
            )

        decoding_error = CurrencyServiceError.DECODING_ERROR
        try:
            snapshot = self._provider.get_latest()
        except ProviderError as exc:
            error = _classify(exc)
            logger.warning("Rate fetch failed: %s", exc, extra=log_extra(error.value, str(exc)))
            return FetchResult(sequence=sequence, error=error)
        except Exception as exc:
            # Every fetch reaches its completion; unexpected failures count as undecodable.
            logger.exception(
                "Rate fetch raised unexpectedly", extra=log_extra(decoding_error.value, str(exc))
            )
            return FetchResult(sequence=sequence, error=decoding_error)

        try:
            converter = CurrencyConverter.from_snapshot(snapshot)
        except ValueError as exc:
            logger.warning(
                "Rate snapshot rejected: %s", exc, extra=log_extra(decoding_error.value, str(exc))
            )
            return FetchResult(sequence=sequence, error=decoding_error)

        logger.info("Rate fetch succeeded", extra=log_extra("success"))
        return FetchResult(sequence=sequence, converter=converter)


def init_currency_service(app) -> CurrencyService:
    """Build the service for the configured provider and attach it to the app."""

    provider = get_provider(app.config.get("FX_RATE_PROVIDER"), app.config)
    executor = ThreadPoolExecutor(
        max_workers=max(int(app.config.get("FETCH_MAX_WORKERS", 2)), 1),
        thread_name_prefix="rates-fetch",
    )
    service = CurrencyService(provider, executor=executor)
    app.extensions["currency_service"] = service
    # Worker threads live for the whole process; release them at interpreter exit.
    atexit.register(service.shutdown, False)
    return service
