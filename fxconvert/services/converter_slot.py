"""Caller-owned reference to the current converter."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime

from .currency_service import CurrencyServiceError, FetchResult
from .fx_conversion import CurrencyConverter

logger = logging.getLogger(__name__)

STATUS_READY = "ready"
STATUS_ERROR = "error"
STATUS_LOADING = "loading"


@dataclass(frozen=True)
class SlotState:
    status: str
    sequence: int
    base_currency: str | None = None
    as_of: datetime | None = None
    error: CurrencyServiceError | None = None


class ConverterSlot:
    """Hold the newest converter, ignoring results from superseded fetches."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._converter: CurrencyConverter | None = None
        self._last_error: CurrencyServiceError | None = None
        self._applied_sequence = 0

    @property
    def converter(self) -> CurrencyConverter | None:
        return self._converter

    @property
    def last_error(self) -> CurrencyServiceError | None:
        return self._last_error

    @property
    def applied_sequence(self) -> int:
        return self._applied_sequence

    def accept(self, result: FetchResult) -> bool:
        """Apply `result` unless a newer fetch has already been applied."""

        with self._lock:
            if result.sequence <= self._applied_sequence:
                logger.info(
                    "Discarding stale fetch result %s (applied %s)",
                    result.sequence,
                    self._applied_sequence,
                )
                return False

            self._applied_sequence = result.sequence
            if result.converter is not None:
                self._converter = result.converter
                self._last_error = None
            else:
                # A failed refresh keeps serving the previous converter.
                self._last_error = result.error
            return True

    def state(self) -> SlotState:
        with self._lock:
            converter = self._converter
            error = self._last_error
            sequence = self._applied_sequence

        if converter is not None:
            return SlotState(
                status=STATUS_READY,
                sequence=sequence,
                base_currency=converter.base_currency,
                as_of=converter.timestamp,
                error=error,
            )
        if error is not None:
            return SlotState(status=STATUS_ERROR, sequence=sequence, error=error)
        return SlotState(status=STATUS_LOADING, sequence=sequence)
