"""Abstract interface and error types for FX rate providers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .schemas import RateSnapshot


class ProviderError(Exception):
    """Raised when an upstream provider cannot fulfill a request."""


class NoDataError(ProviderError):
    """The transport failed or the provider returned an empty body."""


class WrongStatusCodeError(ProviderError):
    """The provider answered with a non-success status."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DecodingError(ProviderError):
    """The provider body could not be parsed into a rate snapshot."""


class BaseRateProvider(ABC):
    """Defines the interface all FX rate providers must implement."""

    name: str

    @abstractmethod
    def get_latest(self) -> RateSnapshot:
        """Retrieve the most recent rates snapshot."""
