"""Provider interfaces and data structures for FX rate sources."""

from .base import (
    BaseRateProvider,
    DecodingError,
    NoDataError,
    ProviderError,
    WrongStatusCodeError,
)
from .fixer_client import FixerClient, FixerClientConfig
from .fixer_provider import FixerProvider
from .http_client import HTTPClient, HTTPClientConfig
from .mock import MockRateProvider
from .registry import get_provider, list_providers
from .schemas import LatestRatesSchema, RateSnapshot, load_snapshot

__all__ = [
    "BaseRateProvider",
    "DecodingError",
    "NoDataError",
    "ProviderError",
    "WrongStatusCodeError",
    "FixerClient",
    "FixerClientConfig",
    "FixerProvider",
    "HTTPClient",
    "HTTPClientConfig",
    "MockRateProvider",
    "get_provider",
    "list_providers",
    "LatestRatesSchema",
    "RateSnapshot",
    "load_snapshot",
]
