"""Registry and factory for FX rate providers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Dict, List

from .base import BaseRateProvider
from .fixer_provider import FixerProvider
from .mock import MockRateProvider

ProviderFactory = Callable[[Mapping[str, Any]], BaseRateProvider]

_PROVIDER_FACTORIES: Dict[str, ProviderFactory] = {
    FixerProvider.name: FixerProvider.from_config,
    MockRateProvider.name: MockRateProvider.from_config,
}


def list_providers() -> List[str]:
    """Return the list of registered provider identifiers."""

    return sorted(_PROVIDER_FACTORIES.keys())


def get_provider(name: str | None, config: Mapping[str, Any]) -> BaseRateProvider:
    """Instantiate a provider by name using the supplied configuration."""

    provider_name = (name or "mock").strip().lower()
    try:
        factory = _PROVIDER_FACTORIES[provider_name]
    except KeyError as exc:
        available = ", ".join(list_providers())
        raise ValueError(
            f"Unknown provider '{provider_name}'. Available providers: {available}"
        ) from exc
    return factory(config)
