"""Application configuration classes."""

from __future__ import annotations

import os

SUPPORTED_RATE_PROVIDERS = {"fixer", "mock"}
PROVIDER_ALIASES = {"fixerio": "fixer", "fixer.io": "fixer"}

DEFAULT_CURRENCIES = "EUR,USD,GBP,CHF,JPY,CAD,AUD,CNY,SEK,NZD"


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value is not None else default


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "fx-converter"
    FX_RATE_PROVIDER = _get_env("FX_RATE_PROVIDER", "fixer")
    RATES_API_BASE_URL = _get_env("RATES_API_BASE_URL", "http://data.fixer.io/api")
    RATES_API_KEY = _get_env("RATES_API_KEY", "")
    REQUEST_TIMEOUT_SECONDS = float(_get_env("REQUEST_TIMEOUT_SECONDS", "5"))
    SUPPORTED_CURRENCIES = _get_env("SUPPORTED_CURRENCIES", DEFAULT_CURRENCIES)
    DEFAULT_SOURCE_CURRENCY = _get_env("DEFAULT_SOURCE_CURRENCY", "EUR")
    DEFAULT_TARGET_CURRENCY = _get_env("DEFAULT_TARGET_CURRENCY", "USD")
    MONEY_DECIMAL_PLACES = int(_get_env("MONEY_DECIMAL_PLACES", "2"))
    MONEY_DECIMAL_SEPARATOR = _get_env("MONEY_DECIMAL_SEPARATOR", ".")
    MONEY_GROUP_SEPARATOR = _get_env("MONEY_GROUP_SEPARATOR", ",")
    MONEY_PLACEHOLDER = _get_env("MONEY_PLACEHOLDER", "-")
    FETCH_ON_STARTUP = _get_env("FETCH_ON_STARTUP", "true").lower() == "true"
    FETCH_MAX_WORKERS = int(_get_env("FETCH_MAX_WORKERS", "2"))
    REFRESH_WAIT_SECONDS = float(_get_env("REFRESH_WAIT_SECONDS", "10"))
    LOG_LEVEL = _get_env("LOG_LEVEL", "INFO")
    LOG_JSON_ENABLED = _get_env("LOG_JSON_ENABLED", "false").lower() == "true"
    LOG_FORMAT = _get_env("LOG_FORMAT", "%(asctime)s %(levelname)s [%(name)s] %(message)s")


class DevelopmentConfig(BaseConfig):
    """Configuration for local development."""

    DEBUG = True
    TESTING = False


class ProductionConfig(BaseConfig):
    """Configuration for production deployments."""

    DEBUG = False
    TESTING = False


CONFIG_BY_ENV = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
}


def get_config(config_name: str | None = None) -> type[BaseConfig]:
    """Return the config class for the requested environment.

    Args:
        config_name: Optional explicit config identifier. If omitted, the
            APP_ENV environment variable is consulted.

    Raises:
        KeyError: If the requested configuration is not defined.
        ValueError: If the provider or currency catalog settings are invalid.
    """

    env_candidate = config_name if config_name is not None else os.getenv("APP_ENV", "development")
    env_name = (env_candidate or "development").lower()
    try:
        config_cls = CONFIG_BY_ENV[env_name]
    except KeyError as exc:
        raise KeyError(f"Unknown APP_ENV '{env_name}'") from exc

    _validate_provider(config_cls)
    _validate_currencies(config_cls)
    return config_cls


def _validate_provider(config_cls: type[BaseConfig]) -> None:
    normalized = _normalize_provider(config_cls.FX_RATE_PROVIDER)
    if normalized not in SUPPORTED_RATE_PROVIDERS:
        raise ValueError(
            f"Unsupported FX_RATE_PROVIDER '{config_cls.FX_RATE_PROVIDER}'. "
            f"Allowed values: {sorted(SUPPORTED_RATE_PROVIDERS)}"
        )
    config_cls.FX_RATE_PROVIDER = normalized


def _validate_currencies(config_cls: type[BaseConfig]) -> None:
    codes = [code.strip().upper() for code in config_cls.SUPPORTED_CURRENCIES.split(",") if code.strip()]
    if not codes:
        raise ValueError("SUPPORTED_CURRENCIES must list at least one currency code.")
    duplicates = sorted({code for code in codes if codes.count(code) > 1})
    if duplicates:
        raise ValueError(f"SUPPORTED_CURRENCIES contains duplicates: {', '.join(duplicates)}")


def _normalize_provider(value: str | None) -> str:
    if not value:
        return ""
    normalized = value.strip().lower()
    return PROVIDER_ALIASES.get(normalized, normalized)
