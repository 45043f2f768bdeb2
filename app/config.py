"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache

from db.config import load_env_files, resolve_database_url


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_optional_str_env(name: str) -> str | None:
    """
    Read an optional string value from environment variables.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _get_list_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    """
    Read a comma-separated list; blank items are dropped.
    """

    raw_value = _get_optional_str_env(name)
    if raw_value is None:
        return default
    items = tuple(item.strip() for item in raw_value.split(",") if item.strip())
    return items or default


@dataclass(frozen=True)
class ApiSettings:
    """
    HTTP surface settings: the shared API key and allowed CORS origins.
    """

    api_key: str | None = None
    cors_origins: tuple[str, ...] = field(default_factory=lambda: ("*",))


@dataclass(frozen=True)
class ProductIngestionSettings:
    """
    Runtime settings for CSV product ingestion.
    """

    log_rejected_rows: bool = True


@lru_cache(maxsize=1)
def get_api_settings() -> ApiSettings:
    """
    Return cached API settings from environment variables.
    """

    return ApiSettings(
        api_key=_get_optional_str_env("API_KEY"),
        cors_origins=_get_list_env("CORS_ORIGINS", ("*",)),
    )


@lru_cache(maxsize=1)
def get_product_ingestion_settings() -> ProductIngestionSettings:
    """
    Return cached product ingestion settings from environment variables.
    """

    return ProductIngestionSettings(
        log_rejected_rows=_get_bool_env("PRODUCT_INGEST_LOG_REJECTED_ROWS", True),
    )


def get_log_level() -> str:
    """
    Return the configured root log level name.
    """

    return _get_str_env("LOG_LEVEL", "INFO").upper()


def validate_startup_env() -> None:
    """
    Validate required environment variables at startup.

    The database URL goes through the same lookup the engine uses, so a URL
    the engine would ignore (CLOUD_DATABASE_URL outside a cloud ENVIRONMENT)
    fails here. Raises RuntimeError listing every problem at once.
    """

    _load_env_once()
    errors: list[str] = []

    if not os.getenv("API_KEY", "").strip():
        errors.append(
            "API_KEY is not set. Write endpoints and CSV uploads would reject every request."
        )

    try:
        resolve_database_url()
    except RuntimeError as exc:
        errors.append(str(exc))

    if errors:
        raise RuntimeError(
            "Startup validation failed, missing or invalid environment variables:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )
