"""Centralized configuration management for the MovieTrack service."""

from __future__ import annotations

import logging
import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field, PrivateAttr
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables defined in a local .env file before instantiating the
# settings singleton so scripts importing :mod:`movietrack.settings` observe the
# same values as the API process.
load_dotenv()

# -- Application-wide constants -------------------------------------------------

DEFAULT_SQLITE_DATABASE_URL = "sqlite+aiosqlite:///./data/movietrack.db"
SQLITE_ASYNC_PREFIX = "sqlite+aiosqlite://"
SQLITE_SYNC_PREFIX = "sqlite://"
DEFAULT_CATALOG_BASE_URL = "https://itunes.apple.com"
DEFAULT_CATALOG_COUNTRY = "au"
DEFAULT_CATALOG_MEDIA = "movie"
DEFAULT_CATALOG_TIMEOUT_SECONDS = 10.0
DEFAULT_SEARCH_TERM = "star"
DEFAULT_LOG_LEVEL = "INFO"


class AppSettings(BaseSettings):
    """Typed configuration surface built on top of ``pydantic-settings``.

    The class encapsulates the environment variables consumed by the service
    and exposes helpers (for example, the normalized database URL) so that the
    API process, scripts, and tests share a single parsing path.
    """

    _explicit_database_url: bool = PrivateAttr(default=False)
    _explicit_catalog_base_url: bool = PrivateAttr(default=False)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    def __init__(self, **values: object) -> None:
        """Capture explicit overrides prior to delegating to ``BaseSettings``."""

        normalized_keys = {str(key).lower() for key in values}
        super().__init__(**values)
        self._explicit_database_url = "database_url" in normalized_keys
        self._explicit_catalog_base_url = "catalog_base_url" in normalized_keys
        database_env = os.getenv("DATABASE_URL")
        if database_env is not None and database_env.strip():
            self._explicit_database_url = True
        catalog_env = os.getenv("CATALOG_BASE_URL")
        if catalog_env is not None and catalog_env.strip():
            self._explicit_catalog_base_url = True

    database_url: str | None = Field(
        default=None,
        alias="DATABASE_URL",
        description=(
            "SQLAlchemy database URL for the favorites and preferences tables."
            " Plain sqlite:// URLs are coerced into the aiosqlite driver string."
        ),
    )
    catalog_base_url: str = Field(
        default=DEFAULT_CATALOG_BASE_URL,
        alias="CATALOG_BASE_URL",
        description="Base URL of the movie catalog search API.",
    )
    catalog_country: str = Field(
        default=DEFAULT_CATALOG_COUNTRY,
        alias="CATALOG_COUNTRY",
        description="Storefront country code sent with every catalog search.",
    )
    catalog_media: str = Field(
        default=DEFAULT_CATALOG_MEDIA,
        alias="CATALOG_MEDIA",
        description="Catalog media type filter.",
    )
    catalog_timeout_seconds: float = Field(
        default=DEFAULT_CATALOG_TIMEOUT_SECONDS,
        alias="CATALOG_TIMEOUT_SECONDS",
        gt=0,
        description="Timeout applied to each catalog request.",
    )
    default_search_term: str = Field(
        default=DEFAULT_SEARCH_TERM,
        alias="DEFAULT_SEARCH_TERM",
        min_length=1,
        description="Term searched when the service starts.",
    )
    log_level: str = Field(
        default=DEFAULT_LOG_LEVEL,
        alias="LOG_LEVEL",
        description="Root logging level (e.g. INFO, DEBUG, WARNING).",
    )

    @property
    def resolved_database_url(self) -> str:
        """Return the async-compatible database URL after applying fallbacks."""

        if not self.database_url:
            return DEFAULT_SQLITE_DATABASE_URL

        url = self.database_url.strip()
        if url.startswith(SQLITE_ASYNC_PREFIX):
            return url
        if url.startswith(SQLITE_SYNC_PREFIX):
            return url.replace(SQLITE_SYNC_PREFIX, SQLITE_ASYNC_PREFIX, 1)

        raise RuntimeError(
            f"Expected a SQLite connection string, received: {url}"
        )

    @property
    def catalog_search_url(self) -> str:
        """Return the absolute URL of the catalog search endpoint."""

        return f"{self.catalog_base_url.rstrip('/')}/search"

    @property
    def log_level_numeric(self) -> int:
        """Translate ``log_level`` into the numeric constant expected by logging."""

        candidate = logging.getLevelName(self.log_level.upper())
        if isinstance(candidate, int):
            return candidate
        return logging.INFO

    def optional_config_warnings(self) -> list[str]:
        """Return human-readable warnings for unset optional configuration."""

        warnings: list[str] = []

        if not self._explicit_database_url:
            warnings.append(
                "DATABASE_URL is not set - favorites are stored in "
                f"{DEFAULT_SQLITE_DATABASE_URL}"
            )

        if not self._explicit_catalog_base_url:
            warnings.append(
                "CATALOG_BASE_URL is not set - searching the public catalog at "
                f"{DEFAULT_CATALOG_BASE_URL}"
            )

        return warnings


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return a cached instance of :class:`AppSettings`."""

    return AppSettings()


__all__ = [
    "AppSettings",
    "DEFAULT_CATALOG_BASE_URL",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_SEARCH_TERM",
    "DEFAULT_SQLITE_DATABASE_URL",
    "get_settings",
]
