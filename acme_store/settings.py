"""Centralized configuration management for the Acme Store API."""

from __future__ import annotations

import logging
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables defined in a local .env file before instantiating the
# settings object so ``python -m acme_store`` and the reset CLI see the same values.
load_dotenv()

# -- Application-wide constants -------------------------------------------------

DEFAULT_DATABASE_URL = "postgres://localhost/the_acme_store"
POSTGRES_ASYNC_PREFIX = "postgresql+psycopg://"
POSTGRES_SYNC_PREFIXES = ("postgres://", "postgresql://")
SQLITE_ASYNC_PREFIX = "sqlite+aiosqlite://"
DEFAULT_PORT = 3000
DEFAULT_LOG_LEVEL = "INFO"


def normalize_database_url(database_url: str) -> str:
    """Return ``database_url`` rewritten for an async SQLAlchemy driver.

    PostgreSQL URLs supplied in libpq form (``postgres://`` or
    ``postgresql://``) are upgraded to the psycopg async dialect.  SQLite URLs
    must already name the aiosqlite driver.
    """

    url = database_url.strip()
    if not url:
        raise RuntimeError(
            "DATABASE_URL is set but empty. Provide a valid PostgreSQL connection string."
        )

    for prefix in POSTGRES_SYNC_PREFIXES:
        if url.startswith(prefix):
            return url.replace(prefix, POSTGRES_ASYNC_PREFIX, 1)

    if url.startswith((POSTGRES_ASYNC_PREFIX, SQLITE_ASYNC_PREFIX)):
        return url

    raise RuntimeError(
        "DATABASE_URL must use the PostgreSQL scheme (or sqlite+aiosqlite for local runs), "
        f"received: {url.split('://', 1)[0]}://..."
    )


class AppSettings(BaseSettings):
    """Typed configuration surface built on top of ``pydantic-settings``."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    database_url: str = Field(
        default=DEFAULT_DATABASE_URL,
        alias="DATABASE_URL",
        description=(
            "Database connection string. Postgres URLs supplied in sync format"
            " are coerced into the async psycopg driver string at runtime."
        ),
    )
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=DEFAULT_PORT, alias="PORT", ge=1, le=65535)
    log_level: str = Field(
        default=DEFAULT_LOG_LEVEL,
        alias="LOG_LEVEL",
        description="Root logging level (e.g. INFO, DEBUG, WARNING).",
    )
    reset_schema: bool = Field(
        default=False,
        alias="RESET_SCHEMA",
        description=(
            "Drop and recreate every table at startup. Destroys all stored"
            " data, so it is only meant for demos and local bootstrap."
        ),
    )
    seed_demo_data: bool = Field(
        default=False,
        alias="SEED_DEMO_DATA",
        description="Insert the demo catalog after a schema reset.",
    )
    db_pool_size: int = Field(default=10, alias="DB_POOL_SIZE", ge=1)
    db_max_overflow: int = Field(default=10, alias="DB_MAX_OVERFLOW", ge=0)

    @property
    def resolved_database_url(self) -> str:
        """Return the async-compatible database URL."""

        return normalize_database_url(self.database_url)

    @property
    def database_type(self) -> str:
        """Return ``sqlite`` when using SQLite otherwise ``postgresql``."""

        if self.resolved_database_url.startswith("sqlite"):
            return "sqlite"
        return "postgresql"

    @property
    def log_level_numeric(self) -> int:
        """Translate ``log_level`` into the numeric constant expected by logging."""

        candidate = logging.getLevelName(self.log_level.upper())
        if isinstance(candidate, int):
            return candidate
        return logging.INFO

    def optional_config_warnings(self) -> list[str]:
        """Return human-readable warnings for risky configuration."""

        warnings: list[str] = []

        if self.reset_schema:
            warnings.append(
                "RESET_SCHEMA is enabled - every table is dropped and recreated at startup"
            )

        if self.seed_demo_data and not self.reset_schema:
            warnings.append(
                "SEED_DEMO_DATA has no effect unless RESET_SCHEMA is also enabled"
            )

        return warnings


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return a cached instance of :class:`AppSettings`."""

    return AppSettings()


__all__ = [
    "AppSettings",
    "DEFAULT_DATABASE_URL",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_PORT",
    "POSTGRES_ASYNC_PREFIX",
    "get_settings",
    "normalize_database_url",
]
