"""Database settings: read from environment once per process.

The connection URL comes from ``DATABASE_URL`` when set, otherwise it is
assembled from ``PG_HOST`` / ``PG_PORT`` / ``PG_USER`` / ``PG_PASSWORD`` /
``PG_DATABASE``.  Two driver flavours of the same URL are exposed: the
asyncpg one for the runtime engine and the libpq one for Alembic.
"""

import os
from dataclasses import dataclass

_ASYNC_PREFIX = "postgresql+asyncpg://"
_SYNC_PREFIX = "postgresql://"


@dataclass(frozen=True)
class DatabaseSettings:
    """Connection and pool parameters for the submissions database."""

    url: str
    pool_size: int = 5
    max_overflow: int = 10
    # Log every SQL statement (FORMFLOW_DB_ECHO=1); development only
    echo: bool = False

    @property
    def async_url(self) -> str:
        if self.url.startswith(_SYNC_PREFIX):
            return self.url.replace(_SYNC_PREFIX, _ASYNC_PREFIX, 1)
        return self.url

    @property
    def sync_url(self) -> str:
        return self.url.replace(_ASYNC_PREFIX, _SYNC_PREFIX, 1)


def _url_from_parts() -> str:
    host = os.getenv("PG_HOST", "localhost")
    port = os.getenv("PG_PORT", "5432")
    user = os.getenv("PG_USER", "formflow")
    password = os.getenv("PG_PASSWORD", "formflow")
    database = os.getenv("PG_DATABASE", "formflow")
    return f"{_SYNC_PREFIX}{user}:{password}@{host}:{port}/{database}"


def load_database_settings() -> DatabaseSettings:
    """Build settings from ``DATABASE_URL`` / ``PG_*`` environment variables."""
    return DatabaseSettings(
        url=os.getenv("DATABASE_URL") or _url_from_parts(),
        pool_size=int(os.getenv("PG_POOL_SIZE", "5")),
        max_overflow=int(os.getenv("PG_MAX_OVERFLOW", "10")),
        echo=os.getenv("FORMFLOW_DB_ECHO", "0").lower() in ("1", "true", "yes"),
    )


def get_sync_url() -> str:
    """libpq URL for Alembic, which runs migrations synchronously."""
    return load_database_settings().sync_url


def get_async_url() -> str:
    """asyncpg URL for the runtime engine."""
    return load_database_settings().async_url
