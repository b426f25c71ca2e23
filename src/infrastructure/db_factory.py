"""
Database connection factory utilities for the Pet Store query service.

Provides DSN composition from settings, a managed psycopg async connection pool
and a dedicated sync connection for bulk loading. Opening connections is
retried with tenacity for transient failures; queries issued through the pool
are never retried here.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import psycopg
from psycopg import Connection
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool, PoolTimeout
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from src.config import Settings, get_settings
from src.utils.logging import get_logger

log = get_logger(__name__)


def build_dsn(settings: Optional[Settings] = None) -> str:
    """Compose a DSN string from settings."""
    settings = settings or get_settings()
    return (
        f"postgresql://{settings.db_user}:{settings.db_password}"
        f"@{settings.db_host}:{settings.db_port}/{settings.db_name}"
    )


def create_async_pool(
    dsn: Optional[str] = None,
    min_size: Optional[int] = None,
    max_size: Optional[int] = None,
) -> AsyncConnectionPool:
    """
    Build an unopened async pool whose connections return rows as dicts.

    Parameters
    ----------
    dsn : str | None
        Connection string. Defaults to the one built from settings.
    min_size : int | None
        Minimum number of idle connections to keep.
    max_size : int | None
        Maximum total connections in the pool.
    """
    settings = get_settings()
    return AsyncConnectionPool(
        conninfo=dsn or build_dsn(settings),
        min_size=min_size or settings.db_pool_min_size,
        max_size=max_size or settings.db_pool_max_size,
        kwargs={"row_factory": dict_row},
        open=False,
    )


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((psycopg.OperationalError, PoolTimeout)),
    reraise=True,
)
async def open_async_pool(pool: AsyncConnectionPool, timeout: float = 10.0) -> AsyncConnectionPool:
    """
    Open the pool and wait until `min_size` connections are ready.

    Retries up to 3 times with exponential backoff.

    Raises
    ------
    psycopg_pool.PoolTimeout
        If the pool cannot be filled after all retry attempts.
    """
    await pool.open(wait=True, timeout=timeout)
    log.info("Async pool opened", extra={"min_size": pool.min_size, "max_size": pool.max_size})
    return pool


@asynccontextmanager
async def managed_async_pool(dsn_override: Optional[str] = None) -> AsyncIterator[AsyncConnectionPool]:
    """
    Open a pool for the lifetime of the block and always close it afterwards.

    Example
    -------
        async with managed_async_pool() as pool:
            store = PostgresPetStore(pool)
    """
    pool = create_async_pool(dsn=dsn_override)
    try:
        await open_async_pool(pool)
        yield pool
    finally:
        await pool.close()


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((psycopg.OperationalError, psycopg.InterfaceError)),
    reraise=True,
)
def get_sync_connection(dsn_override: Optional[str] = None) -> Connection:
    """
    Acquire a dedicated synchronous connection with automatic retry.

    Use this for one-off operations such as bulk loading seed data.

    Raises
    ------
    psycopg.OperationalError
        If connection fails after all retry attempts.
    """
    return psycopg.connect(dsn_override or build_dsn())


__all__ = [
    "build_dsn",
    "create_async_pool",
    "get_sync_connection",
    "managed_async_pool",
    "open_async_pool",
]
