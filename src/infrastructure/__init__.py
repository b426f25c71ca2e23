"""
Infrastructure package for the Pet Store query service.

Centralizes database connectivity concerns (DSN, async pool, sync connection).
Keep this layer focused on I/O and resource management, decoupled from the
query core and the service.
"""

from src.infrastructure.db_factory import (
    build_dsn,
    create_async_pool,
    get_sync_connection,
    managed_async_pool,
    open_async_pool,
)

__all__ = [
    "build_dsn",
    "create_async_pool",
    "get_sync_connection",
    "managed_async_pool",
    "open_async_pool",
]
