"""PostgreSQL lifecycle operations.

This package resolves connection parameters, builds argument vectors for
the PostgreSQL client tools and dispatches the CLI's operations to them.
"""

from .commands import PostgresCommands
from .config import (
    ConnectionConfig,
    ConnectionSource,
    FileSource,
    UrlSource,
    locate_source,
    resolve_connection,
)
from .dispatcher import PostgresDispatcher

__all__ = [
    "ConnectionConfig",
    "ConnectionSource",
    "FileSource",
    "UrlSource",
    "locate_source",
    "resolve_connection",
    "PostgresCommands",
    "PostgresDispatcher",
]
