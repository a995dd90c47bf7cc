"""SQLite storage implementations."""

from stokmakmur.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_pool,
)
from stokmakmur.infrastructure.storage.sqlite.kv_store import SQLiteKeyValueStore

__all__ = [
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "SQLiteKeyValueStore",
]
