"""SQLite implementation of the local key-value cache."""

import aiosqlite

from stokmakmur.config import get_logger
from stokmakmur.core.exceptions import DatabaseError
from stokmakmur.core.interfaces.storage import IKeyValueStore
from stokmakmur.infrastructure.storage.sqlite.connection import ConnectionPool, get_pool

logger = get_logger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS cache_entries (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
)
"""


class SQLiteKeyValueStore(IKeyValueStore):
    """Stores each cache slot as one row of cache_entries."""

    def __init__(self, pool: ConnectionPool | None = None):
        self._pool = pool
        self._schema_ready = False

    async def _get_pool(self) -> ConnectionPool:
        if self._pool is None:
            self._pool = await get_pool()
        if not self._schema_ready:
            async with self._pool.transaction() as conn:
                await conn.execute(SCHEMA)
            self._schema_ready = True
        return self._pool

    async def get(self, key: str) -> str | None:
        pool = await self._get_pool()
        try:
            async with pool.acquire() as conn:
                cursor = await conn.execute(
                    "SELECT value FROM cache_entries WHERE key = ?", (key,)
                )
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise DatabaseError("cache_get", str(e)) from e
        return None if row is None else row["value"]

    async def set(self, key: str, value: str) -> None:
        pool = await self._get_pool()
        try:
            async with pool.transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO cache_entries (key, value, updated_at)
                    VALUES (?, ?, CURRENT_TIMESTAMP)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = excluded.updated_at
                    """,
                    (key, value),
                )
        except aiosqlite.Error as e:
            raise DatabaseError("cache_set", str(e)) from e
        logger.debug("cache_entry_written", key=key, size=len(value))

    async def delete(self, key: str) -> None:
        pool = await self._get_pool()
        try:
            async with pool.transaction() as conn:
                await conn.execute("DELETE FROM cache_entries WHERE key = ?", (key,))
        except aiosqlite.Error as e:
            raise DatabaseError("cache_delete", str(e)) from e
