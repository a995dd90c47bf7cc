"""
aiosqlite connection pool for the cache database.

A fixed number of connections is opened lazily and handed out through an
asyncio queue. The cache writes a handful of small rows per commit, so two
connections are plenty.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from stokmakmur.config import get_logger, get_settings

logger = get_logger(__name__)

PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA synchronous=NORMAL",
)


class ConnectionPool:
    """Queue of open aiosqlite connections to one database file."""

    def __init__(self, db_path: Path, pool_size: int = 2, busy_timeout: int = 30000):
        self.db_path = Path(db_path)
        self.pool_size = max(1, pool_size)
        self.busy_timeout = busy_timeout

        self._idle: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue()
        self._opened: list[aiosqlite.Connection] = []
        self._ready = False
        self._guard = asyncio.Lock()

    @property
    def is_open(self) -> bool:
        return self._ready

    async def initialize(self) -> None:
        """Open pool_size connections; calling again is a no-op."""
        async with self._guard:
            if self._ready:
                return
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            for _ in range(self.pool_size):
                conn = await self._open()
                self._opened.append(conn)
                self._idle.put_nowait(conn)
            self._ready = True

        logger.info("sqlite_pool_opened", db_path=str(self.db_path), size=self.pool_size)

    async def _open(self) -> aiosqlite.Connection:
        conn = await aiosqlite.connect(self.db_path)
        for pragma in PRAGMAS:
            await conn.execute(pragma)
        await conn.execute(f"PRAGMA busy_timeout={int(self.busy_timeout)}")
        conn.row_factory = aiosqlite.Row
        return conn

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """Borrow a connection for reads; it goes back to the queue on exit."""
        if not self._ready:
            await self.initialize()
        conn = await self._idle.get()
        try:
            yield conn
        finally:
            self._idle.put_nowait(conn)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """Borrow a connection and commit on success, roll back on error."""
        async with self.acquire() as conn:
            try:
                yield conn
            except BaseException:
                await conn.rollback()
                raise
            await conn.commit()

    async def close(self) -> None:
        async with self._guard:
            for conn in self._opened:
                await conn.close()
            self._opened = []
            self._idle = asyncio.Queue()
            self._ready = False
        logger.info("sqlite_pool_closed", db_path=str(self.db_path))


_pool: ConnectionPool | None = None


async def get_pool() -> ConnectionPool:
    """Process-wide pool built from storage settings."""
    global _pool
    if _pool is None:
        storage = get_settings().storage
        _pool = ConnectionPool(
            db_path=storage.db_path,
            pool_size=storage.pool_size,
            busy_timeout=storage.busy_timeout,
        )
        await _pool.initialize()
    return _pool


async def close_pool() -> None:
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None
