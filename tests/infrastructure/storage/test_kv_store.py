"""Tests for the local cache backends."""

from pathlib import Path

import pytest

from stokmakmur.infrastructure.storage import create_cache_store
from stokmakmur.infrastructure.storage.memory import MemoryKeyValueStore
from stokmakmur.infrastructure.storage.sqlite.connection import ConnectionPool
from stokmakmur.infrastructure.storage.sqlite.kv_store import SQLiteKeyValueStore


@pytest.fixture
async def pool(tmp_path: Path):
    """Create a connection pool on a temporary database."""
    pool = ConnectionPool(db_path=tmp_path / "cache.db", pool_size=1)
    await pool.initialize()
    yield pool
    await pool.close()


@pytest.fixture
def sqlite_store(pool):
    return SQLiteKeyValueStore(pool=pool)


class TestSQLiteKeyValueStore:
    async def test_missing_key(self, sqlite_store):
        assert await sqlite_store.get("stok_makmur_items") is None

    async def test_set_and_get(self, sqlite_store):
        await sqlite_store.set("stok_makmur_items", '[{"id": "1"}]')
        assert await sqlite_store.get("stok_makmur_items") == '[{"id": "1"}]'

    async def test_set_overwrites(self, sqlite_store):
        await sqlite_store.set("stok_makmur_sheet_url", "https://a")
        await sqlite_store.set("stok_makmur_sheet_url", "https://b")
        assert await sqlite_store.get("stok_makmur_sheet_url") == "https://b"

    async def test_delete(self, sqlite_store):
        await sqlite_store.set("k", "v")
        await sqlite_store.delete("k")
        assert await sqlite_store.get("k") is None

    async def test_survives_new_store_instance(self, pool):
        await SQLiteKeyValueStore(pool=pool).set("k", "persisted")
        assert await SQLiteKeyValueStore(pool=pool).get("k") == "persisted"


class TestMemoryKeyValueStore:
    async def test_roundtrip_and_snapshot(self):
        store = MemoryKeyValueStore({"a": "1"})
        await store.set("b", "2")
        await store.delete("a")
        await store.delete("missing")

        assert await store.get("b") == "2"
        assert store.snapshot() == {"b": "2"}


class TestCreateCacheStore:
    def test_backends(self):
        assert isinstance(create_cache_store("memory"), MemoryKeyValueStore)
        assert isinstance(create_cache_store("sqlite"), SQLiteKeyValueStore)

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            create_cache_store("redis")
