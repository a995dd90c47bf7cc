"""Local cache backends."""

from stokmakmur.config import get_settings
from stokmakmur.core.interfaces.storage import IKeyValueStore
from stokmakmur.infrastructure.storage.memory import MemoryKeyValueStore
from stokmakmur.infrastructure.storage.sqlite import SQLiteKeyValueStore


def create_cache_store(backend: str | None = None) -> IKeyValueStore:
    """Build the cache backend named in settings ("sqlite" or "memory")."""
    backend = backend or get_settings().storage.backend
    if backend == "sqlite":
        return SQLiteKeyValueStore()
    if backend == "memory":
        return MemoryKeyValueStore()
    raise ValueError(f"Unknown storage backend: {backend}")


__all__ = ["MemoryKeyValueStore", "SQLiteKeyValueStore", "create_cache_store"]
