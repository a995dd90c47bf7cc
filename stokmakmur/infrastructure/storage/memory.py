"""In-process key-value cache, lost on restart."""

from stokmakmur.core.interfaces.storage import IKeyValueStore


class MemoryKeyValueStore(IKeyValueStore):
    """Dict-backed cache for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def snapshot(self) -> dict[str, str]:
        return dict(self._data)
