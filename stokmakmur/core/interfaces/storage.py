"""Abstract interface for the local key-value cache."""

from abc import ABC, abstractmethod


class IKeyValueStore(ABC):
    """String-keyed slots holding serialized state.

    Read once when the state container loads, written after every commit.
    """

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the stored value, or None if the slot is empty."""
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Clear a slot."""
        pass
