"""Abstract key-value storage — swap the local JSON file for another backend later."""

from abc import ABC, abstractmethod


class StorageError(Exception):
    """Raised by storage backends when a read or write fails."""


class KeyValueStorage(ABC):
    @abstractmethod
    def get(self, key: str) -> bytes | None:
        """Return the blob stored under key, or None if absent."""

    @abstractmethod
    def set(self, key: str, blob: bytes) -> None:
        """Store blob under key, replacing any previous value."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove key. Returns True if it existed."""

    @abstractmethod
    def keys(self) -> list[str]:
        """All keys currently stored."""
