"""Persistence gateway port.

The budgeting core stores its state as JSON strings under a handful of
keys. Infrastructure adapters implement this protocol on top of a database,
a file or plain memory.
"""

from typing import Protocol


class KeyValueStorePort(Protocol):
    """Port exposing durable string storage by key."""

    def get(self, key: str) -> str | None:
        """Return the value stored under ``key``.

        Returns:
            str | None: Stored value, or None when the key is absent.

        Raises:
            PersistenceReadError: If the storage cannot be read.
        """

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value.

        Raises:
            PersistenceError: If the write fails.
        """


__all__ = ["KeyValueStorePort"]
