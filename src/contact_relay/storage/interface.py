"""
Record store interface definition.
"""

from abc import ABC, abstractmethod


class RecordStoreError(Exception):
    """Base exception for record store errors."""

    def __init__(self, message: str, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


class RecordStore(ABC):
    """Put-by-key store used as a backup copy of submissions."""

    name: str = "abstract"

    @abstractmethod
    async def put(self, key: str, value: str) -> None:
        """Store ``value`` (serialized JSON) under ``key`` or raise ``RecordStoreError``."""
        ...

    async def close(self) -> None:
        """Release connections held by the store."""
