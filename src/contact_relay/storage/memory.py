from __future__ import annotations

from contact_relay.storage.interface import RecordStore, RecordStoreError


class MemoryRecordStore(RecordStore):
    """Dict-backed store for development and tests."""

    name = "memory"

    def __init__(self) -> None:
        self.records: dict[str, str] = {}

    async def put(self, key: str, value: str) -> None:
        if key in self.records:
            raise RecordStoreError("Key already exists", key=key)
        self.records[key] = value
