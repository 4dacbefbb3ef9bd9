"""
Redis-backed record store.
"""

from __future__ import annotations

from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from contact_relay.storage.config import StoreConfig
from contact_relay.storage.interface import RecordStore, RecordStoreError


class RedisRecordStore(RecordStore):
    """Stores each submission as a plain string value with no expiry."""

    name = "redis"

    def __init__(self, config: StoreConfig, client: Optional[redis.Redis] = None) -> None:
        self._config = config
        self._client = client

    def _get_client(self) -> redis.Redis:
        if self._client is None:
            self._client = redis.from_url(
                self._config.redis_url,
                encoding="utf-8",
                decode_responses=True,
                socket_timeout=self._config.timeout_seconds,
                socket_connect_timeout=self._config.timeout_seconds,
            )
        return self._client

    async def put(self, key: str, value: str) -> None:
        full_key = f"{self._config.key_prefix}{key}"
        try:
            # nx: keys are never overwritten
            stored = await self._get_client().set(full_key, value, nx=True)
        except RedisError as e:
            raise RecordStoreError(f"Redis write failed: {e}", key=full_key) from e
        if not stored:
            raise RecordStoreError("Key already exists", key=full_key)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
