"""
Record store factory.
"""

from __future__ import annotations

import logging

from contact_relay.storage.config import StoreConfig, StoreType
from contact_relay.storage.interface import RecordStore

logger = logging.getLogger(__name__)


def build_record_store(cfg: StoreConfig) -> RecordStore | None:
    """Create the configured store, or ``None`` when persistence is disabled."""
    logger.info(
        "Record store resolved",
        extra={"store_type": cfg.type.value},
    )

    if cfg.type == StoreType.NONE:
        return None

    if cfg.type == StoreType.MEMORY:
        from contact_relay.storage.memory import MemoryRecordStore

        return MemoryRecordStore()

    if cfg.type == StoreType.REDIS:
        from contact_relay.storage.redis_store import RedisRecordStore

        return RedisRecordStore(cfg)

    if cfg.type == StoreType.DYNAMODB:
        from contact_relay.storage.dynamodb import DynamoDBRecordStore

        return DynamoDBRecordStore(cfg)

    raise ValueError(f"Unsupported store type: {cfg.type}")
