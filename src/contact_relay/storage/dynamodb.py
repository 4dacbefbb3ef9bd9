"""
DynamoDB-backed record store.

boto3 is synchronous; writes run in a worker thread.
"""

from __future__ import annotations

from typing import Any, Optional

import anyio
import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from contact_relay.storage.config import StoreConfig
from contact_relay.storage.interface import RecordStore, RecordStoreError


class DynamoDBRecordStore(RecordStore):
    """Writes ``{"id": key, "payload": value}`` items to a single table."""

    name = "dynamodb"

    def __init__(self, config: StoreConfig, table: Optional[Any] = None) -> None:
        self._config = config
        self._table = table

    def _get_table(self) -> Any:
        if self._table is None:
            resource = boto3.resource(
                "dynamodb",
                region_name=self._config.aws_region,
                config=Config(
                    connect_timeout=self._config.timeout_seconds,
                    read_timeout=self._config.timeout_seconds,
                    retries={"total_max_attempts": 1},
                ),
            )
            self._table = resource.Table(self._config.dynamodb_table)
        return self._table

    def _put_sync(self, key: str, value: str) -> None:
        try:
            self._get_table().put_item(
                Item={"id": key, "payload": value},
                ConditionExpression="attribute_not_exists(id)",
            )
        except (ClientError, BotoCoreError) as e:
            raise RecordStoreError(f"DynamoDB write failed: {e}", key=key) from e

    async def put(self, key: str, value: str) -> None:
        full_key = f"{self._config.key_prefix}{key}"
        await anyio.to_thread.run_sync(self._put_sync, full_key, value)
