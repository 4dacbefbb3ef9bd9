"""
Shared fixtures for contact relay tests.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from unittest.mock import AsyncMock

import pytest

from contact_relay.contact.service import ContactSubmissionHandler
from contact_relay.email.adapters.mock import MockEmailProvider
from contact_relay.email.config import EmailConfig, ProviderType
from contact_relay.email.interface import EmailProvider, SendResult
from contact_relay.storage.memory import MemoryRecordStore

FIXED_NOW = datetime(2024, 5, 17, 14, 30, 5, 123000, tzinfo=timezone.utc)


@pytest.fixture
def valid_payload() -> dict[str, Any]:
    return {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "business": "example.com",
        "tier": "tier2",
        "phone": "+1 555 0100",
        "message": "We want to show up in AI answers.",
    }


@pytest.fixture
def email_config() -> EmailConfig:
    return EmailConfig(
        provider=ProviderType.SENDGRID,
        sendgrid_api_key="SG.test-key-123456",
        web3forms_access_key="w3f-test-access-key",
        recipient_email="inbox@example.com",
        recipient_name="Inbox",
        from_email="noreply@example.com",
        from_name="example.com",
        site_name="example.com",
        timeout_seconds=5,
    )


@pytest.fixture
def mock_provider() -> MockEmailProvider:
    return MockEmailProvider()


@pytest.fixture
def spy_provider() -> AsyncMock:
    """Provider whose ``send`` is an AsyncMock, for call assertions."""
    provider = AsyncMock(spec=EmailProvider)
    provider.name = "spy"
    provider.send = AsyncMock(return_value=SendResult(provider="spy", provider_message_id="msg-1"))
    return provider


@pytest.fixture
def memory_store() -> MemoryRecordStore:
    return MemoryRecordStore()


@pytest.fixture
def contact_handler(mock_provider: MockEmailProvider, memory_store: MemoryRecordStore) -> ContactSubmissionHandler:
    return ContactSubmissionHandler(
        mock_provider,
        memory_store,
        from_address="noreply@example.com",
        from_name="example.com",
        recipient_address="inbox@example.com",
        recipient_name="Inbox",
        site_name="example.com",
        clock=lambda: FIXED_NOW,
    )
