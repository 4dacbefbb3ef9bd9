"""
Tests for ContactSubmissionHandler.
"""

from __future__ import annotations

import json
from unittest.mock import AsyncMock

import pytest

from contact_relay.contact import service as service_module
from contact_relay.contact.service import ContactSubmissionHandler, generate_submission_key
from contact_relay.email.adapters.mock import MockEmailProvider
from contact_relay.email.interface import EmailDeliveryError
from contact_relay.shared.exceptions import (
    InternalError,
    InvalidEmailError,
    MissingFieldError,
    ProviderDispatchError,
    ProviderNotConfiguredError,
)
from contact_relay.storage.interface import RecordStore, RecordStoreError
from contact_relay.storage.memory import MemoryRecordStore


class TestHandleSuccess:
    @pytest.mark.asyncio
    async def test_relays_notification(self, contact_handler, mock_provider, valid_payload) -> None:
        result = await contact_handler.handle(valid_payload)

        assert result.to_dict() == {"success": True, "message": "Form submitted successfully"}
        assert len(mock_provider.sent) == 1

        sent = mock_provider.sent[0]
        assert sent.subject == "New GEO Inquiry from Jane Doe"
        assert sent.reply_to_address == "jane@example.com"
        assert sent.reply_to_name == "Jane Doe"
        assert sent.to_address == "inbox@example.com"
        assert sent.to_name == "Inbox"
        assert sent.from_address == "noreply@example.com"
        assert sent.from_name == "example.com"
        assert "Interested In: Tier 2: AI Recommendation ($3,000)" in sent.body_text

    @pytest.mark.asyncio
    async def test_persists_payload_with_timestamp(self, contact_handler, memory_store, valid_payload) -> None:
        result = await contact_handler.handle(valid_payload)

        assert result.stored_key is not None
        stored = json.loads(memory_store.records[result.stored_key])
        submitted_at = stored.pop("submittedAt")
        assert stored == valid_payload
        assert submitted_at == "2024-05-17T14:30:05.123Z"

    @pytest.mark.asyncio
    async def test_without_store_skips_persistence(self, mock_provider, valid_payload) -> None:
        handler = ContactSubmissionHandler(mock_provider)

        result = await handler.handle(valid_payload)

        assert result.stored_key is None
        assert len(mock_provider.sent) == 1

    @pytest.mark.asyncio
    async def test_default_recipient_when_override_empty(self, mock_provider, valid_payload) -> None:
        handler = ContactSubmissionHandler(mock_provider, recipient_address="")

        await handler.handle(valid_payload)

        assert mock_provider.sent[0].to_address == "lana@genaiqueen.com"

    @pytest.mark.asyncio
    async def test_from_config(self, email_config, mock_provider, valid_payload) -> None:
        handler = ContactSubmissionHandler.from_config(email_config, mock_provider)

        await handler.handle(valid_payload)

        sent = mock_provider.sent[0]
        assert sent.to_address == "inbox@example.com"
        assert sent.from_address == "noreply@example.com"


class TestHandleValidation:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["name", "email", "business", "tier", "message"])
    async def test_missing_field_never_dispatches(self, spy_provider, memory_store, valid_payload, field) -> None:
        handler = ContactSubmissionHandler(spy_provider, memory_store)
        valid_payload[field] = ""

        with pytest.raises(MissingFieldError) as exc_info:
            await handler.handle(valid_payload)

        assert exc_info.value.field == field
        spy_provider.send.assert_not_awaited()
        assert memory_store.records == {}

    @pytest.mark.asyncio
    async def test_invalid_email_never_dispatches(self, spy_provider, valid_payload) -> None:
        handler = ContactSubmissionHandler(spy_provider)
        valid_payload["email"] = "jane@example"

        with pytest.raises(InvalidEmailError):
            await handler.handle(valid_payload)

        spy_provider.send.assert_not_awaited()


class TestHandleFailures:
    @pytest.mark.asyncio
    async def test_provider_failure_is_fatal_even_when_stored(self, memory_store, valid_payload) -> None:
        handler = ContactSubmissionHandler(MockEmailProvider(fail=True), memory_store)

        with pytest.raises(ProviderDispatchError) as exc_info:
            await handler.handle(valid_payload)

        assert exc_info.value.status_code == 500
        assert exc_info.value.code == "provider_error"
        assert exc_info.value.message == "Failed to send"
        # The backup copy was still written.
        assert len(memory_store.records) == 1

    @pytest.mark.asyncio
    async def test_provider_error_body_not_leaked(self, spy_provider, valid_payload) -> None:
        spy_provider.send.side_effect = EmailDeliveryError(
            "sendgrid returned HTTP 401",
            error_code="401",
            provider_response='{"errors":[{"message":"secret detail"}]}',
        )
        handler = ContactSubmissionHandler(spy_provider)

        with pytest.raises(ProviderDispatchError) as exc_info:
            await handler.handle(valid_payload)

        assert "secret detail" not in json.dumps(exc_info.value.to_dict())

    @pytest.mark.asyncio
    async def test_unconfigured_provider(self, spy_provider, valid_payload) -> None:
        spy_provider.send.side_effect = ProviderNotConfiguredError("EMAIL_SENDGRID_API_KEY is not set")
        handler = ContactSubmissionHandler(spy_provider)

        with pytest.raises(ProviderNotConfiguredError) as exc_info:
            await handler.handle(valid_payload)

        assert exc_info.value.code == "provider_unconfigured"
        assert "SENDGRID" not in exc_info.value.message

    @pytest.mark.asyncio
    async def test_store_failure_does_not_change_outcome(self, mock_provider, valid_payload) -> None:
        store = AsyncMock(spec=RecordStore)
        store.name = "broken"
        store.put.side_effect = RecordStoreError("connection refused")
        handler = ContactSubmissionHandler(mock_provider, store)

        result = await handler.handle(valid_payload)

        assert result.to_dict()["success"] is True
        assert result.stored_key is None
        store.put.assert_awaited_once()
        assert len(mock_provider.sent) == 1

    @pytest.mark.asyncio
    async def test_unexpected_exception_becomes_internal_error(self, spy_provider, valid_payload) -> None:
        spy_provider.send.side_effect = RuntimeError("boom")
        handler = ContactSubmissionHandler(spy_provider)

        with pytest.raises(InternalError) as exc_info:
            await handler.handle(valid_payload)

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Failed to process form submission"


class TestSubmissionKeys:
    def test_keys_unique_within_same_millisecond(self, monkeypatch) -> None:
        monkeypatch.setattr(service_module.time, "time_ns", lambda: 1_715_956_205_123_000_000)

        first = generate_submission_key()
        second = generate_submission_key()

        assert first != second
        assert first.startswith("submission_1715956205123_")
        assert second.startswith("submission_1715956205123_")

    @pytest.mark.asyncio
    async def test_two_submissions_same_millisecond_both_stored(self, mock_provider, valid_payload, monkeypatch) -> None:
        monkeypatch.setattr(service_module.time, "time_ns", lambda: 1_715_956_205_123_000_000)
        store = MemoryRecordStore()
        handler = ContactSubmissionHandler(mock_provider, store)

        first = await handler.handle(valid_payload)
        second = await handler.handle(valid_payload)

        assert first.stored_key != second.stored_key
        assert len(store.records) == 2
