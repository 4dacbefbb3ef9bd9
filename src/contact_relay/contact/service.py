"""
Contact submission handler.

A single linear pass per request:
validate -> format -> (store, best-effort) -> dispatch -> result.

Failure policy: the record store is a backup copy only. Its failures are
logged and never change the outcome. Email dispatch is the success
criterion: if the provider does not accept the message the submission fails
with ``provider_error`` even when the record was stored.
"""

from __future__ import annotations

import time
import uuid
from datetime import datetime, timezone
from typing import Any, Callable

from contact_relay.contact.formatting import format_notification, isoformat_utc
from contact_relay.contact.models import ContactResult, StoredSubmission, Submission
from contact_relay.contact.validation import validate_submission
from contact_relay.email.config import DEFAULT_RECIPIENT_EMAIL, EmailConfig
from contact_relay.email.interface import EmailProvider, EmailProviderError, OutboundEmail
from contact_relay.shared.exceptions import (
    ContactRelayError,
    InternalError,
    ProviderDispatchError,
    ProviderNotConfiguredError,
)
from contact_relay.shared.logging import get_logger, mask_email
from contact_relay.storage.interface import RecordStore

logger = get_logger(__name__)

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate_submission_key() -> str:
    """``submission_<epoch ms>_<random>``; the random part keeps same-millisecond keys apart."""
    return f"submission_{time.time_ns() // 1_000_000}_{uuid.uuid4().hex}"


class ContactSubmissionHandler:
    """Validates a contact-form payload and relays it to the email provider."""

    def __init__(
        self,
        provider: EmailProvider,
        store: RecordStore | None = None,
        *,
        from_address: str = "noreply@genaiqueen.com",
        from_name: str = "genaiqueen.com",
        recipient_address: str = DEFAULT_RECIPIENT_EMAIL,
        recipient_name: str = "",
        site_name: str = "genaiqueen.com",
        clock: Clock | None = None,
        key_factory: Callable[[], str] | None = None,
    ) -> None:
        self._provider = provider
        self._store = store
        self._from_address = from_address
        self._from_name = from_name
        self._recipient_address = recipient_address or DEFAULT_RECIPIENT_EMAIL
        self._recipient_name = recipient_name
        self._site_name = site_name
        self._clock = clock or _utcnow
        self._key_factory = key_factory or generate_submission_key

    @classmethod
    def from_config(
        cls,
        email_config: EmailConfig,
        provider: EmailProvider,
        store: RecordStore | None = None,
    ) -> "ContactSubmissionHandler":
        return cls(
            provider,
            store,
            from_address=email_config.from_email,
            from_name=email_config.from_name,
            recipient_address=email_config.resolved_recipient,
            recipient_name=email_config.recipient_name,
            site_name=email_config.site_name,
        )

    @property
    def provider(self) -> EmailProvider:
        return self._provider

    @property
    def store(self) -> RecordStore | None:
        return self._store

    async def handle(self, payload: Any) -> ContactResult:
        """Process one submission.

        Raises:
            ContactRelayError: any handled failure; ``code`` and
                ``status_code`` describe it for the transport layer.
        """
        try:
            return await self._handle(payload)
        except ContactRelayError:
            raise
        except Exception as e:
            logger.exception("Unexpected error processing contact submission")
            raise InternalError() from e

    async def _handle(self, payload: Any) -> ContactResult:
        try:
            submission = validate_submission(payload)
        except ContactRelayError as e:
            logger.info(
                "Contact submission rejected",
                extra={"error_code": e.code, "field": getattr(e, "field", None)},
            )
            raise

        notification = format_notification(submission, self._site_name, now=self._clock())

        stored_key = None
        if self._store is not None:
            stored_key = await self._persist(submission, notification.submitted_at)

        outbound = OutboundEmail(
            from_address=self._from_address,
            from_name=self._from_name,
            to_address=self._recipient_address,
            to_name=self._recipient_name,
            reply_to_address=submission.email,
            reply_to_name=submission.name,
            subject=notification.subject,
            body_text=notification.body,
        )

        try:
            result = await self._provider.send(outbound)
        except ProviderNotConfiguredError as e:
            logger.error(
                "Email provider is not configured",
                extra={"provider": self._provider.name, "detail": e.detail},
            )
            raise
        except EmailProviderError as e:
            logger.error(
                "Email dispatch failed",
                extra={
                    "provider": self._provider.name,
                    "error_code": e.error_code,
                    "stored_key": stored_key,
                    "submitter": mask_email(submission.email),
                },
            )
            raise ProviderDispatchError() from e

        logger.info(
            "Contact submission relayed",
            extra={
                "provider": result.provider,
                "provider_message_id": result.provider_message_id,
                "stored_key": stored_key,
                "submitter": mask_email(submission.email),
                "tier": submission.tier,
            },
        )
        return ContactResult(
            stored_key=stored_key,
            provider_message_id=result.provider_message_id,
        )

    async def _persist(self, submission: Submission, submitted_at: datetime) -> str | None:
        """Write the backup record; returns the key, or ``None`` if the write failed."""
        record = StoredSubmission(
            key=self._key_factory(),
            fields=submission.raw,
            submitted_at=isoformat_utc(submitted_at),
        )
        try:
            await self._store.put(record.key, record.to_json())
        except Exception:
            logger.warning(
                "Record store write failed; continuing without backup",
                exc_info=True,
                extra={"store": self._store.name, "key": record.key},
            )
            return None
        return record.key
