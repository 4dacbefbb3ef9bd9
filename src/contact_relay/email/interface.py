"""
Email provider interface definition.

One operation: ``send`` an already-formatted plain-text notification. Concrete
bindings (forms relay, transactional relay, API-key provider) live under
``contact_relay.email.adapters``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import anyio


@dataclass(frozen=True)
class OutboundEmail:
    """Notification to be delivered by a provider."""

    from_address: str
    from_name: str
    to_address: str
    to_name: str
    reply_to_address: str
    reply_to_name: str
    subject: str
    body_text: str


@dataclass(frozen=True)
class SendResult:
    """Result of a successful send."""

    provider: str
    provider_message_id: str | None = None
    status_code: int | None = None
    sent_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class EmailProviderError(Exception):
    """Base exception for email provider errors."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        provider_response: Any = None,
    ) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.provider_response = provider_response


class EmailDeliveryError(EmailProviderError):
    """The provider rejected the message or could not be reached."""


class EmailProvider(ABC):
    """Abstract interface for email providers.

    Adapters implement ``send_sync``; ``send`` runs it in a worker thread so
    the event loop is never blocked on provider I/O.
    """

    name: str = "abstract"

    async def send(self, message: OutboundEmail) -> SendResult:
        return await anyio.to_thread.run_sync(self.send_sync, message)

    @abstractmethod
    def send_sync(self, message: OutboundEmail) -> SendResult:
        """Deliver ``message`` or raise ``EmailDeliveryError``.

        Raises ``ProviderNotConfiguredError`` when a credential the provider
        needs is missing.
        """
        ...

    def close(self) -> None:
        """Release any pooled connections."""
