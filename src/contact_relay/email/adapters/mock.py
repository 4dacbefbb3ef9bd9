from __future__ import annotations

from dataclasses import dataclass, field

from contact_relay.email.interface import (
    EmailDeliveryError,
    EmailProvider,
    OutboundEmail,
    SendResult,
)


@dataclass
class MockEmailProvider(EmailProvider):
    """
    In-memory provider for local runs and tests.
    Never touches the network; keeps every message it was asked to send.
    """

    fail: bool = False
    sent: list[OutboundEmail] = field(default_factory=list)

    name = "mock"

    def send_sync(self, message: OutboundEmail) -> SendResult:
        if self.fail:
            raise EmailDeliveryError("mock provider configured to fail", error_code="MOCK_FAILURE")
        self.sent.append(message)
        return SendResult(provider=self.name, provider_message_id=f"MOCK_{len(self.sent):06d}")

    async def send(self, message: OutboundEmail) -> SendResult:
        return self.send_sync(message)
