"""
SendGrid v3 adapter (bearer-token credential, explicit recipient).
"""

from __future__ import annotations

from typing import Any

from contact_relay.email.adapters.base import HTTPEmailProvider, address_entry
from contact_relay.email.interface import OutboundEmail, SendResult
from contact_relay.shared.exceptions import ProviderNotConfiguredError


class SendGridProvider(HTTPEmailProvider):
    name = "sendgrid"

    def _build_payload(self, message: OutboundEmail) -> dict[str, Any]:
        return {
            "personalizations": [
                {
                    "to": [address_entry(message.to_address, message.to_name)],
                    "subject": message.subject,
                }
            ],
            "from": address_entry(message.from_address, message.from_name),
            "reply_to": address_entry(message.reply_to_address, message.reply_to_name),
            "content": [{"type": "text/plain", "value": message.body_text}],
        }

    def send_sync(self, message: OutboundEmail) -> SendResult:
        api_key = self._config.sendgrid_api_key
        if not api_key:
            raise ProviderNotConfiguredError("EMAIL_SENDGRID_API_KEY is not set")
        if not message.to_address:
            raise ProviderNotConfiguredError("no recipient address configured")

        response = self._post_json(
            self._config.sendgrid_url,
            self._build_payload(message),
            headers={"Authorization": f"Bearer {api_key}"},
        )
        self._raise_for_status(response)

        return SendResult(
            provider=self.name,
            provider_message_id=response.headers.get("X-Message-Id"),
            status_code=response.status_code,
        )
