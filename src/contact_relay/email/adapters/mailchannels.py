"""
MailChannels transactional relay adapter.
"""

from __future__ import annotations

from typing import Any

from contact_relay.email.adapters.base import HTTPEmailProvider, address_entry
from contact_relay.email.interface import OutboundEmail, SendResult


class MailChannelsProvider(HTTPEmailProvider):
    name = "mailchannels"

    def _build_payload(self, message: OutboundEmail) -> dict[str, Any]:
        return {
            "personalizations": [
                {"to": [address_entry(message.to_address, message.to_name)]}
            ],
            "from": address_entry(message.from_address, message.from_name),
            "reply_to": address_entry(message.reply_to_address, message.reply_to_name),
            "subject": message.subject,
            "content": [{"type": "text/plain", "value": message.body_text}],
        }

    def send_sync(self, message: OutboundEmail) -> SendResult:
        headers = {}
        if self._config.mailchannels_api_key:
            headers["X-Api-Key"] = self._config.mailchannels_api_key

        response = self._post_json(
            self._config.mailchannels_url,
            self._build_payload(message),
            headers=headers,
        )
        self._raise_for_status(response)

        return SendResult(provider=self.name, status_code=response.status_code)
