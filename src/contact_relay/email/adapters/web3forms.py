"""
Web3Forms adapter (generic forms relay keyed by an access token).

The destination inbox is bound to the access key on the Web3Forms side, so
``to_address`` is not sent.
"""

from __future__ import annotations

import logging

from contact_relay.email.adapters.base import HTTPEmailProvider
from contact_relay.email.interface import EmailDeliveryError, OutboundEmail, SendResult
from contact_relay.shared.exceptions import ProviderNotConfiguredError

logger = logging.getLogger(__name__)


class Web3FormsProvider(HTTPEmailProvider):
    name = "web3forms"

    def send_sync(self, message: OutboundEmail) -> SendResult:
        access_key = self._config.web3forms_access_key
        if not access_key:
            raise ProviderNotConfiguredError("EMAIL_WEB3FORMS_ACCESS_KEY is not set")

        payload = {
            "access_key": access_key,
            "subject": message.subject,
            "from_name": message.from_name,
            "name": message.reply_to_name,
            "email": message.reply_to_address,
            "replyto": message.reply_to_address,
            "message": message.body_text,
        }

        response = self._post_json(
            self._config.web3forms_url,
            payload,
            headers={"Accept": "application/json"},
        )
        self._raise_for_status(response)

        # Web3Forms can answer 200 with success=false.
        try:
            data = response.json()
        except ValueError as e:
            raise EmailDeliveryError(
                message="web3forms returned a non-JSON body",
                error_code="BAD_RESPONSE",
            ) from e

        if not isinstance(data, dict) or not data.get("success"):
            detail = data.get("message", "") if isinstance(data, dict) else ""
            logger.error(
                "Web3Forms reported failure",
                extra={"provider_message": str(detail)[:200]},
            )
            raise EmailDeliveryError(
                message="web3forms reported failure",
                error_code="PROVIDER_FAILURE",
                provider_response=data,
            )

        return SendResult(provider=self.name, status_code=response.status_code)
