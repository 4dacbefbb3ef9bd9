"""
Shared plumbing for HTTP-based email providers.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from contact_relay.email.config import EmailConfig
from contact_relay.email.interface import EmailDeliveryError, EmailProvider

logger = logging.getLogger(__name__)

# Provider bodies are logged for diagnosis, never returned to callers.
_MAX_LOGGED_BODY = 500


def address_entry(email: str, name: str) -> dict[str, str]:
    """`{"email", "name"}` object used by JSON mail APIs; empty names are omitted."""
    entry = {"email": email}
    if name:
        entry["name"] = name
    return entry


class HTTPEmailProvider(EmailProvider):
    """Email provider that talks JSON over HTTPS through ``httpx``."""

    def __init__(
        self,
        config: EmailConfig,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._config = config
        self._http_client = http_client
        self._owns_client = http_client is None

    def _get_client(self) -> httpx.Client:
        if self._http_client is None:
            self._http_client = httpx.Client(
                timeout=httpx.Timeout(self._config.timeout_seconds),
            )
        return self._http_client

    def close(self) -> None:
        if self._owns_client and self._http_client is not None:
            self._http_client.close()
            self._http_client = None

    def _post_json(
        self,
        url: str,
        payload: dict[str, Any],
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """POST ``payload`` and return the response; transport errors become ``EmailDeliveryError``."""
        client = self._get_client()
        try:
            return client.post(url, json=payload, headers=headers or {})
        except httpx.HTTPError as e:
            logger.exception(
                "HTTP error during email dispatch",
                extra={"provider": self.name, "url": url},
            )
            raise EmailDeliveryError(
                message=f"HTTP error: {e!s}",
                error_code="HTTP_ERROR",
            ) from e

    def _raise_for_status(self, response: httpx.Response) -> None:
        if response.status_code < 400:
            return
        body = response.text[:_MAX_LOGGED_BODY] if response.content else ""
        logger.error(
            "Email provider rejected message",
            extra={
                "provider": self.name,
                "status_code": response.status_code,
                "provider_body": body,
            },
        )
        raise EmailDeliveryError(
            message=f"{self.name} returned HTTP {response.status_code}",
            error_code=str(response.status_code),
            provider_response=body,
        )
