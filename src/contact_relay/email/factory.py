"""
Email provider factory.

Single source of truth for provider selection: ``EmailConfig`` (Pydantic
Settings) loaded from OS env + .env. Credentials are checked here, once, so a
misconfigured deployment fails at startup rather than on every request.
"""

from __future__ import annotations

import logging

import httpx

from contact_relay.email.adapters.mailchannels import MailChannelsProvider
from contact_relay.email.adapters.mock import MockEmailProvider
from contact_relay.email.adapters.sendgrid import SendGridProvider
from contact_relay.email.adapters.web3forms import Web3FormsProvider
from contact_relay.email.config import EmailConfig, ProviderType
from contact_relay.email.interface import EmailProvider
from contact_relay.shared.exceptions import ProviderNotConfiguredError
from contact_relay.shared.logging import mask_secret

logger = logging.getLogger(__name__)

# Credential each provider cannot work without (None: nothing required).
_REQUIRED_CREDENTIAL: dict[ProviderType, str | None] = {
    ProviderType.WEB3FORMS: "web3forms_access_key",
    ProviderType.SENDGRID: "sendgrid_api_key",
    ProviderType.MAILCHANNELS: None,
    ProviderType.MOCK: None,
}


def validate_email_config(cfg: EmailConfig) -> None:
    """Raise ``ProviderNotConfiguredError`` if the selected provider lacks its credential."""
    attr = _REQUIRED_CREDENTIAL.get(cfg.provider)
    if attr and not getattr(cfg, attr):
        env_name = f"EMAIL_{attr.upper()}"
        raise ProviderNotConfiguredError(f"{env_name} is required for provider '{cfg.provider.value}'")


def build_email_provider(
    cfg: EmailConfig,
    http_client: httpx.Client | None = None,
) -> EmailProvider:
    """Create the provider selected by ``cfg.provider``."""
    validate_email_config(cfg)

    logger.info(
        "Email provider resolved",
        extra={
            "provider": cfg.provider.value,
            "web3forms_access_key": mask_secret(cfg.web3forms_access_key),
            "sendgrid_api_key": mask_secret(cfg.sendgrid_api_key),
            "recipient_override": bool(cfg.recipient_email),
            "timeout_seconds": cfg.timeout_seconds,
        },
    )

    if cfg.provider == ProviderType.WEB3FORMS:
        return Web3FormsProvider(cfg, http_client=http_client)

    if cfg.provider == ProviderType.SENDGRID:
        return SendGridProvider(cfg, http_client=http_client)

    if cfg.provider == ProviderType.MAILCHANNELS:
        return MailChannelsProvider(cfg, http_client=http_client)

    if cfg.provider == ProviderType.MOCK:
        return MockEmailProvider()

    raise ValueError(f"Unsupported email provider: {cfg.provider}")
