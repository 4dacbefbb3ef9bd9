"""
Email provider configuration.

Exactly one provider is active per deployment, selected by ``EMAIL_PROVIDER``.
"""

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_RECIPIENT_EMAIL = "lana@genaiqueen.com"


class ProviderType(str, Enum):
    """Supported email provider types."""

    WEB3FORMS = "web3forms"
    MAILCHANNELS = "mailchannels"
    SENDGRID = "sendgrid"
    MOCK = "mock"


class EmailConfig(BaseSettings):
    """Email provider configuration from environment."""

    model_config = SettingsConfigDict(
        env_prefix="EMAIL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Provider selection
    provider: ProviderType = Field(default=ProviderType.SENDGRID)

    # Forms relay
    web3forms_access_key: str = Field(default="")
    web3forms_url: str = Field(default="https://api.web3forms.com/submit")

    # Transactional relay (key is optional: some relays authenticate by origin)
    mailchannels_api_key: str = Field(default="")
    mailchannels_url: str = Field(default="https://api.mailchannels.net/tx/v1/send")

    # API-key provider
    sendgrid_api_key: str = Field(default="")
    sendgrid_url: str = Field(default="https://api.sendgrid.com/v3/mail/send")

    # Addressing
    recipient_email: str = Field(
        default="",
        description="Inbox that receives submissions; empty falls back to the default address.",
    )
    recipient_name: str = Field(default="")
    from_email: str = Field(default="noreply@genaiqueen.com")
    from_name: str = Field(default="genaiqueen.com")
    site_name: str = Field(default="genaiqueen.com")

    # Outbound call bound
    timeout_seconds: float = Field(default=10.0, ge=1, le=60)

    @property
    def resolved_recipient(self) -> str:
        return self.recipient_email.strip() or DEFAULT_RECIPIENT_EMAIL


def get_email_config() -> EmailConfig:
    return EmailConfig()
