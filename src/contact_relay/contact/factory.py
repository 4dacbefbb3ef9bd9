"""
Contact handler factory.
"""

from __future__ import annotations

from contact_relay.contact.service import ContactSubmissionHandler
from contact_relay.email.config import get_email_config
from contact_relay.email.factory import build_email_provider
from contact_relay.storage.config import get_store_config
from contact_relay.storage.factory import build_record_store


def build_contact_handler() -> ContactSubmissionHandler:
    """Build the handler from environment configuration.

    Raises ``ProviderNotConfiguredError`` if the selected provider is missing
    its credential, so the process refuses to start.
    """
    email_cfg = get_email_config()
    provider = build_email_provider(email_cfg)
    store = build_record_store(get_store_config())
    return ContactSubmissionHandler.from_config(email_cfg, provider, store)
