"""
Contact submission data types.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

REQUIRED_FIELDS: tuple[str, ...] = ("name", "email", "business", "tier", "message")

PHONE_PLACEHOLDER = "Not provided"

TIER_LABELS: dict[str, str] = {
    "tier1": "Tier 1: Traditional Visibility ($1,500)",
    "tier2": "Tier 2: AI Recommendation ($3,000)",
    "tier3": "Tier 3: Omnipresence ($5,000)",
    "not-sure": "Not sure yet",
}


def tier_label(tier: str) -> str:
    """Human-readable label for a tier code; unknown codes pass through verbatim."""
    return TIER_LABELS.get(tier, tier)


@dataclass(frozen=True)
class Submission:
    """A validated contact-form payload."""

    name: str
    email: str
    business: str
    tier: str
    message: str
    phone: str | None = None
    # Payload exactly as received, persisted alongside submittedAt.
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def phone_display(self) -> str:
        return self.phone or PHONE_PLACEHOLDER

    @property
    def tier_display(self) -> str:
        return tier_label(self.tier)


@dataclass(frozen=True)
class NotificationRecord:
    """Formatted notification ready for dispatch."""

    subject: str
    body: str
    submitted_at: datetime


@dataclass(frozen=True)
class StoredSubmission:
    """Backup copy written to the record store."""

    key: str
    fields: dict[str, Any]
    submitted_at: str

    def to_json(self) -> str:
        return json.dumps({**self.fields, "submittedAt": self.submitted_at}, default=str)


@dataclass(frozen=True)
class ContactResult:
    """Outcome of a fully successful submission."""

    message: str = "Form submitted successfully"
    stored_key: str | None = None
    provider_message_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"success": True, "message": self.message}
