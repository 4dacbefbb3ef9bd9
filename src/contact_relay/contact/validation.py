"""
Submission validation.

Checks run in a fixed order and stop at the first failure: required fields
(``name, email, business, tier, message``) first, then the email shape.
"""

import re
from typing import Any

from contact_relay.contact.models import REQUIRED_FIELDS, Submission
from contact_relay.shared.exceptions import InternalError, InvalidEmailError, MissingFieldError

# local-part@domain.tld: no whitespace, exactly one @, a dot after it
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def is_valid_email(value: Any) -> bool:
    return isinstance(value, str) and EMAIL_PATTERN.fullmatch(value) is not None


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


def validate_submission(payload: Any) -> Submission:
    """Return a ``Submission`` or raise the first validation error found.

    Raises:
        InternalError: payload is not a JSON object.
        MissingFieldError: a required field is absent or falsy.
        InvalidEmailError: the email does not look like an address.
    """
    if not isinstance(payload, dict):
        raise InternalError()

    for field_name in REQUIRED_FIELDS:
        if not payload.get(field_name):
            raise MissingFieldError(field_name)

    email = payload["email"]
    if not is_valid_email(email):
        raise InvalidEmailError()

    phone = payload.get("phone")
    return Submission(
        name=_as_text(payload["name"]),
        email=email,
        business=_as_text(payload["business"]),
        tier=_as_text(payload["tier"]),
        message=_as_text(payload["message"]),
        phone=_as_text(phone) if phone else None,
        raw=dict(payload),
    )
