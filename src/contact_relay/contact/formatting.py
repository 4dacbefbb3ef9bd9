"""
Notification message formatting.
"""

from datetime import datetime, timezone

from contact_relay.contact.models import NotificationRecord, Submission

SUBJECT_TEMPLATE = "New GEO Inquiry from {name}"

BODY_TEMPLATE = """\
New GEO inquiry from {site_name}

Name: {name}
Email: {email}
Business/Website: {business}
Phone: {phone}
Interested In: {tier}

Message:
{message}

---
Submitted at: {submitted_at}"""


def isoformat_utc(moment: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a ``Z`` suffix."""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_subject(submission: Submission) -> str:
    return SUBJECT_TEMPLATE.format(name=submission.name)


def format_notification(
    submission: Submission,
    site_name: str,
    now: datetime | None = None,
) -> NotificationRecord:
    """Render the plain-text notification; the timestamp is taken at formatting time."""
    submitted_at = now or datetime.now(timezone.utc)
    body = BODY_TEMPLATE.format(
        site_name=site_name,
        name=submission.name,
        email=submission.email,
        business=submission.business,
        phone=submission.phone_display,
        tier=submission.tier_display,
        message=submission.message,
        submitted_at=isoformat_utc(submitted_at),
    )
    return NotificationRecord(
        subject=build_subject(submission),
        body=body.strip(),
        submitted_at=submitted_at,
    )
