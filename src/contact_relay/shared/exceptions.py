"""
Error taxonomy surfaced to callers of the contact endpoint.

Each error carries a machine-readable ``code``, the HTTP ``status_code`` it
maps to, and a public ``message`` that is safe to return to the caller.
"""


class ContactRelayError(Exception):
    """Base exception for contact relay errors."""

    def __init__(
        self,
        message: str,
        code: str = "internal_error",
        status_code: int = 500,
    ) -> None:
        self.message = message
        self.code = code
        self.status_code = status_code
        super().__init__(message)

    def to_dict(self) -> dict[str, str]:
        return {"error": self.message, "code": self.code}


# Client errors
class MissingFieldError(ContactRelayError):
    """A required submission field is absent or empty."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Missing required field: {field}", "missing_field", 400)
        self.field = field


class InvalidEmailError(ContactRelayError):
    """The submitter's email address does not look like an address."""

    def __init__(self) -> None:
        super().__init__("Invalid email address", "invalid_email", 400)


# Server errors
class ProviderDispatchError(ContactRelayError):
    """The email provider did not accept the notification."""

    def __init__(self, message: str = "Failed to send") -> None:
        super().__init__(message, "provider_error", 500)


class ProviderNotConfiguredError(ContactRelayError):
    """A credential or setting required by the selected provider is missing."""

    def __init__(self, detail: str = "") -> None:
        super().__init__("Email provider is not configured", "provider_unconfigured", 500)
        # Server-side only; never part of the response body.
        self.detail = detail


class InternalError(ContactRelayError):
    """Malformed input or an unexpected failure."""

    def __init__(self, message: str = "Failed to process form submission") -> None:
        super().__init__(message, "internal_error", 500)
