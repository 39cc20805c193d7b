"""
Error taxonomy for the PayHere SDK.

Every error is a ``PayhereError`` tagged with a closed ``ErrorKind`` and a
structured ``context`` mapping, so callers can log or serialize failures
without parsing messages.
"""
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    MISSING_FIELD = "missing_field"
    VERIFICATION = "verification"
    CONFIG = "config"
    INVALID_TRANSITION = "invalid_transition"


class VerificationFailure(str, Enum):
    MERCHANT_MISMATCH = "merchant_mismatch"
    HASH_MISMATCH = "hash_mismatch"


class PayhereError(Exception):
    """Base exception for all SDK errors."""

    kind: ErrorKind

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        self.message = message
        self.context = context or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API error response format."""
        return {
            "error": self.kind.value,
            "message": self.message,
            "context": self.context,
        }


class ValidationError(PayhereError):
    """An outbound field value was rejected."""

    kind = ErrorKind.VALIDATION

    def __init__(self, field: str, value: Any, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(
            f"Invalid value for '{field}': {reason}",
            {"field": field, "value": value, "reason": reason},
        )


class MissingFieldError(PayhereError):
    """A required field is absent or blank."""

    kind = ErrorKind.MISSING_FIELD

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Required field '{field}' is missing", {"field": field})


class VerificationError(PayhereError):
    """
    An inbound notification failed authentication.

    ``reason`` separates a notification addressed to another merchant from a
    payload whose signature does not match.
    """

    kind = ErrorKind.VERIFICATION

    def __init__(
        self,
        reason: VerificationFailure,
        message: str,
        context: dict[str, Any] | None = None,
    ):
        self.reason = reason
        super().__init__(message, {"reason": reason.value, **(context or {})})


class ConfigError(PayhereError):
    """Merchant credentials or environment are unusable."""

    kind = ErrorKind.CONFIG


class InvalidTransitionError(PayhereError):
    """Builder lifecycle event is not allowed in the current state."""

    kind = ErrorKind.INVALID_TRANSITION
