from payhere.client import Payhere
from payhere.config import Environment, MerchantConfig, PayhereSettings
from payhere.exceptions import (
    ConfigError,
    ErrorKind,
    InvalidTransitionError,
    MissingFieldError,
    PayhereError,
    ValidationError,
    VerificationError,
    VerificationFailure,
)
from payhere.notification import NotificationVerifier
from payhere.request import PaymentRequestBuilder
from payhere.status import PaymentStatus, classify

__all__ = [
    "ConfigError",
    "Environment",
    "ErrorKind",
    "InvalidTransitionError",
    "MerchantConfig",
    "MissingFieldError",
    "NotificationVerifier",
    "PaymentRequestBuilder",
    "PaymentStatus",
    "Payhere",
    "PayhereError",
    "PayhereSettings",
    "ValidationError",
    "VerificationError",
    "VerificationFailure",
    "classify",
]
