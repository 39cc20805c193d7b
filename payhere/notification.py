"""
Inbound payment notification verification.

The raw webhook payload is passed in explicitly. Construction rejects
payloads missing a required field before any hashing. ``verify`` either
returns True or raises ``VerificationError``; it never reports failure as a
return value.
"""
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from payhere.config import MerchantConfig
from payhere.exceptions import MissingFieldError, VerificationError, VerificationFailure
from payhere.signature import (
    NOTIFICATION_SIGNATURE_FIELD,
    compute_signature,
    format_amount,
    verify_signature,
)
from payhere.status import PaymentStatus, classify, parse_status_code

REQUIRED_FIELDS: tuple[str, ...] = (
    "merchant_id",
    "order_id",
    "payment_id",
    "payhere_amount",
    "payhere_currency",
    "status_code",
    NOTIFICATION_SIGNATURE_FIELD,
)


def _is_blank(value: Any) -> bool:
    return value is None or not str(value).strip()


class NotificationVerifier:
    def __init__(self, config: MerchantConfig, payload: Mapping[str, Any]):
        for name in REQUIRED_FIELDS:
            if _is_blank(payload.get(name)):
                raise MissingFieldError(name)
        self.config = config
        self._data: dict[str, str] = {
            key: str(value).strip() for key, value in payload.items() if value is not None
        }
        self.is_verified = False

    def verify(self) -> bool:
        """
        Authenticate the notification.

        Checks merchant identity first, then recomputes the signature over
        merchant id, order id, two-decimal amount, currency and status code,
        and compares it with ``md5sig`` in constant time.

        Raises:
            VerificationError: MERCHANT_MISMATCH if the payload names another
                merchant, HASH_MISMATCH if the signature does not match.
        """
        received_merchant_id = self._data["merchant_id"]
        if received_merchant_id != self.config.merchant_id:
            raise VerificationError(
                VerificationFailure.MERCHANT_MISMATCH,
                "Notification is addressed to a different merchant",
                {
                    "expected_merchant_id": self.config.merchant_id,
                    "received_merchant_id": received_merchant_id,
                    "order_id": self.order_id,
                },
            )

        received_hash = self._data[NOTIFICATION_SIGNATURE_FIELD]
        context = {
            "order_id": self.order_id,
            "payment_id": self.payment_id,
            "received_hash": received_hash,
            "amount": self._data["payhere_amount"],
            "currency": self.currency,
            "status_code": self._data["status_code"],
        }
        try:
            amount = format_amount(self._data["payhere_amount"])
        except ValueError:
            raise VerificationError(
                VerificationFailure.HASH_MISMATCH,
                "Notification amount is not a number",
                {**context, "expected_hash": None},
            )

        expected_hash = compute_signature(
            merchant_id=received_merchant_id,
            order_id=self.order_id,
            amount=amount,
            currency=self.currency,
            secret=self.config.merchant_secret,
            status_code=self._data["status_code"],
        )
        if not verify_signature(received_hash, expected_hash):
            raise VerificationError(
                VerificationFailure.HASH_MISMATCH,
                "Notification signature mismatch",
                {**context, "expected_hash": expected_hash},
            )

        self.is_verified = True
        return True

    @property
    def data(self) -> dict[str, str]:
        return dict(self._data)

    def get(self, key: str, default: str | None = None) -> str | None:
        return self._data.get(key, default)

    @property
    def order_id(self) -> str:
        return self._data["order_id"]

    @property
    def payment_id(self) -> str:
        return self._data["payment_id"]

    @property
    def merchant_id(self) -> str:
        return self._data["merchant_id"]

    @property
    def amount(self) -> Decimal | None:
        """Amount as a two-decimal Decimal, or None if it is not a number."""
        try:
            return Decimal(format_amount(self._data["payhere_amount"]))
        except ValueError:
            return None

    @property
    def currency(self) -> str:
        return self._data["payhere_currency"]

    @property
    def custom_1(self) -> str | None:
        return self._data.get("custom_1")

    @property
    def custom_2(self) -> str | None:
        return self._data.get("custom_2")

    @property
    def card_holder_name(self) -> str | None:
        return self._data.get("card_holder_name")

    @property
    def card_no(self) -> str | None:
        return self._data.get("card_no")

    @property
    def method(self) -> str | None:
        return self._data.get("method")

    @property
    def status_message(self) -> str | None:
        return self._data.get("status_message")

    # Status accessors read the raw status code and work before verify();
    # business decisions must wait until verify() has returned True.

    @property
    def status_code(self) -> int | None:
        return parse_status_code(self._data["status_code"])

    @property
    def status(self) -> PaymentStatus:
        return classify(self._data["status_code"])

    @property
    def status_text(self) -> str:
        return self.status.text

    def is_success(self) -> bool:
        return self.status is PaymentStatus.SUCCESS

    def is_pending(self) -> bool:
        return self.status is PaymentStatus.PENDING

    def is_canceled(self) -> bool:
        return self.status is PaymentStatus.CANCELED

    def is_failed(self) -> bool:
        return self.status is PaymentStatus.FAILED

    def is_charged_back(self) -> bool:
        return self.status is PaymentStatus.CHARGED_BACK
