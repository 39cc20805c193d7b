import hashlib
import hmac
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

SIGNATURE_FIELD = "hash"
NOTIFICATION_SIGNATURE_FIELD = "md5sig"
TWO_PLACES = Decimal("0.01")


def _md5_upper(value: str) -> str:
    return hashlib.md5(value.encode("utf-8")).hexdigest().upper()


def hash_secret(secret: str) -> str:
    """Uppercase hex MD5 digest of the merchant secret."""
    return _md5_upper(secret)


def format_amount(amount: Decimal | float | int | str) -> str:
    """
    Render an amount with exactly two decimals and a ``.`` separator.

    Rounds half-up. The result never contains grouping separators and does
    not depend on the process locale, so ``format_amount(format_amount(x))``
    always equals ``format_amount(x)``.

    Raises:
        ValueError: If the amount is not a finite number.
    """
    if isinstance(amount, bool):
        raise ValueError(f"Invalid amount: {amount!r}")
    try:
        value = Decimal(str(amount).strip())
        if not value.is_finite():
            raise ValueError(f"Invalid amount: {amount!r}")
        rounded = value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValueError(f"Invalid amount: {amount!r}")
    return f"{rounded:f}"


def compute_signature(
    merchant_id: str,
    order_id: str,
    amount: Decimal | float | int | str,
    currency: str,
    secret: str,
    status_code: int | str | None = None,
) -> str:
    """
    Compute the PayHere MD5 signature.

    The signed string is ``merchant_id + order_id + amount + currency``,
    followed by ``status_code`` for inbound notifications only, then the
    uppercase MD5 of the secret. The secret itself is never part of the
    output.
    """
    message = merchant_id + order_id + format_amount(amount) + currency
    if status_code is not None:
        message += str(status_code)
    message += hash_secret(secret)
    return _md5_upper(message)


def verify_signature(candidate: str, expected: str) -> bool:
    """Compare two signatures in constant time."""
    return hmac.compare_digest(candidate.encode("utf-8"), expected.encode("utf-8"))
