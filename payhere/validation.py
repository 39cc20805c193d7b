"""
Per-field validation rules for outbound payment requests.

Every rule trims its input, raises ``ValidationError`` naming the field and
the offending value on failure, and returns the value to store. Free-text
fields are sanitized (tags stripped, then HTML-escaped); email, phone and
URLs are checked but stored as given.
"""
import html
import re
from decimal import Decimal

from pydantic import EmailStr, HttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from payhere.exceptions import ValidationError
from payhere.signature import format_amount

SUPPORTED_CURRENCIES: tuple[str, ...] = ("LKR", "USD", "GBP", "EUR", "AUD")
DEFAULT_CURRENCY = "LKR"

MAX_AMOUNT = Decimal("999999.99")
MAX_ITEM_NUMBER = 9999
MIN_PHONE_DIGITS = 9
MAX_PHONE_DIGITS = 15

ORDER_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")
TAG_PATTERN = re.compile(r"<[^>]*>")
PHONE_PATTERN = re.compile(r"^\+?(\d+)$")
PHONE_SEPARATORS = re.compile(r"[\s\-()]")

_email_adapter = TypeAdapter(EmailStr)
_url_adapter = TypeAdapter(HttpUrl)


def strip_tags(value: str) -> str:
    return TAG_PATTERN.sub("", value).strip()


def _as_text(field: str, value: object) -> str:
    if not isinstance(value, str):
        raise ValidationError(field, value, "must be a string")
    return value.strip()


def _required_text(field: str, value: object, max_length: int) -> str:
    text = _as_text(field, value)
    if not text:
        raise ValidationError(field, value, "must not be empty")
    if len(text) > max_length:
        raise ValidationError(field, value, f"must be at most {max_length} characters")
    return text


def _free_text(field: str, value: object, max_length: int) -> str:
    """Strip tags, require something left over, then escape HTML-special characters."""
    text = strip_tags(_as_text(field, value))
    if not text:
        raise ValidationError(field, value, "must not be empty")
    if len(text) > max_length:
        raise ValidationError(field, value, f"must be at most {max_length} characters")
    return html.escape(text, quote=True)


def validate_order_id(value: object) -> str:
    order_id = _required_text("order_id", value, 50)
    if not ORDER_ID_PATTERN.match(order_id):
        raise ValidationError(
            "order_id", value, "may only contain letters, digits, '_' and '-'"
        )
    return order_id


def validate_amount(value: object) -> str:
    """Return the amount rendered with two decimals."""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal, str)):
        raise ValidationError("amount", value, "must be a number")
    try:
        formatted = format_amount(value)
    except ValueError:
        raise ValidationError("amount", value, "must be a finite number")
    amount = Decimal(formatted)
    if amount <= 0:
        raise ValidationError("amount", value, "must be greater than 0")
    if amount > MAX_AMOUNT:
        raise ValidationError("amount", value, f"must not exceed {MAX_AMOUNT}")
    return formatted


def validate_currency(value: object) -> str:
    currency = _as_text("currency", value).upper()
    if currency not in SUPPORTED_CURRENCIES:
        raise ValidationError(
            "currency",
            value,
            f"unsupported currency. Supported currencies: {', '.join(SUPPORTED_CURRENCIES)}",
        )
    return currency


def validate_item_name(value: object) -> str:
    return _free_text("items", value, 100)


def validate_item_number(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("item_number", value, "must be an integer")
    if not 1 <= value <= MAX_ITEM_NUMBER:
        raise ValidationError(
            "item_number", value, f"must be between 1 and {MAX_ITEM_NUMBER}"
        )
    return value


def validate_name(field: str, value: object) -> str:
    return _free_text(field, value, 50)


def validate_email(value: object) -> str:
    email = _required_text("email", value, 100)
    try:
        _email_adapter.validate_python(email)
    except PydanticValidationError:
        raise ValidationError("email", value, "is not a valid email address")
    return email


def validate_phone(value: object) -> str:
    phone = _as_text("phone", value)
    if not phone:
        raise ValidationError("phone", value, "must not be empty")
    match = PHONE_PATTERN.match(PHONE_SEPARATORS.sub("", phone))
    if match is None:
        raise ValidationError("phone", value, "may only contain digits and separators")
    digits = len(match.group(1))
    if not MIN_PHONE_DIGITS <= digits <= MAX_PHONE_DIGITS:
        raise ValidationError(
            "phone",
            value,
            f"must contain between {MIN_PHONE_DIGITS} and {MAX_PHONE_DIGITS} digits",
        )
    return phone


def validate_address(value: object) -> str:
    return _free_text("address", value, 200)


def validate_locality(field: str, value: object) -> str:
    """City and country share the same rule."""
    return _free_text(field, value, 50)


def validate_url(field: str, value: object, require_https: bool = False) -> str:
    url = _required_text(field, value, 2048)
    try:
        parsed = _url_adapter.validate_python(url)
    except PydanticValidationError:
        raise ValidationError(field, value, "is not a valid absolute http(s) URL")
    if require_https and parsed.scheme != "https":
        raise ValidationError(field, value, "must use https in the live environment")
    return url


def validate_custom_1(value: object) -> str:
    return _free_text("custom_1", value, 100)


def validate_custom_2(value: object) -> str | None:
    if value is None:
        return None
    if not strip_tags(_as_text("custom_2", value)):
        return None
    return _free_text("custom_2", value, 100)
