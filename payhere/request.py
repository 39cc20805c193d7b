"""
Outbound payment request builder.

Setters validate their arguments and commit only when every argument passes,
so a rejected value never reaches the field map. ``finalize`` checks the
required fields and signs the current contents.
"""
from payhere import validation
from payhere.config import MerchantConfig
from payhere.exceptions import MissingFieldError
from payhere.signature import SIGNATURE_FIELD, compute_signature
from payhere.state_machine import (
    FINALIZE,
    RESET,
    SET_FIELD,
    BuilderState,
    apply_transition,
)

REQUIRED_FIELDS: tuple[str, ...] = (
    "order_id",
    "amount",
    "currency",
    "first_name",
    "last_name",
    "email",
    "phone",
    "address",
    "city",
    "country",
)

# Wire order of the checkout form; the hash is appended last.
FIELD_ORDER: tuple[str, ...] = (
    "merchant_id",
    "order_id",
    "amount",
    "currency",
    "items",
    "item_number",
    "first_name",
    "last_name",
    "email",
    "phone",
    "address",
    "city",
    "country",
    "return_url",
    "cancel_url",
    "notify_url",
    "custom_1",
    "custom_2",
)


class PaymentRequestBuilder:
    """Accumulates checkout fields for one payment at a time."""

    def __init__(self, config: MerchantConfig):
        self.config = config
        self._fields: dict[str, str] = {}
        self._state = BuilderState.EMPTY
        self._seed()

    def _seed(self) -> None:
        self._fields = {
            "merchant_id": self.config.merchant_id,
            "currency": validation.DEFAULT_CURRENCY,
        }

    def _commit(self, values: dict[str, str | None]) -> None:
        self._state = apply_transition(self._state, SET_FIELD)
        for key, value in values.items():
            if value is None:
                self._fields.pop(key, None)
            else:
                self._fields[key] = value

    @property
    def state(self) -> BuilderState:
        return self._state

    @property
    def checkout_url(self) -> str:
        return self.config.checkout_url

    @property
    def fields(self) -> dict[str, str]:
        """Snapshot of the accumulated fields, without the hash."""
        return self._ordered()

    def set_order_id(self, order_id: str) -> None:
        self._commit({"order_id": validation.validate_order_id(order_id)})

    def set_amount(self, amount) -> None:
        self._commit({"amount": validation.validate_amount(amount)})

    def set_currency(self, currency: str = validation.DEFAULT_CURRENCY) -> None:
        self._commit({"currency": validation.validate_currency(currency)})

    def set_items(self, item_name: str, item_number: int = 1) -> None:
        values = {
            "items": validation.validate_item_name(item_name),
            "item_number": str(validation.validate_item_number(item_number)),
        }
        self._commit(values)

    def set_customer(
        self,
        first_name: str,
        last_name: str,
        email: str,
        phone: str,
        address: str,
        city: str,
        country: str,
    ) -> None:
        values = {
            "first_name": validation.validate_name("first_name", first_name),
            "last_name": validation.validate_name("last_name", last_name),
            "email": validation.validate_email(email),
            "phone": validation.validate_phone(phone),
            "address": validation.validate_address(address),
            "city": validation.validate_locality("city", city),
            "country": validation.validate_locality("country", country),
        }
        self._commit(values)

    def _set_url(self, field: str, url: str) -> None:
        value = validation.validate_url(field, url, require_https=self.config.is_live)
        self._commit({field: value})

    def set_return_url(self, url: str) -> None:
        self._set_url("return_url", url)

    def set_cancel_url(self, url: str) -> None:
        self._set_url("cancel_url", url)

    def set_notify_url(self, url: str) -> None:
        self._set_url("notify_url", url)

    def set_custom_fields(self, custom_1: str, custom_2: str | None = None) -> None:
        values = {
            "custom_1": validation.validate_custom_1(custom_1),
            "custom_2": validation.validate_custom_2(custom_2),
        }
        self._commit(values)

    def missing_fields(self) -> list[str]:
        """Required fields not yet set, in the fixed required-field order."""
        return [
            name for name in REQUIRED_FIELDS if not self._fields.get(name, "").strip()
        ]

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()

    def _ordered(self) -> dict[str, str]:
        return {key: self._fields[key] for key in FIELD_ORDER if key in self._fields}

    def finalize(self) -> dict[str, str]:
        """
        Validate completeness and return the signed field map.

        The hash is recomputed from the current fields on every call and is
        always the last key.

        Raises:
            MissingFieldError: For the first required field not yet set.
        """
        missing = self.missing_fields()
        if missing:
            raise MissingFieldError(missing[0])

        data = self._ordered()
        data[SIGNATURE_FIELD] = compute_signature(
            merchant_id=data["merchant_id"],
            order_id=data["order_id"],
            amount=data["amount"],
            currency=data["currency"],
            secret=self.config.merchant_secret,
        )
        self._state = apply_transition(self._state, FINALIZE)
        return data

    get_data = finalize

    def reset(self) -> None:
        """Discard everything except the merchant id and default currency."""
        self._state = apply_transition(self._state, RESET)
        self._seed()
