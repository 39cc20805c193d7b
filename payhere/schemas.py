from pydantic import BaseModel, Field, StrictStr


class CustomerDetails(BaseModel):
    first_name: StrictStr
    last_name: StrictStr
    email: StrictStr
    phone: StrictStr
    address: StrictStr
    city: StrictStr
    country: StrictStr


class CheckoutRequest(BaseModel):
    """Request body for the checkout endpoints.

    Types are checked here; the payment rules themselves are enforced by the
    builder so that errors carry the offending field and value.
    """

    order_id: StrictStr
    amount: float | StrictStr
    currency: StrictStr = "LKR"
    item_name: StrictStr
    item_number: int = Field(default=1)
    customer: CustomerDetails
    return_url: StrictStr | None = None
    cancel_url: StrictStr | None = None
    notify_url: StrictStr | None = None
    custom_1: StrictStr | None = None
    custom_2: StrictStr | None = None


class CheckoutFields(BaseModel):
    action: str
    fields: dict[str, str]
