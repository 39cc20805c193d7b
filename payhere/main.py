import html
import logging
from collections.abc import Callable
from urllib.parse import parse_qsl

from fastapi import FastAPI, Request, Response
from fastapi.responses import HTMLResponse, JSONResponse

from payhere.client import Payhere
from payhere.config import MerchantConfig, PayhereSettings
from payhere.exceptions import MissingFieldError, PayhereError, VerificationError
from payhere.notification import NotificationVerifier
from payhere.request import PaymentRequestBuilder
from payhere.schemas import CheckoutFields, CheckoutRequest

logger = logging.getLogger(__name__)

MAX_BODY_SIZE = 1024 * 1024  # 1 MB limit
CHECKOUT_PATH = "/payhere/checkout"
NOTIFY_PATH = "/payhere/notify"

NotificationCallback = Callable[[NotificationVerifier], None]


def render_checkout_form(action: str, fields: dict[str, str], button_text: str = "Pay Now") -> str:
    """Render an auto-submitting form; every value is escaped here, at render time."""
    inputs = "\n".join(
        f'    <input type="hidden" name="{html.escape(name)}" value="{html.escape(value)}">'
        for name, value in fields.items()
    )
    return (
        "<html><body>\n"
        f'<form id="payhere_form" method="post" action="{html.escape(action)}">\n'
        f"{inputs}\n"
        f"    <button type=\"submit\">{html.escape(button_text)}</button>\n"
        "</form>\n"
        '<script>document.getElementById("payhere_form").submit();</script>\n'
        "</body></html>"
    )


def build_checkout_fields(builder: PaymentRequestBuilder, checkout: CheckoutRequest) -> dict[str, str]:
    builder.set_order_id(checkout.order_id)
    builder.set_amount(checkout.amount)
    builder.set_currency(checkout.currency)
    builder.set_items(checkout.item_name, checkout.item_number)
    customer = checkout.customer
    builder.set_customer(
        customer.first_name,
        customer.last_name,
        customer.email,
        customer.phone,
        customer.address,
        customer.city,
        customer.country,
    )
    if checkout.return_url is not None:
        builder.set_return_url(checkout.return_url)
    if checkout.cancel_url is not None:
        builder.set_cancel_url(checkout.cancel_url)
    if checkout.notify_url is not None:
        builder.set_notify_url(checkout.notify_url)
    if checkout.custom_1 is not None:
        builder.set_custom_fields(checkout.custom_1, checkout.custom_2)
    return builder.finalize()


def create_app(
    config: MerchantConfig | None = None,
    on_notification: NotificationCallback | None = None,
) -> FastAPI:
    if config is None:
        settings = PayhereSettings()
        logging.getLogger("payhere").setLevel(settings.log_level)
        config = settings.merchant_config()

    application = FastAPI(title="PayHere Checkout")
    application.state.payhere = Payhere.from_config(config)
    application.state.on_notification = on_notification

    @application.post(CHECKOUT_PATH)
    def checkout(checkout: CheckoutRequest, request: Request) -> Response:
        payhere: Payhere = request.app.state.payhere
        try:
            fields = build_checkout_fields(payhere.create_payment_request(), checkout)
        except PayhereError as exc:
            logger.info("Checkout rejected for order %s: %s", checkout.order_id, exc)
            return JSONResponse(status_code=400, content=exc.to_dict())
        return HTMLResponse(render_checkout_form(payhere.config.checkout_url, fields))

    @application.post(f"{CHECKOUT_PATH}/fields", response_model=CheckoutFields)
    def checkout_fields(checkout: CheckoutRequest, request: Request) -> Response:
        payhere: Payhere = request.app.state.payhere
        try:
            fields = build_checkout_fields(payhere.create_payment_request(), checkout)
        except PayhereError as exc:
            logger.info("Checkout rejected for order %s: %s", checkout.order_id, exc)
            return JSONResponse(status_code=400, content=exc.to_dict())
        body = CheckoutFields(action=payhere.config.checkout_url, fields=fields)
        return JSONResponse(status_code=200, content=body.model_dump())

    @application.post(NOTIFY_PATH)
    async def receive_notification(request: Request) -> Response:
        # 1. Read raw body with size limit
        body = await request.body()
        if len(body) > MAX_BODY_SIZE:
            return JSONResponse(status_code=413, content={"error": "Payload too large"})

        # 2. Parse form-encoded payload into a flat map
        try:
            payload = dict(parse_qsl(body.decode("utf-8"), keep_blank_values=True))
        except UnicodeDecodeError:
            return JSONResponse(status_code=400, content={"error": "Invalid form body"})

        # 3. Required fields -> 400
        payhere: Payhere = request.app.state.payhere
        try:
            notification = payhere.handle_notification(payload)
        except MissingFieldError as exc:
            logger.warning("Notification rejected: %s", exc)
            return JSONResponse(status_code=400, content=exc.to_dict())

        # 4. Authenticate -> 403
        try:
            notification.verify()
        except VerificationError as exc:
            logger.warning(
                "Notification verification failed (%s): %s",
                exc.reason.value,
                exc.context,
            )
            return JSONResponse(status_code=403, content=exc.to_dict())

        logger.info(
            "Verified notification for order %s, payment %s: %s",
            notification.order_id,
            notification.payment_id,
            notification.status_text,
        )

        # 5. Hand over to the merchant; always acknowledge so the gateway does not retry
        callback = request.app.state.on_notification
        if callback is not None:
            try:
                callback(notification)
            except Exception:  # noqa: BLE001
                logger.exception(
                    "Notification handler failed for order %s", notification.order_id
                )

        return JSONResponse(
            status_code=200,
            content={
                "status": "accepted",
                "order_id": notification.order_id,
                "payment_status": notification.status_text,
            },
        )

    return application
