from collections.abc import Mapping
from typing import Any

from payhere.config import Environment, MerchantConfig, PayhereSettings
from payhere.notification import NotificationVerifier
from payhere.request import PaymentRequestBuilder


class Payhere:
    """Entry point tying a merchant configuration to builders and verifiers."""

    def __init__(
        self,
        merchant_id: str,
        merchant_secret: str,
        environment: Environment | str = Environment.SANDBOX,
    ):
        self.config = MerchantConfig(merchant_id, merchant_secret, environment)

    @classmethod
    def from_config(cls, config: MerchantConfig) -> "Payhere":
        client = cls.__new__(cls)
        client.config = config
        return client

    @classmethod
    def from_settings(cls, settings: PayhereSettings | None = None) -> "Payhere":
        settings = settings or PayhereSettings()
        return cls.from_config(settings.merchant_config())

    def create_payment_request(self) -> PaymentRequestBuilder:
        return PaymentRequestBuilder(self.config)

    def handle_notification(self, payload: Mapping[str, Any]) -> NotificationVerifier:
        return NotificationVerifier(self.config, payload)
