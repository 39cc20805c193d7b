"""
PayHere merchant configuration.

``MerchantConfig`` is the immutable value every builder and verifier holds.
``PayhereSettings`` loads one from environment variables (``PAYHERE_`` prefix)
or a ``.env`` file.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from payhere.exceptions import ConfigError

SANDBOX_URL = "https://sandbox.payhere.lk/pay/checkout"
LIVE_URL = "https://www.payhere.lk/pay/checkout"


class Environment(str, Enum):
    SANDBOX = "sandbox"
    LIVE = "live"

    @classmethod
    def parse(cls, value: "Environment | str") -> "Environment":
        if isinstance(value, Environment):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(env.value for env in cls)
            raise ConfigError(
                f"Unknown environment {value!r}. Expected one of: {choices}",
                {"environment": value},
            )


CHECKOUT_URLS: dict[Environment, str] = {
    Environment.SANDBOX: SANDBOX_URL,
    Environment.LIVE: LIVE_URL,
}


@dataclass(frozen=True)
class MerchantConfig:
    merchant_id: str
    merchant_secret: str = field(repr=False)
    environment: Environment = Environment.SANDBOX

    def __post_init__(self) -> None:
        if not isinstance(self.merchant_id, str) or not self.merchant_id.strip():
            raise ConfigError("Merchant ID must not be empty", {"field": "merchant_id"})
        if not isinstance(self.merchant_secret, str) or not self.merchant_secret.strip():
            raise ConfigError(
                "Merchant secret must not be empty", {"field": "merchant_secret"}
            )
        object.__setattr__(self, "merchant_id", self.merchant_id.strip())
        object.__setattr__(self, "environment", Environment.parse(self.environment))

    @property
    def is_sandbox(self) -> bool:
        return self.environment is Environment.SANDBOX

    @property
    def is_live(self) -> bool:
        return self.environment is Environment.LIVE

    @property
    def checkout_url(self) -> str:
        return CHECKOUT_URLS[self.environment]


class PayhereSettings(BaseSettings):
    """
    Settings loaded from environment variables.

    PAYHERE_MERCHANT_ID, PAYHERE_MERCHANT_SECRET, PAYHERE_ENVIRONMENT and
    PAYHERE_LOG_LEVEL are read; a ``.env`` file in the working directory is
    honoured as well.
    """

    model_config = SettingsConfigDict(
        env_prefix="PAYHERE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    merchant_id: str = ""
    merchant_secret: str = ""
    environment: str = Environment.SANDBOX.value
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    def merchant_config(self) -> MerchantConfig:
        return MerchantConfig(
            merchant_id=self.merchant_id,
            merchant_secret=self.merchant_secret,
            environment=Environment.parse(self.environment),
        )
