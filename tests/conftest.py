import pytest
from starlette.testclient import TestClient

from payhere.client import Payhere
from payhere.config import Environment, MerchantConfig
from payhere.main import create_app
from tests.fixtures.payloads import MERCHANT_ID, MERCHANT_SECRET


@pytest.fixture(scope="function")
def merchant_config():
    return MerchantConfig(MERCHANT_ID, MERCHANT_SECRET, Environment.SANDBOX)


@pytest.fixture(scope="function")
def live_config():
    return MerchantConfig(MERCHANT_ID, MERCHANT_SECRET, Environment.LIVE)


@pytest.fixture(scope="function")
def payhere(merchant_config):
    return Payhere.from_config(merchant_config)


@pytest.fixture(scope="function")
def received_notifications():
    """Verified notifications handed to the merchant callback."""
    return []


@pytest.fixture(scope="function")
def app(merchant_config, received_notifications):
    """Create a FastAPI app that records verified notifications."""
    return create_app(merchant_config, on_notification=received_notifications.append)


@pytest.fixture(scope="function")
def client(app):
    """HTTP test client."""
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
