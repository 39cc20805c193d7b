"""Steps shared by several feature files.

Steps that may receive empty strings use parsers.re: the 'parse' parser
requires at least one character per field.
"""
import pytest
from pytest_bdd import given, parsers, then, when

from payhere.exceptions import (
    ConfigError,
    MissingFieldError,
    ValidationError,
)
from payhere.request import PaymentRequestBuilder
from tests.fixtures.payloads import make_customer
from tests.helpers.outcomes import attempt


@pytest.fixture
def context():
    return {}


# ── Given ──────────────────────────────────────────────────────────────────────

@given("a payment request for a sandbox merchant")
def sandbox_request(merchant_config, context):
    context["builder"] = PaymentRequestBuilder(merchant_config)


@given("a payment request for a live merchant")
def live_request(live_config, context):
    context["builder"] = PaymentRequestBuilder(live_config)


# ── When ───────────────────────────────────────────────────────────────────────

@when(parsers.parse('I set the amount to "{amount}"'))
def set_amount(amount, context):
    attempt(context, context["builder"].set_amount, amount)


@when(parsers.parse('I set the currency to "{currency}"'))
def set_currency(currency, context):
    attempt(context, context["builder"].set_currency, currency)


@when(parsers.re(r'I set the order id to "(?P<order_id>.*)"'))
def set_order_id(order_id, context):
    attempt(context, context["builder"].set_order_id, order_id)


@when(parsers.re(
    r'I set the customer with (?P<field>first_name|last_name|email|phone|address|city|country) '
    r'"(?P<value>.*)"'
))
def set_customer_field(field, value, context):
    attempt(context, context["builder"].set_customer, **make_customer(**{field: value}))


@when(parsers.re(r'I set the custom fields to "(?P<custom_1>.*)" and "(?P<custom_2>.*)"'))
def set_custom_fields(custom_1, custom_2, context):
    attempt(context, context["builder"].set_custom_fields, custom_1, custom_2)


# ── Then ───────────────────────────────────────────────────────────────────────

@then("no error should be raised")
def no_error(context):
    assert context.get("error") is None, f"Unexpected error: {context['error']!r}"


@then(parsers.parse('a validation error should be raised for field "{field}"'))
def validation_error(field, context):
    error = context.get("error")
    assert isinstance(error, ValidationError), f"Expected ValidationError, got {error!r}"
    assert error.field == field, f"Expected field {field!r}, got {error.field!r}"
    assert error.context["field"] == field


@then(parsers.parse('a missing field error should be raised for field "{field}"'))
def missing_field_error(field, context):
    error = context.get("error")
    assert isinstance(error, MissingFieldError), f"Expected MissingFieldError, got {error!r}"
    assert error.field == field, f"Expected field {field!r}, got {error.field!r}"


@then("a config error should be raised")
def config_error(context):
    error = context.get("error")
    assert isinstance(error, ConfigError), f"Expected ConfigError, got {error!r}"


@then(parsers.parse('the error message should mention "{text}"'))
def error_mentions(text, context):
    assert text in str(context["error"]), f"{text!r} not in {str(context['error'])!r}"


@then(parsers.parse('the field "{field}" should be "{expected}"'))
def field_equals(field, expected, context):
    fields = context["builder"].fields
    assert fields.get(field) == expected, (
        f"Expected {field}={expected!r}, got {fields.get(field)!r}"
    )


@then(parsers.parse('the field "{field}" should not be set'))
def field_not_set(field, context):
    fields = context["builder"].fields
    assert field not in fields, f"{field} unexpectedly set to {fields[field]!r}"
