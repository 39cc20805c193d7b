import inspect

from pytest_bdd import parsers, scenarios, then, when

from payhere import signature as sig_module
from payhere.signature import compute_signature, format_amount, verify_signature
from tests.helpers.signing import reference_signature

scenarios("signatures.feature")

SIGN_ARGS = ("merchant_id", "order_id", "amount", "currency", "secret", "status_code")


def _sign(values: dict) -> str:
    return compute_signature(
        values["merchant_id"],
        values["order_id"],
        values["amount"],
        values["currency"],
        values["secret"],
        status_code=values.get("status_code"),
    )


@when(parsers.re(
    r'I sign merchant "(?P<merchant>[^"]*)" order "(?P<order>[^"]*)" amount "(?P<amount>[^"]*)" '
    r'currency "(?P<currency>[^"]*)" with secret "(?P<secret>[^"]*)"'
))
def sign_request(merchant, order, amount, currency, secret, context):
    context["values"] = {
        "merchant_id": merchant,
        "order_id": order,
        "amount": amount,
        "currency": currency,
        "secret": secret,
    }
    context["signature"] = _sign(context["values"])


@when(parsers.re(
    r'I sign merchant "(?P<merchant>[^"]*)" order "(?P<order>[^"]*)" amount "(?P<amount>[^"]*)" '
    r'currency "(?P<currency>[^"]*)" with secret "(?P<secret>[^"]*)" and status "(?P<status>[^"]*)"'
))
def sign_notification(merchant, order, amount, currency, secret, status, context):
    context["values"] = {
        "merchant_id": merchant,
        "order_id": order,
        "amount": amount,
        "currency": currency,
        "secret": secret,
        "status_code": status,
    }
    context["signature"] = _sign(context["values"])


@when(parsers.parse('I sign again with {field} changed to "{value}"'))
def sign_changed(field, value, context):
    assert field in SIGN_ARGS
    changed = {**context["values"], field: value}
    context["changed_signature"] = _sign(changed)


@then(parsers.re(
    r'the signature should equal the reference hash of "(?P<merchant>[^"]*)", "(?P<order>[^"]*)", '
    r'"(?P<amount>[^"]*)", "(?P<currency>[^"]*)" with secret "(?P<secret>[^"]*)"'
))
def equals_reference(merchant, order, amount, currency, secret, context):
    expected = reference_signature(merchant, order, amount, currency, secret=secret)
    assert context["signature"] == expected


@then(parsers.re(
    r'the signature should equal the reference hash of "(?P<merchant>[^"]*)", "(?P<order>[^"]*)", '
    r'"(?P<amount>[^"]*)", "(?P<currency>[^"]*)", "(?P<status>[^"]*)" with secret "(?P<secret>[^"]*)"'
))
def equals_reference_with_status(merchant, order, amount, currency, status, secret, context):
    expected = reference_signature(merchant, order, amount, currency, status, secret=secret)
    assert context["signature"] == expected


@then("the signature should be 32 uppercase hex characters")
def uppercase_hex(context):
    signature = context["signature"]
    assert len(signature) == 32
    assert signature == signature.upper()
    int(signature, 16)


@then("the signature should verify against a fresh signature of the same values")
def round_trip(context):
    assert verify_signature(context["signature"], _sign(context["values"]))


@then("the two signatures should differ")
def signatures_differ(context):
    assert context["signature"] != context["changed_signature"]


@then("the original signature should not verify against the new one")
def no_longer_verifies(context):
    assert not verify_signature(context["signature"], context["changed_signature"])


@when(parsers.parse('I format the amount "{amount}"'))
def format_value(amount, context):
    try:
        context["formatted"] = format_amount(amount)
        context["format_error"] = None
    except ValueError as exc:
        context["format_error"] = exc


@then(parsers.parse('the formatted amount should be "{expected}"'))
def formatted_equals(expected, context):
    assert context["format_error"] is None
    assert context["formatted"] == expected


@then("formatting it again should give the same value")
def format_idempotent(context):
    assert format_amount(context["formatted"]) == context["formatted"]


@then("formatting should fail")
def format_failed(context):
    assert isinstance(context["format_error"], ValueError)


@then("the signature comparison should use hmac.compare_digest")
def check_uses_compare_digest():
    source = inspect.getsource(sig_module.verify_signature)
    assert "hmac.compare_digest" in source, (
        "verify_signature does not use hmac.compare_digest"
    )
