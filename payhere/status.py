from enum import Enum


class PaymentStatus(Enum):
    SUCCESS = 2
    PENDING = 0
    CANCELED = -1
    FAILED = -2
    CHARGED_BACK = -3
    UNKNOWN = None

    @property
    def text(self) -> str:
        return STATUS_TEXT[self]


STATUS_TEXT: dict[PaymentStatus, str] = {
    PaymentStatus.SUCCESS: "Success",
    PaymentStatus.PENDING: "Pending",
    PaymentStatus.CANCELED: "Canceled",
    PaymentStatus.FAILED: "Failed",
    PaymentStatus.CHARGED_BACK: "Chargedback",
    PaymentStatus.UNKNOWN: "Unknown",
}

_BY_CODE: dict[int, PaymentStatus] = {
    status.value: status for status in PaymentStatus if status.value is not None
}


def parse_status_code(code: object) -> int | None:
    """Return ``code`` as an int, or None when it is not an integer value."""
    if isinstance(code, bool):
        return None
    if isinstance(code, int):
        return code
    if isinstance(code, str):
        try:
            return int(code.strip())
        except ValueError:
            return None
    return None


def classify(code: object) -> PaymentStatus:
    """
    Map a gateway status code to a ``PaymentStatus``.

    Total: anything outside {2, 0, -1, -2, -3}, including non-integers,
    classifies as ``UNKNOWN``.
    """
    parsed = parse_status_code(code)
    if parsed is None:
        return PaymentStatus.UNKNOWN
    return _BY_CODE.get(parsed, PaymentStatus.UNKNOWN)


def status_text(code: object) -> str:
    return classify(code).text
