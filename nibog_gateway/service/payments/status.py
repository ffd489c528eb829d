"""Mapping of PhonePe responses to PaymentStatus."""

from typing import Any, Dict, Optional

from nibog_gateway.domain.entities import PaymentStatus

_STATE_MAP = {
    "COMPLETED": PaymentStatus.SUCCESS,
    "PENDING": PaymentStatus.PENDING,
    "FAILED": PaymentStatus.FAILED,
    "CANCELLED": PaymentStatus.CANCELLED,
}

_CODE_MAP = {
    "PAYMENT_SUCCESS": PaymentStatus.SUCCESS,
    "PAYMENT_PENDING": PaymentStatus.PENDING,
    "PAYMENT_ERROR": PaymentStatus.FAILED,
    "PAYMENT_DECLINED": PaymentStatus.FAILED,
    "PAYMENT_CANCELLED": PaymentStatus.CANCELLED,
}


def extract_payment_state(response: Dict[str, Any]) -> Optional[str]:
    """PhonePe uses both "state" and "paymentState" for the same field."""
    data = response.get("data")
    if not isinstance(data, dict):
        return None
    state = data.get("state") or data.get("paymentState")
    return state.upper() if isinstance(state, str) else None


def map_payment_status(response: Dict[str, Any]) -> PaymentStatus:
    """
    Resolve a gateway status or callback body to a PaymentStatus.

    The response code wins for terminal outcomes; otherwise the payment
    state decides. Anything unrecognised counts as FAILED.
    """
    code = str(response.get("code") or "").upper()
    state = extract_payment_state(response)

    if code == "PAYMENT_SUCCESS" or state == "COMPLETED":
        return PaymentStatus.SUCCESS
    if code == "PAYMENT_CANCELLED" or state == "CANCELLED":
        return PaymentStatus.CANCELLED
    if state in _STATE_MAP:
        return _STATE_MAP[state]
    return _CODE_MAP.get(code, PaymentStatus.FAILED)
