"""
X-VERIFY signing for PhonePe requests and callbacks.

PhonePe authenticates each call with a salted SHA-256 checksum:

    X-VERIFY = hex(sha256(base64_payload + api_path + salt_key)) + "###" + salt_index

Callbacks use the same scheme with an empty api_path.
"""

import base64
import hashlib
import hmac
import json
from typing import Any, Dict

from nibog_gateway.domain.entities import (
    MerchantCredentials,
    PaymentRequest,
    SignedEnvelope,
)

from .constants import PAY_API_PATH, SIGNATURE_SEPARATOR, STATUS_API_PATH


def encode_payload(data: Dict[str, Any]) -> str:
    """Serialize to compact JSON and base64-encode it."""
    raw = json.dumps(data, separators=(",", ":"), ensure_ascii=False)
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


def decode_payload(base64_payload: str) -> Dict[str, Any]:
    """
    Inverse of encode_payload.

    Raises:
        ValueError: If the payload is not base64 encoded JSON
    """
    try:
        raw = base64.b64decode(base64_payload, validate=True)
        return json.loads(raw.decode("utf-8"))
    except (ValueError, UnicodeDecodeError) as e:
        raise ValueError(f"Malformed base64 JSON payload: {e}") from e


def sign_payload(
    base64_payload: str,
    api_path: str,
    salt_key: str,
    salt_index: str,
) -> str:
    """
    Compute the X-VERIFY value for a payload.

    Pure and deterministic: identical inputs always give identical output.
    """
    digest = hashlib.sha256(
        (base64_payload + api_path + salt_key).encode("utf-8")
    ).hexdigest()
    return f"{digest}{SIGNATURE_SEPARATOR}{salt_index}"


def verify_callback_signature(
    received_signature: str,
    payload: str,
    salt_key: str,
    salt_index: str,
) -> bool:
    """Check a callback X-VERIFY header in constant time."""
    if not received_signature:
        return False
    expected = sign_payload(payload, "", salt_key, salt_index)
    return hmac.compare_digest(
        received_signature.encode("utf-8"),
        expected.encode("utf-8"),
    )


def build_signed_envelope(
    request: PaymentRequest,
    credentials: MerchantCredentials,
    api_path: str = PAY_API_PATH,
) -> SignedEnvelope:
    base64_payload = encode_payload(request.to_dict())
    signature = sign_payload(
        base64_payload,
        api_path,
        credentials.salt_key,
        credentials.salt_index,
    )
    return SignedEnvelope(base64_payload=base64_payload, signature=signature)


def sign_status_path(transaction_id: str, credentials: MerchantCredentials) -> str:
    """X-VERIFY for GET /pg/v1/status/{merchant_id}/{transaction_id}."""
    path = f"{STATUS_API_PATH}/{credentials.merchant_id}/{transaction_id}"
    return sign_payload("", path, credentials.salt_key, credentials.salt_index)
