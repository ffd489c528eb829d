"""
PhonePe payment request building and signing.
"""

from .builder import PaymentRequestBuilder, normalize_mobile_number, rupees_to_paise
from .constants import PAY_API_PATH, STATUS_API_PATH
from .signing import (
    build_signed_envelope,
    decode_payload,
    encode_payload,
    sign_payload,
    sign_status_path,
    verify_callback_signature,
)
from .references import extract_booking_id, generate_booking_ref
from .status import extract_payment_state, map_payment_status
from .transaction_id import TransactionIdGenerator

__all__ = [
    # Builder
    "PaymentRequestBuilder",
    "normalize_mobile_number",
    "rupees_to_paise",
    "TransactionIdGenerator",
    # Signing
    "PAY_API_PATH",
    "STATUS_API_PATH",
    "build_signed_envelope",
    "decode_payload",
    "encode_payload",
    "sign_payload",
    "sign_status_path",
    "verify_callback_signature",
    # References
    "extract_booking_id",
    "generate_booking_ref",
    # Status
    "extract_payment_state",
    "map_payment_status",
]
