"""Booking references and booking IDs derived from transaction IDs."""

import re
from datetime import date
from typing import Optional

from .constants import BOOKING_REF_PREFIX, BOOKING_REF_SUFFIX_LENGTH, TRANSACTION_ID_PREFIX

_NON_DIGITS = re.compile(r"\D")
_BOOKING_ID = re.compile(rf"^{re.escape(TRANSACTION_ID_PREFIX)}(\d+)_")


def generate_booking_ref(identifier: str, on: date) -> str:
    """
    Build a PPTYYMMDDxxx ticket reference.

    xxx is the last three digits of the identifier, zero padded.
    """
    digits = _NON_DIGITS.sub("", identifier or "")
    suffix = digits[-BOOKING_REF_SUFFIX_LENGTH:].rjust(BOOKING_REF_SUFFIX_LENGTH, "0")
    return f"{BOOKING_REF_PREFIX}{on:%y%m%d}{suffix}"


def extract_booking_id(merchant_transaction_id: str) -> Optional[int]:
    """NIBOG_<booking_id>_<timestamp> -> booking_id, when it is numeric."""
    match = _BOOKING_ID.match(merchant_transaction_id or "")
    return int(match.group(1)) if match else None
