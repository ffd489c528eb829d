"""PhonePe payment request construction."""

import math
import re
from numbers import Real
from typing import List, Optional
from urllib.parse import quote, urlencode

from nibog_gateway.domain.entities import (
    MerchantCredentials,
    PaymentInstrument,
    PaymentRequest,
    SignedEnvelope,
)
from nibog_gateway.domain.exceptions import (
    InvalidPaymentRequestException,
    MissingMerchantCredentialsException,
)

from .constants import (
    MAX_TRANSACTION_ID_LENGTH,
    PAY_API_PATH,
    PAY_PAGE_INSTRUMENT,
    REDIRECT_MODE,
)
from .signing import build_signed_envelope
from .transaction_id import TransactionIdGenerator

_NON_DIGITS = re.compile(r"\D")


def normalize_mobile_number(mobile_number: str) -> str:
    """Strip everything but digits ("987-654-3210" -> "9876543210")."""
    return _NON_DIGITS.sub("", mobile_number or "")


def rupees_to_paise(amount_in_rupees: float) -> int:
    """
    Convert a rupee amount to integer paise, rounding to nearest.

    Raises:
        InvalidPaymentRequestException: If the amount is not a positive number
    """
    if isinstance(amount_in_rupees, bool) or not isinstance(amount_in_rupees, Real):
        raise InvalidPaymentRequestException(
            f"amount must be a number, got {type(amount_in_rupees).__name__}"
        )
    if not math.isfinite(amount_in_rupees) or amount_in_rupees <= 0:
        raise InvalidPaymentRequestException("amount must be greater than 0")

    paise = round(amount_in_rupees * 100)
    if paise <= 0:
        raise InvalidPaymentRequestException("amount is below one paisa")
    return paise


class PaymentRequestBuilder:
    """
    Builds and signs PhonePe pay page requests for one merchant.

    Credentials are checked up front so a misconfigured service fails at
    construction instead of halfway through a checkout.
    """

    def __init__(
        self,
        credentials: MerchantCredentials,
        app_url: str,
        callback_path: str,
        id_generator: Optional[TransactionIdGenerator] = None,
    ):
        missing = credentials.missing_fields()
        if missing:
            raise MissingMerchantCredentialsException(missing)
        if not app_url:
            raise MissingMerchantCredentialsException(["app_url"])

        self._credentials = credentials
        self._app_url = app_url.rstrip("/")
        self._callback_path = "/" + callback_path.lstrip("/")
        self._id_generator = id_generator or TransactionIdGenerator()

    @property
    def credentials(self) -> MerchantCredentials:
        return self._credentials

    def build_payment_request(
        self,
        booking_id: str,
        user_id: str,
        amount_in_rupees: float,
        mobile_number: str,
    ) -> PaymentRequest:
        """
        Assemble a payment request for one checkout attempt.

        Args:
            booking_id: Booking identifier, or an existing NIBOG_ transaction id
            user_id: The paying user
            amount_in_rupees: Positive amount in rupees
            mobile_number: Any formatting; non-digits are removed

        Returns:
            A fully populated PaymentRequest

        Raises:
            InvalidPaymentRequestException: If any input is malformed
        """
        booking_id = str(booking_id).strip() if booking_id is not None else ""
        user_id = str(user_id).strip() if user_id is not None else ""

        errors: List[str] = []
        if not booking_id:
            errors.append("booking_id is required")
        if not user_id:
            errors.append("user_id is required")
        mobile = normalize_mobile_number(mobile_number)
        if not mobile:
            errors.append("mobile_number must contain digits")
        if errors:
            raise InvalidPaymentRequestException("; ".join(errors))

        amount = rupees_to_paise(amount_in_rupees)

        # Pending bookings already carry their transaction id
        if booking_id.startswith(self._id_generator.prefix):
            transaction_id = booking_id
        else:
            transaction_id = self._id_generator.generate(booking_id)

        if len(transaction_id) > MAX_TRANSACTION_ID_LENGTH:
            raise InvalidPaymentRequestException(
                f"Transaction ID exceeds 38 character limit: {transaction_id}"
            )

        return PaymentRequest(
            merchant_id=self._credentials.merchant_id,
            merchant_transaction_id=transaction_id,
            merchant_user_id=user_id,
            amount=amount,
            redirect_url=self._redirect_url(booking_id, transaction_id),
            redirect_mode=REDIRECT_MODE,
            callback_url=f"{self._app_url}{self._callback_path}",
            mobile_number=mobile,
            payment_instrument=PaymentInstrument(type=PAY_PAGE_INSTRUMENT),
        )

    def sign(self, request: PaymentRequest, api_path: str = PAY_API_PATH) -> SignedEnvelope:
        return build_signed_envelope(request, self._credentials, api_path)

    def _redirect_url(self, booking_id: str, transaction_id: str) -> str:
        query = urlencode(
            {"bookingId": booking_id, "transactionId": transaction_id},
            quote_via=quote,
        )
        return f"{self._app_url}/payment-callback?{query}"
