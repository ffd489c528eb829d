"""Payment record service - forwards successful payments to the backend."""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

import structlog

from nibog_gateway.application.dto import PaymentRecordResult, PaymentStatusResponse
from nibog_gateway.core.metrics import record_payment_record
from nibog_gateway.domain.entities import PaymentStatus
from nibog_gateway.domain.exceptions import (
    BackendUnavailableException,
    InvalidPaymentRequestException,
)
from nibog_gateway.domain.interfaces import BookingBackendClient, KeyValueStore
from nibog_gateway.service.payments import extract_booking_id, generate_booking_ref

logger = structlog.get_logger(__name__)

PAYMENT_CREATE_RESOURCE = "payments/create"
BOOKING_REF_LOOKUP_RESOURCE = "tickect/booking_ref/details"
REQUIRED_RECORD_FIELDS = ("booking_id", "transaction_id", "amount")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PaymentRecordService:
    """
    Writes payment records to the webhook backend.

    Successful payments are recorded at most once per merchant transaction:
    results are remembered in the store, and the backend is asked for an
    existing ticket with the same booking reference before writing.
    """

    def __init__(
        self,
        backend_client: BookingBackendClient,
        store: KeyValueStore,
        merchant_id: str,
        ttl_seconds: float | None = None,
        now: Callable[[], datetime] = _utc_now,
    ):
        self._backend = backend_client
        self._store = store
        self._merchant_id = merchant_id
        self._ttl = ttl_seconds
        self._now = now

    async def create_payment_record(self, record: Dict[str, Any]) -> Any:
        """
        Forward a payment record as-is.

        Raises:
            InvalidPaymentRequestException: booking_id, transaction_id or amount missing
            BackendUnavailableException: If the backend rejects or fails
        """
        missing = [name for name in REQUIRED_RECORD_FIELDS if not record.get(name)]
        if missing:
            raise InvalidPaymentRequestException(
                f"Missing required payment data: {', '.join(missing)}"
            )

        result = await self._backend.post(PAYMENT_CREATE_RESOURCE, record)
        logger.info(
            "payment_record_created",
            booking_id=record.get("booking_id"),
            transaction_id=record.get("transaction_id"),
        )
        return result

    async def record_successful_payment(
        self,
        payment: PaymentStatusResponse,
    ) -> Optional[PaymentRecordResult]:
        """
        Record a SUCCESS payment; other statuses are ignored.

        Never raises for backend failures; they are reported in the result
        and not remembered, so a later status check can try again.
        """
        if payment.status != PaymentStatus.SUCCESS:
            return None

        transaction_id = payment.merchant_transaction_id
        cached = self._store.get(transaction_id)
        if cached is not None:
            return cached

        now = self._now()
        booking_ref = generate_booking_ref(
            payment.gateway_transaction_id or transaction_id,
            now.date(),
        )
        log = logger.bind(transaction_id=transaction_id, booking_ref=booking_ref)

        booking_id = extract_booking_id(transaction_id)
        if booking_id is None or payment.amount_paise is None:
            result = PaymentRecordResult(
                booking_ref=booking_ref,
                booking_id=booking_id,
                payment_recorded=False,
                error="Transaction has no booking ID or amount to record",
            )
            return self._remember(transaction_id, result, "skipped", log)

        existing = await self._find_booking(booking_ref, booking_id, log)
        if existing is not None:
            result = PaymentRecordResult(
                booking_ref=booking_ref,
                booking_id=existing.get("booking_id", booking_id),
                payment_recorded=True,
                duplicate=True,
            )
            return self._remember(transaction_id, result, "duplicate", log)

        try:
            await self._backend.post(
                PAYMENT_CREATE_RESOURCE,
                self._payment_payload(payment, booking_id, now),
            )
        except BackendUnavailableException as e:
            record_payment_record("failed")
            log.error("payment_record_failed", booking_id=booking_id, error=e.message)
            return PaymentRecordResult(
                booking_ref=booking_ref,
                booking_id=booking_id,
                payment_recorded=False,
                error=e.message,
            )

        result = PaymentRecordResult(
            booking_ref=booking_ref,
            booking_id=booking_id,
            payment_recorded=True,
        )
        return self._remember(transaction_id, result, "recorded", log)

    async def _find_booking(
        self,
        booking_ref: str,
        booking_id: int,
        log,
    ) -> Optional[Dict[str, Any]]:
        """
        Existing ticket for this reference and booking, if the backend has one.

        A failed lookup counts as "not found".
        """
        try:
            found = await self._backend.post(
                BOOKING_REF_LOOKUP_RESOURCE,
                {"booking_ref_id": booking_ref},
            )
        except BackendUnavailableException as e:
            log.warning("booking_ref_lookup_failed", error=e.message)
            return None

        rows: List[Any] = found if isinstance(found, list) else [found]
        for row in rows:
            if not isinstance(row, dict) or not row:
                continue
            # References only carry three digits of the transaction, so a
            # ticket for another booking is not a duplicate
            if str(row.get("booking_id", booking_id)) == str(booking_id):
                return row
        return None

    def _payment_payload(
        self,
        payment: PaymentStatusResponse,
        booking_id: int,
        now: datetime,
    ) -> Dict[str, Any]:
        return {
            "booking_id": booking_id,
            "transaction_id": payment.gateway_transaction_id,
            "phonepe_transaction_id": payment.merchant_transaction_id,
            "amount": payment.amount_paise / 100,
            "payment_method": "PhonePe",
            "payment_status": "successful",
            "payment_date": now.isoformat(),
            "gateway_response": {
                "code": payment.gateway_code,
                "merchantId": self._merchant_id,
                "merchantTransactionId": payment.merchant_transaction_id,
                "transactionId": payment.gateway_transaction_id,
                "amount": payment.amount_paise,
                "state": payment.gateway_state,
            },
        }

    def _remember(
        self,
        transaction_id: str,
        result: PaymentRecordResult,
        outcome: str,
        log,
    ) -> PaymentRecordResult:
        self._store.set(transaction_id, result, ttl_seconds=self._ttl)
        record_payment_record(outcome)
        log.info("payment_record_" + outcome, booking_id=result.booking_id)
        return result
