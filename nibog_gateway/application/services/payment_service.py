"""Payment service - orchestrates PhonePe checkout use cases."""

from dataclasses import replace
from typing import Optional

import structlog

from nibog_gateway.application.dto import (
    PaymentInitiationRequest,
    PaymentInitiationResponse,
    PaymentStatusResponse,
)
from nibog_gateway.application.services.payment_record_service import PaymentRecordService
from nibog_gateway.core.metrics import (
    record_callback_verification,
    record_payment_initiation,
    record_payment_status,
)
from nibog_gateway.domain.entities import PaymentStatus
from nibog_gateway.domain.exceptions import (
    InvalidPaymentRequestException,
    PaymentGatewayException,
    PaymentRejectedException,
    SignatureMismatchException,
)
from nibog_gateway.domain.interfaces import PaymentGatewayClient
from nibog_gateway.service.payments import (
    PaymentRequestBuilder,
    decode_payload,
    extract_payment_state,
    map_payment_status,
    sign_status_path,
    verify_callback_signature,
)

logger = structlog.get_logger(__name__)


class PaymentService:
    """
    Application service for PhonePe payment use cases.

    Every gateway call is made once; failures surface to the caller.
    Successful outcomes are handed to the recorder when one is configured.
    """

    def __init__(
        self,
        builder: PaymentRequestBuilder,
        gateway_client: PaymentGatewayClient,
        recorder: Optional[PaymentRecordService] = None,
    ):
        self._builder = builder
        self._gateway = gateway_client
        self._recorder = recorder

    async def initiate_payment(
        self,
        request: PaymentInitiationRequest,
    ) -> PaymentInitiationResponse:
        """
        Build, sign and submit a payment request.

        Args:
            request: Booking, user, amount in rupees and mobile number

        Returns:
            PaymentInitiationResponse with the pay page redirect URL

        Raises:
            InvalidPaymentRequestException: If the input is malformed
            PaymentRejectedException: If PhonePe refuses the request
            PaymentGatewayException: If PhonePe is unreachable or errors
        """
        errors = request.validate()
        if errors:
            raise InvalidPaymentRequestException("; ".join(errors))

        payment_request = self._builder.build_payment_request(
            booking_id=request.booking_id,
            user_id=request.user_id,
            amount_in_rupees=request.amount,
            mobile_number=request.mobile_number,
        )
        envelope = self._builder.sign(payment_request)

        log = logger.bind(
            booking_id=request.booking_id,
            transaction_id=payment_request.merchant_transaction_id,
            amount_paise=payment_request.amount,
        )
        log.info("payment_initiation_requested")

        try:
            body = await self._gateway.initiate(envelope, payment_request.merchant_id)
        except PaymentGatewayException:
            record_payment_initiation("failed")
            raise

        if not body.get("success"):
            record_payment_initiation("rejected")
            log.warning(
                "payment_initiation_rejected",
                gateway_code=body.get("code"),
                gateway_message=body.get("message"),
            )
            raise PaymentRejectedException(
                message=body.get("message") or "Payment initiation was rejected",
                gateway_code=body.get("code"),
            )

        data = body.get("data") or {}
        redirect_info = (data.get("instrumentResponse") or {}).get("redirectInfo") or {}
        redirect_url = redirect_info.get("url")

        record_payment_initiation("initiated")
        log.info("payment_initiated", gateway_code=body.get("code"))

        return PaymentInitiationResponse(
            merchant_transaction_id=payment_request.merchant_transaction_id,
            amount_paise=payment_request.amount,
            redirect_url=redirect_url,
            gateway_code=body.get("code"),
        )

    async def check_payment_status(self, transaction_id: str) -> PaymentStatusResponse:
        """
        Ask PhonePe for the current state of a transaction.

        Raises:
            InvalidPaymentRequestException: If transaction_id is empty
            PaymentRejectedException: If PhonePe refuses the query
            PaymentGatewayException: If PhonePe is unreachable or errors
        """
        transaction_id = (transaction_id or "").strip()
        if not transaction_id:
            raise InvalidPaymentRequestException("transaction_id is required")

        credentials = self._builder.credentials
        body = await self._gateway.check_status(
            merchant_id=credentials.merchant_id,
            transaction_id=transaction_id,
            x_verify=sign_status_path(transaction_id, credentials),
        )

        code = str(body.get("code") or "")
        if body.get("success") is False and not code.startswith("PAYMENT_"):
            logger.warning(
                "payment_status_rejected",
                transaction_id=transaction_id,
                gateway_code=code,
            )
            raise PaymentRejectedException(
                message=body.get("message") or "Payment status check was rejected",
                gateway_code=code or None,
            )

        status = map_payment_status(body)
        state = extract_payment_state(body)
        record_payment_status(status.value, "status_check")
        logger.info(
            "payment_status_checked",
            transaction_id=transaction_id,
            status=status.value,
            gateway_code=code,
            gateway_state=state,
        )

        response = PaymentStatusResponse.from_gateway(transaction_id, status, body, state)
        return await self._record_if_successful(response)

    async def handle_callback(
        self,
        x_verify: str | None,
        base64_response: str,
    ) -> PaymentStatusResponse:
        """
        Verify and decode a server-to-server callback.

        Raises:
            SignatureMismatchException: Missing or wrong X-VERIFY header
            InvalidPaymentRequestException: If the body is not base64 JSON
        """
        credentials = self._builder.credentials
        valid = verify_callback_signature(
            x_verify or "",
            base64_response,
            credentials.salt_key,
            credentials.salt_index,
        )
        record_callback_verification(valid)

        if not valid:
            logger.warning("payment_callback_signature_mismatch", has_header=bool(x_verify))
            raise SignatureMismatchException()

        try:
            body = decode_payload(base64_response)
        except ValueError as e:
            raise InvalidPaymentRequestException(str(e)) from e
        if not isinstance(body, dict):
            raise InvalidPaymentRequestException("Callback payload must be a JSON object")
        data = body.get("data")
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise InvalidPaymentRequestException("Callback payload data must be a JSON object")

        status = map_payment_status(body)
        state = extract_payment_state(body)
        transaction_id = data.get("merchantTransactionId") or ""

        record_payment_status(status.value, "callback")
        logger.info(
            "payment_callback_received",
            transaction_id=transaction_id,
            status=status.value,
            gateway_code=body.get("code"),
        )

        response = PaymentStatusResponse.from_gateway(transaction_id, status, body, state)
        return await self._record_if_successful(response)

    async def _record_if_successful(
        self,
        response: PaymentStatusResponse,
    ) -> PaymentStatusResponse:
        if self._recorder is None or response.status != PaymentStatus.SUCCESS:
            return response
        record = await self._recorder.record_successful_payment(response)
        return replace(response, record=record)
