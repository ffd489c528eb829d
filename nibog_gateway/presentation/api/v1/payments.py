"""Payment API endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Header, Path

from nibog_gateway.application.dto import PaymentInitiationRequest, PaymentStatusResponse
from nibog_gateway.application.services import PaymentRecordService, PaymentService
from nibog_gateway.core.dependencies import get_payment_record_service, get_payment_service
from nibog_gateway.presentation.schemas import (
    ErrorResponseSchema,
    PaymentCallbackSchema,
    PaymentInitiateRequestSchema,
    PaymentInitiateResponseSchema,
    PaymentRecordCreateSchema,
    PaymentRecordSchema,
    PaymentStatusResponseSchema,
)

payments_router = APIRouter(
    prefix="/payments",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid or rejected request"},
        503: {"model": ErrorResponseSchema, "description": "Payment gateway unavailable"},
    },
)


def _status_schema(response: PaymentStatusResponse) -> PaymentStatusResponseSchema:
    record = None
    if response.record is not None:
        record = PaymentRecordSchema(
            booking_ref=response.record.booking_ref,
            booking_id=response.record.booking_id,
            payment_recorded=response.record.payment_recorded,
            duplicate=response.record.duplicate,
            error=response.record.error,
        )
    return PaymentStatusResponseSchema(
        merchant_transaction_id=response.merchant_transaction_id,
        status=response.status.value,
        gateway_code=response.gateway_code,
        gateway_state=response.gateway_state,
        gateway_transaction_id=response.gateway_transaction_id,
        amount_paise=response.amount_paise,
        record=record,
    )


@payments_router.post(
    "/initiate",
    response_model=PaymentInitiateResponseSchema,
    status_code=200,
    summary="Initiate PhonePe Payment",
    description="""Build, sign and submit a PhonePe pay page request for a booking""",
    responses={
        200: {"description": "Payment initiated; redirect the user to redirect_url"},
    },
)
async def initiate_payment(
    request: PaymentInitiateRequestSchema,
    payment_service: Annotated[PaymentService, Depends(get_payment_service)],
) -> PaymentInitiateResponseSchema:
    dto = PaymentInitiationRequest(
        booking_id=request.booking_id,
        user_id=request.user_id,
        amount=request.amount,
        mobile_number=request.mobile_number,
    )

    response = await payment_service.initiate_payment(dto)

    return PaymentInitiateResponseSchema(
        merchant_transaction_id=response.merchant_transaction_id,
        amount_paise=response.amount_paise,
        redirect_url=response.redirect_url,
        gateway_code=response.gateway_code,
    )


@payments_router.get(
    "/{transaction_id}/status",
    response_model=PaymentStatusResponseSchema,
    summary="Check Payment Status",
    description="""
    Query PhonePe for the current state of a merchant transaction.

    The gateway state is mapped to PENDING, SUCCESS, FAILED or CANCELLED.
    """,
)
async def get_payment_status(
    transaction_id: Annotated[
        str,
        Path(min_length=1, max_length=38, description="Merchant transaction ID"),
    ],
    payment_service: Annotated[PaymentService, Depends(get_payment_service)],
) -> PaymentStatusResponseSchema:
    response = await payment_service.check_payment_status(transaction_id)
    return _status_schema(response)


@payments_router.post(
    "/callback",
    response_model=PaymentStatusResponseSchema,
    summary="PhonePe Callback",
    description="""
    Server-to-server callback from PhonePe.

    The X-VERIFY header must match the base64 response body; a mismatch is
    rejected with 401 and never retried.
    """,
    responses={
        401: {"model": ErrorResponseSchema, "description": "Signature mismatch"},
    },
)
async def payment_callback(
    callback: PaymentCallbackSchema,
    payment_service: Annotated[PaymentService, Depends(get_payment_service)],
    x_verify: Annotated[str | None, Header(alias="X-VERIFY")] = None,
) -> PaymentStatusResponseSchema:
    response = await payment_service.handle_callback(x_verify, callback.response)
    return _status_schema(response)


@payments_router.post(
    "/records",
    summary="Create Payment Record",
    description="""
    Forward a payment record to the webhook backend.

    booking_id, transaction_id and amount are required; every other field
    is passed through unchanged.
    """,
)
async def create_payment_record(
    request: PaymentRecordCreateSchema,
    record_service: Annotated[PaymentRecordService, Depends(get_payment_record_service)],
) -> Any:
    return await record_service.create_payment_record(request.model_dump(exclude_none=True))
