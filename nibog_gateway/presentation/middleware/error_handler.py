"""Error handling middleware and exception handlers."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import structlog

from nibog_gateway.domain.exceptions import (
    BackendUnavailableException,
    DomainException,
    InvalidPaymentRequestException,
    InvalidPromoCodeRequestException,
    InvalidSlotStatusException,
    MissingMerchantCredentialsException,
    PaymentGatewayException,
    PaymentRejectedException,
    PromoCodeRejectedException,
    SignatureMismatchException,
)
from .request_context import get_request_id

logger = structlog.get_logger(__name__)


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": code,
            "message": message,
            "request_id": get_request_id(),
        },
    )


def error_handler_middleware(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Maps domain exceptions to appropriate HTTP responses.
    """

    @app.exception_handler(InvalidPaymentRequestException)
    @app.exception_handler(InvalidSlotStatusException)
    @app.exception_handler(InvalidPromoCodeRequestException)
    @app.exception_handler(PromoCodeRejectedException)
    async def invalid_request_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle invalid request errors."""
        return _error_response(400, exc.code, exc.message)

    @app.exception_handler(PaymentRejectedException)
    async def payment_rejected_handler(
        request: Request,
        exc: PaymentRejectedException,
    ) -> JSONResponse:
        """Handle requests the gateway refused."""
        response = _error_response(400, exc.code, exc.message)
        if exc.gateway_code:
            response.headers["X-Gateway-Code"] = exc.gateway_code
        return response

    @app.exception_handler(SignatureMismatchException)
    async def signature_mismatch_handler(
        request: Request,
        exc: SignatureMismatchException,
    ) -> JSONResponse:
        """Reject callbacks that fail X-VERIFY verification."""
        logger.warning(
            "signature_mismatch",
            request_id=get_request_id(),
            path=request.url.path,
        )
        return _error_response(401, exc.code, exc.message)

    @app.exception_handler(MissingMerchantCredentialsException)
    async def missing_credentials_handler(
        request: Request,
        exc: MissingMerchantCredentialsException,
    ) -> JSONResponse:
        """Handle a service started without PhonePe credentials."""
        logger.error(
            "merchant_credentials_missing",
            request_id=get_request_id(),
            missing=exc.missing,
        )
        return _error_response(500, exc.code, "Payment service is not configured.")

    @app.exception_handler(PaymentGatewayException)
    async def gateway_error_handler(
        request: Request,
        exc: PaymentGatewayException,
    ) -> JSONResponse:
        """Handle PhonePe errors and timeouts."""
        logger.error(
            "payment_gateway_error",
            request_id=get_request_id(),
            code=exc.code,
            message=exc.message,
            status_code=exc.status_code,
        )
        return _error_response(
            503,
            exc.code,
            "Payment gateway temporarily unavailable. Please try again.",
        )

    @app.exception_handler(BackendUnavailableException)
    async def backend_error_handler(
        request: Request,
        exc: BackendUnavailableException,
    ) -> JSONResponse:
        """Handle webhook backend errors."""
        logger.error(
            "backend_unavailable",
            request_id=get_request_id(),
            message=exc.message,
            status_code=exc.status_code,
        )
        return _error_response(
            503,
            exc.code,
            "Unable to process request. Please try again later.",
        )

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle generic domain exceptions."""
        logger.warning(
            "domain_exception",
            request_id=get_request_id(),
            code=exc.code,
            message=exc.message,
        )
        return _error_response(400, exc.code, exc.message)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unhandled_exception",
            request_id=get_request_id(),
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return _error_response(500, "INTERNAL_ERROR", "An unexpected error occurred.")
