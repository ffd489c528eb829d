"""HTTP implementation of PaymentGatewayClient for PhonePe."""

from typing import Any, Dict

import httpx
import structlog

from nibog_gateway.core.config import settings
from nibog_gateway.core.metrics import record_gateway_failure, track_gateway_latency
from nibog_gateway.domain.entities import SignedEnvelope
from nibog_gateway.domain.exceptions import (
    PaymentGatewayException,
    PaymentGatewayTimeoutException,
)
from nibog_gateway.domain.interfaces import PaymentGatewayClient
from nibog_gateway.service.payments import PAY_API_PATH, STATUS_API_PATH

logger = structlog.get_logger(__name__)


class HttpPhonePeClient(PaymentGatewayClient):
    """
    HTTP client for the PhonePe PG v1 API.

    Single attempt per call with an explicit timeout; callers own the
    retry policy.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = (base_url or settings.phonepe_base_url).rstrip("/")
        self._timeout = timeout or settings.phonepe_timeout
        self._transport = transport

    async def initiate(
        self,
        envelope: SignedEnvelope,
        merchant_id: str,
    ) -> Dict[str, Any]:
        """POST the signed payload to the pay endpoint."""
        return await self._request(
            "initiate",
            "POST",
            f"{self._base_url}{PAY_API_PATH}",
            headers={
                "Content-Type": "application/json",
                "X-VERIFY": envelope.signature,
                "X-MERCHANT-ID": merchant_id,
            },
            json=envelope.to_dict(),
        )

    async def check_status(
        self,
        merchant_id: str,
        transaction_id: str,
        x_verify: str,
    ) -> Dict[str, Any]:
        """GET the status of one merchant transaction."""
        return await self._request(
            "status",
            "GET",
            f"{self._base_url}{STATUS_API_PATH}/{merchant_id}/{transaction_id}",
            headers={
                "Content-Type": "application/json",
                "X-VERIFY": x_verify,
                "X-MERCHANT-ID": merchant_id,
            },
        )

    async def _request(
        self,
        operation: str,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> Dict[str, Any]:
        try:
            with track_gateway_latency(operation):
                async with httpx.AsyncClient(
                    timeout=self._timeout,
                    transport=self._transport,
                ) as client:
                    response = await client.request(method, url, **kwargs)
        except httpx.TimeoutException:
            record_gateway_failure(operation, "timeout")
            logger.warning("phonepe_timeout", operation=operation, timeout=self._timeout)
            raise PaymentGatewayTimeoutException()
        except httpx.HTTPError as e:
            record_gateway_failure(operation, "error")
            logger.error("phonepe_request_failed", operation=operation, error=str(e))
            raise PaymentGatewayException(message=f"Payment gateway unreachable: {e}")

        try:
            data = response.json()
        except ValueError:
            data = None

        # PhonePe reports business rejections as 4xx with a JSON body
        if response.status_code >= 400 and not (
            isinstance(data, dict) and data.get("success") is False and data.get("code")
        ):
            record_gateway_failure(operation, "error")
            logger.warning(
                "phonepe_error_response",
                operation=operation,
                status_code=response.status_code,
                response=response.text[:200],
            )
            raise PaymentGatewayException(
                message=f"Payment gateway error: HTTP {response.status_code}",
                status_code=response.status_code,
            )

        if not isinstance(data, dict):
            record_gateway_failure(operation, "invalid_response")
            logger.warning(
                "phonepe_invalid_response",
                operation=operation,
                status_code=response.status_code,
                response=response.text[:200],
            )
            raise PaymentGatewayException(
                message="Payment gateway returned a non-JSON response",
                status_code=response.status_code,
            )

        logger.info(
            "phonepe_response",
            operation=operation,
            status_code=response.status_code,
            success=data.get("success"),
            code=data.get("code"),
        )
        return data
