"""HTTP implementation of BookingBackendClient."""

from typing import Any, Dict, List

import httpx
import structlog

from nibog_gateway.core.config import settings
from nibog_gateway.core.metrics import track_backend_latency
from nibog_gateway.domain.exceptions import BackendUnavailableException
from nibog_gateway.domain.interfaces import BookingBackendClient

logger = structlog.get_logger(__name__)


class HttpBookingBackendClient(BookingBackendClient):
    """HTTP client for the webhook backend."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = (base_url or settings.backend_api_url).rstrip("/")
        self._timeout = timeout or settings.backend_api_timeout
        self._transport = transport

    async def get_collection(self, resource: str) -> List[Dict[str, Any]]:
        data = await self._request("GET", resource)

        if isinstance(data, dict):
            data = [data] if data else []
        if not isinstance(data, list):
            raise BackendUnavailableException(f"Unexpected backend payload: {resource}")
        return data

    async def post(self, resource: str, payload: Dict[str, Any]) -> Any:
        return await self._request("POST", resource, json=payload)

    async def _request(self, method: str, resource: str, **kwargs: Any) -> Any:
        url = f"{self._base_url}/{resource.lstrip('/')}"

        try:
            with track_backend_latency():
                async with httpx.AsyncClient(
                    timeout=self._timeout,
                    transport=self._transport,
                ) as client:
                    response = await client.request(
                        method,
                        url,
                        headers={"Content-Type": "application/json"},
                        **kwargs,
                    )
        except httpx.TimeoutException:
            logger.warning("backend_timeout", method=method, resource=resource)
            raise BackendUnavailableException(f"Backend timed out: {resource}")
        except httpx.HTTPError as e:
            logger.error("backend_request_failed", method=method, resource=resource, error=str(e))
            raise BackendUnavailableException(f"Backend unreachable: {resource}")

        if response.status_code >= 400:
            logger.warning(
                "backend_error_response",
                method=method,
                resource=resource,
                status_code=response.status_code,
            )
            raise BackendUnavailableException(
                message=f"Backend error for {resource}: HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError:
            raise BackendUnavailableException(
                message=f"Backend returned invalid JSON: {resource}",
                status_code=response.status_code,
            )
