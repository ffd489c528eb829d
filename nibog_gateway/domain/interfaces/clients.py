"""External client interfaces."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from nibog_gateway.domain.entities import SignedEnvelope


class PaymentGatewayClient(ABC):
    """
    Abstract client for the PhonePe payment gateway.

    Implementations must apply an explicit timeout and must not retry.
    """

    @abstractmethod
    async def initiate(
        self,
        envelope: SignedEnvelope,
        merchant_id: str,
    ) -> Dict[str, Any]:
        """
        Submit a signed payment request to the pay endpoint.

        Args:
            envelope: Base64 payload and its X-VERIFY signature
            merchant_id: Sent as the X-MERCHANT-ID header

        Returns:
            The decoded gateway JSON response

        Raises:
            PaymentGatewayException: Network failure, non-2xx or bad body
            PaymentGatewayTimeoutException: If the request times out
        """
        ...

    @abstractmethod
    async def check_status(
        self,
        merchant_id: str,
        transaction_id: str,
        x_verify: str,
    ) -> Dict[str, Any]:
        """
        Query the status endpoint for one transaction.

        Args:
            merchant_id: The merchant identifier
            transaction_id: The merchant transaction ID
            x_verify: Signature over the status path

        Returns:
            The decoded gateway JSON response

        Raises:
            PaymentGatewayException: Network failure, non-2xx or bad body
            PaymentGatewayTimeoutException: If the request times out
        """
        ...


class BookingBackendClient(ABC):
    """
    Abstract client for the webhook backend.

    The backend owns all persistence; this service reads collections from it
    and forwards writes to it as-is.
    """

    @abstractmethod
    async def get_collection(self, resource: str) -> List[Dict[str, Any]]:
        """
        Fetch every record of a backend resource (e.g. "event/get-all").

        Raises:
            BackendUnavailableException: On network errors or non-2xx
        """
        ...

    @abstractmethod
    async def post(self, resource: str, payload: Dict[str, Any]) -> Any:
        """
        POST a JSON payload to a backend resource (e.g. "payments/create").

        Returns:
            The decoded JSON response body

        Raises:
            BackendUnavailableException: On network errors, non-2xx or bad body
        """
        ...
