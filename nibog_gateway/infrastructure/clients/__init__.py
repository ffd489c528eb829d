"""External API client implementations."""

from .phonepe_client import HttpPhonePeClient
from .backend_client import HttpBookingBackendClient

__all__ = [
    "HttpPhonePeClient",
    "HttpBookingBackendClient",
]
