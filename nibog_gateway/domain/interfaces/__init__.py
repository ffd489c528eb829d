"""
Domain Interfaces (Ports)
"""

from .clients import PaymentGatewayClient, BookingBackendClient
from .stores import KeyValueStore

__all__ = [
    "PaymentGatewayClient",
    "BookingBackendClient",
    "KeyValueStore",
]
