"""
Fixtures for integration tests.

Provides:
- Test client for FastAPI app
- Mock PhonePe gateway client with canned responses
- Mock webhook backend client with catalog data
- Fresh in-memory stores per test
"""

import base64
import json
from typing import Any, AsyncGenerator, Dict, List, Optional, Set, Tuple

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from nibog_gateway.main import app
from nibog_gateway.core.dependencies import (
    get_backend_client,
    get_event_cache,
    get_merchant_credentials,
    get_payment_gateway_client,
    get_payment_record_store,
    get_payment_request_builder,
    get_slot_status_store,
)
from nibog_gateway.domain.entities import MerchantCredentials, SignedEnvelope
from nibog_gateway.domain.exceptions import (
    BackendUnavailableException,
    PaymentGatewayException,
)
from nibog_gateway.domain.interfaces import BookingBackendClient, PaymentGatewayClient
from nibog_gateway.infrastructure.stores import InMemoryKeyValueStore
from nibog_gateway.service.payments import (
    PaymentRequestBuilder,
    TransactionIdGenerator,
    sign_payload,
)


# =============================================================================
# Test Data
# =============================================================================

TEST_CREDENTIALS = MerchantCredentials(
    merchant_id="MERCHANTUAT",
    salt_key="test-salt-key",
    salt_index="1",
)
TEST_APP_URL = "https://nibog.test"
FIXED_MS = 1_700_000_000_000
PAY_PAGE_URL = "https://mercury-uat.phonepe.com/transact/pg?token=abc"

EVENTS = [
    {
        "id": 1,
        "title": "Baby Crawling Championship",
        "description": "Crawling races for babies",
        "city_id": 10,
        "venue_id": 100,
        "event_date": "2025-03-15",
        "status": "Published",
    },
    {
        "id": 2,
        "title": "Toddler Olympics",
        "description": "Running and jumping",
        "city_id": 99,
        "venue_id": 999,
        "event_date": "2025-04-01",
        "status": "Draft",
    },
]
GAME_SLOTS = [
    {
        "id": 501,
        "event_id": 1,
        "game_id": 7,
        "custom_title": "Crawl Sprint",
        "custom_description": "10 metre crawl",
        "custom_price": "499.00",
        "start_time": "10:00:00",
        "end_time": "11:00:00",
        "slot_price": "499.00",
        "max_participants": 20,
    },
    {
        "id": 502,
        "event_id": 1,
        "game_id": 8,
        "custom_title": "Ball Chase",
        "custom_description": None,
        "custom_price": None,
        "start_time": "11:30:00",
        "end_time": "12:30:00",
        "slot_price": "299.00",
        "max_participants": 15,
    },
]
PROMO_PREVIEW_RESULT = {
    "is_valid": True,
    "discount_amount": 79.8,
    "final_amount": 718.2,
    "message": "Promo code applied",
    "promo_details": {"promo_code": "NIBOG10", "type": "percentage", "value": 10},
}
PROMO_FINAL_RESULT = {
    "is_valid": True,
    "promo_id": 3,
    "discount_amount": 79.8,
    "final_amount": 718.2,
}
CITIES = [{"id": 10, "city_name": "Hyderabad", "state": "Telangana", "is_active": True}]
VENUES = [
    {
        "id": 100,
        "venue_name": "Gachibowli Indoor Stadium",
        "address": "Gachibowli",
        "capacity": 500,
        "is_active": True,
    }
]


def pay_success_response(transaction_id: str = "NIBOG_1042_1700000000000") -> Dict[str, Any]:
    return {
        "success": True,
        "code": "PAYMENT_INITIATED",
        "message": "Payment initiated",
        "data": {
            "merchantId": TEST_CREDENTIALS.merchant_id,
            "merchantTransactionId": transaction_id,
            "instrumentResponse": {
                "type": "PAY_PAGE",
                "redirectInfo": {"url": PAY_PAGE_URL, "method": "GET"},
            },
        },
    }


def status_response(
    code: str,
    state: Optional[str],
    transaction_id: str = "NIBOG_1042_1700000000000",
    success: bool = True,
) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "merchantId": TEST_CREDENTIALS.merchant_id,
        "merchantTransactionId": transaction_id,
        "transactionId": "T2401011234567890",
        "amount": 49900,
    }
    if state is not None:
        data["state"] = state
    return {"success": success, "code": code, "message": code, "data": data}


def encode_callback(body: Dict[str, Any]) -> str:
    return base64.b64encode(json.dumps(body).encode()).decode()


def sign_callback(base64_body: str, credentials: MerchantCredentials = TEST_CREDENTIALS) -> str:
    return sign_payload(base64_body, "", credentials.salt_key, credentials.salt_index)


# =============================================================================
# Mock Clients
# =============================================================================

class MockPaymentGatewayClient(PaymentGatewayClient):
    """Mock PhonePe client that records calls and returns canned bodies."""

    def __init__(
        self,
        initiate_response: Optional[Dict[str, Any]] = None,
        status_body: Optional[Dict[str, Any]] = None,
        fail_mode: bool = False,
    ):
        self.initiate_response = initiate_response or pay_success_response()
        self.status_body = status_body or status_response("PAYMENT_SUCCESS", "COMPLETED")
        self.fail_mode = fail_mode
        self.initiate_calls: List[Dict[str, Any]] = []
        self.status_calls: List[Dict[str, Any]] = []

    async def initiate(self, envelope: SignedEnvelope, merchant_id: str) -> Dict[str, Any]:
        self.initiate_calls.append({"envelope": envelope, "merchant_id": merchant_id})
        if self.fail_mode:
            raise PaymentGatewayException("PhonePe unavailable", status_code=502)
        return self.initiate_response

    async def check_status(
        self,
        merchant_id: str,
        transaction_id: str,
        x_verify: str,
    ) -> Dict[str, Any]:
        self.status_calls.append({
            "merchant_id": merchant_id,
            "transaction_id": transaction_id,
            "x_verify": x_verify,
        })
        if self.fail_mode:
            raise PaymentGatewayException("PhonePe unavailable", status_code=502)
        return self.status_body


class MockBookingBackendClient(BookingBackendClient):
    """Mock webhook backend serving fixed collections and canned POST answers."""

    def __init__(self, fail_mode: bool = False):
        self.fail_mode = fail_mode
        self.fail_post_resources: Set[str] = set()
        self.collections: Dict[str, List[Dict[str, Any]]] = {
            "event/get-all": EVENTS,
            "event-game-slot/get-all": GAME_SLOTS,
            "city/get-all": CITIES,
            "venues/get-all": VENUES,
        }
        self.post_responses: Dict[str, Any] = {
            "tickect/booking_ref/details": [],
            "payments/create": [{"payment_id": 1}],
            "promocode/preview-validation": PROMO_PREVIEW_RESULT,
            "promocode/validate": PROMO_FINAL_RESULT,
        }
        self.calls: List[str] = []
        self.posted: List[Tuple[str, Dict[str, Any]]] = []

    async def get_collection(self, resource: str) -> List[Dict[str, Any]]:
        self.calls.append(resource)
        if self.fail_mode:
            raise BackendUnavailableException("Backend unavailable", status_code=500)
        return self.collections.get(resource, [])

    async def post(self, resource: str, payload: Dict[str, Any]) -> Any:
        self.posted.append((resource, payload))
        if self.fail_mode or resource in self.fail_post_resources:
            raise BackendUnavailableException("Backend unavailable", status_code=500)
        return self.post_responses.get(resource, {})

    def posts_to(self, resource: str) -> List[Dict[str, Any]]:
        return [payload for posted, payload in self.posted if posted == resource]


# =============================================================================
# Mock Client Fixtures
# =============================================================================

@pytest.fixture
def mock_gateway_client() -> MockPaymentGatewayClient:
    """Create a mock PhonePe client."""
    return MockPaymentGatewayClient()


@pytest.fixture
def mock_backend_client() -> MockBookingBackendClient:
    """Create a mock webhook backend client."""
    return MockBookingBackendClient()


@pytest.fixture
def payment_builder() -> PaymentRequestBuilder:
    """Builder with test credentials and a fixed clock."""
    return PaymentRequestBuilder(
        credentials=TEST_CREDENTIALS,
        app_url=TEST_APP_URL,
        callback_path="/v1/payments/callback",
        id_generator=TransactionIdGenerator(clock=lambda: FIXED_MS),
    )


# =============================================================================
# App Client Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def client(
    payment_builder: PaymentRequestBuilder,
    mock_gateway_client: MockPaymentGatewayClient,
    mock_backend_client: MockBookingBackendClient,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with mocked dependencies.

    This client:
    - Signs with test merchant credentials and a fixed clock
    - Mocks the PhonePe gateway and webhook backend clients
    - Uses fresh slot status, event and payment record stores
    """
    slot_store = InMemoryKeyValueStore()
    event_cache = InMemoryKeyValueStore()
    record_store = InMemoryKeyValueStore()

    app.dependency_overrides[get_merchant_credentials] = lambda: TEST_CREDENTIALS
    app.dependency_overrides[get_payment_request_builder] = lambda: payment_builder
    app.dependency_overrides[get_payment_gateway_client] = lambda: mock_gateway_client
    app.dependency_overrides[get_backend_client] = lambda: mock_backend_client
    app.dependency_overrides[get_slot_status_store] = lambda: slot_store
    app.dependency_overrides[get_event_cache] = lambda: event_cache
    app.dependency_overrides[get_payment_record_store] = lambda: record_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def unconfigured_client(
    mock_gateway_client: MockPaymentGatewayClient,
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client whose merchant credentials are empty."""
    app.dependency_overrides[get_merchant_credentials] = lambda: MerchantCredentials("", "", "")
    app.dependency_overrides[get_payment_gateway_client] = lambda: mock_gateway_client
    app.dependency_overrides[get_backend_client] = lambda: MockBookingBackendClient()

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# =============================================================================
# Helper Fixtures
# =============================================================================

@pytest.fixture
def initiate_request() -> dict:
    """Request body for a 499 rupee checkout."""
    return {
        "booking_id": "1042",
        "user_id": "77",
        "amount": 499.0,
        "mobile_number": "987-654-3210",
    }
