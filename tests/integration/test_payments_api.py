"""
Integration tests for the payment endpoints.

These tests verify:
1. Initiation builds, signs and submits the expected envelope
2. Gateway rejections and outages map to 400 and 503
3. Status checks sign the status path and map gateway states
4. Callbacks are accepted only with a matching X-VERIFY signature
5. Successful payments are recorded once with the webhook backend
"""

import pytest
from httpx import AsyncClient

from nibog_gateway.service.payments import decode_payload, sign_payload, sign_status_path

from tests.integration.conftest import (
    PAY_PAGE_URL,
    TEST_CREDENTIALS,
    MockBookingBackendClient,
    MockPaymentGatewayClient,
    encode_callback,
    sign_callback,
    status_response,
)


# =============================================================================
# Initiation Tests
# =============================================================================

class TestInitiatePayment:
    """Tests for POST /v1/payments/initiate."""

    @pytest.mark.asyncio
    async def test_initiate_returns_redirect_url(
        self,
        client: AsyncClient,
        initiate_request: dict,
    ):
        response = await client.post("/v1/payments/initiate", json=initiate_request)

        assert response.status_code == 200
        data = response.json()
        assert data["merchant_transaction_id"] == "NIBOG_1042_1700000000000"
        assert data["amount_paise"] == 49900
        assert data["redirect_url"] == PAY_PAGE_URL
        assert data["gateway_code"] == "PAYMENT_INITIATED"

    @pytest.mark.asyncio
    async def test_initiate_sends_signed_envelope(
        self,
        client: AsyncClient,
        mock_gateway_client: MockPaymentGatewayClient,
        initiate_request: dict,
    ):
        await client.post("/v1/payments/initiate", json=initiate_request)

        assert len(mock_gateway_client.initiate_calls) == 1
        call = mock_gateway_client.initiate_calls[0]
        envelope = call["envelope"]

        assert call["merchant_id"] == "MERCHANTUAT"
        assert envelope.signature == sign_payload(
            envelope.base64_payload,
            "/pg/v1/pay",
            TEST_CREDENTIALS.salt_key,
            TEST_CREDENTIALS.salt_index,
        )

        payload = decode_payload(envelope.base64_payload)
        assert payload["amount"] == 49900
        assert payload["mobileNumber"] == "9876543210"
        assert payload["merchantUserId"] == "77"
        assert payload["callbackUrl"] == "https://nibog.test/v1/payments/callback"
        assert payload["redirectUrl"] == (
            "https://nibog.test/payment-callback"
            "?bookingId=1042&transactionId=NIBOG_1042_1700000000000"
        )

    @pytest.mark.asyncio
    async def test_initiate_accepts_numeric_ids(
        self,
        client: AsyncClient,
    ):
        response = await client.post(
            "/v1/payments/initiate",
            json={"booking_id": 1042, "user_id": 77, "amount": 100, "mobile_number": "9876543210"},
        )

        assert response.status_code == 200
        assert response.json()["amount_paise"] == 10000

    @pytest.mark.asyncio
    async def test_initiate_rejects_non_positive_amount(
        self,
        client: AsyncClient,
        mock_gateway_client: MockPaymentGatewayClient,
        initiate_request: dict,
    ):
        initiate_request["amount"] = 0

        response = await client.post("/v1/payments/initiate", json=initiate_request)

        assert response.status_code == 422
        assert mock_gateway_client.initiate_calls == []

    @pytest.mark.asyncio
    async def test_initiate_rejects_mobile_without_digits(
        self,
        client: AsyncClient,
        mock_gateway_client: MockPaymentGatewayClient,
        initiate_request: dict,
    ):
        initiate_request["mobile_number"] = "---"

        response = await client.post("/v1/payments/initiate", json=initiate_request)

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_PAYMENT_REQUEST"
        assert mock_gateway_client.initiate_calls == []

    @pytest.mark.asyncio
    async def test_gateway_rejection_returns_400(
        self,
        client: AsyncClient,
        mock_gateway_client: MockPaymentGatewayClient,
        initiate_request: dict,
    ):
        mock_gateway_client.initiate_response = {
            "success": False,
            "code": "BAD_REQUEST",
            "message": "Please check the inputs you have provided.",
        }

        response = await client.post("/v1/payments/initiate", json=initiate_request)

        assert response.status_code == 400
        assert response.json()["error"] == "PAYMENT_REJECTED"
        assert response.headers["X-Gateway-Code"] == "BAD_REQUEST"

    @pytest.mark.asyncio
    async def test_gateway_outage_returns_503(
        self,
        client: AsyncClient,
        mock_gateway_client: MockPaymentGatewayClient,
        initiate_request: dict,
    ):
        mock_gateway_client.fail_mode = True

        response = await client.post("/v1/payments/initiate", json=initiate_request)

        assert response.status_code == 503
        assert response.json()["error"] == "PAYMENT_GATEWAY_ERROR"
        assert len(mock_gateway_client.initiate_calls) == 1

    @pytest.mark.asyncio
    async def test_missing_credentials_returns_500(
        self,
        unconfigured_client: AsyncClient,
        mock_gateway_client: MockPaymentGatewayClient,
        initiate_request: dict,
    ):
        response = await unconfigured_client.post("/v1/payments/initiate", json=initiate_request)

        assert response.status_code == 500
        assert response.json()["error"] == "MERCHANT_CREDENTIALS_MISSING"
        assert mock_gateway_client.initiate_calls == []


# =============================================================================
# Status Tests
# =============================================================================

class TestPaymentStatus:
    """Tests for GET /v1/payments/{transaction_id}/status."""

    @pytest.mark.asyncio
    async def test_status_signs_status_path(
        self,
        client: AsyncClient,
        mock_gateway_client: MockPaymentGatewayClient,
    ):
        response = await client.get("/v1/payments/NIBOG_1042_1700000000000/status")

        assert response.status_code == 200
        call = mock_gateway_client.status_calls[0]
        assert call["merchant_id"] == "MERCHANTUAT"
        assert call["transaction_id"] == "NIBOG_1042_1700000000000"
        assert call["x_verify"] == sign_status_path("NIBOG_1042_1700000000000", TEST_CREDENTIALS)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "code, state, expected",
        [
            ("PAYMENT_SUCCESS", "COMPLETED", "SUCCESS"),
            ("PAYMENT_PENDING", "PENDING", "PENDING"),
            ("PAYMENT_ERROR", "FAILED", "FAILED"),
            ("PAYMENT_CANCELLED", None, "CANCELLED"),
        ],
    )
    async def test_status_mapping(
        self,
        client: AsyncClient,
        mock_gateway_client: MockPaymentGatewayClient,
        code: str,
        state: str,
        expected: str,
    ):
        mock_gateway_client.status_body = status_response(
            code, state, success=code == "PAYMENT_SUCCESS"
        )

        response = await client.get("/v1/payments/NIBOG_1042_1700000000000/status")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == expected
        assert data["gateway_code"] == code
        assert data["gateway_transaction_id"] == "T2401011234567890"
        assert data["amount_paise"] == 49900

    @pytest.mark.asyncio
    async def test_status_query_rejected(
        self,
        client: AsyncClient,
        mock_gateway_client: MockPaymentGatewayClient,
    ):
        mock_gateway_client.status_body = {
            "success": False,
            "code": "AUTHORIZATION_FAILED",
            "message": "X-VERIFY header is incorrect",
        }

        response = await client.get("/v1/payments/NIBOG_1042_1700000000000/status")

        assert response.status_code == 400
        assert response.json()["error"] == "PAYMENT_REJECTED"

    @pytest.mark.asyncio
    async def test_status_with_non_object_data_still_maps(
        self,
        client: AsyncClient,
        mock_gateway_client: MockPaymentGatewayClient,
    ):
        mock_gateway_client.status_body = {
            "success": True,
            "code": "PAYMENT_PENDING",
            "data": "oops",
        }

        response = await client.get("/v1/payments/NIBOG_1042_1700000000000/status")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "PENDING"
        assert data["gateway_state"] is None
        assert data["amount_paise"] is None

    @pytest.mark.asyncio
    async def test_transaction_id_over_limit_rejected(
        self,
        client: AsyncClient,
        mock_gateway_client: MockPaymentGatewayClient,
    ):
        response = await client.get(f"/v1/payments/{'N' * 39}/status")

        assert response.status_code == 422
        assert mock_gateway_client.status_calls == []


# =============================================================================
# Callback Tests
# =============================================================================

class TestPaymentCallback:
    """Tests for POST /v1/payments/callback."""

    @pytest.mark.asyncio
    async def test_valid_callback_accepted(
        self,
        client: AsyncClient,
    ):
        body = encode_callback(status_response("PAYMENT_SUCCESS", "COMPLETED"))

        response = await client.post(
            "/v1/payments/callback",
            json={"response": body},
            headers={"X-VERIFY": sign_callback(body)},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["merchant_transaction_id"] == "NIBOG_1042_1700000000000"
        assert data["status"] == "SUCCESS"
        assert data["gateway_state"] == "COMPLETED"

    @pytest.mark.asyncio
    async def test_failed_payment_callback(
        self,
        client: AsyncClient,
    ):
        body = encode_callback(status_response("PAYMENT_ERROR", "FAILED", success=False))

        response = await client.post(
            "/v1/payments/callback",
            json={"response": body},
            headers={"X-VERIFY": sign_callback(body)},
        )

        assert response.status_code == 200
        assert response.json()["status"] == "FAILED"

    @pytest.mark.asyncio
    async def test_tampered_callback_rejected(
        self,
        client: AsyncClient,
    ):
        body = encode_callback(status_response("PAYMENT_ERROR", "FAILED", success=False))
        signature = sign_callback(body)
        forged = encode_callback(status_response("PAYMENT_SUCCESS", "COMPLETED"))

        response = await client.post(
            "/v1/payments/callback",
            json={"response": forged},
            headers={"X-VERIFY": signature},
        )

        assert response.status_code == 401
        assert response.json()["error"] == "SIGNATURE_MISMATCH"

    @pytest.mark.asyncio
    async def test_callback_without_signature_rejected(
        self,
        client: AsyncClient,
    ):
        body = encode_callback(status_response("PAYMENT_SUCCESS", "COMPLETED"))

        response = await client.post("/v1/payments/callback", json={"response": body})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_callback_signed_with_other_salt_index_rejected(
        self,
        client: AsyncClient,
    ):
        body = encode_callback(status_response("PAYMENT_SUCCESS", "COMPLETED"))
        signature = sign_payload(body, "", TEST_CREDENTIALS.salt_key, "2")

        response = await client.post(
            "/v1/payments/callback",
            json={"response": body},
            headers={"X-VERIFY": signature},
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_signed_garbage_rejected_as_invalid(
        self,
        client: AsyncClient,
    ):
        body = "not-base64!"

        response = await client.post(
            "/v1/payments/callback",
            json={"response": body},
            headers={"X-VERIFY": sign_callback(body)},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_PAYMENT_REQUEST"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("data", ["oops", ["a", "b"], 42])
    async def test_signed_callback_with_non_object_data_rejected(
        self,
        client: AsyncClient,
        data,
    ):
        body = encode_callback({"success": True, "code": "PAYMENT_SUCCESS", "data": data})

        response = await client.post(
            "/v1/payments/callback",
            json={"response": body},
            headers={"X-VERIFY": sign_callback(body)},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_PAYMENT_REQUEST"


# =============================================================================
# Payment Recording Tests
# =============================================================================

class TestPaymentRecording:
    """Tests for recording successful payments with the webhook backend."""

    @pytest.mark.asyncio
    async def test_successful_status_records_payment(
        self,
        client: AsyncClient,
        mock_backend_client: MockBookingBackendClient,
    ):
        response = await client.get("/v1/payments/NIBOG_1042_1700000000000/status")

        assert response.status_code == 200
        record = response.json()["record"]
        assert record["payment_recorded"] is True
        assert record["duplicate"] is False
        assert record["booking_id"] == 1042
        assert record["booking_ref"].startswith("PPT")
        assert record["booking_ref"].endswith("890")

        lookups = mock_backend_client.posts_to("tickect/booking_ref/details")
        assert lookups == [{"booking_ref_id": record["booking_ref"]}]

        created = mock_backend_client.posts_to("payments/create")
        assert len(created) == 1
        assert created[0]["booking_id"] == 1042
        assert created[0]["transaction_id"] == "T2401011234567890"
        assert created[0]["phonepe_transaction_id"] == "NIBOG_1042_1700000000000"
        assert created[0]["amount"] == 499.0
        assert created[0]["payment_status"] == "successful"
        assert created[0]["gateway_response"]["merchantId"] == "MERCHANTUAT"

    @pytest.mark.asyncio
    async def test_repeated_status_checks_record_once(
        self,
        client: AsyncClient,
        mock_backend_client: MockBookingBackendClient,
    ):
        await client.get("/v1/payments/NIBOG_1042_1700000000000/status")
        response = await client.get("/v1/payments/NIBOG_1042_1700000000000/status")

        assert response.json()["record"]["payment_recorded"] is True
        assert len(mock_backend_client.posts_to("payments/create")) == 1

    @pytest.mark.asyncio
    async def test_callback_after_status_check_does_not_record_again(
        self,
        client: AsyncClient,
        mock_backend_client: MockBookingBackendClient,
    ):
        await client.get("/v1/payments/NIBOG_1042_1700000000000/status")
        body = encode_callback(status_response("PAYMENT_SUCCESS", "COMPLETED"))

        response = await client.post(
            "/v1/payments/callback",
            json={"response": body},
            headers={"X-VERIFY": sign_callback(body)},
        )

        assert response.json()["record"]["payment_recorded"] is True
        assert len(mock_backend_client.posts_to("payments/create")) == 1

    @pytest.mark.asyncio
    async def test_existing_booking_reference_is_duplicate(
        self,
        client: AsyncClient,
        mock_backend_client: MockBookingBackendClient,
    ):
        mock_backend_client.post_responses["tickect/booking_ref/details"] = [
            {"booking_id": 1042, "booking_ref": "PPT250315890"}
        ]

        response = await client.get("/v1/payments/NIBOG_1042_1700000000000/status")

        record = response.json()["record"]
        assert record["duplicate"] is True
        assert record["payment_recorded"] is True
        assert mock_backend_client.posts_to("payments/create") == []

    @pytest.mark.asyncio
    async def test_backend_failure_keeps_status_response(
        self,
        client: AsyncClient,
        mock_backend_client: MockBookingBackendClient,
    ):
        mock_backend_client.fail_post_resources.add("payments/create")

        response = await client.get("/v1/payments/NIBOG_1042_1700000000000/status")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "SUCCESS"
        assert data["record"]["payment_recorded"] is False
        assert data["record"]["error"]

    @pytest.mark.asyncio
    async def test_pending_payment_not_recorded(
        self,
        client: AsyncClient,
        mock_gateway_client: MockPaymentGatewayClient,
        mock_backend_client: MockBookingBackendClient,
    ):
        mock_gateway_client.status_body = status_response("PAYMENT_PENDING", "PENDING")

        response = await client.get("/v1/payments/NIBOG_1042_1700000000000/status")

        assert response.json()["record"] is None
        assert mock_backend_client.posted == []


class TestCreatePaymentRecord:
    """Tests for POST /v1/payments/records."""

    @pytest.mark.asyncio
    async def test_record_forwarded(
        self,
        client: AsyncClient,
        mock_backend_client: MockBookingBackendClient,
    ):
        response = await client.post(
            "/v1/payments/records",
            json={
                "booking_id": 1042,
                "transaction_id": "T2401011234567890",
                "amount": 499.0,
                "payment_method": "PhonePe",
                "notes": "manual entry",
            },
        )

        assert response.status_code == 200
        assert response.json() == [{"payment_id": 1}]
        forwarded = mock_backend_client.posts_to("payments/create")[0]
        assert forwarded["booking_id"] == 1042
        assert forwarded["notes"] == "manual entry"
        assert "payment_date" not in forwarded

    @pytest.mark.asyncio
    async def test_missing_fields_rejected(
        self,
        client: AsyncClient,
        mock_backend_client: MockBookingBackendClient,
    ):
        response = await client.post(
            "/v1/payments/records",
            json={"booking_id": 1042, "amount": 499.0},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_PAYMENT_REQUEST"
        assert "transaction_id" in response.json()["message"]
        assert mock_backend_client.posted == []

    @pytest.mark.asyncio
    async def test_backend_failure_returns_503(
        self,
        client: AsyncClient,
        mock_backend_client: MockBookingBackendClient,
    ):
        mock_backend_client.fail_mode = True

        response = await client.post(
            "/v1/payments/records",
            json={"booking_id": 1042, "transaction_id": "T1", "amount": 499.0},
        )

        assert response.status_code == 503
        assert response.json()["error"] == "BACKEND_UNAVAILABLE"
