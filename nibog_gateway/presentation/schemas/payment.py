"""Payment-related Pydantic schemas."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PaymentInitiateRequestSchema(BaseModel):
    """Schema for POST /v1/payments/initiate request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "booking_id": "1042",
                    "user_id": "77",
                    "amount": 499.0,
                    "mobile_number": "987-654-3210",
                }
            ]
        }
    )
    booking_id: str = Field(
        ...,
        min_length=1,
        max_length=64,
        description="Booking identifier or an existing NIBOG_ transaction ID",
        examples=["1042"],
    )
    user_id: str = Field(
        ...,
        min_length=1,
        max_length=64,
        description="Identifier of the paying user",
        examples=["77"],
    )
    amount: float = Field(
        ...,
        gt=0,
        description="Amount in rupees",
        examples=[499.0],
    )
    mobile_number: str = Field(
        ...,
        min_length=1,
        max_length=32,
        description="Mobile number; non-digit characters are removed",
        examples=["987-654-3210"],
    )

    @field_validator("booking_id", "user_id", mode="before")
    @classmethod
    def coerce_identifier(cls, v):
        """Accept numeric IDs and strip whitespace."""
        if isinstance(v, int) and not isinstance(v, bool):
            v = str(v)
        if isinstance(v, str):
            if not v.strip():
                raise ValueError("identifier cannot be empty or whitespace")
            return v.strip()
        return v


class PaymentInitiateResponseSchema(BaseModel):
    """Schema for POST /v1/payments/initiate response body."""

    merchant_transaction_id: str = Field(
        ...,
        description="Unique transaction ID for this payment attempt",
        examples=["NIBOG_1042_1700000000000"],
    )
    amount_paise: int = Field(
        ...,
        gt=0,
        description="Amount sent to the gateway in paise",
        examples=[49900],
    )
    redirect_url: Optional[str] = Field(
        None,
        description="PhonePe pay page URL to send the user to",
    )
    gateway_code: Optional[str] = Field(
        None,
        description="Response code returned by PhonePe",
        examples=["PAYMENT_INITIATED"],
    )


class PaymentRecordSchema(BaseModel):
    """Outcome of forwarding a successful payment to the backend."""

    booking_ref: str = Field(
        ...,
        description="Ticket reference in PPTYYMMDDxxx format",
        examples=["PPT250315890"],
    )
    booking_id: Optional[Any] = Field(
        None,
        description="Booking the payment was recorded against",
    )
    payment_recorded: bool = Field(
        ...,
        description="Whether the backend holds a payment record for this transaction",
    )
    duplicate: bool = Field(
        False,
        description="True when the backend already had this booking",
    )
    error: Optional[str] = Field(
        None,
        description="Why recording failed, if it did",
    )


class PaymentStatusResponseSchema(BaseModel):
    """Schema for payment status and callback responses."""

    merchant_transaction_id: str = Field(
        ...,
        description="Merchant transaction ID",
    )
    status: str = Field(
        ...,
        description="PENDING, SUCCESS, FAILED or CANCELLED",
        examples=["SUCCESS"],
    )
    gateway_code: Optional[str] = Field(
        None,
        description="Response code returned by PhonePe",
        examples=["PAYMENT_SUCCESS"],
    )
    gateway_state: Optional[str] = Field(
        None,
        description="Payment state reported by PhonePe",
        examples=["COMPLETED"],
    )
    gateway_transaction_id: Optional[str] = Field(
        None,
        description="PhonePe's own transaction ID",
    )
    amount_paise: Optional[int] = Field(
        None,
        description="Amount in paise as reported by PhonePe",
    )
    record: Optional[PaymentRecordSchema] = Field(
        None,
        description="Set for SUCCESS outcomes once the payment has been forwarded",
    )


class PaymentCallbackSchema(BaseModel):
    """Schema for the PhonePe server-to-server callback body."""

    response: str = Field(
        ...,
        min_length=1,
        description="Base64 encoded JSON payment result",
    )


class PaymentRecordCreateSchema(BaseModel):
    """
    Schema for POST /v1/payments/records request body.

    Unknown fields are forwarded to the backend untouched. Required fields
    are optional here so that missing ones are reported as a 400.
    """

    model_config = ConfigDict(extra="allow")

    booking_id: Optional[int] = Field(None, description="Booking being paid for")
    transaction_id: Optional[str] = Field(None, description="Gateway transaction ID")
    amount: Optional[float] = Field(None, description="Amount in rupees")
    phonepe_transaction_id: Optional[str] = None
    payment_method: Optional[str] = Field(None, examples=["PhonePe"])
    payment_status: Optional[str] = Field(None, examples=["successful"])
    payment_date: Optional[str] = None
    gateway_response: Optional[Dict[str, Any]] = None
