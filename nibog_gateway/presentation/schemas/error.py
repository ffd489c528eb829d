"""Pydantic schema for API error responses."""

from pydantic import BaseModel, Field


class ErrorResponseSchema(BaseModel):
    """Standard error response format for all API errors."""
    error: str = Field(
        ...,
        description="Error code",
        examples=["SIGNATURE_MISMATCH"],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Callback signature verification failed"],
    )
    request_id: str | None = Field(
        None,
        description="Request ID for tracing",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "error": "PAYMENT_GATEWAY_TIMEOUT",
                    "message": "Payment gateway request timed out",
                    "request_id": "abc123",
                }
            ]
        }
    }
