"""Promo code Pydantic schemas."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PromoCodePreviewRequestSchema(BaseModel):
    """
    Schema for POST /v1/promo-codes/validate-preview request body.

    Fields are optional so that missing values are reported as
    INVALID_PROMO_CODE_REQUEST (400) by the service.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"promo_code": "NIBOG10", "event_id": 1, "game_ids": [7, 8], "subtotal": 798.0}
            ]
        }
    )

    promo_code: Optional[str] = Field(None, description="Code entered by the user")
    event_id: Optional[int] = Field(None, description="Event being booked")
    game_ids: Optional[List[int]] = Field(None, description="Games selected for the booking")
    subtotal: Optional[float] = Field(None, description="Order subtotal in rupees")


class PromoCodeFinalRequestSchema(BaseModel):
    """Schema for POST /v1/promo-codes/validate-final request body."""

    promo_code: Optional[str] = Field(None, description="Code entered by the user")
    event_id: Optional[int] = Field(None, description="Event being booked")
    game_ids: Optional[List[int]] = Field(None, description="Games selected for the booking")
    amount: Optional[float] = Field(None, description="Order total in rupees")


class PromoCodeValidationSchema(BaseModel):
    """One promo code preview result; extra backend fields are kept."""

    model_config = ConfigDict(extra="allow")

    is_valid: bool = False
    discount_amount: float = 0
    final_amount: float = 0
    message: Optional[str] = None
    promo_details: Dict[str, Any] = Field(default_factory=dict)
