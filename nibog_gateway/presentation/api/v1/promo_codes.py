"""Promo code validation endpoints."""

from typing import Annotated, Any, Dict, List, Union

from fastapi import APIRouter, Depends

from nibog_gateway.application.services import PromoCodeService
from nibog_gateway.core.dependencies import get_promo_code_service
from nibog_gateway.presentation.schemas import (
    ErrorResponseSchema,
    PromoCodeFinalRequestSchema,
    PromoCodePreviewRequestSchema,
    PromoCodeValidationSchema,
)

promo_codes_router = APIRouter(
    prefix="/promo-codes",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Missing or malformed fields"},
    },
)


@promo_codes_router.post(
    "/validate-preview",
    response_model=List[PromoCodeValidationSchema],
    summary="Preview Promo Code",
    description="""
    Check a promo code against the selected event and games.

    Always answers with a list; when the backend cannot validate the code
    the single entry is marked invalid with the subtotal unchanged.
    """,
)
async def validate_promo_code_preview(
    request: PromoCodePreviewRequestSchema,
    promo_service: Annotated[PromoCodeService, Depends(get_promo_code_service)],
) -> List[Dict[str, Any]]:
    return await promo_service.validate_preview(
        promo_code=request.promo_code,
        event_id=request.event_id,
        game_ids=request.game_ids,
        subtotal=request.subtotal,
    )


@promo_codes_router.post(
    "/validate-final",
    response_model=Union[List[Dict[str, Any]], Dict[str, Any]],
    summary="Validate Promo Code At Checkout",
)
async def validate_promo_code_final(
    request: PromoCodeFinalRequestSchema,
    promo_service: Annotated[PromoCodeService, Depends(get_promo_code_service)],
) -> Any:
    return await promo_service.validate_final(
        promo_code=request.promo_code,
        event_id=request.event_id,
        game_ids=request.game_ids,
        amount=request.amount,
    )
