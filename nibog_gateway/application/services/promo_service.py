"""Promo code service - validates codes through the webhook backend."""

from typing import Any, Dict, List, Sequence

import structlog

from nibog_gateway.core.metrics import record_promo_validation
from nibog_gateway.domain.exceptions import (
    BackendUnavailableException,
    InvalidPromoCodeRequestException,
    PromoCodeRejectedException,
)
from nibog_gateway.domain.interfaces import BookingBackendClient

logger = structlog.get_logger(__name__)

PREVIEW_RESOURCE = "promocode/preview-validation"
FINAL_RESOURCE = "promocode/validate"
INVALID_PROMO_MESSAGE = "Invalid or inapplicable promo code."


def invalid_preview(subtotal: float) -> Dict[str, Any]:
    """Preview result used whenever the backend cannot answer."""
    return {
        "is_valid": False,
        "discount_amount": 0,
        "final_amount": subtotal,
        "message": INVALID_PROMO_MESSAGE,
        "promo_details": {},
    }


class PromoCodeService:
    """
    Promo code checks for the booking flow.

    The preview check runs while the user is still choosing games and
    degrades to "invalid" on backend failure; the final check runs at
    checkout and fails loudly.
    """

    def __init__(self, backend_client: BookingBackendClient):
        self._backend = backend_client

    async def validate_preview(
        self,
        promo_code: str | None,
        event_id: Any,
        game_ids: Sequence[Any] | None,
        subtotal: Any,
    ) -> List[Dict[str, Any]]:
        """
        Preview the discount for a code; always answers with a list.

        Raises:
            InvalidPromoCodeRequestException: If a required field is missing
        """
        code, event, games, amount = self._validate(
            promo_code, event_id, game_ids, subtotal,
            "promo_code, event_id, game_ids and subtotal are required",
        )

        try:
            result = await self._backend.post(
                PREVIEW_RESOURCE,
                {
                    "promocode": code,
                    "eventId": event,
                    "gameIds": games,
                    "subtotal": amount,
                },
            )
        except BackendUnavailableException as e:
            record_promo_validation("preview", "error")
            logger.warning("promo_preview_failed", promo_code=code, error=e.message)
            return [invalid_preview(amount)]

        results = result if isinstance(result, list) else [result]
        valid = bool(results) and isinstance(results[0], dict) and bool(results[0].get("is_valid"))
        record_promo_validation("preview", "valid" if valid else "invalid")
        logger.info("promo_preview_validated", promo_code=code, event_id=event, valid=valid)
        return results

    async def validate_final(
        self,
        promo_code: str | None,
        event_id: Any,
        game_ids: Sequence[Any] | None,
        amount: Any,
    ) -> Any:
        """
        Validate a code at checkout and return the backend's answer.

        Raises:
            InvalidPromoCodeRequestException: If a required field is missing
            PromoCodeRejectedException: If the backend fails or refuses
        """
        code, event, games, total = self._validate(
            promo_code, event_id, game_ids, amount,
            "promo_code, event_id, game_ids and amount are required",
        )

        try:
            result = await self._backend.post(
                FINAL_RESOURCE,
                {
                    "promo_code": code,
                    "event_id": event,
                    "game_ids": games,
                    "total_amount": total,
                },
            )
        except BackendUnavailableException as e:
            record_promo_validation("final", "error")
            logger.warning("promo_final_validation_failed", promo_code=code, error=e.message)
            raise PromoCodeRejectedException() from e

        record_promo_validation("final", "valid")
        logger.info("promo_final_validated", promo_code=code, event_id=event)
        return result

    @staticmethod
    def _validate(
        promo_code: str | None,
        event_id: Any,
        game_ids: Sequence[Any] | None,
        amount: Any,
        message: str,
    ) -> tuple[str, int, List[int], float]:
        code = (promo_code or "").strip()
        if not code or not event_id or not game_ids or not amount:
            raise InvalidPromoCodeRequestException(message)
        if isinstance(game_ids, (str, bytes)) or not isinstance(game_ids, Sequence):
            raise InvalidPromoCodeRequestException("game_ids must be a list")

        try:
            event = int(str(event_id))
            games = [int(str(game_id)) for game_id in game_ids]
            total = float(str(amount))
        except ValueError as e:
            raise InvalidPromoCodeRequestException(
                "event_id and game_ids must be integers and the amount a number"
            ) from e

        if total <= 0:
            raise InvalidPromoCodeRequestException("amount must be greater than 0")
        return code, event, games, total
