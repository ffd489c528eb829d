from fastapi import APIRouter

from .payments import payments_router
from .slots import slots_router
from .events import events_router
from .promo_codes import promo_codes_router
from .health import health_router

router = APIRouter()

router.include_router(health_router, tags=["Health"])
router.include_router(payments_router, tags=["Payments"])
router.include_router(slots_router, tags=["Event Game Slots"])
router.include_router(events_router, tags=["Events"])
router.include_router(promo_codes_router, tags=["Promo Codes"])
