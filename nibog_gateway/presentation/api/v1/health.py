"""Health check endpoint for service monitoring."""

from fastapi import APIRouter
from pydantic import BaseModel

from nibog_gateway import __version__
from nibog_gateway.core.config import settings
from nibog_gateway.core.dependencies import get_merchant_credentials

health_router = APIRouter()


class HealthResponse(BaseModel):
    status: str = "healthy"
    version: str
    phonepe_environment: str
    merchant_configured: bool


@health_router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Returns the health status of the service and whether PhonePe credentials are set.",
)
async def health_check() -> HealthResponse:
    configured = not get_merchant_credentials().missing_fields()
    return HealthResponse(
        status="healthy" if configured else "degraded",
        version=__version__,
        phonepe_environment="production" if settings.phonepe_is_production else "sandbox",
        merchant_configured=configured,
    )
