"""
NIBOG Gateway - Main Application Entry Point

Payment and booking backend for the NIBOG children's event platform:
signs PhonePe payment requests, verifies gateway callbacks and serves
cached read models from the webhook backend.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from nibog_gateway import __version__
from nibog_gateway.core.config import settings
from nibog_gateway.core.dependencies import get_merchant_credentials
from nibog_gateway.core.logging import setup_logging
from nibog_gateway.core.metrics import get_metrics, get_metrics_content_type
from nibog_gateway.presentation.api import api_router
from nibog_gateway.presentation.middleware import (
    LoggingMiddleware,
    RequestContextMiddleware,
    error_handler_middleware,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Sets up logging and reports missing PhonePe credentials at startup.
    """
    setup_logging()

    logger = structlog.get_logger(__name__)
    missing = get_merchant_credentials().missing_fields()
    if missing:
        logger.warning("merchant_credentials_missing", missing=missing)

    logger.info(
        "application_started",
        version=__version__,
        phonepe_environment=settings.phonepe_environment,
    )

    yield

    logger.info("application_stopped")


app = FastAPI(
    title="NIBOG Gateway",
    description="PhonePe payments and booking backend",
    version=__version__,
    debug=settings.debug,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestContextMiddleware)

error_handler_middleware(app)

app.include_router(api_router)


async def metrics() -> Response:
    """Prometheus metrics endpoint."""
    return Response(
        content=get_metrics(),
        media_type=get_metrics_content_type(),
    )


if settings.metrics_enabled:
    app.add_api_route("/metrics", metrics, methods=["GET"], include_in_schema=False)


@app.get("/", include_in_schema=False)
async def root():
    """Redirect to API documentation."""

    return RedirectResponse(url="/docs")
