"""
Health Routes
=============

Liveness, smoke-test and configuration diagnostics.

Endpoints:
- GET / - Service liveness
- GET /test - Smoke test with server time
- GET /env-check - Which required variables are set, without revealing secrets
"""

from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends

from collection_sync.config import Settings, get_settings
from collection_sync.schemas.responses import EnvCheckResponse, StatusResponse
from collection_sync.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()

SET_HIDDEN = "Set (hidden)"
NOT_SET = "Not set"


@router.get("/", response_model=StatusResponse, summary="Service liveness")
async def root() -> StatusResponse:
    """Return a static OK status."""
    return StatusResponse(message="Collection management service is running")


@router.get("/test", response_model=StatusResponse, summary="Smoke test")
async def test_endpoint() -> StatusResponse:
    """Return an OK status with the current server time."""
    logger.debug("Test endpoint hit")
    return StatusResponse(
        message="Test endpoint working",
        time=datetime.now(timezone.utc),
    )


@router.get(
    "/env-check",
    response_model=EnvCheckResponse,
    summary="Environment check",
    description=(
        "Report which required environment variables are missing. "
        "Secrets are shown only as set or not set."
    ),
)
async def env_check(
    settings: Annotated[Settings, Depends(get_settings)],
) -> EnvCheckResponse:
    """Check required configuration without exposing secret values."""
    required: dict[str, str | None] = {
        "SHOPIFY_STORE": settings.shopify_store,
        "SHOPIFY_TOKEN": SET_HIDDEN if settings.shopify_token else NOT_SET,
        "SHOPIFY_WEBHOOK_SECRET": SET_HIDDEN if settings.shopify_webhook_secret else NOT_SET,
        "PORT": (
            str(settings.port)
            if "port" in settings.model_fields_set
            else f"{settings.port} (default)"
        ),
    }

    missing = [name for name, value in required.items() if not value or value == NOT_SET]

    if missing:
        logger.warning("Missing environment variables", missing=missing)
        status, message = "error", f"Missing environment variables: {', '.join(missing)}"
    else:
        status, message = "ok", "All required environment variables are set"

    return EnvCheckResponse(
        status=status,
        message=message,
        environment={**required, "ENVIRONMENT": settings.environment},
    )
