"""
FastAPI Application Entry Point
===============================

Main FastAPI application with middleware, error handlers
and lifecycle management.
"""

import time
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator
from uuid import uuid4

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from collection_sync import __version__
from collection_sync.config.settings import get_settings
from collection_sync.taxonomy import TaxonomyProvider
from collection_sync.utils.errors import (
    CollectionSyncError,
    TaxonomyLoadError,
    WebhookVerificationError,
)
from collection_sync.utils.logger import (
    bind_request_context,
    configure_logging,
    get_logger,
)

configure_logging()
logger = get_logger(__name__)

ERROR_STATUS_CODES: dict[type[CollectionSyncError], int] = {
    WebhookVerificationError: status.HTTP_401_UNAUTHORIZED,
    TaxonomyLoadError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Creates the taxonomy provider (loaded lazily on first classification)
    and reports which required settings are missing.
    """
    settings = get_settings()
    logger.info(
        "collection-sync service starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
        shopify_store="set" if settings.shopify_store else "not set",
        shopify_token="set" if settings.shopify_token else "not set",
        webhook_secret="set" if settings.shopify_webhook_secret else "not set",
    )

    app.state.taxonomy_provider = TaxonomyProvider(settings.collections_file)

    yield

    logger.info("collection-sync service shutting down")


def create_app() -> FastAPI:
    """
    FastAPI application factory.

    Returns:
        Configured FastAPI application instance
    """
    settings = get_settings()

    app = FastAPI(
        title="Collection Sync API",
        description=(
            "Assigns Shopify products to catalog collections by parsing their "
            "titles. Receives product webhooks and a manual batch trigger."
        ),
        version=__version__,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
        lifespan=lifespan,
    )

    # -------------------------------------------------------------------------
    # Request Logging Middleware
    # -------------------------------------------------------------------------
    @app.middleware("http")
    async def log_requests(request: Request, call_next: Any) -> Any:
        """
        Log each request with timing, binding a request ID to every log
        line emitted while it is handled.

        Adds X-Request-ID and X-Process-Time response headers.
        """
        request_id = request.headers.get("X-Request-ID") or str(uuid4())
        bind_request_context(request_id=request_id, path=request.url.path)
        start_time = time.perf_counter()

        logger.info(
            "Request received",
            method=request.method,
            client_ip=request.client.host if request.client else None,
            webhook_id=request.headers.get("X-Shopify-Webhook-Id"),
        )

        response = await call_next(request)

        process_time = time.perf_counter() - start_time
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{process_time:.4f}"

        logger.info(
            "Request completed",
            status_code=response.status_code,
            duration_ms=round(process_time * 1000, 2),
        )

        return response

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(CollectionSyncError)
    async def collection_sync_error_handler(
        request: Request, exc: CollectionSyncError
    ) -> JSONResponse:
        """Handle application-specific errors."""
        status_code = next(
            (code for cls, code in ERROR_STATUS_CODES.items() if isinstance(exc, cls)),
            status.HTTP_400_BAD_REQUEST,
        )
        logger.error(
            "Application error",
            error_type=type(exc).__name__,
            message=exc.message,
            details=exc.details,
            path=str(request.url.path),
        )
        return JSONResponse(
            status_code=status_code,
            content={
                "error": type(exc).__name__,
                "message": exc.message,
                "details": exc.details,
            },
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected errors."""
        logger.exception(
            "Unexpected error",
            error_type=type(exc).__name__,
            message=str(exc),
            path=str(request.url.path),
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "InternalServerError",
                "message": "An unexpected error occurred",
            },
        )

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    from collection_sync.api.routes import health_router, process_router, webhooks_router

    app.include_router(health_router, tags=["Health"])
    app.include_router(process_router, prefix="/process", tags=["Processing"])
    app.include_router(webhooks_router, prefix="/webhook", tags=["Webhooks"])

    return app


# Create application instance
app = create_app()
