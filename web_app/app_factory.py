"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api import api_router
from .web import web_router
from .middleware.logging import LoggingMiddleware
from shortener.errors import InvalidInputError, StoreError

logger = logging.getLogger("url_shortener.web")


async def invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
    """Malformed client input is a 400 with the original's error shape."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid URL", "detail": exc.message},
    )


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    """Store failures that escaped a route."""
    logger.error(f"Store error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def create_app(
    service_instance,
    config,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        service_instance: Service instance (may be None until the lifespan sets it)
        config: Configuration instance

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="URL Shortener",
        description="Short links with expiration, click counting and QR codes",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    # Store instances in app state for access in routes
    app.state.service = service_instance
    app.state.config = config

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(LoggingMiddleware)

    app.add_exception_handler(InvalidInputError, invalid_input_handler)
    app.add_exception_handler(StoreError, store_error_handler)

    # Registered before the catch-all "/{short_code}" redirect
    app.include_router(api_router, prefix="/api", tags=["API"])
    app.include_router(web_router, tags=["Web"])

    return app
