"""API routes implementation."""

from fastapi import APIRouter, Query, Request, HTTPException, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, Response
from datetime import datetime, timezone
from typing import List

from .schemas import (
    ShortenRequest,
    ShortenResponse,
    StatsResponse,
    LinkSummary,
    StatisticsResponse,
    HealthResponse,
    ErrorResponse,
)
from shortener.common.validators import is_valid_short_code, is_valid_url, normalize_url
from shortener.database.models import NotFound
from shortener.errors import InvalidInputError, StoreError
from shortener.qr import generate_qr_png

router = APIRouter()


def short_url_for(request: Request, short_code: str) -> str:
    """Build the public short link for ``short_code`` as seen by this request's client.

    The link is ``{base}/{prefix}/{code}``. ``base`` comes from
    X-Forwarded-Proto + X-Forwarded-Host when a proxy sets both, otherwise
    from the request's own scheme and Host, otherwise from ``BASE_URL``.
    ``prefix`` is X-Forwarded-Prefix (a path the proxy strips) or
    ``PATH_PREFIX``.
    """
    config = request.app.state.config
    headers = request.headers

    proto = headers.get("x-forwarded-proto")
    host = headers.get("x-forwarded-host")
    if not (proto and host):
        proto, host = request.url.scheme, headers.get("host")

    base_url = f"{proto}://{host}" if host else config.base_url.rstrip("/")

    prefix = (headers.get("x-forwarded-prefix") or "").strip().strip("/")
    prefix = prefix or config.path_prefix.strip("/")

    if prefix:
        return f"{base_url}/{prefix}/{short_code}"
    return f"{base_url}/{short_code}"


def _not_found() -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": "Not found"})


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid URL"},
        500: {"model": ErrorResponse, "description": "Failed to shorten"},
    },
    summary="Create short URL",
    description="Shorten a URL. Submitting a URL that already has a code returns that code.",
)
async def shorten_url(request: Request, body: ShortenRequest):
    """Create a shortened URL."""
    service = request.app.state.service

    url = normalize_url(body.url)
    is_valid, error = is_valid_url(url)
    if not is_valid:
        raise InvalidInputError(error)

    try:
        short_code = await service.create_short_url(url, body.expires_at)
    except StoreError as e:
        service.logger.error(f"Error creating short URL for {url}: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to shorten"},
        )

    return ShortenResponse(
        short_url=short_url_for(request, short_code),
        short_code=short_code,
    )


@router.get(
    "/stats",
    response_model=StatisticsResponse,
    summary="Get statistics",
    description="Get service-wide statistics.",
)
async def get_statistics(request: Request):
    """Get service statistics."""
    service = request.app.state.service

    stats = await service.get_statistics()

    return StatisticsResponse(**stats)


@router.get(
    "/stats/{short_code}",
    response_model=StatsResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Short code not found"},
    },
    summary="Get short code statistics",
    description="Click count and metadata for a short code, including expired ones.",
)
async def get_url_stats(request: Request, short_code: str):
    """Get statistics for a short code."""
    service = request.app.state.service

    result = await service.get_stats(short_code)

    if isinstance(result, NotFound):
        return _not_found()

    return StatsResponse(
        short_code=result.short_code,
        original_url=result.original_url,
        click_count=result.click_count,
        created_at=result.created_at,
        expires_at=result.expires_at,
    )


@router.get(
    "/qr/{short_code}",
    response_class=Response,
    responses={
        200: {"content": {"image/png": {}}, "description": "QR code for the short link"},
        404: {"model": ErrorResponse, "description": "Short code not found"},
    },
    summary="QR code",
    description="PNG QR code encoding the short link. Expiration is not checked.",
)
async def get_qr_code(request: Request, short_code: str):
    """Render the QR code of a short link."""
    service = request.app.state.service
    config = request.app.state.config

    is_valid, _ = is_valid_short_code(short_code)
    if not is_valid or not await service.url_exists(short_code):
        return _not_found()

    png = await run_in_threadpool(
        generate_qr_png,
        short_url_for(request, short_code),
        box_size=config.qr_box_size,
        border=config.qr_border,
    )
    return Response(content=png, media_type="image/png")


@router.get(
    "/debug/urls",
    response_model=List[LinkSummary],
    summary="List short codes",
    description="Debug listing of short codes and their URLs. Enabled by ENABLE_DEBUG_ROUTES.",
)
async def list_urls(request: Request, limit: int = Query(1000, ge=1, le=10000)):
    """List stored short codes."""
    if not request.app.state.config.enable_debug_routes:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")

    service = request.app.state.service

    return await service.list_urls(limit)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service is healthy.",
)
async def health_check(request: Request):
    """Health check endpoint for monitoring."""
    service = request.app.state.service

    health = await service.health_check()

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        database="healthy" if health["database"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
