"""Web interface routes implementation."""

import os
from fastapi import APIRouter, Request, HTTPException, status
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates

from shortener.common.validators import is_valid_short_code
from shortener.database.models import Resolved, Expired

router = APIRouter()

# Setup Jinja2 templates
template_dir = os.path.join(os.path.dirname(__file__), "..", "templates")
templates = Jinja2Templates(directory=template_dir)


def _not_found_page(request: Request, short_code: str):
    return templates.TemplateResponse(
        request,
        "not_found.html",
        {"short_code": short_code},
        status_code=status.HTTP_404_NOT_FOUND,
    )


@router.get("/health", include_in_schema=False)
async def health_check_web(request: Request):
    """Health check endpoint (simple version for load balancers)."""
    service = request.app.state.service

    health = await service.health_check()

    if health["overall"]:
        return {"status": "healthy"}
    else:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service unhealthy",
        )


@router.get("/{short_code}", include_in_schema=False)
async def redirect_to_url(request: Request, short_code: str):
    """Redirect to the original URL, counting the click."""
    service = request.app.state.service

    is_valid, _ = is_valid_short_code(short_code)
    if not is_valid:
        return _not_found_page(request, short_code)

    result = await service.resolve(short_code)

    if isinstance(result, Resolved):
        # 302 keeps browsers coming back so every visit is counted
        return RedirectResponse(url=result.original_url, status_code=status.HTTP_302_FOUND)

    if isinstance(result, Expired):
        return templates.TemplateResponse(
            request,
            "expired.html",
            {"short_code": short_code, "expires_at": result.expires_at},
            status_code=status.HTTP_410_GONE,
        )

    return _not_found_page(request, short_code)
