"""Web interface routes implementation."""

import os
from fastapi import APIRouter, Request, Form, HTTPException, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from shortlink.errors import GatewayError, RetriesExhaustedError, ShortLinkNotFoundError
from shortlink.shortcode import ShortCodeGenerator
from shortlink.common.validators import is_valid_url
from shortlink.common.url_builder import build_short_url
from shortlink.common.headers import (
    build_base_url,
    get_client_timezone,
    get_forwarded_path_prefix,
)
from shortlink.common.timefmt import format_created_at

router = APIRouter()

template_dir = os.path.join(os.path.dirname(__file__), "..", "templates")
templates = Jinja2Templates(directory=template_dir)


def _path_prefix(request: Request) -> str:
    """Path prefix from X-Forwarded-Prefix (proxy) or config. Normalized: leading slash, no trailing."""
    prefix = get_forwarded_path_prefix(request.headers)
    if prefix:
        return prefix
    p = (request.app.state.config.path_prefix or "").strip().strip("/")
    return "/" + p if p else ""


def _error_page(request: Request, title: str, reason: str, status_code: int) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "404.html",
        {"title": title, "reason": reason, "prefix": _path_prefix(request)},
        status_code=status_code,
    )


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def homepage(request: Request):
    """Serve the page with the shortening form."""
    return templates.TemplateResponse(
        request,
        "app.html",
        {"title": "Shortlink - URL Shortener", "prefix": _path_prefix(request)},
    )


@router.post("/", response_class=HTMLResponse, include_in_schema=False)
async def create_short_url_web(request: Request, url: str = Form("")):
    """Handle form submission; answers with the result fragment."""
    service = request.app.state.service
    config = request.app.state.config
    context = {"short_url": None, "created": "", "error": None}

    is_valid, _ = is_valid_url(url)
    if not is_valid:
        context["error"] = "This is not a valid URL"
        return templates.TemplateResponse(request, "partials/result.html", context)

    try:
        link = await service.shorten(url)
    except (GatewayError, RetriesExhaustedError) as e:
        service.logger.error(f"Shortening failed: {e}")
        context["error"] = f"Something went wrong: {e}"
        return templates.TemplateResponse(request, "partials/result.html", context)

    base_url = build_base_url(
        headers=request.headers,
        fallback_base_url=config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )
    context["short_url"] = build_short_url(
        short_id=link.id,
        base_url=base_url,
        path_prefix=_path_prefix(request),
    )
    context["created"] = format_created_at(link.created_at, get_client_timezone(request.headers))
    return templates.TemplateResponse(request, "partials/result.html", context)


@router.get("/404", response_class=HTMLResponse, include_in_schema=False)
async def not_found_page(request: Request):
    """Generic not-found page."""
    return _error_page(request, "Error 404", "The page you requested does not exist", status.HTTP_404_NOT_FOUND)


@router.get("/health", include_in_schema=False)
async def health_check_web(request: Request):
    """Health check endpoint (simple version for load balancers)."""
    service = request.app.state.service

    health = await service.health_check()

    if health["overall"]:
        return {"status": "healthy"}
    raise HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Service unhealthy",
    )


@router.get("/{short_id}", include_in_schema=False)
async def redirect_to_url(request: Request, short_id: str):
    """Redirect to the original URL."""
    service = request.app.state.service
    config = request.app.state.config

    if not ShortCodeGenerator.is_valid_format(short_id):
        return _error_page(request, "Error 404", f"Short link '{short_id}' not found", status.HTTP_404_NOT_FOUND)

    try:
        long_url = await service.resolve(short_id)
    except ShortLinkNotFoundError as e:
        return _error_page(request, "Error 404", str(e), status.HTTP_404_NOT_FOUND)
    except GatewayError as e:
        service.logger.error(f"Redirect for {short_id} failed: {e}")
        return _error_page(request, "Error 503", "Service temporarily unavailable", status.HTTP_503_SERVICE_UNAVAILABLE)

    if long_url.isascii():
        # Location carries the stored string byte for byte
        return Response(status_code=config.redirect_status_code, headers={"location": long_url})
    # Non-ASCII cannot go into a header verbatim; RedirectResponse percent-encodes it
    return RedirectResponse(url=long_url, status_code=config.redirect_status_code)
