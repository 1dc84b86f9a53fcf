"""API routes implementation."""

from fastapi import APIRouter, Request, HTTPException, status
from datetime import datetime, timezone

from .schemas import (
    ShortenRequest,
    ShortenResponse,
    LinkResponse,
    HealthResponse,
    ErrorResponse,
)
from shortlink.errors import GatewayError, RetriesExhaustedError, ShortLinkNotFoundError
from shortlink.common.validators import is_valid_url
from shortlink.common.url_builder import build_short_url
from shortlink.common.headers import build_base_url, get_forwarded_path_prefix

router = APIRouter()


def _short_url_for(request: Request, short_id: str) -> str:
    config = request.app.state.config
    base_url = build_base_url(
        headers=request.headers,
        fallback_base_url=config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )
    path_prefix = get_forwarded_path_prefix(request.headers) or config.path_prefix
    return build_short_url(short_id=short_id, base_url=base_url, path_prefix=path_prefix)


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid URL"},
        503: {"model": ErrorResponse, "description": "Datastore unavailable or identifier space saturated"},
    },
    summary="Create short URL",
    description="Create a shortened URL with a random identifier.",
)
async def shorten_url(request: Request, body: ShortenRequest):
    """Create a shortened URL."""
    service = request.app.state.service

    is_valid, error = is_valid_url(body.url)
    if not is_valid:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid URL: {error}",
        )

    try:
        link = await service.shorten(body.url)
    except (GatewayError, RetriesExhaustedError) as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e),
        )

    return ShortenResponse(
        short_id=link.id,
        short_url=_short_url_for(request, link.id),
        long_url=link.long_url,
        created_at=link.created_at,
    )


@router.get(
    "/links/{short_id}",
    response_model=LinkResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Short id not found"},
        503: {"model": ErrorResponse, "description": "Datastore unavailable"},
    },
    summary="Get short link",
    description="Get the stored long URL and creation time for a short identifier.",
)
async def get_link(request: Request, short_id: str):
    """Get a stored short link."""
    service = request.app.state.service

    try:
        link = await service.get_link(short_id)
    except ShortLinkNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except GatewayError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))

    return LinkResponse(short_id=link.id, long_url=link.long_url, created_at=link.created_at)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service is healthy.",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    service = request.app.state.service

    health = await service.health_check()

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        database="healthy" if health["database"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
