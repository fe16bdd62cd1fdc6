"""API routes implementation."""

from datetime import datetime, timezone

from fastapi import APIRouter, Request

from .schemas import (
    ShortenRequest,
    ShortenResponse,
    HealthResponse,
    ErrorResponse,
)
from shortener.common.url_builder import build_short_url

router = APIRouter()


# Plain ``def`` endpoints run in FastAPI's thread pool, one request per worker thread.
@router.post(
    "/shorten",
    response_model=ShortenResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request body or URL"},
        500: {"model": ErrorResponse, "description": "Could not generate short code"},
    },
    summary="Create short URL",
    description="Create a shortened URL with a random short code.",
)
def shorten_url(request: Request, body: ShortenRequest):
    """Create a shortened URL.

    InvalidURLError and GenerationError propagate to the handlers
    registered in the app factory.
    """
    service = request.app.state.service
    config = request.app.state.config

    mapping = service.create_short_url(body.url)

    short_url = build_short_url(
        short_code=mapping.short_code,
        base_url=config.base_url,
        path_prefix=config.path_prefix,
    )

    return ShortenResponse(
        short_url=short_url,
        short_code=mapping.short_code,
        original_url=mapping.original_url,
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service is healthy.",
)
def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    service = request.app.state.service

    health = service.health_check()

    return HealthResponse(
        status="healthy",
        mappings=health["mappings"],
        timestamp=datetime.now(timezone.utc),
    )
