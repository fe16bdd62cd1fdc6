"""Redirect routes implementation."""

from fastapi import APIRouter, Request, HTTPException, status
from fastapi.responses import RedirectResponse

from ..api.schemas import ErrorResponse

router = APIRouter()


@router.get(
    "/{short_code}",
    response_class=RedirectResponse,
    status_code=status.HTTP_302_FOUND,
    responses={
        404: {"model": ErrorResponse, "description": "Short code not found"},
    },
    summary="Resolve short URL",
)
def redirect_to_url(request: Request, short_code: str):
    """Redirect to the original URL."""
    service = request.app.state.service

    original_url = service.get_original_url(short_code)

    if not original_url:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Short URL not found",
        )

    return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)
