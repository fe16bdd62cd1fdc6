"""Validation utilities for URL shortener."""

from urllib.parse import urlparse
from typing import Tuple

MAX_URL_LENGTH = 2048

# Path segments served by the web app itself; never handed out as short codes
RESERVED_CODES = frozenset({"health", "shorten", "docs", "redoc", "openapi"})


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a URL.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"

    if len(url) > MAX_URL_LENGTH:
        return False, f"URL is too long (max {MAX_URL_LENGTH} characters)"

    if url != url.strip() or any(c.isspace() for c in url):
        return False, "URL must not contain whitespace"

    try:
        result = urlparse(url)
        # Accessing port validates it (raises ValueError when out of range)
        result.port
    except ValueError as e:
        return False, f"Invalid URL format: {e}"

    # Check if scheme is http or https
    if result.scheme not in ("http", "https"):
        return False, "URL must use http or https protocol"

    # Check if netloc (domain) exists
    if not result.hostname:
        return False, "URL must have a valid domain"

    return True, ""


def is_reserved_code(short_code: str) -> bool:
    """Check whether a code collides with a route served by the app.

    Args:
        short_code: The short code to check

    Returns:
        True if the code is reserved
    """
    return short_code.lower() in RESERVED_CODES
