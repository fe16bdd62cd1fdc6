"""Common utilities for URL shortener."""

from .validators import is_valid_url, is_reserved_code, RESERVED_CODES
from .url_builder import build_short_url
from .logging_config import setup_logging, get_logger

__all__ = [
    "is_valid_url",
    "is_reserved_code",
    "RESERVED_CODES",
    "build_short_url",
    "setup_logging",
    "get_logger",
]
