"""Core business logic for URL shortener."""

from .shortcode import ShortCodeGenerator, ALPHABET
from .store import MappingStore, ReadWriteLock
from .models import URLMapping
from .service import URLShortenerService
from .exceptions import (
    ShortenerError,
    InvalidURLError,
    GenerationError,
    CodeSpaceExhaustedError,
)

__all__ = [
    "ShortCodeGenerator",
    "ALPHABET",
    "MappingStore",
    "ReadWriteLock",
    "URLMapping",
    "URLShortenerService",
    "ShortenerError",
    "InvalidURLError",
    "GenerationError",
    "CodeSpaceExhaustedError",
]
