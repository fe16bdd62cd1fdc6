"""Business logic service for URL shortener."""

import logging
from typing import Optional, Dict, Any

from .shortcode import ShortCodeGenerator
from .store import MappingStore
from .models import URLMapping
from .exceptions import InvalidURLError, CodeSpaceExhaustedError
from .common.validators import is_valid_url, is_reserved_code
from .common.logging_config import get_logger


class URLShortenerService:
    """Service layer for URL shortening business logic."""

    def __init__(
        self,
        store: Optional[MappingStore] = None,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        code_length: int = 6,
        max_collision_retries: int = 10,
    ):
        """Initialize URL shortener service.

        Args:
            store: Mapping store (a fresh empty store if not given)
            short_code_generator: Optional short code generator
            logger: Optional logger
            code_length: Length of generated short codes
            max_collision_retries: Maximum allocation attempts per request
        """
        if max_collision_retries < 1:
            raise ValueError("max_collision_retries must be at least 1")

        self.store = store if store is not None else MappingStore()
        self.generator = short_code_generator or ShortCodeGenerator(default_length=code_length)
        self.logger = logger or get_logger("service")
        self.code_length = code_length
        self.max_collision_retries = max_collision_retries

    def create_short_url(self, original_url: str) -> URLMapping:
        """Create a new short URL.

        Args:
            original_url: The original long URL

        Returns:
            The stored mapping

        Raises:
            InvalidURLError: If the URL fails validation
            GenerationError: If the random source fails
            CodeSpaceExhaustedError: If no free code was found within the retry cap
        """
        is_valid, error = is_valid_url(original_url)
        if not is_valid:
            raise InvalidURLError(f"Invalid URL: {error}")

        short_code = self._generate_unique_short_code()
        self.store.put(short_code, original_url)

        self.logger.info(f"Created short URL: {short_code} -> {original_url}")
        return URLMapping(short_code=short_code, original_url=original_url)

    def get_original_url(self, short_code: str) -> Optional[str]:
        """Get the original URL for a short code.

        Args:
            short_code: The short code to lookup

        Returns:
            Original URL or None if not found
        """
        if not ShortCodeGenerator.is_valid_format(short_code):
            self.logger.info(f"Rejected malformed short code: {short_code!r}")
            return None

        original_url, found = self.store.get(short_code)
        if not found:
            self.logger.info(f"Short code not found: {short_code}")
            return None

        self.logger.debug(f"Retrieved URL: {short_code} -> {original_url}")
        return original_url

    def url_exists(self, short_code: str) -> bool:
        """Check if a short code exists.

        Args:
            short_code: The short code to check

        Returns:
            True if exists
        """
        return self.store.exists(short_code)

    def health_check(self) -> Dict[str, Any]:
        """Perform health check.

        Returns:
            Dictionary with the mapping count
        """
        return {"mappings": len(self.store)}

    def _generate_unique_short_code(self) -> str:
        """Generate a short code not present in the store and not reserved.

        Returns:
            Unique short code

        Raises:
            GenerationError: If the random source fails (not retried)
            CodeSpaceExhaustedError: If every attempt collided
        """
        for attempt in range(1, self.max_collision_retries + 1):
            code = self.generator.generate(self.code_length)

            if is_reserved_code(code):
                self.logger.debug(f"Skipping reserved code: {code}")
                continue

            if not self.store.exists(code):
                if attempt > 1:
                    self.logger.debug(f"Generated code after {attempt} attempts: {code}")
                return code

            self.logger.debug(f"Collision on attempt {attempt}: {code}")

        self.logger.error(
            f"Unable to allocate short code after {self.max_collision_retries} attempts "
            f"(store size: {len(self.store)})"
        )
        raise CodeSpaceExhaustedError(self.max_collision_retries)
