"""Short code generation utilities."""

import secrets
import string
from typing import Optional

from .exceptions import GenerationError

# Base62 characters (alphanumeric, case-sensitive)
ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits


class ShortCodeGenerator:
    """Generate random short codes from a cryptographically secure source."""

    BASE62_CHARS = ALPHABET

    def __init__(self, default_length: int = 6):
        """Initialize short code generator.

        Args:
            default_length: Default length for generated codes
        """
        self._check_length(default_length)
        self.default_length = default_length

    def generate(self, length: Optional[int] = None) -> str:
        """Generate a random short code.

        Every character is drawn independently and uniformly from the
        62-character alphabet using ``secrets.randbelow``.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Random short code of exactly ``length`` characters

        Raises:
            ValueError: If length is not a positive integer
            GenerationError: If the random source fails
        """
        if length is None:
            length = self.default_length
        self._check_length(length)

        base = len(self.BASE62_CHARS)
        try:
            return ''.join(self.BASE62_CHARS[secrets.randbelow(base)] for _ in range(length))
        except Exception as e:
            raise GenerationError(f"Random source failed: {e}") from e

    @staticmethod
    def _check_length(length: int) -> None:
        if isinstance(length, bool) or not isinstance(length, int):
            raise ValueError(f"Code length must be an integer (given type: {type(length).__name__})")
        if length < 1:
            raise ValueError(f"Code length must be at least 1 (given value: {length})")

    @staticmethod
    def is_valid_format(code: str) -> bool:
        """Check if code has valid format (non-empty, alphanumeric).

        Args:
            code: Code to validate

        Returns:
            True if valid format
        """
        return bool(code) and all(c in ALPHABET for c in code)
