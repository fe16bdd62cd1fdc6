"""Exceptions raised by the URL shortener core."""


class ShortenerError(Exception):
    """Base class for URL shortener errors."""


class InvalidURLError(ShortenerError, ValueError):
    """The submitted URL is not a well-formed absolute http(s) URL."""


class GenerationError(ShortenerError):
    """A short code could not be produced.

    Raised when the secure random source fails. Fatal to the request.
    """


class CodeSpaceExhaustedError(GenerationError):
    """Every allocation attempt collided with an existing or reserved code."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"Unable to generate unique short code after {attempts} attempts")
