"""Data models for URL shortener."""

from dataclasses import dataclass


@dataclass(frozen=True)
class URLMapping:
    """Represents a short code to target URL mapping."""

    short_code: str
    original_url: str

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "short_code": self.short_code,
            "original_url": self.original_url,
        }
