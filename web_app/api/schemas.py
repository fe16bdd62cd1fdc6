"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from datetime import datetime


class ShortenRequest(BaseModel):
    """Request to shorten a URL."""

    url: str = Field(..., description="The absolute http(s) URL to shorten")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"url": "https://example.com/very/long/path/to/resource"},
            ]
        }
    }


class ShortenResponse(BaseModel):
    """Response after shortening a URL."""

    short_url: str = Field(..., description="The complete short URL")
    short_code: str = Field(..., description="The generated short code")
    original_url: str = Field(..., description="The original long URL")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "short_url": "http://localhost:8080/aB3xZ9",
                    "short_code": "aB3xZ9",
                    "original_url": "https://example.com/very/long/path",
                }
            ]
        }
    }


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    mappings: int = Field(..., description="Number of stored mappings")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error message")
