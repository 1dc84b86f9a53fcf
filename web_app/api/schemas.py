"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ShortenRequest(BaseModel):
    """Request to shorten a URL."""

    url: str = Field(..., description="The URL to shorten", min_length=1, max_length=2048)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"url": "https://example.com/very/long/path/to/resource"},
            ]
        }
    }


class ShortenResponse(BaseModel):
    """Response after shortening a URL."""

    short_id: str = Field(..., description="The generated short identifier")
    short_url: str = Field(..., description="The complete short URL")
    long_url: str = Field(..., description="The original long URL")
    created_at: datetime = Field(..., description="Creation timestamp (UTC)")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "short_id": "aB3x",
                    "short_url": "https://short.link/aB3x",
                    "long_url": "https://example.com/very/long/path",
                    "created_at": "2024-01-01T12:00:00Z"
                }
            ]
        }
    }


class LinkResponse(BaseModel):
    """Stored short link."""

    short_id: str
    long_url: str
    created_at: datetime


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    database: str = Field(..., description="Database status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    detail: Optional[str] = Field(None, description="Detailed error information")
