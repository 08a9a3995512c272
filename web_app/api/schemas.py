"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ShortenRequest(BaseModel):
    """Request to shorten a URL.

    ``url`` is optional here so that a missing URL is reported as
    ``400 Invalid URL`` by the route, like any other malformed URL.
    """

    url: Optional[str] = Field(None, description="The URL to shorten")
    expires_at: Optional[datetime] = Field(
        None,
        description="Optional expiration instant (ISO 8601); naive values are taken as UTC",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "url": "https://example.com/very/long/path/to/resource",
                    "expires_at": None
                },
                {
                    "url": "https://github.com/user/repo",
                    "expires_at": "2030-01-01T00:00:00Z"
                }
            ]
        }
    }


class ShortenResponse(BaseModel):
    """Response after shortening a URL."""

    short_url: str = Field(..., description="The complete short URL")
    short_code: str = Field(..., description="The short code")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "short_url": "https://short.link/aB3dE9x",
                    "short_code": "aB3dE9x"
                }
            ]
        }
    }


class StatsResponse(BaseModel):
    """Statistics for one short code."""

    short_code: str
    original_url: str
    click_count: int
    created_at: datetime
    expires_at: Optional[datetime] = None


class LinkSummary(BaseModel):
    """Entry of the debug listing."""

    short_code: str
    original_url: str


class StatisticsResponse(BaseModel):
    """Service-wide statistics."""

    total_urls: int
    total_clicks: int
    database: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    database: str = Field(..., description="Database status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error message")
    detail: Optional[str] = Field(None, description="Detailed error information")
