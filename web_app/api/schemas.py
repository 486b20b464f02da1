"""Pydantic schemas for API requests and responses."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class ShortenRequest(BaseModel):
    """Request to shorten a URL."""

    url: str = Field(..., description="The URL to shorten", min_length=1)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"url": "https://example.com/a/very/long/path"},
            ]
        }
    }


class ShortenResponse(BaseModel):
    """Response after shortening a URL."""

    id: str = Field(..., description="The generated short ID")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"id": "aZ3kP9qx"},
            ]
        }
    }


class VisitEventResponse(BaseModel):
    """One recorded redirect."""

    timestamp: int = Field(..., description="Visit time in milliseconds since the Unix epoch")


class AnalyticsResponse(BaseModel):
    """Visit analytics for a short ID, oldest visit first."""

    total_clicks: int = Field(..., alias="totalClicks")
    analytics: List[VisitEventResponse]

    model_config = {"populate_by_name": True}


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    storage: str = Field(..., description="Storage status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error message")
    detail: Optional[str] = Field(None, description="Detailed error information")
