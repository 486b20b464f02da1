"""API routes implementation."""

from datetime import datetime, timezone

from fastapi import APIRouter, Request, status

from .schemas import (
    AnalyticsResponse,
    ErrorResponse,
    HealthResponse,
    ShortenRequest,
    ShortenResponse,
    VisitEventResponse,
)

router = APIRouter()
health_router = APIRouter()


@router.post(
    "",
    response_model=ShortenResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Missing or invalid url"},
        503: {"model": ErrorResponse, "description": "No short ID could be allocated or storage is down"},
    },
    summary="Create short URL",
    description="Create a short ID that redirects to the given URL.",
)
async def create_short_url(request: Request, body: ShortenRequest):
    """Create a shortened URL."""
    service = request.app.state.service

    short_id = await service.create(body.url)

    return ShortenResponse(id=short_id)


@router.get(
    "/analytics/{short_id}",
    response_model=AnalyticsResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Short ID not found"},
    },
    summary="Get analytics",
    description="Get the total click count and the chronological visit history of a short ID.",
)
async def get_analytics(request: Request, short_id: str):
    """Get visit analytics for a short ID."""
    service = request.app.state.service

    result = await service.get_analytics(short_id)

    return AnalyticsResponse(
        total_clicks=result.total_clicks,
        analytics=[VisitEventResponse(timestamp=event.timestamp_ms) for event in result.analytics],
    )


@health_router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service and its storage are healthy.",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    service = request.app.state.service

    health = await service.health_check()

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        storage="healthy" if health["storage"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
