"""Health check routes."""

from datetime import datetime

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from relay.config import Settings
from relay.domain.service import ConnectionRegistry


router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    version: str
    git_sha: str
    live_connections: int  # WebSocket clients held by this process


@router.get("/health", response_model=HealthResponse)
async def health_check(
    settings: FromDishka[Settings],
    connection_registry: FromDishka[ConnectionRegistry],
) -> HealthResponse:
    """Basic health check endpoint.

    Returns:
        Health status indicating the service is running
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(),
        version="0.1.0",
        git_sha=settings.git_sha,
        live_connections=await connection_registry.connected_count(),
    )
