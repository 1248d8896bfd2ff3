"""Health check route."""

from datetime import datetime, timezone

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from linkage.config import DirectorySettings, Settings

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Liveness plus the directory this instance talks to."""

    status: str
    timestamp: datetime
    environment: str
    directory_base_url: str
    directory_token_configured: bool


@router.get("/health", response_model=HealthResponse)
async def health_check(
    settings: FromDishka[Settings], directory_settings: FromDishka[DirectorySettings]
) -> HealthResponse:
    """Report that the service is up.

    The directory itself is not called; a missing Management API token is
    reported so misconfigured deployments show up before the first link.
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        environment=settings.environment,
        directory_base_url=directory_settings.base_url,
        directory_token_configured=directory_settings.api_token is not None,
    )
