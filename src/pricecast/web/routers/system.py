"""System endpoints: health check."""

from fastapi import APIRouter, Depends

from pricecast.config import Settings
from pricecast.web.dependencies import get_settings
from pricecast.web.schemas import HealthResponse

router = APIRouter(tags=["system"])


@router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_settings)):
    """API health check."""
    return HealthResponse(status="ok", version=settings.api_version)
