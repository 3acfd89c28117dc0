"""FastAPI dependency injection providers."""

from fastapi import Request

from pricecast.analysis.assets import AssetCatalog
from pricecast.config import Settings


def get_settings(request: Request) -> Settings:
    """Get application settings from app state."""
    return request.app.state.settings


def get_catalog(request: Request) -> AssetCatalog:
    """Get the asset profile catalog from app state."""
    return request.app.state.catalog
