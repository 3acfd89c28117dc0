"""Asset profile endpoints."""

from fastapi import APIRouter, Depends

from pricecast.analysis.assets import AssetCatalog, AssetProfile
from pricecast.web.dependencies import get_catalog
from pricecast.web.schemas import ApiResponse, AssetProfileOut

router = APIRouter(prefix="/assets", tags=["assets"])


def _to_schema(profile: AssetProfile, known: bool) -> AssetProfileOut:
    return AssetProfileOut(
        ticker=profile.ticker,
        name=profile.name,
        sector=profile.sector,
        volatility=profile.volatility,
        growth=profile.growth,
        known=known,
    )


@router.get("", response_model=ApiResponse[list[AssetProfileOut]])
async def list_assets(catalog: AssetCatalog = Depends(get_catalog)):
    """List every profile in the catalog."""
    return ApiResponse(data=[_to_schema(p, True) for p in catalog.profiles()])


@router.get("/{ticker}", response_model=ApiResponse[AssetProfileOut])
async def get_asset(ticker: str, catalog: AssetCatalog = Depends(get_catalog)):
    """Get the profile for a ticker; unknown tickers get the default profile."""
    return ApiResponse(data=_to_schema(catalog.get(ticker), ticker in catalog))
