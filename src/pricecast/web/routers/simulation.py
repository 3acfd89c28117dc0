"""Simulation API endpoints."""

from fastapi import APIRouter, Depends

from pricecast.analysis.assets import AssetCatalog
from pricecast.analysis.simulation import run_for_ticker
from pricecast.config import Settings
from pricecast.web.dependencies import get_catalog, get_settings
from pricecast.web.schemas import (
    ApiResponse,
    ErrorResponse,
    SimulationRequest,
    SimulationResponse,
)

router = APIRouter(prefix="/simulations", tags=["simulation"])


# Plain ``def``: FastAPI runs it in the threadpool, keeping the CPU-bound
# simulation off the event loop.
@router.post(
    "",
    response_model=ApiResponse[SimulationResponse],
    responses={422: {"model": ErrorResponse}},
)
def create_simulation(
    body: SimulationRequest,
    settings: Settings = Depends(get_settings),
    catalog: AssetCatalog = Depends(get_catalog),
):
    """Run a Monte Carlo projection and return the full result."""
    result = run_for_ticker(
        body.ticker,
        current_price=body.current_price,
        investment_amount=body.investment_amount,
        target_amount=body.target_amount,
        simulation_count=body.simulation_count,
        drift=body.drift,
        volatility=body.volatility,
        catalog=catalog,
        settings=settings,
        seed=body.seed,
    )
    return ApiResponse(
        data=SimulationResponse.from_result(result, known=body.ticker in catalog)
    )
