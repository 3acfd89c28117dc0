"""FastAPI application factory for Pricecast API."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pricecast.analysis.assets import AssetCatalog
from pricecast.config import Settings
from pricecast.exceptions import (
    DegenerateNumericError,
    InvalidParameterError,
    SimulationCancelledError,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: log startup and shutdown."""
    logger.info("Starting Pricecast API...")
    yield
    logger.info("Pricecast API shutdown complete")


def create_app(settings: Settings | None = None, catalog: AssetCatalog | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title=settings.api_title,
        description="Monte Carlo price projection and rule-based investment recommendation",
        version=settings.api_version,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.catalog = catalog or AssetCatalog()

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", "Accept"],
    )

    _register_exception_handlers(app)
    _register_routers(app)

    return app


def _error(status_code: int, code: str, message: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message, **extra}},
    )


def _register_exception_handlers(app: FastAPI):
    @app.exception_handler(InvalidParameterError)
    async def invalid_parameter(request: Request, exc: InvalidParameterError):
        logger.warning("Rejected simulation request: %s", exc)
        return _error(422, "invalid_parameter", exc.message, field=exc.field)

    @app.exception_handler(DegenerateNumericError)
    async def degenerate_numeric(request: Request, exc: DegenerateNumericError):
        logger.warning("Simulation diverged: %s", exc)
        return _error(422, "degenerate_numeric", str(exc))

    @app.exception_handler(SimulationCancelledError)
    async def cancelled(request: Request, exc: SimulationCancelledError):
        return _error(503, "cancelled", str(exc))


def _register_routers(app: FastAPI):
    """Register all API routers."""
    from pricecast.web.routers.assets import router as assets_router
    from pricecast.web.routers.simulation import router as simulation_router
    from pricecast.web.routers.system import router as system_router

    app.include_router(assets_router, prefix="/api/v1")
    app.include_router(simulation_router, prefix="/api/v1")
    app.include_router(system_router, prefix="/api/v1")
