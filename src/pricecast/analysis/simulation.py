"""Monte Carlo simulation orchestrator.

simulate -> aggregate -> project -> recommend. Path generation runs in
parallel batches; every reduction after it starts only once all paths are
in, and the SimulationResult is returned only when the whole pipeline has
finished.
"""

import logging
import threading
from dataclasses import asdict, dataclass, field
from typing import Any

import numpy as np

from pricecast.analysis.assets import AssetCatalog, AssetProfile, lookup_asset_profile
from pricecast.analysis.distribution import (
    CDFPoint,
    HistogramBucket,
    PercentileBand,
    build_cdf,
    build_histogram,
    build_percentile_bands,
    sample_paths,
)
from pricecast.analysis.investment import InvestmentProjection, project_investment
from pricecast.analysis.parameters import SimulationParameters
from pricecast.analysis.recommendation import Recommendation, recommend
from pricecast.analysis.sim_models import ProgressCallback
from pricecast.analysis.sim_models.gbm import simulate_gbm_paths
from pricecast.analysis.statistics import Statistics, compute_statistics
from pricecast.config import Settings
from pricecast.exceptions import InvalidParameterError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class SimulationResult:
    parameters: SimulationParameters
    profile: AssetProfile | None
    seed: int
    statistics: Statistics
    investment: InvestmentProjection
    histogram: tuple[HistogramBucket, ...]
    cdf: tuple[CDFPoint, ...]
    percentile_bands: tuple[PercentileBand, ...]
    sample_paths: tuple[tuple[float, ...], ...]
    recommendation: Recommendation
    terminal_prices: np.ndarray = field(repr=False)  # generation order

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe rendering (arrays omitted, enums as values)."""
        stats = asdict(self.statistics)
        stats.pop("sorted_prices")
        return {
            "parameters": asdict(self.parameters),
            "profile": asdict(self.profile) if self.profile else None,
            "seed": self.seed,
            "statistics": stats,
            "investment": asdict(self.investment),
            "histogram": [asdict(b) for b in self.histogram],
            "cdf": [asdict(p) for p in self.cdf],
            "percentile_bands": [asdict(b) for b in self.percentile_bands],
            "sample_paths": [list(p) for p in self.sample_paths],
            "recommendation": {
                "action": self.recommendation.action.value,
                "label": self.recommendation.action.label,
                "rationale": self.recommendation.rationale,
            },
        }


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def run_simulation(
    params: SimulationParameters,
    *,
    seed: int | None = None,
    progress: ProgressCallback | None = None,
    cancel_event: threading.Event | None = None,
    batch_size: int | None = None,
    max_workers: int | None = None,
    profile: AssetProfile | None = None,
    settings: Settings | None = None,
) -> SimulationResult:
    """Run the full pipeline for one validated parameter set.

    Args:
        params: Simulation inputs (validated on construction).
        seed: Root seed; falls back to ``settings.simulation_seed``. None
            means fresh entropy, recorded on the result for replay.
        progress: Receives the completed fraction in (0, 1] per batch.
        cancel_event: Checked at batch boundaries; aborts the run.
        batch_size: Override ``settings.simulation_batch_size``.
        max_workers: Override ``settings.simulation_max_workers``.
        profile: Asset profile to attach to the result, if known.
        settings: Application settings (default: loaded from environment).

    Returns:
        SimulationResult, only once every stage has completed.

    Raises:
        DegenerateNumericError: if the step terms, the price recursion or the
            population moments leave the finite range.
        SimulationCancelledError: if cancel_event is set mid-run.
        ValueError: if an explicit batch_size or max_workers is not positive.
    """
    settings = settings or Settings()
    if seed is None:
        seed = settings.simulation_seed
    if seed is not None and seed < 0:
        raise InvalidParameterError("seed", f"must be non-negative, got {seed}")

    logger.info(
        "Running %d simulations for %s (S0=%.2f, mu=%.4f, sigma=%.4f)",
        params.simulation_count, params.ticker, params.current_price,
        params.drift, params.volatility,
    )

    paths = simulate_gbm_paths(
        params,
        seed=seed,
        batch_size=settings.simulation_batch_size if batch_size is None else batch_size,
        max_workers=settings.simulation_max_workers if max_workers is None else max_workers,
        progress=progress,
        cancel_event=cancel_event,
    )

    # --- Reductions over the complete population -------------------------
    stats = compute_statistics(paths.terminal_prices, params.current_price)
    investment = project_investment(
        stats,
        investment_amount=params.investment_amount,
        target_amount=params.target_amount,
        current_price=params.current_price,
    )
    recommendation = recommend(investment.expected_return_pct, stats.prob_profit)

    result = SimulationResult(
        parameters=params,
        profile=profile,
        seed=paths.seed,
        statistics=stats,
        investment=investment,
        histogram=build_histogram(stats.sorted_prices),
        cdf=build_cdf(stats.sorted_prices),
        percentile_bands=build_percentile_bands(paths.sampled_paths),
        sample_paths=sample_paths(paths.sampled_paths, params.paths_to_visualize),
        recommendation=recommendation,
        terminal_prices=paths.terminal_prices,
    )

    logger.info(
        "Simulation complete for %s: mean=%.2f expected_return=%+.2f%% -> %s",
        params.ticker, stats.mean, investment.expected_return_pct,
        recommendation.action.value,
    )
    return result


def run_for_ticker(
    ticker: str,
    current_price: float,
    investment_amount: float,
    target_amount: float,
    simulation_count: int | None = None,
    drift: float | None = None,
    volatility: float | None = None,
    catalog: AssetCatalog | None = None,
    settings: Settings | None = None,
    **kwargs: Any,
) -> SimulationResult:
    """Look up the ticker's profile, build parameters from it and run.

    Remaining keyword arguments go to :func:`run_simulation`.
    """
    settings = settings or Settings()
    profile = catalog.get(ticker) if catalog is not None else lookup_asset_profile(ticker)

    params = SimulationParameters.from_profile(
        profile,
        current_price=current_price,
        investment_amount=investment_amount,
        target_amount=target_amount,
        simulation_count=(
            settings.simulation_default_count if simulation_count is None else simulation_count
        ),
        drift=drift,
        volatility=volatility,
    )
    return run_simulation(params, profile=profile, settings=settings, **kwargs)
