"""Geometric Brownian Motion (constant volatility) path simulation.

Model: dS = mu * S * dt + sigma * S * dW
Exact: S(t+dt) = S(t) * exp((mu - 0.5*sigma^2)*dt + sigma*sqrt(dt)*Z)

Standard normals come from the Box-Muller transform over two uniform
draws. Simulations are split into fixed-size batches; batch ``k`` draws
from child stream ``k`` of the root SeedSequence, so a seeded run is
reproducible no matter how many worker threads execute it or in what
order the batches finish.
"""

import logging
import math
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed

import numpy as np

from pricecast.analysis.parameters import SimulationParameters
from pricecast.config import Settings
from pricecast.exceptions import DegenerateNumericError, SimulationCancelledError

from . import PathSet, ProgressCallback

logger = logging.getLogger(__name__)

def box_muller(rng: np.random.Generator, shape: tuple[int, ...]) -> np.ndarray:
    """Standard normal variates from two independent uniform draws."""
    # Generator.random is [0, 1); flip u1 to (0, 1] so log(u1) stays finite
    u1 = 1.0 - rng.random(shape)
    u2 = rng.random(shape)
    return np.sqrt(-2.0 * np.log(u1)) * np.cos(2.0 * np.pi * u2)


def simulate_gbm_paths(
    params: SimulationParameters,
    seed: int | None = None,
    batch_size: int | None = None,
    max_workers: int | None = None,
    progress: ProgressCallback | None = None,
    cancel_event: threading.Event | None = None,
) -> PathSet:
    """Generate ``params.simulation_count`` GBM trajectories.

    Args:
        params: Validated simulation inputs.
        seed: Root seed. None draws fresh OS entropy (recorded on the result).
        batch_size: Simulations per batch; the progress/cancellation granularity.
            None reads ``Settings.simulation_batch_size``.
        max_workers: Worker threads executing batches. None reads
            ``Settings.simulation_max_workers``.
        progress: Called from the calling thread after each finished batch
            with the fraction of simulations completed, in (0, 1].
        cancel_event: Checked at batch boundaries. Once set, outstanding
            batches are dropped and SimulationCancelledError is raised.

    Returns:
        PathSet with sampled paths and terminal prices, index-aligned.

    Raises:
        DegenerateNumericError: if the per-step drift or diffusion term, or any
            simulated price, is non-finite.
        SimulationCancelledError: if cancel_event is set before completion.
    """
    if batch_size is None or max_workers is None:
        settings = Settings()
        if batch_size is None:
            batch_size = settings.simulation_batch_size
        if max_workers is None:
            max_workers = settings.simulation_max_workers
    if batch_size <= 0:
        raise ValueError(f"batch_size must be positive, got {batch_size}")
    if max_workers <= 0:
        raise ValueError(f"max_workers must be positive, got {max_workers}")

    n = params.simulation_count
    steps = params.steps
    stride = params.path_sample_stride

    root = np.random.SeedSequence(seed)
    n_batches = math.ceil(n / batch_size)
    child_seeds = root.spawn(n_batches)

    sampled_paths = np.empty((n, params.sampled_path_length), dtype=np.float64)
    terminal_prices = np.empty(n, dtype=np.float64)

    with np.errstate(over="ignore", invalid="ignore"):
        sigma = np.float64(params.volatility)
        drift = (np.float64(params.drift) - 0.5 * sigma**2) * params.dt
        diffusion = sigma * math.sqrt(params.dt)
    if not (np.isfinite(drift) and np.isfinite(diffusion)):
        raise DegenerateNumericError(
            f"GBM step terms are not finite (drift={drift}, diffusion={diffusion}) "
            f"for mu={params.drift}, sigma={params.volatility}"
        )
    # Price after step k*stride lives in column k*stride - 1 of the step matrix
    sample_columns = np.arange(stride, steps + 1, stride) - 1

    def run_batch(k: int) -> int:
        if cancel_event is not None and cancel_event.is_set():
            return 0
        start = k * batch_size
        stop = min(start + batch_size, n)
        rng = np.random.default_rng(child_seeds[k])

        z = box_muller(rng, (stop - start, steps))
        log_paths = np.cumsum(drift + diffusion * z, axis=1)
        with np.errstate(over="ignore", invalid="ignore"):
            prices = params.current_price * np.exp(log_paths)

        if not np.all(np.isfinite(prices)):
            raise DegenerateNumericError(
                f"GBM produced non-finite prices in simulations [{start}, {stop}) "
                f"(S0={params.current_price}, mu={params.drift}, sigma={params.volatility})"
            )

        sampled_paths[start:stop, 0] = params.current_price
        sampled_paths[start:stop, 1:] = prices[:, sample_columns]
        terminal_prices[start:stop] = prices[:, -1]
        return stop - start

    logger.debug(
        "Simulating %d paths x %d steps in %d batches (%d workers)",
        n, steps, n_batches, max_workers,
    )

    completed = 0
    with ThreadPoolExecutor(max_workers=min(max_workers, n_batches)) as executor:
        futures = [executor.submit(run_batch, k) for k in range(n_batches)]
        try:
            for future in as_completed(futures):
                completed += future.result()
                if cancel_event is not None and cancel_event.is_set():
                    raise SimulationCancelledError(
                        f"Simulation cancelled after {completed}/{n} paths"
                    )
                if progress is not None:
                    progress(completed / n)
        except BaseException:
            for future in futures:
                future.cancel()
            raise

    return PathSet(
        sampled_paths=_freeze(sampled_paths),
        terminal_prices=_freeze(terminal_prices),
        seed=root.entropy,
    )


def _freeze(arr: np.ndarray) -> np.ndarray:
    arr.flags.writeable = False
    return arr
