"""Monte Carlo path generation models.

Provides the stochastic price model used by the pipeline:
- GBM: Geometric Brownian Motion (constant drift and volatility)
"""

from dataclasses import dataclass
from typing import Callable

import numpy as np

ProgressCallback = Callable[[float], None]


@dataclass(frozen=True, eq=False)
class PathSet:
    """Simulated trajectories for one run.

    Row ``i`` of ``sampled_paths`` and entry ``i`` of ``terminal_prices``
    describe the same trajectory.
    """

    sampled_paths: np.ndarray    # (n_paths, steps // stride + 1), includes S0
    terminal_prices: np.ndarray  # (n_paths,), price after the final step
    seed: int                    # root entropy, enough to replay the run

    @property
    def n_paths(self) -> int:
        return int(self.terminal_prices.shape[0])

    @property
    def path_length(self) -> int:
        return int(self.sampled_paths.shape[1])


__all__ = ["PathSet", "ProgressCallback"]
