"""Summary statistics over the terminal-price population.

Percentiles use the nearest-rank rule ``sorted[floor(p/100 * N)]`` clamped
to the valid index range, without interpolation, and the median is the
lower-middle element for even N. Neither is the numpy default; both are
kept deliberately so every derived figure indexes a real simulated price.
"""

import logging
import math
from dataclasses import dataclass, field

import numpy as np

from pricecast.exceptions import DegenerateNumericError

logger = logging.getLogger(__name__)

PERCENTILE_TABLE_LEVELS = (5, 10, 25, 50, 75, 90, 95)


def nearest_rank_index(n: int, p: float) -> int:
    """Index of the p-th percentile in a sorted sample of size n."""
    if n <= 0:
        raise ValueError("percentile of an empty sample is undefined")
    return min(max(math.floor(p / 100 * n), 0), n - 1)


def nearest_rank_percentile(sorted_values: np.ndarray, p: float) -> float:
    """Nearest-rank percentile of an ascending array."""
    return float(sorted_values[nearest_rank_index(len(sorted_values), p)])


@dataclass(frozen=True)
class PercentilePoint:
    percentile: int
    value: float


@dataclass(frozen=True)
class Statistics:
    current_price: float
    count: int
    mean: float
    median: float
    std: float
    min: float
    max: float
    prob_profit: float  # fraction in [0, 1]
    var_95: float       # 5th percentile price
    var_90: float       # 10th percentile price
    coefficient_of_variation: float  # std / mean, in percent
    percentile_table: tuple[PercentilePoint, ...]
    sorted_prices: np.ndarray = field(repr=False, compare=False)

    def percentile(self, p: float) -> float:
        return nearest_rank_percentile(self.sorted_prices, p)


def compute_statistics(terminal_prices: np.ndarray, current_price: float) -> Statistics:
    """Sort the population once and derive every summary figure from it.

    Raises DegenerateNumericError when the mean or std overflows, which can
    happen with finite prices near the float64 limit.
    """
    prices = np.asarray(terminal_prices, dtype=np.float64)
    n = len(prices)
    if n == 0:
        raise ValueError("cannot summarise an empty price population")

    sorted_prices = np.sort(prices)
    sorted_prices.flags.writeable = False

    with np.errstate(over="ignore", invalid="ignore"):
        mean = float(np.mean(sorted_prices))
        std = float(np.std(sorted_prices))  # population (ddof=0)
    if not (math.isfinite(mean) and math.isfinite(std)):
        raise DegenerateNumericError(
            f"price moments overflowed over {n} prices (mean={mean}, std={std})"
        )
    prob_profit = float(np.count_nonzero(sorted_prices > current_price) / n)

    stats = Statistics(
        current_price=current_price,
        count=n,
        mean=mean,
        median=float(sorted_prices[(n - 1) // 2]),
        std=std,
        min=float(sorted_prices[0]),
        max=float(sorted_prices[-1]),
        prob_profit=prob_profit,
        var_95=nearest_rank_percentile(sorted_prices, 5),
        var_90=nearest_rank_percentile(sorted_prices, 10),
        coefficient_of_variation=std / mean * 100 if mean != 0 else 0.0,
        percentile_table=tuple(
            PercentilePoint(p, nearest_rank_percentile(sorted_prices, p))
            for p in PERCENTILE_TABLE_LEVELS
        ),
        sorted_prices=sorted_prices,
    )
    logger.debug(
        "Statistics over %d prices: mean=%.2f median=%.2f std=%.2f prob_profit=%.4f",
        n, stats.mean, stats.median, stats.std, stats.prob_profit,
    )
    return stats
