"""Chart-ready summaries of the simulated population.

Histogram, CDF samples, per-step percentile bands and the visualised path
sample. All builders are read-only reductions over the finished run.
"""

import math
from dataclasses import dataclass

import numpy as np

from pricecast.analysis.statistics import nearest_rank_index

HISTOGRAM_BUCKETS = 50
CDF_RANK_STRIDE = 100
BAND_LEVELS = (5, 25, 50, 75, 95)


@dataclass(frozen=True)
class HistogramBucket:
    label: int  # rounded lower edge
    count: int


@dataclass(frozen=True)
class CDFPoint:
    price: int
    probability: float  # percent of the population ranked below this price


@dataclass(frozen=True)
class PercentileBand:
    step: int
    p5: float
    p25: float
    p50: float
    p75: float
    p95: float


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up."""
    return math.floor(value + 0.5)


def build_histogram(
    sorted_prices: np.ndarray, buckets: int = HISTOGRAM_BUCKETS
) -> tuple[HistogramBucket, ...]:
    """Fixed-width buckets spanning [min, max]; counts sum to len(sorted_prices)."""
    prices = np.asarray(sorted_prices, dtype=np.float64)
    lo = float(prices[0])
    hi = float(prices[-1])
    width = (hi - lo) / buckets

    if width > 0:
        idx = np.floor((prices - lo) / width).astype(np.int64)
        # price == max would land one past the last bucket
        idx = np.clip(idx, 0, buckets - 1)
    else:
        idx = np.zeros(len(prices), dtype=np.int64)

    counts = np.bincount(idx, minlength=buckets)
    return tuple(
        HistogramBucket(label=round_half_up(lo + i * width), count=int(counts[i]))
        for i in range(buckets)
    )


def build_cdf(
    sorted_prices: np.ndarray, rank_stride: int = CDF_RANK_STRIDE
) -> tuple[CDFPoint, ...]:
    n = len(sorted_prices)
    return tuple(
        CDFPoint(price=round_half_up(float(sorted_prices[i])), probability=i / n * 100)
        for i in range(0, n, rank_stride)
    )


def build_percentile_bands(sampled_paths: np.ndarray) -> tuple[PercentileBand, ...]:
    """Cross-sectional nearest-rank percentiles at every sampled step.

    Uses a partial sort (``np.partition``) per step column; the selected order
    statistics are identical to indexing a fully sorted column.
    """
    paths = np.asarray(sampled_paths, dtype=np.float64)
    if paths.ndim != 2:
        raise ValueError(f"sampled_paths must be 2-D (n_paths, path_length), got {paths.shape}")

    n_paths, path_length = paths.shape
    ranks = [nearest_rank_index(n_paths, p) for p in BAND_LEVELS]
    selected = np.partition(paths, sorted(set(ranks)), axis=0)[ranks, :]

    bands = []
    for step in range(path_length):
        values = selected[:, step]
        bands.append(PercentileBand(step, *(float(v) for v in values)))
    return tuple(bands)


def sample_paths(sampled_paths: np.ndarray, limit: int) -> tuple[tuple[float, ...], ...]:
    """First ``limit`` sampled trajectories, for path charts."""
    return tuple(tuple(float(v) for v in row) for row in sampled_paths[:limit])
