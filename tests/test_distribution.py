"""Tests for histogram, CDF and percentile band builders."""

import numpy as np
import pytest

from pricecast.analysis.distribution import (
    HISTOGRAM_BUCKETS,
    build_cdf,
    build_histogram,
    build_percentile_bands,
    round_half_up,
    sample_paths,
)


@pytest.fixture
def sorted_prices():
    return np.sort(np.random.default_rng(42).lognormal(mean=6.7, sigma=0.35, size=10_000))


class TestRounding:
    def test_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4
        assert round_half_up(2.49) == 2
        assert round_half_up(-2.5) == -2


class TestHistogram:
    def test_fifty_buckets_summing_to_n(self, sorted_prices):
        hist = build_histogram(sorted_prices)
        assert len(hist) == HISTOGRAM_BUCKETS
        assert sum(b.count for b in hist) == len(sorted_prices)

    def test_max_lands_in_last_bucket(self):
        prices = np.array([0.0, 50.0, 100.0])
        hist = build_histogram(prices)
        assert hist[0].count == 1
        assert hist[25].count == 1
        assert hist[-1].count == 1

    def test_labels(self):
        prices = np.array([100.0, 200.0])
        hist = build_histogram(prices)
        assert hist[0].label == 100
        assert hist[1].label == 102
        assert hist[49].label == 198

    def test_zero_width(self):
        hist = build_histogram(np.full(37, 100.0))
        assert hist[0].count == 37
        assert sum(b.count for b in hist) == 37
        assert all(b.label == 100 for b in hist)


class TestCDF:
    def test_every_hundredth_rank(self, sorted_prices):
        cdf = build_cdf(sorted_prices)
        assert len(cdf) == 100
        assert cdf[0].probability == 0.0
        assert cdf[1].probability == pytest.approx(1.0)
        assert cdf[1].price == round_half_up(sorted_prices[100])

    def test_point_count_for_partial_block(self):
        cdf = build_cdf(np.arange(1050.0))
        assert len(cdf) == 1050 // 100 + 1
        assert cdf[-1].price == 1000
        assert cdf[-1].probability == pytest.approx(1000 / 1050 * 100)

    def test_ascending(self, sorted_prices):
        cdf = build_cdf(sorted_prices)
        prices = [p.price for p in cdf]
        probs = [p.probability for p in cdf]
        assert prices == sorted(prices)
        assert probs == sorted(probs)


class TestPercentileBands:
    def test_matches_full_sort(self):
        paths = np.random.default_rng(5).lognormal(size=(1001, 26))
        bands = build_percentile_bands(paths)
        assert len(bands) == 26
        n = paths.shape[0]
        for band in bands:
            column = np.sort(paths[:, band.step])
            assert band.p5 == column[int(n * 0.05)]
            assert band.p25 == column[int(n * 0.25)]
            assert band.p50 == column[int(n * 0.50)]
            assert band.p75 == column[int(n * 0.75)]
            assert band.p95 == column[int(n * 0.95)]

    def test_band_ordering(self):
        paths = np.random.default_rng(6).lognormal(size=(500, 10))
        for band in build_percentile_bands(paths):
            assert band.p5 <= band.p25 <= band.p50 <= band.p75 <= band.p95

    def test_single_path(self):
        bands = build_percentile_bands(np.array([[1.0, 2.0, 3.0]]))
        assert [b.p50 for b in bands] == [1.0, 2.0, 3.0]
        assert bands[2].p5 == bands[2].p95 == 3.0

    def test_requires_2d(self):
        with pytest.raises(ValueError):
            build_percentile_bands(np.array([1.0, 2.0, 3.0]))


class TestSamplePaths:
    def test_limit(self):
        paths = np.arange(30.0).reshape(10, 3)
        sample = sample_paths(paths, 4)
        assert len(sample) == 4
        assert sample[1] == (3.0, 4.0, 5.0)

    def test_fewer_paths_than_limit(self):
        paths = np.ones((3, 5))
        assert len(sample_paths(paths, 100)) == 3
