"""Pytest configuration and shared fixtures."""

import pytest

from pricecast.analysis.parameters import SimulationParameters
from pricecast.config import Settings


@pytest.fixture
def asml_params():
    """ASML-like inputs at a test-friendly simulation count."""
    return SimulationParameters(
        ticker="ASML",
        current_price=850.0,
        volatility=0.35,
        drift=0.15,
        simulation_count=1000,
        investment_amount=10000.0,
        target_amount=15000.0,
    )


@pytest.fixture
def flat_params():
    """Zero drift, zero volatility: every path stays at the spot price."""
    return SimulationParameters(
        ticker="FLAT",
        current_price=100.0,
        volatility=0.0,
        drift=0.0,
        simulation_count=250,
        investment_amount=1000.0,
        target_amount=1000.0,
    )


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        simulation_default_count=500,
        simulation_batch_size=100,
        simulation_max_workers=2,
        simulation_seed=None,
    )
