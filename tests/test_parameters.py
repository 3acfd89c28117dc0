"""Tests for parameter validation and asset profile lookup."""

import dataclasses

import pytest

from pricecast.analysis.assets import (
    AssetCatalog,
    AssetProfile,
    STATIC_PROFILES,
    lookup_asset_profile,
)
from pricecast.analysis.parameters import SimulationParameters
from pricecast.exceptions import InvalidParameterError


def make_params(**overrides):
    values = dict(
        ticker="TEST",
        current_price=100.0,
        volatility=0.3,
        drift=0.1,
        simulation_count=1000,
        investment_amount=1000.0,
        target_amount=1500.0,
    )
    values.update(overrides)
    return SimulationParameters(**values)


# ---------------------------------------------------------------------------
# SimulationParameters
# ---------------------------------------------------------------------------


class TestValidation:
    def test_valid_parameters(self):
        params = make_params()
        assert params.steps == 252
        assert params.sampled_path_length == 26
        assert params.dt == pytest.approx(1 / 252)

    @pytest.mark.parametrize(
        "field, value",
        [
            ("current_price", 0.0),
            ("current_price", -850.0),
            ("current_price", float("nan")),
            ("volatility", -0.1),
            ("volatility", float("inf")),
            ("drift", float("nan")),
            ("simulation_count", 0),
            ("simulation_count", 10_000_000),
            ("simulation_count", 100.5),
            ("simulation_count", True),
            ("investment_amount", -1.0),
            ("target_amount", -0.01),
            ("path_sample_stride", 0),
        ],
    )
    def test_invalid_field_named(self, field, value):
        with pytest.raises(InvalidParameterError) as excinfo:
            make_params(**{field: value})
        assert excinfo.value.field == field
        assert field in str(excinfo.value)

    def test_is_value_error(self):
        with pytest.raises(ValueError, match="positive"):
            make_params(current_price=-1.0)

    def test_zero_amounts_allowed(self):
        params = make_params(investment_amount=0.0, target_amount=0.0, volatility=0.0)
        assert params.investment_amount == 0.0

    def test_negative_drift_allowed(self):
        assert make_params(drift=-0.4).drift == -0.4

    def test_immutable(self):
        params = make_params()
        with pytest.raises(dataclasses.FrozenInstanceError):
            params.current_price = 1.0

    def test_from_profile(self):
        params = SimulationParameters.from_profile(
            STATIC_PROFILES["TSLA"], current_price=250.0,
            investment_amount=5000.0, target_amount=6000.0, simulation_count=2000,
        )
        assert params.ticker == "TSLA"
        assert params.volatility == 0.65
        assert params.drift == 0.25

    def test_from_profile_overrides(self):
        params = SimulationParameters.from_profile(
            STATIC_PROFILES["TSLA"], current_price=250.0,
            investment_amount=5000.0, target_amount=6000.0, simulation_count=2000,
            drift=0.0, volatility=0.1,
        )
        assert params.drift == 0.0
        assert params.volatility == 0.1


# ---------------------------------------------------------------------------
# Asset profiles
# ---------------------------------------------------------------------------


class TestAssetLookup:
    def test_known_ticker(self):
        profile = lookup_asset_profile("ASML")
        assert profile.name == "ASML Holding N.V."
        assert profile.volatility == 0.35
        assert profile.growth == 0.15

    def test_case_insensitive(self):
        assert lookup_asset_profile(" nvda ") == STATIC_PROFILES["NVDA"]

    def test_unknown_ticker_gets_default(self):
        profile = lookup_asset_profile("zzz")
        assert profile.ticker == "ZZZ"
        assert profile.name == "ZZZ Stock"
        assert profile.sector == "General"
        assert profile.volatility == 0.30
        assert profile.growth == 0.12

    def test_ten_static_entries(self):
        assert len(STATIC_PROFILES) == 10
        assert len(AssetCatalog().profiles()) == 10

    def test_custom_catalog(self):
        custom = AssetProfile("ACME", "Acme Corp", "Industrials", 0.2, 0.05)
        catalog = AssetCatalog({"acme": custom})
        assert catalog.get("ACME") is custom
        assert "acme" in catalog
        assert "ASML" not in catalog
        assert catalog.get("ASML").sector == "General"
