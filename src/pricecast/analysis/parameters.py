"""Validated simulation inputs."""

import math
import numbers
from dataclasses import dataclass

from pricecast.analysis.assets import AssetProfile
from pricecast.exceptions import InvalidParameterError

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

TIME_HORIZON_YEARS = 1
TRADING_DAYS_PER_YEAR = 252
PATH_SAMPLE_STRIDE = 10
PATHS_TO_VISUALIZE = 100

MIN_SIMULATION_COUNT = 1
MAX_SIMULATION_COUNT = 1_000_000
RECOMMENDED_SIMULATION_RANGE = (1000, 50000)


@dataclass(frozen=True)
class SimulationParameters:
    """Inputs for one run. Validated on construction, immutable afterwards."""

    ticker: str
    current_price: float
    volatility: float
    drift: float
    simulation_count: int
    investment_amount: float
    target_amount: float
    time_horizon_years: int = TIME_HORIZON_YEARS
    trading_days_per_year: int = TRADING_DAYS_PER_YEAR
    path_sample_stride: int = PATH_SAMPLE_STRIDE
    paths_to_visualize: int = PATHS_TO_VISUALIZE

    def __post_init__(self):
        _require_finite("current_price", self.current_price)
        if self.current_price <= 0:
            raise InvalidParameterError(
                "current_price", f"must be positive, got {self.current_price}"
            )

        _require_finite("volatility", self.volatility)
        if self.volatility < 0:
            raise InvalidParameterError(
                "volatility", f"must be non-negative, got {self.volatility}"
            )

        _require_finite("drift", self.drift)

        if isinstance(self.simulation_count, bool) or not isinstance(
            self.simulation_count, numbers.Integral
        ):
            raise InvalidParameterError(
                "simulation_count", f"must be an integer, got {self.simulation_count!r}"
            )
        if not MIN_SIMULATION_COUNT <= self.simulation_count <= MAX_SIMULATION_COUNT:
            raise InvalidParameterError(
                "simulation_count",
                f"must be within [{MIN_SIMULATION_COUNT}, {MAX_SIMULATION_COUNT}], "
                f"got {self.simulation_count}",
            )

        for name in ("investment_amount", "target_amount"):
            value = getattr(self, name)
            _require_finite(name, value)
            if value < 0:
                raise InvalidParameterError(name, f"must be non-negative, got {value}")

        for name in (
            "time_horizon_years",
            "trading_days_per_year",
            "path_sample_stride",
            "paths_to_visualize",
        ):
            value = getattr(self, name)
            if not isinstance(value, numbers.Integral) or value <= 0:
                raise InvalidParameterError(name, f"must be a positive integer, got {value!r}")

    @property
    def dt(self) -> float:
        return 1.0 / self.trading_days_per_year

    @property
    def steps(self) -> int:
        return round(self.time_horizon_years / self.dt)

    @property
    def sampled_path_length(self) -> int:
        return self.steps // self.path_sample_stride + 1

    @classmethod
    def from_profile(
        cls,
        profile: AssetProfile,
        current_price: float,
        investment_amount: float,
        target_amount: float,
        simulation_count: int,
        drift: float | None = None,
        volatility: float | None = None,
    ) -> "SimulationParameters":
        """Build parameters from an asset profile (mu = growth, sigma = volatility)."""
        return cls(
            ticker=profile.ticker,
            current_price=current_price,
            volatility=profile.volatility if volatility is None else volatility,
            drift=profile.growth if drift is None else drift,
            simulation_count=simulation_count,
            investment_amount=investment_amount,
            target_amount=target_amount,
        )


def _require_finite(field: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidParameterError(field, f"must be a number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidParameterError(field, f"must be finite, got {value}")
