"""Pydantic request/response schemas for Pricecast API."""

from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

from pricecast.analysis.parameters import MAX_SIMULATION_COUNT, MIN_SIMULATION_COUNT

T = TypeVar("T")


# --- Base schemas ---


class Meta(BaseModel):
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ApiResponse(BaseModel, Generic[T]):
    data: T
    meta: Meta = Field(default_factory=Meta)


class ErrorResponse(BaseModel):
    error: dict[str, Any] = Field(
        description="Error details with code, message, and optional field"
    )


class HealthResponse(BaseModel):
    status: str
    version: str


# --- Asset schemas ---


class AssetProfileOut(BaseModel):
    ticker: str
    name: str
    sector: str
    volatility: float = Field(description="Annualised volatility (sigma)")
    growth: float = Field(description="Annualised expected return (mu)")
    known: bool = Field(description="False when the default profile was substituted")


# --- Simulation schemas ---


class SimulationRequest(BaseModel):
    # Domain checks live in SimulationParameters so the API and the core
    # reject the same inputs with the same field names.
    ticker: str = Field(min_length=1, max_length=12)
    current_price: float
    investment_amount: float
    target_amount: float
    simulation_count: int | None = Field(
        None, description=f"Paths to simulate ({MIN_SIMULATION_COUNT}-{MAX_SIMULATION_COUNT})"
    )
    drift: float | None = Field(None, description="Override the profile's annualised drift")
    volatility: float | None = Field(None, description="Override the profile's annualised volatility")
    seed: int | None = Field(None, ge=0, description="Seed for a reproducible run")


class StatisticsOut(BaseModel):
    count: int
    mean: float
    median: float
    std: float
    min: float
    max: float
    prob_profit: float
    var_95: float
    var_90: float
    coefficient_of_variation: float
    percentile_table: list[dict[str, float]]


class InvestmentOut(BaseModel):
    shares: float
    avg_final_value: float
    expected_return_pct: float
    prob_target_reached: float
    worst_case_5pct: float
    potential_loss: float


class HistogramBucketOut(BaseModel):
    label: int
    count: int


class CDFPointOut(BaseModel):
    price: int
    probability: float


class PercentileBandOut(BaseModel):
    step: int
    p5: float
    p25: float
    p50: float
    p75: float
    p95: float


class RecommendationOut(BaseModel):
    action: str
    label: str
    rationale: str


class SimulationResponse(BaseModel):
    ticker: str
    current_price: float
    drift: float
    volatility: float
    simulation_count: int
    seed: int
    profile: AssetProfileOut | None = None
    statistics: StatisticsOut
    investment: InvestmentOut
    histogram: list[HistogramBucketOut]
    cdf: list[CDFPointOut]
    percentile_bands: list[PercentileBandOut]
    sample_paths: list[list[float]]
    recommendation: RecommendationOut

    @classmethod
    def from_result(cls, result, known: bool = True) -> "SimulationResponse":
        data = result.to_dict()
        params = data["parameters"]
        profile = data["profile"]
        return cls(
            ticker=params["ticker"],
            current_price=params["current_price"],
            drift=params["drift"],
            volatility=params["volatility"],
            simulation_count=params["simulation_count"],
            seed=data["seed"],
            profile=AssetProfileOut(**profile, known=known) if profile else None,
            statistics=StatisticsOut(**{
                k: v for k, v in data["statistics"].items() if k != "current_price"
            }),
            investment=InvestmentOut(**{
                k: v for k, v in data["investment"].items()
                if k not in ("investment_amount", "target_amount")
            }),
            histogram=data["histogram"],
            cdf=data["cdf"],
            percentile_bands=data["percentile_bands"],
            sample_paths=data["sample_paths"],
            recommendation=data["recommendation"],
        )
