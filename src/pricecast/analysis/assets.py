"""Static asset profile lookup.

The catalog stands in for a market-data feed: a fixed table of well-known
tickers with an annualised volatility and growth (drift) assumption each.
Lookup never fails; unknown tickers get a generic default profile.
"""

import logging
from dataclasses import dataclass
from typing import Mapping

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_SECTOR = "General"
DEFAULT_VOLATILITY = 0.30
DEFAULT_GROWTH = 0.12


@dataclass(frozen=True)
class AssetProfile:
    ticker: str
    name: str
    sector: str
    volatility: float  # annualised sigma
    growth: float      # annualised drift (mu)


STATIC_PROFILES: dict[str, AssetProfile] = {
    p.ticker: p
    for p in (
        AssetProfile("ASML", "ASML Holding N.V.", "Technology", 0.35, 0.15),
        AssetProfile("AAPL", "Apple Inc.", "Technology", 0.28, 0.12),
        AssetProfile("TSLA", "Tesla Inc.", "Automotive", 0.65, 0.25),
        AssetProfile("MSFT", "Microsoft Corporation", "Technology", 0.25, 0.14),
        AssetProfile("NVDA", "NVIDIA Corporation", "Technology", 0.55, 0.30),
        AssetProfile("GOOGL", "Alphabet Inc.", "Technology", 0.30, 0.13),
        AssetProfile("AMZN", "Amazon.com Inc.", "E-commerce", 0.35, 0.18),
        AssetProfile("META", "Meta Platforms Inc.", "Social Media", 0.45, 0.16),
        AssetProfile("JPM", "JPMorgan Chase & Co.", "Banking", 0.22, 0.08),
        AssetProfile("V", "Visa Inc.", "Financial Services", 0.24, 0.10),
    )
}


def default_profile(ticker: str) -> AssetProfile:
    """Generic profile used for tickers missing from the catalog."""
    symbol = normalize_ticker(ticker)
    return AssetProfile(
        ticker=symbol,
        name=f"{symbol} Stock",
        sector=DEFAULT_SECTOR,
        volatility=DEFAULT_VOLATILITY,
        growth=DEFAULT_GROWTH,
    )


def normalize_ticker(ticker: str) -> str:
    return (ticker or "").strip().upper()


class AssetCatalog:
    """Ticker -> AssetProfile lookup backed by an in-memory mapping.

    Replaceable: anything exposing ``get(ticker) -> AssetProfile`` can be
    handed to the pipeline instead.
    """

    def __init__(self, profiles: Mapping[str, AssetProfile] | None = None):
        source = STATIC_PROFILES if profiles is None else profiles
        self._profiles = {normalize_ticker(k): v for k, v in source.items()}

    def get(self, ticker: str) -> AssetProfile:
        symbol = normalize_ticker(ticker)
        profile = self._profiles.get(symbol)
        if profile is None:
            logger.debug("Unknown ticker %r, using default profile", symbol)
            return default_profile(symbol)
        return profile

    def __contains__(self, ticker: str) -> bool:
        return normalize_ticker(ticker) in self._profiles

    def profiles(self) -> list[AssetProfile]:
        return list(self._profiles.values())


_DEFAULT_CATALOG = AssetCatalog()


def lookup_asset_profile(ticker: str) -> AssetProfile:
    return _DEFAULT_CATALOG.get(ticker)
