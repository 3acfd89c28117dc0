"""Rule-based investment recommendation."""

from dataclasses import dataclass
from enum import Enum


class Action(str, Enum):
    STRONG_BUY = "STRONG_BUY"
    BUY = "BUY"
    HOLD = "HOLD"
    HOLD_REDUCE = "HOLD_REDUCE"
    SELL = "SELL"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    Action.STRONG_BUY: "STRONG BUY",
    Action.BUY: "BUY",
    Action.HOLD: "HOLD",
    Action.HOLD_REDUCE: "HOLD/REDUCE",
    Action.SELL: "SELL",
}


@dataclass(frozen=True)
class Recommendation:
    action: Action
    rationale: str


# (return must exceed, prob_profit must exceed, action, rationale), first match wins.
# None disables the probability condition.
RULES: tuple[tuple[float, float | None, Action, str], ...] = (
    (20.0, 0.65, Action.STRONG_BUY,
     "Significant upside potential with high probability of profit"),
    (10.0, 0.55, Action.BUY, "Attractive risk-reward profile"),
    (0.0, 0.50, Action.HOLD, "Fair valuation with moderate upside"),
    (-10.0, None, Action.HOLD_REDUCE, "Limited upside, consider reducing position"),
)
FALLBACK = Recommendation(Action.SELL, "Overvalued based on Monte Carlo analysis")


def recommend(expected_return_pct: float, prob_profit: float) -> Recommendation:
    """Map (expected return %, probability of profit in [0, 1]) to a recommendation."""
    for min_return, min_prob, action, rationale in RULES:
        if expected_return_pct > min_return and (min_prob is None or prob_profit > min_prob):
            return Recommendation(action, rationale)
    return FALLBACK
