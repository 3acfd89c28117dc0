"""Dollar-denominated investment outcomes derived from price statistics."""

from dataclasses import dataclass

import numpy as np

from pricecast.analysis.statistics import Statistics


@dataclass(frozen=True)
class InvestmentProjection:
    investment_amount: float
    target_amount: float
    shares: float
    avg_final_value: float
    expected_return_pct: float
    prob_target_reached: float  # percent, 0-100
    worst_case_5pct: float
    potential_loss: float       # negative when the 5th percentile still beats the stake


def project_investment(
    stats: Statistics,
    investment_amount: float,
    target_amount: float,
    current_price: float,
) -> InvestmentProjection:
    """Convert the price distribution into outcomes for a fixed cash stake.

    Args:
        stats: Statistics over the terminal-price population.
        investment_amount: Cash invested at ``current_price``.
        target_amount: Portfolio value whose hit probability is reported.
        current_price: Entry price.

    Returns:
        InvestmentProjection. ``potential_loss`` keeps its sign.
    """
    shares = investment_amount / current_price
    final_values = stats.sorted_prices * shares
    reached = int(np.count_nonzero(final_values >= target_amount))

    avg_final_value = stats.mean * shares
    if investment_amount > 0:
        expected_return_pct = (avg_final_value - investment_amount) / investment_amount * 100
    else:
        # Same ratio expressed per share; a zero stake has no dollar base
        expected_return_pct = (stats.mean - current_price) / current_price * 100

    worst_case_5pct = stats.percentile(5) * shares

    return InvestmentProjection(
        investment_amount=investment_amount,
        target_amount=target_amount,
        shares=shares,
        avg_final_value=avg_final_value,
        expected_return_pct=expected_return_pct,
        prob_target_reached=reached / stats.count * 100,
        worst_case_5pct=worst_case_5pct,
        potential_loss=investment_amount - worst_case_5pct,
    )
