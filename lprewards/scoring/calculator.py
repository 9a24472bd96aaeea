"""Q-score calculator and reward estimator.

Implements the liquidity reward scoring scheme:

    S(v, s) = ((v - s) / v)^2 * b            per-order score
    Q_one   = sum S over YES bids + NO asks
    Q_two   = sum S over YES asks + NO bids
    Q_min   = max(min(Q_one, Q_two), max(Q_one/c, Q_two/c))   midpoint in [0.10, 0.90]
            = min(Q_one, Q_two)                                 otherwise

A party's daily reward is its Q_min share of the market's daily pool.
"""

from __future__ import annotations

from collections.abc import Iterable

from lprewards.constants import DAYS_PER_MONTH, DAYS_PER_YEAR, OrderType, OutcomeSide
from lprewards.types import (
    CalculationCheck,
    Market,
    Order,
    QScore,
    RewardEstimate,
    ScoringParams,
)

DEFAULT_SCORING = ScoringParams()

_Q_ONE_KEYS = frozenset({(OutcomeSide.YES, OrderType.BID), (OutcomeSide.NO, OrderType.ASK)})
_Q_TWO_KEYS = frozenset({(OutcomeSide.YES, OrderType.ASK), (OutcomeSide.NO, OrderType.BID)})


def order_score(
    max_spread: float, spread: float, size: float, boost: float = 1.0
) -> float:
    """Score one order with the quadratic spread kernel.

    Args:
        max_spread: Maximum qualifying spread (v).
        spread: Order's distance from the effective midpoint (s).
        size: Order size in shares.
        boost: Market multiplier (b).

    Returns:
        ``size * boost`` at the midpoint, falling quadratically to 0 at
        ``max_spread``; 0 beyond it.
    """
    if max_spread <= 0 or spread > max_spread:
        return 0.0
    spread_ratio = (max_spread - spread) / max_spread
    return spread_ratio**2 * boost * size


def order_spread(price: float, midpoint: float, side: OutcomeSide = OutcomeSide.YES) -> float:
    """Distance of an order from its side's midpoint (NO trades at 1 - midpoint)."""
    effective_mid = 1.0 - midpoint if side == OutcomeSide.NO else midpoint
    return abs(price - effective_mid)


def score_order(order: Order, market: Market) -> float:
    """Score a single order against a market; undersized orders score 0."""
    if order.size < market.min_size:
        return 0.0
    spread = order_spread(order.price, market.midpoint, order.side)
    return order_score(market.max_spread, spread, order.size)


def _side_total(orders: Iterable[Order], market: Market, keys: frozenset) -> float:
    return sum(
        score_order(o, market) for o in orders if (o.side, o.type) in keys
    )


def calculate_q_one(orders: Iterable[Order], market: Market) -> float:
    """Q_one: YES bids plus NO asks."""
    return _side_total(orders, market, _Q_ONE_KEYS)


def calculate_q_two(orders: Iterable[Order], market: Market) -> float:
    """Q_two: YES asks plus NO bids."""
    return _side_total(orders, market, _Q_TWO_KEYS)


def calculate_q_min(
    q_one: float,
    q_two: float,
    midpoint: float,
    params: ScoringParams = DEFAULT_SCORING,
) -> float:
    """Combine both liquidity directions into Q_min.

    Inside the lenient midpoint band (boundaries inclusive) single-sided
    liquidity still scores, divided by the scaling factor c. Outside it both
    directions are required.
    """
    if params.lenient_midpoint_low <= midpoint <= params.lenient_midpoint_high:
        c = params.scaling_factor
        return max(min(q_one, q_two), max(q_one / c, q_two / c))
    return min(q_one, q_two)


def score_orders(
    orders: Iterable[Order],
    market: Market,
    params: ScoringParams = DEFAULT_SCORING,
) -> QScore:
    """Full Q-score breakdown for one party's orders."""
    orders = list(orders)
    q_one = calculate_q_one(orders, market)
    q_two = calculate_q_two(orders, market)
    q_min = calculate_q_min(q_one, q_two, market.midpoint, params)
    return QScore(q_one=q_one, q_two=q_two, q_min=q_min)


def calculate_total_competition_q_min(
    all_orders: Iterable[Order],
    market: Market,
    params: ScoringParams = DEFAULT_SCORING,
) -> float:
    """Q_min of every resting order in a market, scored as a single party.

    Order books do not expose which provider owns each order, so the whole
    book is treated as one competitor.
    """
    return score_orders(all_orders, market, params).q_min


def estimate_reward(
    user_q_min: float,
    total_q_min: float,
    reward_pool: float,
    capital_deployed: float | None = None,
) -> RewardEstimate:
    """Project a party's payout from its share of the market's total Q_min.

    Args:
        user_q_min: This party's Q_min.
        total_q_min: Sum of Q_min across all providers, including this one.
        reward_pool: Daily reward pool.
        capital_deployed: Capital behind the orders, for APY.

    Returns:
        All-zero estimate when either score is zero. Otherwise APY is set
        only when positive capital is given.
    """
    if total_q_min == 0 or user_q_min == 0:
        return RewardEstimate(
            user_share=0.0, daily_reward=0.0, monthly_reward=0.0, annualized_apy=0.0
        )

    user_share = user_q_min / total_q_min
    daily_reward = user_share * reward_pool
    monthly_reward = daily_reward * DAYS_PER_MONTH

    annualized_apy: float | None = None
    if capital_deployed is not None and capital_deployed > 0:
        annualized_apy = (daily_reward * DAYS_PER_YEAR) / capital_deployed

    return RewardEstimate(
        user_share=user_share,
        daily_reward=daily_reward,
        monthly_reward=monthly_reward,
        annualized_apy=annualized_apy,
    )


def validate_calculation(
    calculated_reward: float, actual_payout: float, tolerance: float = 0.01
) -> CalculationCheck:
    """Compare a projected reward with an observed payout."""
    error = abs(calculated_reward - actual_payout)
    error_percent = error / actual_payout if actual_payout > 0 else 0.0
    return CalculationCheck(
        is_valid=error_percent <= tolerance,
        error=error,
        error_percent=error_percent,
    )
