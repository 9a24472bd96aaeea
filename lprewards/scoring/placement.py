"""Static order placement: fixed spread ratios, ranked by projected reward.

These ignore fill risk and volatility; ``spread_optimizer`` covers that.
They are useful for quick comparisons across many markets.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from lprewards.constants import FALLBACK_SPREAD_RATIO
from lprewards.scoring.calculator import DEFAULT_SCORING, estimate_reward, score_orders
from lprewards.scoring.spread_optimizer import build_two_sided_orders
from lprewards.types import (
    CapitalAllocation,
    Market,
    OrderQuote,
    ScoringParams,
    StaticPlacement,
)

logger = structlog.get_logger(__name__)

STRATEGY_RATIOS: tuple[float, ...] = (
    0.25,  # aggressive: closer to midpoint
    0.35,  # balanced
    0.50,  # conservative
)


def place_at_ratio(
    capital: float,
    market: Market,
    competition_q_min: float,
    spread_ratio: float,
    scoring: ScoringParams = DEFAULT_SCORING,
) -> StaticPlacement:
    """Score a symmetric two-sided quote ``spread_ratio * max_spread`` from the midpoint."""
    buy, sell = build_two_sided_orders(capital, market, market.max_spread * spread_ratio)
    q_score = score_orders([buy, sell], market, scoring)
    reward = estimate_reward(
        q_score.q_min, competition_q_min + q_score.q_min, market.reward_pool
    )
    return StaticPlacement(
        buy_order=OrderQuote(price=buy.price, size=buy.size),
        sell_order=OrderQuote(price=sell.price, size=sell.size),
        expected_q_score=q_score,
        expected_daily_reward=reward.daily_reward,
        capital_efficiency=reward.daily_reward / capital if capital > 0 else 0.0,
        spread_ratio=spread_ratio,
    )


def optimize_order_placement(
    capital: float,
    market: Market,
    competition_q_min: float,
    scoring: ScoringParams = DEFAULT_SCORING,
) -> StaticPlacement:
    """Balanced placement at 35% of max spread."""
    return place_at_ratio(capital, market, competition_q_min, FALLBACK_SPREAD_RATIO, scoring)


def optimize_advanced(
    capital: float,
    market: Market,
    competition_q_min: float,
    scoring: ScoringParams = DEFAULT_SCORING,
) -> StaticPlacement:
    """Try each strategy ratio and keep the one with the highest daily reward.

    Ties (including all-zero rewards) keep the earliest ratio.
    """
    first, *rest = STRATEGY_RATIOS
    best = place_at_ratio(capital, market, competition_q_min, first, scoring)
    for ratio in rest:
        placement = place_at_ratio(capital, market, competition_q_min, ratio, scoring)
        if placement.expected_daily_reward > best.expected_daily_reward:
            best = placement
    return best


def compare_markets(
    capital: float,
    markets: Sequence[tuple[Market, float]],
    scoring: ScoringParams = DEFAULT_SCORING,
) -> list[tuple[Market, StaticPlacement, float]]:
    """Balanced placement per ``(market, competition_q_min)``, sorted by daily ROI."""
    results = []
    for market, competition in markets:
        placement = optimize_order_placement(capital, market, competition, scoring)
        roi = placement.expected_daily_reward / capital if capital > 0 else 0.0
        results.append((market, placement, roi))
    results.sort(key=lambda r: r[2], reverse=True)
    return results


def allocate_capital(
    total_capital: float,
    markets: Sequence[tuple[Market, float]],
    max_markets: int = 3,
    scoring: ScoringParams = DEFAULT_SCORING,
) -> list[CapitalAllocation]:
    """Split capital across the top markets in proportion to their ROI.

    Each selected market's placement is recomputed at its allocated capital
    against its own measured competition.
    """
    selected = compare_markets(total_capital, markets, scoring)[:max_markets]
    total_roi = sum(roi for _, _, roi in selected)
    competition = {id(m): c for m, c in markets}

    allocations = []
    for market, _, roi in selected:
        if total_roi > 0:
            share = roi / total_roi
        else:
            share = 1.0 / len(selected)
        allocation = total_capital * share
        placement = optimize_order_placement(
            allocation, market, competition[id(market)], scoring
        )
        allocations.append(CapitalAllocation(market=market, allocation=allocation, placement=placement))

    logger.debug(
        "placement.capital_allocated",
        total=total_capital,
        markets=len(allocations),
    )
    return allocations
