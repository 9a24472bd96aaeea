"""Dynamic spread optimizer.

Ties the pieces together for one market:

1. Volatility metrics from the market's price history.
2. A spread floor from the volatility score.
3. A fixed-step scan over spread ratios (fraction of max spread). Each
   candidate builds a symmetric YES/NO bid pair, scores it, projects the
   daily reward, estimates fill risk and computes expected value.
4. The candidate with the highest expected value wins; risk-adjusted
   return is reported alongside it.

The scan is deliberately coarse and bounded: expected value is not
guaranteed to be unimodal in the spread, so a convergent search could stop
on a local peak.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from typing import Protocol

import structlog

from lprewards.constants import (
    FALLBACK_SPREAD_RATIO,
    GRID_TOLERANCE,
    MAX_ORDER_PRICE,
    MIN_ORDER_PRICE,
    MIN_SPREAD_STEP,
    OrderType,
    OutcomeSide,
)
from lprewards.scoring.calculator import DEFAULT_SCORING, estimate_reward, score_orders
from lprewards.scoring.fill_probability import (
    expected_value,
    fill_probability,
    risk_adjusted_return,
)
from lprewards.scoring.volatility import (
    DEFAULT_VOLATILITY,
    analyze_volatility,
    recommended_min_spread_ratio,
)
from lprewards.types import (
    Market,
    MarketCandidate,
    OptimalPlacement,
    Order,
    OrderQuote,
    PricePoint,
    ScoringParams,
    SpreadOptions,
    VolatilityMetrics,
    VolatilityParams,
)
from lprewards.utils.math import clamp

logger = structlog.get_logger(__name__)

DEFAULT_OPTIONS = SpreadOptions()


class PriceHistoryProvider(Protocol):
    """Market-data collaborator: best-effort series, empty on failure, never raises."""

    async def get_price_history(
        self, condition_id: str, lookback_days: int = 7
    ) -> list[PricePoint]: ...


# ------------------------------------------------------------------
# Grid helpers
# ------------------------------------------------------------------


def spread_grid(min_ratio: float, max_ratio: float, step: float) -> list[float]:
    """Ratios ``min_ratio, min_ratio + step, ...`` up to and including ``max_ratio``.

    Ratios are computed by index rather than accumulation so the end point
    is not lost to float drift. Positive steps finer than MIN_SPREAD_STEP
    are widened to it so the scan stays bounded.
    """
    if min_ratio > max_ratio + GRID_TOLERANCE:
        return []
    if step <= 0:
        return [min_ratio]
    step = max(step, MIN_SPREAD_STEP)
    ratios = []
    i = 0
    while True:
        ratio = round(min_ratio + i * step, 10)
        if ratio > max_ratio + GRID_TOLERANCE:
            break
        ratios.append(ratio)
        i += 1
    return ratios


def find_optimal_spread(
    min_ratio: float,
    max_ratio: float,
    step: float,
    evaluator: Callable[[float], float],
) -> float:
    """Ratio on the grid with the highest evaluator value (first one wins ties)."""
    best_ratio = min_ratio
    best_value = float("-inf")
    for ratio in spread_grid(min_ratio, max_ratio, step):
        value = evaluator(ratio)
        if value > best_value:
            best_value = value
            best_ratio = ratio
    return best_ratio


def build_two_sided_orders(capital: float, market: Market, spread: float) -> list[Order]:
    """Split capital 50/50 into a YES bid below and a NO bid mirroring above the midpoint."""
    per_side = capital / 2
    yes_price = clamp(market.midpoint - spread, MIN_ORDER_PRICE, MAX_ORDER_PRICE)
    no_price = clamp(1.0 - (market.midpoint + spread), MIN_ORDER_PRICE, MAX_ORDER_PRICE)
    return [
        Order(price=yes_price, size=per_side / yes_price, side=OutcomeSide.YES, type=OrderType.BID),
        Order(price=no_price, size=per_side / no_price, side=OutcomeSide.NO, type=OrderType.BID),
    ]


# ------------------------------------------------------------------
# Single-market optimization
# ------------------------------------------------------------------


def evaluate_spread_ratio(
    ratio: float,
    market: Market,
    capital: float,
    volatility: VolatilityMetrics,
    competition_q_min: float,
    options: SpreadOptions = DEFAULT_OPTIONS,
    scoring: ScoringParams = DEFAULT_SCORING,
    order_book_depth: float | None = None,
) -> OptimalPlacement:
    """Build, score and risk-assess the quote pair at one spread ratio."""
    depth = options.order_book_depth if order_book_depth is None else order_book_depth
    spread = market.max_spread * ratio
    buy, sell = build_two_sided_orders(capital, market, spread)

    q_score = score_orders([buy, sell], market, scoring)
    reward = estimate_reward(
        q_score.q_min, competition_q_min + q_score.q_min, market.reward_pool
    )
    fill = fill_probability(spread, volatility, depth, options.time_horizon)
    ev = expected_value(
        reward.daily_reward,
        fill.probability,
        capital,
        options.time_horizon,
        options.transaction_cost_rate,
    )

    return OptimalPlacement(
        buy_order=OrderQuote(price=buy.price, size=buy.size),
        sell_order=OrderQuote(price=sell.price, size=sell.size),
        expected_q_score=q_score,
        expected_daily_reward=reward.daily_reward,
        capital_efficiency=reward.daily_reward / capital if capital > 0 else 0.0,
        fill_probability=fill.probability,
        expected_value=ev,
        risk_adjusted_return=risk_adjusted_return(ev, capital, fill.probability),
        volatility_score=volatility.volatility_score,
        optimal_spread_ratio=ratio,
        optimal_spread=spread,
        volatility=volatility,
        fill_model=fill,
        condition_id=market.condition_id,
    )


def optimize_spread(
    market: Market,
    capital: float,
    price_history: Sequence[PricePoint],
    competition_q_min: float,
    options: SpreadOptions = DEFAULT_OPTIONS,
    scoring: ScoringParams = DEFAULT_SCORING,
    volatility_params: VolatilityParams = DEFAULT_VOLATILITY,
    order_book_depth: float | None = None,
) -> OptimalPlacement:
    """Best-expected-value spread for a market given its price history.

    The scan never tests ratios below the volatility-implied floor. If the
    grid is empty (floor above ``max_spread_ratio``) the fallback ratio,
    raised to that same floor, is evaluated instead.
    """
    volatility = analyze_volatility(price_history, volatility_params)
    floor = recommended_min_spread_ratio(volatility.volatility_score)
    effective_min = max(options.min_spread_ratio, floor)

    def evaluate(ratio: float) -> OptimalPlacement:
        return evaluate_spread_ratio(
            ratio, market, capital, volatility, competition_q_min,
            options, scoring, order_book_depth,
        )

    best: OptimalPlacement | None = None
    for ratio in spread_grid(effective_min, options.max_spread_ratio, options.spread_step):
        candidate = evaluate(ratio)
        if best is None or candidate.expected_value > best.expected_value:
            best = candidate

    if best is None:
        fallback_ratio = max(FALLBACK_SPREAD_RATIO, floor)
        logger.info(
            "optimizer.empty_grid_fallback",
            market=market.condition_id[:12],
            effective_min=effective_min,
            max_ratio=options.max_spread_ratio,
            fallback_ratio=fallback_ratio,
        )
        best = evaluate(fallback_ratio)

    logger.debug(
        "optimizer.best_spread",
        market=market.condition_id[:12],
        ratio=best.optimal_spread_ratio,
        ev=round(best.expected_value, 4),
        fill_prob=round(best.fill_probability, 4),
        volatility=round(volatility.volatility_score, 1),
    )
    return best


# ------------------------------------------------------------------
# Async orchestration over the market-data provider
# ------------------------------------------------------------------


async def optimize_market(
    market: Market,
    capital: float,
    provider: PriceHistoryProvider,
    competition_q_min: float,
    options: SpreadOptions = DEFAULT_OPTIONS,
    scoring: ScoringParams = DEFAULT_SCORING,
    volatility_params: VolatilityParams = DEFAULT_VOLATILITY,
    order_book_depth: float | None = None,
    lookback_days: int = 7,
) -> OptimalPlacement:
    """Fetch the market's price history, then run ``optimize_spread``."""
    history = await provider.get_price_history(market.condition_id, lookback_days)
    return optimize_spread(
        market, capital, history, competition_q_min,
        options, scoring, volatility_params, order_book_depth,
    )


async def optimize_markets(
    candidates: Sequence[MarketCandidate],
    capital: float,
    provider: PriceHistoryProvider,
    options: SpreadOptions = DEFAULT_OPTIONS,
    scoring: ScoringParams = DEFAULT_SCORING,
    volatility_params: VolatilityParams = DEFAULT_VOLATILITY,
    lookback_days: int = 7,
) -> list[OptimalPlacement]:
    """Optimize every candidate concurrently, best risk-adjusted return first."""
    results = await asyncio.gather(*(
        optimize_market(
            c.market, capital, provider, c.competition_q_min,
            options, scoring, volatility_params, c.order_book_depth, lookback_days,
        )
        for c in candidates
    ))
    ranked = sorted(results, key=lambda r: r.risk_adjusted_return, reverse=True)
    logger.info("optimizer.markets_ranked", count=len(ranked))
    return ranked
