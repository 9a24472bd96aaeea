"""Market opportunity analysis: which reward markets suit a given capital.

Competition is estimated from activity figures when the live order book is
not scored. Each LP is assumed to hold a Q_min of about 35.
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from lprewards.constants import DAYS_PER_YEAR, CompetitionLevel
from lprewards.scoring.calculator import DEFAULT_SCORING, score_orders
from lprewards.scoring.spread_optimizer import build_two_sided_orders
from lprewards.types import MarketOpportunity, MarketRecord, ScoringParams

logger = structlog.get_logger(__name__)

AVG_LP_Q_MIN = 35.0
CONSERVATIVE_SPREAD_RATIO = 0.80
ORDER_CAPITAL_BUFFER = 2.2  # both sides + 10%
COMPETITIVE_SHARE = 0.05
CAPITAL_FLEXIBILITY = 0.8


def estimate_market_competition(
    liquidity: float, volume: float, reward_pool: float
) -> float:
    """Estimated total Q_min of all LPs from liquidity, volume and pool size."""
    liquidity_factor = min(liquidity / 100_000, 10.0)
    volume_factor = min(volume / 1_000_000, 5.0)
    reward_factor = min(reward_pool / 100, 5.0)
    return (liquidity_factor + volume_factor + reward_factor) * AVG_LP_Q_MIN


def classify_competition(total_q_min: float) -> CompetitionLevel:
    if total_q_min < 50:
        return CompetitionLevel.LOW
    if total_q_min < 200:
        return CompetitionLevel.MEDIUM
    return CompetitionLevel.HIGH


def simulate_q_min(
    capital: float, record: MarketRecord, scoring: ScoringParams = DEFAULT_SCORING
) -> float:
    """Q_min of a conservative two-sided quote at 80% of max spread."""
    market = record.market
    orders = build_two_sided_orders(
        capital, market, market.max_spread * CONSERVATIVE_SPREAD_RATIO
    )
    return score_orders(orders, market, scoring).q_min


def analyze_market_opportunity(
    record: MarketRecord,
    capital: float,
    competition: float | None = None,
    scoring: ScoringParams = DEFAULT_SCORING,
) -> MarketOpportunity:
    """Projected reward and capital needs for one market.

    Args:
        record: Market snapshot with activity figures.
        capital: Capital to deploy.
        competition: Measured competing Q_min; estimated from activity if omitted.
    """
    market = record.market
    if competition is None:
        competition = estimate_market_competition(
            record.liquidity, record.volume, market.reward_pool
        )

    q_min = simulate_q_min(capital, record, scoring)
    total = competition + q_min
    share = q_min / total if total > 0 else 0.0
    daily_reward = share * market.reward_pool
    efficiency = daily_reward / capital if capital > 0 else 0.0

    recommended = max(
        market.min_size * market.midpoint * ORDER_CAPITAL_BUFFER,
        competition * COMPETITIVE_SHARE,
    )

    return MarketOpportunity(
        condition_id=market.condition_id,
        question=market.question,
        reward_pool=market.reward_pool,
        estimated_competition=competition,
        estimated_daily_reward=daily_reward,
        capital_efficiency=efficiency,
        roi=efficiency * DAYS_PER_YEAR * 100,
        competition_level=classify_competition(competition),
        recommended_capital=recommended,
    )


def analyze_best_markets_for_capital(
    records: Iterable[MarketRecord],
    capital: float,
    limit: int = 10,
    competition_by_market: dict[str, float] | None = None,
    scoring: ScoringParams = DEFAULT_SCORING,
) -> list[MarketOpportunity]:
    """Top markets by capital efficiency that this capital can compete in.

    A market qualifies when ``capital >= 0.8 * recommended_capital``.
    """
    measured = competition_by_market or {}
    opportunities = []
    scanned = 0
    for record in records:
        scanned += 1
        opp = analyze_market_opportunity(
            record, capital, measured.get(record.market.condition_id), scoring
        )
        if capital >= opp.recommended_capital * CAPITAL_FLEXIBILITY:
            opportunities.append(opp)

    opportunities.sort(key=lambda o: o.capital_efficiency, reverse=True)
    logger.info(
        "analyzer.opportunities",
        scanned=scanned,
        qualifying=len(opportunities),
        capital=capital,
    )
    return opportunities[:limit]
