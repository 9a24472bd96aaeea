"""Batch run: discover reward markets, measure competition, optimize spreads."""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from lprewards.clients.clob import ClobMarketDataClient, gather_books
from lprewards.config import RewardsConfig
from lprewards.constants import OrderType
from lprewards.reporting.formatter import format_optimization_result, format_ranking
from lprewards.scoring.calculator import calculate_total_competition_q_min
from lprewards.scoring.spread_optimizer import optimize_markets
from lprewards.types import MarketCandidate, OptimalPlacement, Order

logger = structlog.get_logger(__name__)


def bid_depth(orders: Sequence[Order]) -> float:
    """Shares resting on the bid side of a YES book."""
    return sum(o.size for o in orders if o.type == OrderType.BID)


async def collect_candidates(
    client: ClobMarketDataClient,
    raw_markets: Sequence[dict],
    config: RewardsConfig,
) -> list[MarketCandidate]:
    """Turn raw reward markets into candidates with measured competition and depth."""
    markets = []
    token_ids = []
    for raw in raw_markets:
        market = client.to_market(raw)
        token_id = client.yes_token_id(raw)
        if market is None or token_id is None:
            continue
        markets.append(market)
        token_ids.append(token_id)
        if len(markets) >= config.max_markets:
            break

    books = await gather_books(client, token_ids)
    candidates = []
    for market, book in zip(markets, books):
        competition = calculate_total_competition_q_min(book, market, config.scoring_params)
        depth = bid_depth(book) if book else None
        candidates.append(MarketCandidate(
            market=market, competition_q_min=competition, order_book_depth=depth,
        ))
        logger.debug(
            "runner.candidate",
            market=market.condition_id[:12],
            midpoint=market.midpoint,
            competition=round(competition, 2),
            depth=depth,
        )
    return candidates


async def run(config: RewardsConfig) -> list[OptimalPlacement]:
    """One full pass over the current reward markets; prints a ranked report."""
    client = ClobMarketDataClient(config)
    await client.connect()
    try:
        raw_markets = await client.get_reward_markets()
        candidates = await collect_candidates(client, raw_markets, config)
        logger.info("runner.candidates_ready", count=len(candidates))

        results = await optimize_markets(
            candidates,
            config.capital_usd,
            client,
            config.spread_options,
            config.scoring_params,
            config.volatility_params,
            config.lookback_days,
        )
    finally:
        await client.close()

    questions = {c.market.condition_id: c.market.question for c in candidates}
    print(format_ranking(results, questions))
    if results:
        best = results[0]
        print()
        print(format_optimization_result(best, questions.get(best.condition_id, "")))
    return results
