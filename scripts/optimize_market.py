"""Run the dynamic spread optimizer for one market: python scripts/optimize_market.py <condition_id>"""
import asyncio, sys, os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from lprewards.config import RewardsConfig
from lprewards.clients.clob import ClobMarketDataClient
from lprewards.reporting.formatter import format_optimization_result
from lprewards.runner import collect_candidates
from lprewards.scoring.spread_optimizer import optimize_market

async def main(condition_id: str):
    config = RewardsConfig()
    clob = ClobMarketDataClient(config)
    await clob.connect()
    try:
        raw_markets = await clob.get_reward_markets()
        raw = [r for r in raw_markets if r["condition_id"] == condition_id]
        if not raw:
            print(f"No reward market found for {condition_id}")
            return
        candidates = await collect_candidates(clob, raw, config)
        if not candidates:
            print(f"Market {condition_id} has no usable midpoint")
            return
        c = candidates[0]
        result = await optimize_market(
            c.market, config.capital_usd, clob, c.competition_q_min,
            config.spread_options, config.scoring_params, config.volatility_params,
            c.order_book_depth, config.lookback_days,
        )
        print(f"Competition Q_min: {c.competition_q_min:.1f}  Book depth: {c.order_book_depth}")
        print(format_optimization_result(result, c.market.question))
    finally:
        await clob.close()

if len(sys.argv) != 2:
    print(__doc__)
    sys.exit(1)
asyncio.run(main(sys.argv[1]))
