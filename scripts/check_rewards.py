"""List reward markets with a quick fixed-ratio placement for the configured capital."""
import asyncio, sys, os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from lprewards.config import RewardsConfig
from lprewards.clients.clob import ClobMarketDataClient
from lprewards.scoring.placement import optimize_advanced

async def main():
    config = RewardsConfig()
    clob = ClobMarketDataClient(config)
    await clob.connect()

    raw_markets = await clob.get_reward_markets()
    markets = [m for m in (clob.to_market(r) for r in raw_markets) if m is not None]

    print(f"\nReward markets (>= ${config.min_daily_reward}/day): {len(markets)}")
    print(f"Capital per market: ${config.capital_usd:.2f}  (competition assumed 0)")
    print(f"\n{'Market':<55} {'$/day':>6} {'Mid':>5} {'MaxSprd':>8} {'MinSz':>6} {'Ratio':>6} {'Qmin':>8}")
    print("-" * 100)
    for m in markets[:30]:
        p = optimize_advanced(config.capital_usd, m, 0.0, config.scoring_params)
        print(f"{m.question[:53]:<55} ${m.reward_pool:>5.0f} {m.midpoint:>5.2f} {m.max_spread:>8.3f} "
              f"{m.min_size:>6.0f} {p.spread_ratio:>6.2f} {p.expected_q_score.q_min:>8.1f}")

    await clob.close()

asyncio.run(main())
