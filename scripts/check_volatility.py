"""Print volatility metrics and the spread floor for a market: python scripts/check_volatility.py <condition_id> [days]"""
import asyncio, sys, os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from lprewards.config import RewardsConfig
from lprewards.clients.clob import ClobMarketDataClient
from lprewards.scoring.volatility import (
    analyze_volatility,
    recommended_min_spread_ratio,
    volatility_level,
)

async def main(condition_id: str, days: int):
    config = RewardsConfig()
    clob = ClobMarketDataClient(config)
    await clob.connect()
    history = await clob.get_price_history(condition_id, days)
    await clob.close()

    m = analyze_volatility(history, config.volatility_params)
    print(f"\nPoints: {len(history)}")
    if history:
        prices = [p.price for p in history]
        print(f"Price range: {min(prices):.4f} - {max(prices):.4f}")
    print(f"Hourly std dev:   {m.hourly_std_dev:.4f}")
    print(f"Daily std dev:    {m.daily_std_dev:.4f}")
    print(f"Max hourly swing: {m.max_hourly_swing:.4f}")
    print(f"Max daily swing:  {m.max_daily_swing:.4f}")
    print(f"Score: {m.volatility_score:.1f} ({volatility_level(m.volatility_score).value})")
    print(f"Min spread ratio: {recommended_min_spread_ratio(m.volatility_score):.2f}")

if len(sys.argv) < 2:
    print(__doc__)
    sys.exit(1)
asyncio.run(main(sys.argv[1], int(sys.argv[2]) if len(sys.argv) > 2 else 7))
