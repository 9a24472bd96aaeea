from datetime import datetime, timedelta, timezone

from lprewards.constants import OrderType, OutcomeSide
from lprewards.types import Market, Order, PricePoint, VolatilityMetrics

START = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_market(
    midpoint=0.50,
    max_spread=0.03,
    min_size=100.0,
    reward_pool=240.50,
    condition_id="0xmarket",
    question="Will it happen?",
):
    return Market(
        midpoint=midpoint,
        max_spread=max_spread,
        min_size=min_size,
        reward_pool=reward_pool,
        condition_id=condition_id,
        question=question,
    )


def yes_bid(price, size):
    return Order(price=price, size=size, side=OutcomeSide.YES, type=OrderType.BID)


def yes_ask(price, size):
    return Order(price=price, size=size, side=OutcomeSide.YES, type=OrderType.ASK)


def no_bid(price, size):
    return Order(price=price, size=size, side=OutcomeSide.NO, type=OrderType.BID)


def no_ask(price, size):
    return Order(price=price, size=size, side=OutcomeSide.NO, type=OrderType.ASK)


def hourly_history(prices, start=START):
    return [PricePoint(timestamp=start + timedelta(hours=i), price=p) for i, p in enumerate(prices)]


def zigzag(n, base=0.5, amplitude=0.01):
    """Prices alternating base+amplitude / base-amplitude: hourly changes of ±2*amplitude."""
    return [base + amplitude if i % 2 == 0 else base - amplitude for i in range(n)]


def vol_metrics(hourly_std_dev, score=10.0):
    return VolatilityMetrics(hourly_std_dev=hourly_std_dev, volatility_score=score)
