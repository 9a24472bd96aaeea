"""Volatility analysis of an hourly price series."""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from lprewards.constants import VolatilityLevel
from lprewards.types import PricePoint, VolatilityMetrics, VolatilityParams
from lprewards.utils.math import max_abs, population_std_dev, strided_differences

logger = structlog.get_logger(__name__)

DEFAULT_VOLATILITY = VolatilityParams()

# (upper score bound, minimum spread ratio of max spread)
_MIN_SPREAD_BANDS: tuple[tuple[float, float], ...] = (
    (20.0, 0.25),
    (40.0, 0.35),
    (60.0, 0.45),
    (80.0, 0.60),
)
_MIN_SPREAD_CEILING = 0.80


def analyze_volatility(
    price_history: Sequence[PricePoint],
    params: VolatilityParams = DEFAULT_VOLATILITY,
) -> VolatilityMetrics:
    """Summarize an ordered hourly price series.

    Hourly changes use a 1-step stride and daily changes a 24-step stride.
    With fewer than two points an all-zero result is returned; callers see
    score 0 for both "calm" and "unknown".
    """
    if len(price_history) < 2:
        logger.debug("volatility.insufficient_data", points=len(price_history))
        return VolatilityMetrics()

    prices = [p.price for p in price_history]
    hourly_changes = strided_differences(prices, params.hourly_stride)
    daily_changes = strided_differences(prices, params.daily_stride)

    hourly_std_dev = population_std_dev(hourly_changes)
    daily_std_dev = population_std_dev(daily_changes)
    max_hourly_swing = max_abs(hourly_changes)
    max_daily_swing = max_abs(daily_changes)

    return VolatilityMetrics(
        hourly_std_dev=hourly_std_dev,
        daily_std_dev=daily_std_dev,
        max_hourly_swing=max_hourly_swing,
        max_daily_swing=max_daily_swing,
        volatility_score=volatility_score(
            hourly_std_dev, daily_std_dev, max_hourly_swing, params
        ),
        price_history=tuple(price_history),
    )


def volatility_score(
    hourly_std_dev: float,
    daily_std_dev: float,
    max_hourly_swing: float,
    params: VolatilityParams = DEFAULT_VOLATILITY,
) -> float:
    """Blend three capped components into a 0-100 score.

    Each component saturates at its cap before weighting, so one outlier
    can add at most its own weight.
    """
    hourly = min(hourly_std_dev / params.hourly_cap, 1.0) * params.hourly_weight
    daily = min(daily_std_dev / params.daily_cap, 1.0) * params.daily_weight
    swing = min(max_hourly_swing / params.swing_cap, 1.0) * params.swing_weight
    return min(max(hourly + daily + swing, 0.0), 100.0)


def volatility_level(score: float) -> VolatilityLevel:
    if score < 20:
        return VolatilityLevel.VERY_STABLE
    if score < 40:
        return VolatilityLevel.STABLE
    if score < 60:
        return VolatilityLevel.MODERATE
    if score < 80:
        return VolatilityLevel.VOLATILE
    return VolatilityLevel.EXTREMELY_VOLATILE


def recommended_min_spread_ratio(score: float) -> float:
    """Minimum spread, as a fraction of max spread, that is safe at this volatility."""
    for upper, ratio in _MIN_SPREAD_BANDS:
        if score < upper:
            return ratio
    return _MIN_SPREAD_CEILING
