"""Fill-risk model for resting orders, plus expected value and risk-adjusted return.

Price movement is treated as a diffusion with hourly volatility sigma. The
chance of the price travelling ``spread`` within ``t`` hours is approximated
by an exponential first-hitting time:

    lambda = (sigma / spread)^2
    P(fill) = 1 - exp(-lambda * t)

then damped by resting order-book depth and capped below certainty. The
constants are empirical heuristics; treat the output as a ranking signal
rather than a calibrated probability.
"""

from __future__ import annotations

import math

from lprewards.constants import (
    CONFIDENCE_HALF_WIDTH,
    DEPTH_NORMALIZER_SHARES,
    FALLBACK_CONFIDENCE_HALF_WIDTH,
    HOURS_PER_DAY,
    MAX_DEPTH_DAMPING,
    MAX_FILL_PROBABILITY,
    FillRisk,
)
from lprewards.types import ConfidenceInterval, FillProbabilityModel, VolatilityMetrics
from lprewards.utils.math import clamp

# Conservative fallback: (spread upper bound, base probability, slope per 30 days)
_FALLBACK_BANDS: tuple[tuple[float, float, float], ...] = (
    (0.01, 0.50, 0.30),
    (0.02, 0.30, 0.25),
    (0.03, 0.15, 0.20),
)
_FALLBACK_WIDE = (0.05, 0.15)


def fill_probability(
    spread: float,
    volatility: VolatilityMetrics,
    order_book_depth: float,
    time_horizon: float = 30.0,
) -> FillProbabilityModel:
    """Probability that an order ``spread`` away from the midpoint fills.

    Args:
        spread: Absolute distance from midpoint (0.015 = 1.5c).
        volatility: Metrics from ``analyze_volatility``.
        order_book_depth: Shares resting on the same side of the book.
        time_horizon: Days to project forward.
    """
    if spread <= 0:
        # At or through the midpoint: marketable immediately
        return FillProbabilityModel(
            probability=1.0,
            expected_time_to_fill=0.0,
            confidence_interval=ConfidenceInterval(lower=1.0, upper=1.0),
            risk_level=FillRisk.VERY_HIGH,
        )

    if volatility.volatility_score == 0:
        return _conservative_estimate(spread, time_horizon)

    hours = time_horizon * HOURS_PER_DAY
    sigma = volatility.hourly_std_dev
    lam = (sigma / spread) ** 2 if sigma > 0 else 0.0

    base = 1.0 - math.exp(-lam * hours)
    probability = min(base * depth_adjustment(order_book_depth), MAX_FILL_PROBABILITY)

    expected_time = hours
    if lam > 0 and probability < MAX_FILL_PROBABILITY:
        expected_time = -math.log(1.0 - probability) / lam

    return FillProbabilityModel(
        probability=probability,
        expected_time_to_fill=expected_time,
        confidence_interval=_band(probability, CONFIDENCE_HALF_WIDTH),
        risk_level=classify_fill_risk(probability),
    )


def depth_adjustment(order_book_depth: float) -> float:
    """Damping factor in [0.5, 1.0]; deeper books resist price movement."""
    normalized = min(max(order_book_depth, 0.0) / DEPTH_NORMALIZER_SHARES, 1.0)
    return max(1.0 - MAX_DEPTH_DAMPING * normalized, 1.0 - MAX_DEPTH_DAMPING)


def _conservative_estimate(spread: float, time_horizon: float) -> FillProbabilityModel:
    """Spread-banded estimate used when no volatility data is available."""
    base, slope = _FALLBACK_WIDE
    for upper, band_base, band_slope in _FALLBACK_BANDS:
        if spread < upper:
            base, slope = band_base, band_slope
            break
    probability = min(base + (time_horizon / 30.0) * slope, MAX_FILL_PROBABILITY)

    return FillProbabilityModel(
        probability=probability,
        expected_time_to_fill=time_horizon * HOURS_PER_DAY * (1.0 - probability),
        confidence_interval=_band(probability, FALLBACK_CONFIDENCE_HALF_WIDTH),
        risk_level=classify_fill_risk(probability),
    )


def _band(probability: float, half_width: float) -> ConfidenceInterval:
    return ConfidenceInterval(
        lower=clamp(probability - half_width, 0.0, 1.0),
        upper=clamp(probability + half_width, 0.0, 1.0),
    )


def classify_fill_risk(probability: float) -> FillRisk:
    if probability < 0.10:
        return FillRisk.LOW
    if probability < 0.25:
        return FillRisk.MEDIUM
    if probability < 0.50:
        return FillRisk.HIGH
    return FillRisk.VERY_HIGH


def expected_value(
    daily_reward: float,
    fill_probability: float,
    capital: float,
    time_horizon: float = 30.0,
    transaction_cost_rate: float = 0.02,
) -> float:
    """Reward over the days the order is expected to rest, less expected fill cost.

    EV = daily_reward * horizon * (1 - p) - capital * cost_rate * p
    """
    expected_days_active = time_horizon * (1.0 - fill_probability)
    expected_loss = capital * transaction_cost_rate * fill_probability
    return daily_reward * expected_days_active - expected_loss


def risk_adjusted_return(
    expected_value: float, capital: float, fill_probability: float
) -> float:
    """EV per unit of capital, discounted by a factor from 0.5 (no fill risk) to 2.0."""
    if capital <= 0:
        return 0.0
    risk_factor = 0.5 + 1.5 * fill_probability
    return expected_value / (capital * risk_factor)
