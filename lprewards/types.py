"""Immutable value types shared by the scoring core and its collaborators."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from lprewards.constants import (
    DAILY_STRIDE,
    HOURLY_STRIDE,
    LENIENT_MIDPOINT_HIGH,
    LENIENT_MIDPOINT_LOW,
    SCALING_FACTOR,
    FillRisk,
    OrderType,
    OutcomeSide,
)


@dataclass(frozen=True)
class Market:
    """Snapshot of one binary market and its reward-program configuration."""
    midpoint: float         # YES fair value, in (0, 1)
    max_spread: float       # Max qualifying distance from midpoint (0.03 = 3c)
    min_size: float         # Minimum shares for an order to qualify
    reward_pool: float      # Daily reward amount (USD)
    condition_id: str = ""
    question: str = ""


@dataclass(frozen=True)
class Order:
    """A single resting limit order."""
    price: float
    size: float
    side: OutcomeSide
    type: OrderType


@dataclass(frozen=True)
class QScore:
    q_one: float   # YES bids + NO asks
    q_two: float   # YES asks + NO bids
    q_min: float   # Combined score that determines reward share


@dataclass(frozen=True)
class RewardEstimate:
    user_share: float
    daily_reward: float
    monthly_reward: float
    annualized_apy: float | None = None  # None when no capital was given


@dataclass(frozen=True)
class CalculationCheck:
    is_valid: bool
    error: float
    error_percent: float


@dataclass(frozen=True)
class ScoringParams:
    """Calibration of the Q_min combination rule."""
    scaling_factor: float = SCALING_FACTOR
    lenient_midpoint_low: float = LENIENT_MIDPOINT_LOW
    lenient_midpoint_high: float = LENIENT_MIDPOINT_HIGH


@dataclass(frozen=True)
class PricePoint:
    timestamp: datetime
    price: float


@dataclass(frozen=True)
class VolatilityParams:
    """Weights (points out of 100) and saturation caps of the volatility score."""
    hourly_weight: float = 60.0
    hourly_cap: float = 0.05
    daily_weight: float = 20.0
    daily_cap: float = 0.10
    swing_weight: float = 20.0
    swing_cap: float = 0.10
    hourly_stride: int = HOURLY_STRIDE
    daily_stride: int = DAILY_STRIDE


@dataclass(frozen=True)
class VolatilityMetrics:
    hourly_std_dev: float = 0.0
    daily_std_dev: float = 0.0
    max_hourly_swing: float = 0.0
    max_daily_swing: float = 0.0
    volatility_score: float = 0.0   # 0 = very stable (or unknown), 100 = extreme
    price_history: tuple[PricePoint, ...] = ()


@dataclass(frozen=True)
class ConfidenceInterval:
    lower: float
    upper: float


@dataclass(frozen=True)
class FillProbabilityModel:
    probability: float
    expected_time_to_fill: float   # hours
    confidence_interval: ConfidenceInterval
    risk_level: FillRisk


@dataclass(frozen=True)
class SpreadOptions:
    time_horizon: float = 30.0          # days
    min_spread_ratio: float = 0.25
    max_spread_ratio: float = 0.80
    spread_step: float = 0.05
    transaction_cost_rate: float = 0.02
    order_book_depth: float = 50_000.0  # shares


@dataclass(frozen=True)
class OrderQuote:
    price: float
    size: float


@dataclass(frozen=True)
class OptimalPlacement:
    """Recommended two-sided quote from the dynamic spread search."""
    buy_order: OrderQuote    # buy YES
    sell_order: OrderQuote   # buy NO (sell-side liquidity)
    expected_q_score: QScore
    expected_daily_reward: float
    capital_efficiency: float
    fill_probability: float
    expected_value: float
    risk_adjusted_return: float
    volatility_score: float
    optimal_spread_ratio: float
    optimal_spread: float = 0.0
    volatility: VolatilityMetrics = field(default_factory=VolatilityMetrics)
    fill_model: FillProbabilityModel | None = None
    condition_id: str = ""


@dataclass(frozen=True)
class StaticPlacement:
    """Two-sided quote at a fixed spread ratio, scored on reward alone."""
    buy_order: OrderQuote
    sell_order: OrderQuote
    expected_q_score: QScore
    expected_daily_reward: float
    capital_efficiency: float
    spread_ratio: float


@dataclass(frozen=True)
class MarketCandidate:
    """A market queued for dynamic spread optimization."""
    market: Market
    competition_q_min: float
    order_book_depth: float | None = None   # falls back to SpreadOptions default


@dataclass(frozen=True)
class MarketRecord:
    """Stored market snapshot with activity figures used for competition estimates."""
    market: Market
    liquidity: float = 0.0
    volume: float = 0.0


@dataclass(frozen=True)
class MarketOpportunity:
    condition_id: str
    question: str
    reward_pool: float
    estimated_competition: float
    estimated_daily_reward: float
    capital_efficiency: float
    roi: float   # annualized, percent
    competition_level: str
    recommended_capital: float


@dataclass(frozen=True)
class CapitalAllocation:
    market: Market
    allocation: float
    placement: StaticPlacement
