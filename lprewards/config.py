"""Optimizer configuration using Pydantic Settings, loaded from the environment and .env."""

from __future__ import annotations

import structlog
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

from lprewards.constants import (
    CLOB_HOST,
    DEFAULT_LOG_LEVEL,
    DEFAULT_REQUEST_TIMEOUT_SEC,
    LENIENT_MIDPOINT_HIGH,
    LENIENT_MIDPOINT_LOW,
    MIN_SPREAD_STEP,
    SCALING_FACTOR,
)
from lprewards.types import ScoringParams, SpreadOptions, VolatilityParams

logger = structlog.get_logger()


class RewardsConfig(BaseSettings):
    """Central configuration for reward scoring and spread optimization.

    All values can be set via environment variables with LPR_ prefix.
    E.g., LPR_CAPITAL_USD, LPR_SCALING_FACTOR, etc.
    """

    # === API ===
    clob_host: str = CLOB_HOST
    request_timeout_sec: float = DEFAULT_REQUEST_TIMEOUT_SEC

    # === Batch Run ===
    capital_usd: float = Field(default=100.0, gt=0, description="Capital per market")
    max_markets: int = 10
    min_daily_reward: float = 1.0  # Skip markets paying less per day
    lookback_days: int = 7

    # === Reward Formula ===
    scaling_factor: float = SCALING_FACTOR
    lenient_midpoint_low: float = LENIENT_MIDPOINT_LOW
    lenient_midpoint_high: float = LENIENT_MIDPOINT_HIGH

    # === Volatility Score ===
    vol_hourly_weight: float = 60.0
    vol_hourly_cap: float = 0.05
    vol_daily_weight: float = 20.0
    vol_daily_cap: float = 0.10
    vol_swing_weight: float = 20.0
    vol_swing_cap: float = 0.10

    # === Spread Search ===
    time_horizon_days: float = 30.0
    min_spread_ratio: float = 0.25
    max_spread_ratio: float = 0.80
    spread_step: float = 0.05
    transaction_cost_rate: float = 0.02
    order_book_depth: float = 50_000.0

    # === Logging ===
    log_level: str = DEFAULT_LOG_LEVEL

    model_config = {
        "env_file": ".env",
        "env_prefix": "LPR_",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
    }

    @model_validator(mode="after")
    def _check_calibration(self) -> "RewardsConfig":
        """Reject settings the optimizer cannot search over."""
        if self.spread_step < MIN_SPREAD_STEP:
            raise ValueError(f"spread_step must be at least {MIN_SPREAD_STEP}")
        if self.min_spread_ratio > self.max_spread_ratio:
            raise ValueError("min_spread_ratio must not exceed max_spread_ratio")
        if self.scaling_factor <= 0:
            raise ValueError("scaling_factor must be positive")
        if self.lenient_midpoint_low > self.lenient_midpoint_high:
            logger.warning(
                "config.empty_lenient_band",
                low=self.lenient_midpoint_low,
                high=self.lenient_midpoint_high,
            )
        return self

    @property
    def scoring_params(self) -> ScoringParams:
        return ScoringParams(
            scaling_factor=self.scaling_factor,
            lenient_midpoint_low=self.lenient_midpoint_low,
            lenient_midpoint_high=self.lenient_midpoint_high,
        )

    @property
    def volatility_params(self) -> VolatilityParams:
        return VolatilityParams(
            hourly_weight=self.vol_hourly_weight,
            hourly_cap=self.vol_hourly_cap,
            daily_weight=self.vol_daily_weight,
            daily_cap=self.vol_daily_cap,
            swing_weight=self.vol_swing_weight,
            swing_cap=self.vol_swing_cap,
        )

    @property
    def spread_options(self) -> SpreadOptions:
        """Search options for the dynamic spread optimizer."""
        return SpreadOptions(
            time_horizon=self.time_horizon_days,
            min_spread_ratio=self.min_spread_ratio,
            max_spread_ratio=self.max_spread_ratio,
            spread_step=self.spread_step,
            transaction_cost_rate=self.transaction_cost_rate,
            order_book_depth=self.order_book_depth,
        )
