"""Constants for the liquidity reward optimizer."""

from enum import StrEnum

# API Base URLs
CLOB_HOST = "https://clob.polymarket.com"

# Defaults
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_REQUEST_TIMEOUT_SEC = 10.0
PRICE_HISTORY_FIDELITY_MIN = 60  # hourly resolution
REWARD_MARKETS_PAGE_LIMIT = 30  # pagination safety limit

# Reward formula
SCALING_FACTOR = 3.0  # c: single-sided penalty divisor
LENIENT_MIDPOINT_LOW = 0.10
LENIENT_MIDPOINT_HIGH = 0.90
DAYS_PER_MONTH = 30
DAYS_PER_YEAR = 365

# Order price bounds for generated quotes
MIN_ORDER_PRICE = 0.01
MAX_ORDER_PRICE = 0.99

# Volatility change strides over an hourly series
HOURLY_STRIDE = 1
DAILY_STRIDE = 24

# Fill model
MAX_FILL_PROBABILITY = 0.95
DEPTH_NORMALIZER_SHARES = 100_000
MAX_DEPTH_DAMPING = 0.5
CONFIDENCE_HALF_WIDTH = 0.15
FALLBACK_CONFIDENCE_HALF_WIDTH = 0.20
HOURS_PER_DAY = 24

# Spread search
FALLBACK_SPREAD_RATIO = 0.35
GRID_TOLERANCE = 1e-9
MIN_SPREAD_STEP = 0.001  # bounds the scan to ~1000 ratios per unit range


class OutcomeSide(StrEnum):
    YES = "YES"
    NO = "NO"


class OrderType(StrEnum):
    BID = "BID"
    ASK = "ASK"


class FillRisk(StrEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    VERY_HIGH = "Very High"


class VolatilityLevel(StrEnum):
    VERY_STABLE = "Very Stable"
    STABLE = "Stable"
    MODERATE = "Moderate"
    VOLATILE = "Volatile"
    EXTREMELY_VOLATILE = "Extremely Volatile"


class CompetitionLevel(StrEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
