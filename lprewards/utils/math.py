"""Mathematical utilities: clamping and dispersion of price changes."""

from __future__ import annotations

import statistics
from collections.abc import Sequence


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp value to [min_val, max_val] range."""
    return max(min_val, min(value, max_val))


def population_std_dev(values: Sequence[float]) -> float:
    """Population standard deviation (0.0 for fewer than 2 values)."""
    if len(values) < 2:
        return 0.0
    return statistics.pstdev(values)


def max_abs(values: Sequence[float]) -> float:
    """Largest absolute value in the sequence (0.0 when empty)."""
    return max((abs(v) for v in values), default=0.0)


def strided_differences(values: Sequence[float], stride: int) -> list[float]:
    """Differences ``values[i] - values[i - stride]`` for every valid i."""
    if stride <= 0:
        return []
    return [values[i] - values[i - stride] for i in range(stride, len(values))]
