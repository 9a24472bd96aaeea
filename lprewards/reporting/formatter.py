"""Text summaries of optimization results for logs and the console."""

from __future__ import annotations

from collections.abc import Sequence

from lprewards.scoring.volatility import volatility_level
from lprewards.types import MarketOpportunity, OptimalPlacement
from lprewards.utils.time import report_timestamp


def format_optimization_result(result: OptimalPlacement, question: str = "") -> str:
    """Multi-line summary of one dynamic spread optimization."""
    vol = result.volatility
    fill = result.fill_model
    days_to_fill = fill.expected_time_to_fill / 24 if fill else 0.0

    lines = [
        "Optimal Spread Optimization Result",
        "===================================",
        f"Market: {question[:60]}" if question else None,
        "",
        f"Market Volatility: {volatility_level(result.volatility_score).value} "
        f"(Score: {result.volatility_score:.1f}/100)",
        f"- Hourly Std Dev: {vol.hourly_std_dev * 100:.2f}%",
        f"- Max Hourly Swing: {vol.max_hourly_swing * 100:.2f}%",
        "",
        f"Optimal Spread: {result.optimal_spread * 100:.2f}c "
        f"({result.optimal_spread_ratio * 100:.0f}% of max spread)",
        "",
        "Fill Risk Assessment:",
        f"- Fill Probability: {result.fill_probability * 100:.1f}%",
        f"- Risk Level: {fill.risk_level.value}" if fill else None,
        f"- Expected Time to Fill: {days_to_fill:.1f} days",
        "",
        "Expected Returns:",
        f"- Daily Reward: ${result.expected_daily_reward:.2f}",
        f"- Expected Value: ${result.expected_value:.2f}",
        f"- Risk-Adjusted Return: {result.risk_adjusted_return * 100:.2f}%",
        "",
        "Recommended Orders:",
        f"  1. YES BID @ ${result.buy_order.price:.4f} x {result.buy_order.size:.0f} shares",
        f"  2. NO BID @ ${result.sell_order.price:.4f} x {result.sell_order.size:.0f} shares",
    ]
    return "\n".join(line for line in lines if line is not None)


def format_ranking(results: Sequence[OptimalPlacement], questions: dict[str, str] | None = None) -> str:
    """One line per market, in the given (ranked) order."""
    questions = questions or {}
    header = f"{'Market':<42} {'Ratio':>5} {'$/day':>7} {'Fill':>6} {'EV':>8} {'RAR':>7}"
    lines = [f"Ranked at {report_timestamp()}", header, "-" * len(header)]
    for r in results:
        name = questions.get(r.condition_id, r.condition_id)[:40]
        lines.append(
            f"{name:<42} {r.optimal_spread_ratio:>5.2f} {r.expected_daily_reward:>7.2f} "
            f"{r.fill_probability:>6.1%} {r.expected_value:>8.2f} {r.risk_adjusted_return:>7.2%}"
        )
    return "\n".join(lines)


def format_opportunities(opportunities: Sequence[MarketOpportunity]) -> str:
    lines = []
    for i, o in enumerate(opportunities, 1):
        lines.append(
            f"{i}. {o.question[:50]} | pool ${o.reward_pool:.0f}/day | "
            f"~${o.estimated_daily_reward:.2f}/day | ROI {o.roi:.1f}% | "
            f"competition {o.competition_level} | min capital ${o.recommended_capital:.0f}"
        )
    return "\n".join(lines)
