"""UTC time helpers for price-history rows and report headers."""

from __future__ import annotations

from datetime import datetime, timezone


def from_unix(seconds: float) -> datetime:
    """Convert a Unix timestamp (seconds) to an aware UTC datetime."""
    return datetime.fromtimestamp(float(seconds), tz=timezone.utc)


def report_timestamp(dt: datetime | None = None) -> str:
    """Minute-resolution UTC stamp, e.g. '2024-01-01 12:00 UTC'."""
    if dt is None:
        dt = datetime.now(timezone.utc)
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
