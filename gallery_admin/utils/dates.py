"""Datetime helpers."""
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes; treat them as UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def count_since(timestamps: Iterable[Optional[datetime]], days: int, now: Optional[datetime] = None) -> int:
    """Number of timestamps within the last `days` days."""
    cutoff = (now or utcnow()) - timedelta(days=days)
    return sum(1 for ts in timestamps if ts is not None and as_utc(ts) >= cutoff)
