"""
CoachHub API - Date Helpers.

All stored timestamps are naive UTC datetimes, matching what the MongoDB
driver hands back.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional


def utcnow() -> datetime:
    """Current time as a naive UTC datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_naive_utc(value: datetime) -> datetime:
    """Normalize a client-supplied timestamp to naive UTC."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def start_of_month(now: Optional[datetime] = None) -> datetime:
    """First instant of the calendar month containing ``now``."""
    now = now or utcnow()
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def start_of_week(now: Optional[datetime] = None) -> datetime:
    """Monday 00:00 of the week containing ``now``."""
    now = now or utcnow()
    monday = now - timedelta(days=now.weekday())
    return monday.replace(hour=0, minute=0, second=0, microsecond=0)


def to_iso(value: Optional[datetime]) -> Optional[str]:
    """Serialize a stored timestamp for transport."""
    if value is None:
        return None
    return value.isoformat()
