"""Shared utility functions."""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from zoneinfo import ZoneInfo


def utc_now() -> datetime:
    """Return aware UTC datetime."""
    return datetime.now(timezone.utc)


def sunday_based_weekday(day: date) -> int:
    """Return day of week where 0 is Sunday and 6 is Saturday."""
    return (day.weekday() + 1) % 7


def local_instant(day: date, at: time, tz_name: str) -> datetime:
    """Combine calendar date and wall-clock time in a timezone into a UTC instant."""
    return datetime.combine(day, at, tzinfo=ZoneInfo(tz_name)).astimezone(timezone.utc)
