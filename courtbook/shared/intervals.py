"""Half-open time-of-day intervals shared by scheduling and booking.

An interval ``[start, end)`` lives inside a single calendar day. Two intervals
conflict iff ``a.start < b.end and b.start < a.end``; touching endpoints
(09:00-10:00 and 10:00-11:00) never conflict.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import time
from typing import Annotated

from pydantic import BeforeValidator, Field

from courtbook.shared.exceptions import ValidationException

_HHMM_PATTERN = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")


def parse_hhmm(value: str | time) -> time:
    """Parse ``HH:MM`` wall-clock string into ``time``."""
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    match = _HHMM_PATTERN.match(value.strip()) if isinstance(value, str) else None
    if match is None:
        raise ValidationException(f"Invalid time {value!r}, expected HH:MM")
    return time(hour=int(match.group(1)), minute=int(match.group(2)))


def format_hhmm(value: time) -> str:
    return value.strftime("%H:%M")


def _minutes(value: time) -> int:
    return value.hour * 60 + value.minute


@dataclass(frozen=True, slots=True, order=True)
class TimeInterval:
    """Half-open ``[start, end)`` range of wall-clock time."""

    start: time
    end: time

    def __post_init__(self) -> None:
        if self.start >= self.end:
            raise ValidationException(
                f"Interval end {format_hhmm(self.end)} must be after start {format_hhmm(self.start)}",
            )

    @classmethod
    def parse(cls, start: str | time | None, end: str | time | None) -> "TimeInterval":
        if start is None or end is None:
            raise ValidationException("Both start_time and end_time are required")
        return cls(parse_hhmm(start), parse_hhmm(end))

    @property
    def duration_minutes(self) -> int:
        return _minutes(self.end) - _minutes(self.start)

    def overlaps(self, other: "TimeInterval") -> bool:
        return self.start < other.end and other.start < self.end

    def __str__(self) -> str:
        return f"{format_hhmm(self.start)}-{format_hhmm(self.end)}"


def first_overlap(candidate: TimeInterval, intervals: Iterable[TimeInterval]) -> TimeInterval | None:
    """Return the first interval overlapping ``candidate``, if any."""
    for interval in intervals:
        if candidate.overlaps(interval):
            return interval
    return None


def find_internal_overlap(intervals: Iterable[TimeInterval]) -> tuple[TimeInterval, TimeInterval] | None:
    """Return a pair of overlapping intervals from one collection, if any."""
    ordered = sorted(intervals)
    for previous, current in zip(ordered, ordered[1:]):
        if previous.overlaps(current):
            return previous, current
    return None


def _coerce_clock_value(value: object) -> object:
    if isinstance(value, time):
        return format_hhmm(value)
    return value


ClockTime = Annotated[
    str,
    BeforeValidator(_coerce_clock_value),
    Field(
        pattern=_HHMM_PATTERN.pattern,
        examples=["09:00"],
        description=(
            "Wall-clock time HH:MM between 00:00 and 23:59. Intervals stay within one "
            "calendar day, so the latest possible end time is 23:59."
        ),
    ),
]
