from __future__ import annotations

from datetime import time

import pytest
from pydantic import BaseModel, ValidationError

from courtbook.shared.exceptions import ValidationException
from courtbook.shared.intervals import (
    ClockTime,
    TimeInterval,
    find_internal_overlap,
    first_overlap,
    parse_hhmm,
)


class _ClockPayload(BaseModel):
    at: ClockTime


def test_parse_hhmm_accepts_wall_clock_values() -> None:
    assert parse_hhmm("09:00") == time(9)
    assert parse_hhmm("7:05") == time(7, 5)
    assert parse_hhmm(time(23, 59, 30)) == time(23, 59)


@pytest.mark.parametrize("value", ["24:00", "9", "09:60", "nine", ""])
def test_parse_hhmm_rejects_malformed_values(value: str) -> None:
    with pytest.raises(ValidationException):
        parse_hhmm(value)


def test_interval_requires_start_before_end() -> None:
    with pytest.raises(ValidationException):
        TimeInterval(time(10), time(10))
    with pytest.raises(ValidationException):
        TimeInterval.parse("11:00", "10:00")
    with pytest.raises(ValidationException):
        TimeInterval.parse("10:00", None)


def test_half_open_overlap_rule() -> None:
    morning = TimeInterval.parse("09:00", "10:00")

    assert morning.overlaps(TimeInterval.parse("09:30", "10:30"))
    assert morning.overlaps(TimeInterval.parse("08:00", "11:00"))
    assert not morning.overlaps(TimeInterval.parse("10:00", "11:00"))
    assert not morning.overlaps(TimeInterval.parse("08:00", "09:00"))
    assert morning.duration_minutes == 60
    assert str(morning) == "09:00-10:00"


def test_overlap_helpers() -> None:
    intervals = [TimeInterval.parse("12:00", "13:00"), TimeInterval.parse("08:00", "09:00")]

    assert first_overlap(TimeInterval.parse("08:30", "08:45"), intervals) == intervals[1]
    assert first_overlap(TimeInterval.parse("09:00", "12:00"), intervals) is None
    assert find_internal_overlap(intervals) is None

    clash = TimeInterval.parse("12:30", "14:00")
    assert find_internal_overlap([*intervals, clash]) == (intervals[0], clash)


def test_clock_time_field_normalizes_time_objects() -> None:
    assert _ClockPayload(at=time(9, 5)).at == "09:05"
    assert _ClockPayload(at="18:30").at == "18:30"
    with pytest.raises(ValidationError):
        _ClockPayload(at="25:00")


def test_clock_time_documents_same_day_limit() -> None:
    from courtbook.modules.booking.schemas import BookingCreate

    properties = BookingCreate.model_json_schema()["properties"]

    assert "23:59" in properties["end_time"]["description"]
    with pytest.raises(ValidationError):
        _ClockPayload(at="24:00")
    with pytest.raises(ValidationException):
        TimeInterval.parse("23:00", "00:00")
