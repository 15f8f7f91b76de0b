from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, date, datetime, time
from decimal import Decimal

import pytest

from courtbook.core.enums import BookingStatusEnum
from courtbook.modules.booking.policy import (
    booking_starts_at,
    can_cancel,
    ensure_can_cancel,
    ensure_status_transition,
    hours_until_start,
    slot_amount,
)
from courtbook.shared.exceptions import (
    BookingAlreadyCancelledException,
    BookingAlreadyCompletedException,
    CancellationTooLateException,
    InvalidStatusTransitionException,
)
from courtbook.shared.intervals import TimeInterval


@dataclass
class FakeSlot:
    start_time: time


@dataclass
class FakeBooking:
    booking_date: date
    start_time: time
    status: BookingStatusEnum = BookingStatusEnum.CONFIRMED
    slots: list[FakeSlot] = field(default_factory=list)


def test_slot_amount_prorates_and_rounds_to_cents() -> None:
    assert slot_amount(Decimal("20.00"), TimeInterval(time(9), time(10, 30))) == Decimal("30.00")
    assert slot_amount(Decimal("10.00"), TimeInterval(time(8), time(9))) == Decimal("10.00")
    # 25 minutes at 10.00/h is 4.1666...
    assert slot_amount(Decimal("10.00"), TimeInterval(time(8), time(8, 25))) == Decimal("4.17")


def test_start_uses_earliest_slot_and_timezone() -> None:
    booking = FakeBooking(
        booking_date=date(2030, 1, 15),
        start_time=time(10),
        slots=[FakeSlot(time(10)), FakeSlot(time(8))],
    )

    assert booking_starts_at(booking, "UTC") == datetime(2030, 1, 15, 8, 0, tzinfo=UTC)
    assert booking_starts_at(booking, "Europe/Berlin") == datetime(2030, 1, 15, 7, 0, tzinfo=UTC)


def test_cancellation_lead_time_boundary() -> None:
    booking = FakeBooking(booking_date=date(2030, 6, 10), start_time=time(9))

    exactly_lead = datetime(2030, 6, 9, 9, 0, tzinfo=UTC)
    assert hours_until_start(booking, exactly_lead, "UTC") == 24
    ensure_can_cancel(booking, exactly_lead, lead_hours=24, tz_name="UTC")

    just_inside = datetime(2030, 6, 9, 9, 1, tzinfo=UTC)
    with pytest.raises(CancellationTooLateException):
        ensure_can_cancel(booking, just_inside, lead_hours=24, tz_name="UTC")
    assert can_cancel(booking, just_inside, lead_hours=24, tz_name="UTC") is False
    assert can_cancel(booking, just_inside, lead_hours=0, tz_name="UTC") is True


def test_cancel_rejected_for_terminal_statuses() -> None:
    now = datetime(2030, 1, 1, tzinfo=UTC)

    with pytest.raises(BookingAlreadyCancelledException):
        ensure_can_cancel(
            FakeBooking(date(2030, 6, 10), time(9), status=BookingStatusEnum.CANCELLED),
            now,
            lead_hours=24,
            tz_name="UTC",
        )
    with pytest.raises(BookingAlreadyCompletedException):
        ensure_can_cancel(
            FakeBooking(date(2030, 6, 10), time(9), status=BookingStatusEnum.COMPLETED),
            now,
            lead_hours=24,
            tz_name="UTC",
        )


@pytest.mark.parametrize(
    ("current", "target"),
    [
        (BookingStatusEnum.PENDING, BookingStatusEnum.CONFIRMED),
        (BookingStatusEnum.PENDING, BookingStatusEnum.CANCELLED),
        (BookingStatusEnum.CONFIRMED, BookingStatusEnum.CANCELLED),
        (BookingStatusEnum.CONFIRMED, BookingStatusEnum.COMPLETED),
    ],
)
def test_allowed_status_transitions(current: BookingStatusEnum, target: BookingStatusEnum) -> None:
    ensure_status_transition(current, target)


@pytest.mark.parametrize(
    ("current", "target"),
    [
        (BookingStatusEnum.PENDING, BookingStatusEnum.COMPLETED),
        (BookingStatusEnum.CONFIRMED, BookingStatusEnum.PENDING),
        (BookingStatusEnum.CANCELLED, BookingStatusEnum.CONFIRMED),
        (BookingStatusEnum.COMPLETED, BookingStatusEnum.CANCELLED),
    ],
)
def test_rejected_status_transitions(current: BookingStatusEnum, target: BookingStatusEnum) -> None:
    with pytest.raises(InvalidStatusTransitionException):
        ensure_status_transition(current, target)
