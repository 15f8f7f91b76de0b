"""Booking lifecycle rules: pricing, cancellation lead time, status transitions."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, time
from decimal import ROUND_HALF_UP, Decimal
from typing import Protocol

from courtbook.core.enums import BookingStatusEnum
from courtbook.shared.exceptions import (
    BookingAlreadyCancelledException,
    BookingAlreadyCompletedException,
    CancellationTooLateException,
    InvalidStatusTransitionException,
)
from courtbook.shared.intervals import TimeInterval, format_hhmm
from courtbook.shared.utils import local_instant

CENT = Decimal("0.01")

ALLOWED_STATUS_TRANSITIONS: dict[BookingStatusEnum, frozenset[BookingStatusEnum]] = {
    BookingStatusEnum.PENDING: frozenset({BookingStatusEnum.CONFIRMED, BookingStatusEnum.CANCELLED}),
    BookingStatusEnum.CONFIRMED: frozenset({BookingStatusEnum.CANCELLED, BookingStatusEnum.COMPLETED}),
    BookingStatusEnum.CANCELLED: frozenset(),
    BookingStatusEnum.COMPLETED: frozenset(),
}


class _SlotLike(Protocol):
    start_time: time


class _BookingLike(Protocol):
    booking_date: date
    start_time: time
    status: BookingStatusEnum
    slots: Sequence[_SlotLike]


def slot_amount(price_per_hour: Decimal, interval: TimeInterval) -> Decimal:
    """Price of an interval prorated by minutes, rounded to cents."""
    amount = Decimal(price_per_hour) * Decimal(interval.duration_minutes) / Decimal(60)
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def earliest_start(booking: _BookingLike) -> time:
    return min((slot.start_time for slot in booking.slots), default=booking.start_time)


def booking_starts_at(booking: _BookingLike, tz_name: str) -> datetime:
    """UTC instant of the booking's earliest slot start."""
    return local_instant(booking.booking_date, earliest_start(booking), tz_name)


def hours_until_start(booking: _BookingLike, now: datetime, tz_name: str) -> float:
    return (booking_starts_at(booking, tz_name) - now).total_seconds() / 3600


def ensure_can_cancel(booking: _BookingLike, now: datetime, *, lead_hours: int, tz_name: str) -> None:
    """Raise the reason a booking may not be cancelled by its user, if any."""
    if booking.status == BookingStatusEnum.CANCELLED:
        raise BookingAlreadyCancelledException("Booking is already cancelled")
    if booking.status == BookingStatusEnum.COMPLETED:
        raise BookingAlreadyCompletedException("Cannot cancel completed booking")

    hours_left = hours_until_start(booking, now, tz_name)
    if hours_left < lead_hours:
        raise CancellationTooLateException(
            f"Cannot cancel booking within {lead_hours} hours of start time",
            details={
                "booking_date": booking.booking_date.isoformat(),
                "start_time": format_hhmm(earliest_start(booking)),
                "hours_until_start": round(hours_left, 2),
            },
        )


def can_cancel(booking: _BookingLike, now: datetime, *, lead_hours: int, tz_name: str) -> bool:
    try:
        ensure_can_cancel(booking, now, lead_hours=lead_hours, tz_name=tz_name)
    except (
        BookingAlreadyCancelledException,
        BookingAlreadyCompletedException,
        CancellationTooLateException,
    ):
        return False
    return True


def ensure_status_transition(current: BookingStatusEnum, target: BookingStatusEnum) -> None:
    if target not in ALLOWED_STATUS_TRANSITIONS[current]:
        raise InvalidStatusTransitionException(
            f"Booking cannot move from {current} to {target}",
            details={"from": str(current), "to": str(target)},
        )
