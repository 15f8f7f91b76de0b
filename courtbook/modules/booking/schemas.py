"""Booking schemas."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from courtbook.core.enums import BookingStatusEnum, PaymentStatusEnum
from courtbook.shared.intervals import ClockTime


class BookingCreate(BaseModel):
    """Single-interval booking request."""

    court_id: UUID
    booking_date: date
    start_time: ClockTime
    end_time: ClockTime
    duration: int | None = Field(default=None, ge=1, description="Minutes; must match the interval when given")
    notes: str | None = Field(default=None, max_length=1000)


class BookingIntervalInput(BaseModel):
    """One requested interval of a bulk booking."""

    start_time: ClockTime | None = None
    end_time: ClockTime | None = None


class BulkBookingCreate(BaseModel):
    """Multi-interval booking request committed atomically."""

    court_id: UUID
    booking_date: date
    slots: list[BookingIntervalInput]
    notes: str | None = Field(default=None, max_length=1000)


class BookingStatusUpdate(BaseModel):
    """Owner/admin status transition request."""

    status: BookingStatusEnum


class BookingSlotRead(BaseModel):
    """Reserved interval response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    start_time: ClockTime
    end_time: ClockTime
    duration_minutes: int
    amount: Decimal


class BookingRead(BaseModel):
    """Booking response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    court_id: UUID
    booking_date: date
    start_time: ClockTime
    end_time: ClockTime
    duration_minutes: int
    total_amount: Decimal
    status: BookingStatusEnum
    payment_status: PaymentStatusEnum
    notes: str | None
    cancelled_at: datetime | None
    slots: list[BookingSlotRead]
    created_at: datetime
    updated_at: datetime
