"""Scheduling schemas."""

from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from courtbook.shared.intervals import ClockTime


class SlotTemplateInput(BaseModel):
    """One weekly template entry in a bulk upsert."""

    day_of_week: int = Field(ge=0, le=6, description="0 = Sunday, 6 = Saturday")
    start_time: ClockTime
    end_time: ClockTime
    is_available: bool = True
    is_maintenance: bool = False


class SlotTemplateBulkUpsert(BaseModel):
    """Bulk upsert request for a court's weekly template."""

    slots: list[SlotTemplateInput]


class SlotTemplateRead(BaseModel):
    """Weekly template entry response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    court_id: UUID
    day_of_week: int
    start_time: ClockTime
    end_time: ClockTime
    is_available: bool
    is_maintenance: bool
    created_at: datetime
    updated_at: datetime


class AvailabilitySlotRead(BaseModel):
    """Bookable interval of a court on a concrete date."""

    start_time: ClockTime
    end_time: ClockTime
    booked: bool


class CourtAvailabilityRead(BaseModel):
    """Availability projection for a court and date."""

    court_id: UUID
    booking_date: date
    day_of_week: int
    slots: list[AvailabilitySlotRead]
