"""Scheduling business logic: weekly templates and availability projection."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from uuid import UUID

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from courtbook.core.config import get_settings
from courtbook.core.database import get_db_session
from courtbook.modules.booking.repository import BookingRepository
from courtbook.modules.identity.models import User
from courtbook.modules.scheduling.models import WeeklySlotTemplate
from courtbook.modules.scheduling.repository import SchedulingRepository
from courtbook.modules.scheduling.schemas import (
    AvailabilitySlotRead,
    CourtAvailabilityRead,
    SlotTemplateInput,
)
from courtbook.modules.venues.repository import VenueRepository
from courtbook.modules.venues.service import ensure_court_manager
from courtbook.shared.exceptions import NotFoundException, ValidationException
from courtbook.shared.intervals import TimeInterval, find_internal_overlap, first_overlap
from courtbook.shared.utils import sunday_based_weekday

settings = get_settings()


@dataclass(frozen=True, slots=True)
class _TemplateEntry:
    day_of_week: int
    interval: TimeInterval
    is_available: bool
    is_maintenance: bool

    @property
    def key(self) -> tuple[int, time, time]:
        return self.day_of_week, self.interval.start, self.interval.end


def project_availability(
    templates: Iterable[WeeklySlotTemplate],
    reserved: Sequence[TimeInterval],
) -> list[AvailabilitySlotRead]:
    """Mark each open template interval as booked when any reservation overlaps it."""
    projected = []
    for template in sorted(templates, key=lambda item: item.start_time):
        if not template.is_available or template.is_maintenance:
            continue
        interval = TimeInterval(template.start_time, template.end_time)
        projected.append(
            AvailabilitySlotRead(
                start_time=template.start_time,
                end_time=template.end_time,
                booked=first_overlap(interval, reserved) is not None,
            ),
        )
    return projected


def build_default_grid(open_hour: int, close_hour: int, slot_minutes: int) -> list[SlotTemplateInput]:
    """Fixed-length intervals for every day of week between open and close hours."""
    grid = []
    day_start = datetime.combine(date.min, time(hour=open_hour))
    day_end = datetime.combine(date.min, time(hour=close_hour))
    step = timedelta(minutes=slot_minutes)
    for day_of_week in range(7):
        cursor = day_start
        while cursor + step <= day_end:
            grid.append(
                SlotTemplateInput(
                    day_of_week=day_of_week,
                    start_time=cursor.time(),
                    end_time=(cursor + step).time(),
                ),
            )
            cursor += step
    return grid


class SchedulingService:
    """Weekly template management and availability reads."""

    def __init__(
        self,
        repository: SchedulingRepository,
        venue_repository: VenueRepository,
        booking_repository: BookingRepository,
    ) -> None:
        self.repository = repository
        self.venue_repository = venue_repository
        self.booking_repository = booking_repository

    async def _get_managed_court_id(self, court_id: UUID, actor: User) -> UUID:
        court = await self.venue_repository.get_court_by_id(court_id)
        if court is None:
            raise NotFoundException("Court not found")
        ensure_court_manager(court, actor)
        return court.id

    async def list_templates(self, court_id: UUID, actor: User) -> list[WeeklySlotTemplate]:
        """Return the whole weekly template of a managed court."""
        managed_court_id = await self._get_managed_court_id(court_id, actor)
        return await self.repository.list_templates(managed_court_id)

    async def bulk_upsert_templates(
        self,
        court_id: UUID,
        slots: Sequence[SlotTemplateInput],
        actor: User,
    ) -> list[WeeklySlotTemplate]:
        """Insert new entries and toggle flags of entries matched by day + interval."""
        managed_court_id = await self._get_managed_court_id(court_id, actor)
        return await self._upsert(managed_court_id, slots, overwrite_existing=True)

    async def generate_default_templates(self, court_id: UUID, actor: User) -> list[WeeklySlotTemplate]:
        """Add the default grid, leaving entries that already exist untouched."""
        managed_court_id = await self._get_managed_court_id(court_id, actor)
        grid = build_default_grid(
            settings.template_default_open_hour,
            settings.template_default_close_hour,
            settings.template_default_slot_minutes,
        )
        return await self._upsert(managed_court_id, grid, overwrite_existing=False)

    async def _upsert(
        self,
        court_id: UUID,
        slots: Sequence[SlotTemplateInput],
        *,
        overwrite_existing: bool,
    ) -> list[WeeklySlotTemplate]:
        if not slots:
            raise ValidationException("At least one template slot is required")

        incoming: dict[tuple[int, time, time], _TemplateEntry] = {}
        for slot in slots:
            entry = _TemplateEntry(
                day_of_week=slot.day_of_week,
                interval=TimeInterval.parse(slot.start_time, slot.end_time),
                is_available=slot.is_available,
                is_maintenance=slot.is_maintenance,
            )
            incoming[entry.key] = entry

        existing = {
            (template.day_of_week, template.start_time, template.end_time): template
            for template in await self.repository.list_templates(court_id)
        }

        by_day: dict[int, set[TimeInterval]] = defaultdict(set)
        for day_of_week, start, end in (*existing.keys(), *incoming.keys()):
            by_day[day_of_week].add(TimeInterval(start, end))
        for day_of_week, intervals in sorted(by_day.items()):
            overlap = find_internal_overlap(intervals)
            if overlap is not None:
                first, second = overlap
                raise ValidationException(
                    f"Template intervals {first} and {second} overlap",
                    details={"day_of_week": day_of_week, "intervals": [str(first), str(second)]},
                )

        for key, entry in incoming.items():
            template = existing.get(key)
            if template is None:
                await self.repository.create_template(
                    court_id=court_id,
                    day_of_week=entry.day_of_week,
                    start_time=entry.interval.start,
                    end_time=entry.interval.end,
                    is_available=entry.is_available,
                    is_maintenance=entry.is_maintenance,
                )
            elif overwrite_existing:
                await self.repository.update_flags(template, entry.is_available, entry.is_maintenance)

        return await self.repository.list_templates(court_id)

    async def get_availability(self, court_id: UUID, booking_date: date) -> CourtAvailabilityRead:
        """Merge the weekly template for the date with reservations already held."""
        court = await self.venue_repository.get_bookable_court(court_id)
        if court is None:
            raise NotFoundException("Court not found or not available")

        day_of_week = sunday_based_weekday(booking_date)
        templates = await self.repository.list_open_templates(court.id, day_of_week)
        reserved = await self.booking_repository.list_reserved_intervals(court.id, booking_date)
        return CourtAvailabilityRead(
            court_id=court.id,
            booking_date=booking_date,
            day_of_week=day_of_week,
            slots=project_availability(templates, reserved),
        )


async def get_scheduling_service(session: AsyncSession = Depends(get_db_session)) -> SchedulingService:
    """Dependency provider for scheduling service."""
    return SchedulingService(
        repository=SchedulingRepository(session),
        venue_repository=VenueRepository(session),
        booking_repository=BookingRepository(session),
    )
