"""Scheduling repository layer."""

from __future__ import annotations

from datetime import time
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from courtbook.modules.scheduling.models import WeeklySlotTemplate


class SchedulingRepository:
    """DB access for weekly slot templates."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_templates(self, court_id: UUID) -> list[WeeklySlotTemplate]:
        stmt = (
            select(WeeklySlotTemplate)
            .where(WeeklySlotTemplate.court_id == court_id)
            .order_by(WeeklySlotTemplate.day_of_week.asc(), WeeklySlotTemplate.start_time.asc())
        )
        return list((await self.session.scalars(stmt)).all())

    async def list_open_templates(self, court_id: UUID, day_of_week: int) -> list[WeeklySlotTemplate]:
        """Templates that are available and not under maintenance, by start time."""
        stmt = (
            select(WeeklySlotTemplate)
            .where(
                WeeklySlotTemplate.court_id == court_id,
                WeeklySlotTemplate.day_of_week == day_of_week,
                WeeklySlotTemplate.is_available.is_(True),
                WeeklySlotTemplate.is_maintenance.is_(False),
            )
            .order_by(WeeklySlotTemplate.start_time.asc())
        )
        return list((await self.session.scalars(stmt)).all())

    async def create_template(
        self,
        court_id: UUID,
        day_of_week: int,
        start_time: time,
        end_time: time,
        is_available: bool,
        is_maintenance: bool,
    ) -> WeeklySlotTemplate:
        template = WeeklySlotTemplate(
            court_id=court_id,
            day_of_week=day_of_week,
            start_time=start_time,
            end_time=end_time,
            is_available=is_available,
            is_maintenance=is_maintenance,
        )
        self.session.add(template)
        await self.session.flush()
        return template

    async def update_flags(
        self,
        template: WeeklySlotTemplate,
        is_available: bool,
        is_maintenance: bool,
    ) -> WeeklySlotTemplate:
        template.is_available = is_available
        template.is_maintenance = is_maintenance
        await self.session.flush()
        return template
