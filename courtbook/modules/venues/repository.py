"""Venue directory repository layer."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from courtbook.modules.venues.models import Court, Venue


class VenueRepository:
    """DB access for venues and courts."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_court_by_id(self, court_id: UUID) -> Court | None:
        stmt = select(Court).options(selectinload(Court.venue)).where(Court.id == court_id)
        return await self.session.scalar(stmt)

    async def get_bookable_court(self, court_id: UUID) -> Court | None:
        """Return court only when it and its venue are publicly bookable."""
        stmt = (
            select(Court)
            .join(Court.venue)
            .options(selectinload(Court.venue))
            .where(
                Court.id == court_id,
                Court.is_active.is_(True),
                Venue.is_approved.is_(True),
                Venue.is_active.is_(True),
            )
        )
        return await self.session.scalar(stmt)

    async def lock_court(self, court_id: UUID) -> None:
        """Take a row lock on the court until the current transaction ends."""
        stmt = select(Court.id).where(Court.id == court_id).with_for_update()
        await self.session.execute(stmt)
