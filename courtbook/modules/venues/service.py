"""Venue directory service consumed by scheduling and booking."""

from __future__ import annotations

from uuid import UUID

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from courtbook.core.database import get_db_session
from courtbook.core.enums import RoleEnum
from courtbook.modules.identity.models import User
from courtbook.modules.venues.models import Court
from courtbook.modules.venues.repository import VenueRepository
from courtbook.modules.venues.schemas import CourtRead
from courtbook.shared.exceptions import NotFoundException, UnauthorizedException


def is_court_bookable(court: Court) -> bool:
    return court.is_active and court.venue.is_approved and court.venue.is_active


def ensure_court_manager(court: Court, actor: User) -> None:
    """Allow venue owner or admin to manage the court."""
    if actor.role == RoleEnum.ADMIN:
        return
    if actor.role == RoleEnum.OWNER and court.venue.owner_id == actor.id:
        return
    raise UnauthorizedException("You cannot manage this court")


class VenueService:
    """Court lookups with access rules."""

    def __init__(self, repository: VenueRepository) -> None:
        self.repository = repository

    async def get_court_summary(self, court_id: UUID) -> CourtRead:
        court = await self.repository.get_court_by_id(court_id)
        if court is None:
            raise NotFoundException("Court not found")
        return CourtRead(
            id=court.id,
            venue_id=court.venue_id,
            venue_name=court.venue.name,
            name=court.name,
            sport=court.sport,
            price_per_hour=court.price_per_hour,
            is_active=court.is_active,
            is_bookable=is_court_bookable(court),
        )


async def get_venue_service(session: AsyncSession = Depends(get_db_session)) -> VenueService:
    """Dependency provider for venue service."""
    return VenueService(VenueRepository(session))
