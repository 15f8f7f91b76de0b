"""Venue directory API router."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends

from courtbook.modules.venues.schemas import CourtRead
from courtbook.modules.venues.service import VenueService, get_venue_service

router = APIRouter(prefix="/venues", tags=["venues"])


@router.get("/courts/{court_id}", response_model=CourtRead)
async def get_court(
    court_id: UUID,
    service: VenueService = Depends(get_venue_service),
) -> CourtRead:
    """Public court summary with price and bookability."""
    return await service.get_court_summary(court_id)
