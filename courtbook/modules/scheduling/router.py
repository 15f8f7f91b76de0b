"""Scheduling API router."""

from __future__ import annotations

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from courtbook.core.enums import RoleEnum
from courtbook.modules.identity.service import require_roles
from courtbook.modules.scheduling.schemas import (
    CourtAvailabilityRead,
    SlotTemplateBulkUpsert,
    SlotTemplateRead,
)
from courtbook.modules.scheduling.service import SchedulingService, get_scheduling_service

router = APIRouter(prefix="/scheduling", tags=["scheduling"])

manager_dependency = require_roles(RoleEnum.OWNER, RoleEnum.ADMIN)


@router.get("/courts/{court_id}/availability", response_model=CourtAvailabilityRead)
async def get_availability(
    court_id: UUID,
    booking_date: date = Query(alias="date"),
    service: SchedulingService = Depends(get_scheduling_service),
) -> CourtAvailabilityRead:
    """Bookable intervals of the court on the date with their booked flag."""
    return await service.get_availability(court_id, booking_date)


@router.get("/courts/{court_id}/templates", response_model=list[SlotTemplateRead])
async def list_templates(
    court_id: UUID,
    service: SchedulingService = Depends(get_scheduling_service),
    current_user=Depends(manager_dependency),
) -> list[SlotTemplateRead]:
    """Weekly template of a managed court."""
    templates = await service.list_templates(court_id, current_user)
    return [SlotTemplateRead.model_validate(item) for item in templates]


@router.post("/courts/{court_id}/templates/bulk", response_model=list[SlotTemplateRead])
async def bulk_upsert_templates(
    court_id: UUID,
    payload: SlotTemplateBulkUpsert,
    service: SchedulingService = Depends(get_scheduling_service),
    current_user=Depends(manager_dependency),
) -> list[SlotTemplateRead]:
    """Create or toggle weekly template entries."""
    templates = await service.bulk_upsert_templates(court_id, payload.slots, current_user)
    return [SlotTemplateRead.model_validate(item) for item in templates]


@router.post("/courts/{court_id}/templates/default", response_model=list[SlotTemplateRead])
async def generate_default_templates(
    court_id: UUID,
    service: SchedulingService = Depends(get_scheduling_service),
    current_user=Depends(manager_dependency),
) -> list[SlotTemplateRead]:
    """Fill missing entries of the default hourly grid."""
    templates = await service.generate_default_templates(court_id, current_user)
    return [SlotTemplateRead.model_validate(item) for item in templates]
