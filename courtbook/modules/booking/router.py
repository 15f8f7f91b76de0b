"""Booking API router."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from courtbook.core.enums import BookingStatusEnum, RoleEnum
from courtbook.modules.booking.schemas import (
    BookingCreate,
    BookingRead,
    BookingStatusUpdate,
    BulkBookingCreate,
)
from courtbook.modules.booking.service import BookingService, get_booking_service
from courtbook.modules.identity.service import get_current_user, require_roles
from courtbook.shared.pagination import Page, build_page, get_pagination_params

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post("", response_model=BookingRead, status_code=status.HTTP_201_CREATED)
async def create_booking(
    payload: BookingCreate,
    service: BookingService = Depends(get_booking_service),
    current_user=Depends(get_current_user),
) -> BookingRead:
    """Reserve a single interval."""
    booking = await service.create_booking(payload, current_user)
    return BookingRead.model_validate(booking)


@router.post("/bulk", response_model=BookingRead, status_code=status.HTTP_201_CREATED)
async def create_bulk_booking(
    payload: BulkBookingCreate,
    service: BookingService = Depends(get_booking_service),
    current_user=Depends(get_current_user),
) -> BookingRead:
    """Reserve several intervals atomically."""
    booking = await service.create_bulk_booking(payload, current_user)
    return BookingRead.model_validate(booking)


@router.get("/my", response_model=Page[BookingRead])
async def list_my_bookings(
    status_filter: BookingStatusEnum | None = Query(default=None, alias="status"),
    pagination=Depends(get_pagination_params),
    service: BookingService = Depends(get_booking_service),
    current_user=Depends(get_current_user),
) -> Page[BookingRead]:
    """List bookings of current user."""
    items, total = await service.list_my_bookings(current_user, status_filter, pagination.limit, pagination.offset)
    serialized = [BookingRead.model_validate(item) for item in items]
    return build_page(serialized, total, pagination)


@router.get("/owner", response_model=Page[BookingRead])
async def list_managed_bookings(
    status_filter: BookingStatusEnum | None = Query(default=None, alias="status"),
    pagination=Depends(get_pagination_params),
    service: BookingService = Depends(get_booking_service),
    current_user=Depends(require_roles(RoleEnum.OWNER, RoleEnum.ADMIN)),
) -> Page[BookingRead]:
    """List bookings on venues managed by current owner."""
    items, total = await service.list_managed_bookings(
        current_user,
        status_filter,
        pagination.limit,
        pagination.offset,
    )
    serialized = [BookingRead.model_validate(item) for item in items]
    return build_page(serialized, total, pagination)


@router.get("/{booking_id}", response_model=BookingRead)
async def get_booking(
    booking_id: UUID,
    service: BookingService = Depends(get_booking_service),
    current_user=Depends(get_current_user),
) -> BookingRead:
    """Return own booking with its slots."""
    booking = await service.get_booking(booking_id, current_user)
    return BookingRead.model_validate(booking)


@router.put("/{booking_id}/cancel", response_model=BookingRead)
async def cancel_booking(
    booking_id: UUID,
    service: BookingService = Depends(get_booking_service),
    current_user=Depends(get_current_user),
) -> BookingRead:
    """Cancel own booking outside the cancellation lead time."""
    booking = await service.cancel_booking(booking_id, current_user)
    return BookingRead.model_validate(booking)


@router.put("/{booking_id}/status", response_model=BookingRead)
async def update_booking_status(
    booking_id: UUID,
    payload: BookingStatusUpdate,
    service: BookingService = Depends(get_booking_service),
    current_user=Depends(require_roles(RoleEnum.OWNER, RoleEnum.ADMIN)),
) -> BookingRead:
    """Move booking along its status lifecycle (owner/admin)."""
    booking = await service.update_status(booking_id, payload, current_user)
    return BookingRead.model_validate(booking)
