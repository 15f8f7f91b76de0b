"""Booking business logic layer: conflict detection and atomic reservation."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date
from uuid import UUID

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from courtbook.core.config import get_settings
from courtbook.core.database import get_db_session
from courtbook.core.enums import BookingStatusEnum, PaymentStatusEnum, RoleEnum
from courtbook.core.metrics import BOOKING_CONFLICTS_TOTAL, BOOKINGS_CANCELLED_TOTAL, BOOKINGS_CREATED_TOTAL
from courtbook.modules.booking.models import Booking
from courtbook.modules.booking.policy import (
    ensure_can_cancel,
    ensure_status_transition,
    slot_amount,
)
from courtbook.modules.booking.repository import BookingRepository
from courtbook.modules.booking.schemas import (
    BookingCreate,
    BookingIntervalInput,
    BookingStatusUpdate,
    BulkBookingCreate,
)
from courtbook.modules.identity.models import User
from courtbook.modules.venues.repository import VenueRepository
from courtbook.modules.venues.service import ensure_court_manager
from courtbook.shared.exceptions import (
    BookingConflictException,
    BusinessRuleException,
    NotFoundException,
    ValidationException,
)
from courtbook.shared.intervals import TimeInterval, first_overlap
from courtbook.shared.utils import local_instant, utc_now

settings = get_settings()
logger = logging.getLogger(__name__)


class BookingService:
    """Reservation engine: conflict checks, atomic booking, cancellation and status rules."""

    def __init__(
        self,
        booking_repository: BookingRepository,
        venue_repository: VenueRepository,
    ) -> None:
        self.booking_repository = booking_repository
        self.venue_repository = venue_repository

    def _validate_duration(self, interval: TimeInterval) -> None:
        minutes = interval.duration_minutes
        if not settings.booking_min_duration_minutes <= minutes <= settings.booking_max_duration_minutes:
            raise ValidationException(
                f"Duration must be between {settings.booking_min_duration_minutes} and "
                f"{settings.booking_max_duration_minutes} minutes",
                details={"interval": str(interval), "duration_minutes": minutes},
            )

    async def has_conflict(self, court_id: UUID, booking_date: date, interval: TimeInterval) -> bool:
        """True when the interval overlaps a reserved slot of the court on that date."""
        existing = await self.booking_repository.find_overlapping_slot(court_id, booking_date, interval)
        return existing is not None

    async def create_booking(self, payload: BookingCreate, actor: User) -> Booking:
        """Reserve one interval."""
        interval = TimeInterval.parse(payload.start_time, payload.end_time)
        if payload.duration is not None and payload.duration != interval.duration_minutes:
            raise ValidationException(
                f"Duration {payload.duration} does not match interval {interval}",
                details={"duration": payload.duration, "interval_minutes": interval.duration_minutes},
            )
        return await self._reserve(
            actor,
            court_id=payload.court_id,
            booking_date=payload.booking_date,
            intervals=[interval],
            notes=payload.notes,
            kind="single",
        )

    async def create_bulk_booking(self, payload: BulkBookingCreate, actor: User) -> Booking:
        """Reserve several intervals on one court and date, all or nothing."""
        return await self._reserve(
            actor,
            court_id=payload.court_id,
            booking_date=payload.booking_date,
            intervals=self._parse_intervals(payload.slots),
            notes=payload.notes,
            kind="bulk",
        )

    @staticmethod
    def _parse_intervals(slots: Sequence[BookingIntervalInput]) -> list[TimeInterval]:
        intervals = []
        for index, slot in enumerate(slots):
            try:
                intervals.append(TimeInterval.parse(slot.start_time, slot.end_time))
            except ValidationException as exc:
                raise ValidationException(exc.message, details={"slot_index": index}) from exc
        return intervals

    async def _reserve(
        self,
        actor: User,
        *,
        court_id: UUID,
        booking_date: date,
        intervals: Sequence[TimeInterval],
        notes: str | None,
        kind: str,
    ) -> Booking:
        court = await self.venue_repository.get_bookable_court(court_id)
        if court is None:
            raise NotFoundException("Court not found or not available")
        if not intervals:
            raise ValidationException("At least one slot is required")

        now = utc_now()
        for interval in intervals:
            self._validate_duration(interval)
            if local_instant(booking_date, interval.start, settings.booking_timezone) <= now:
                raise BusinessRuleException(
                    "Cannot book a slot in the past",
                    details={"booking_date": booking_date.isoformat(), "interval": str(interval)},
                )

        if settings.booking_auto_confirm:
            status, payment_status = BookingStatusEnum.CONFIRMED, PaymentStatusEnum.PAID
        else:
            status, payment_status = BookingStatusEnum.PENDING, PaymentStatusEnum.PENDING

        try:
            async with self.booking_repository.transaction():
                # Serializes check-then-insert for this court until the transaction ends.
                await self.venue_repository.lock_court(court.id)

                accepted: list[TimeInterval] = []
                for index, interval in enumerate(intervals):
                    clash = first_overlap(interval, accepted)
                    if clash is not None:
                        raise BookingConflictException(
                            f"Requested slots {clash} and {interval} overlap each other",
                            details={"slot_index": index, "interval": str(interval), "overlaps": str(clash)},
                        )
                    if await self.has_conflict(court.id, booking_date, interval):
                        raise BookingConflictException(
                            f"Time slot {interval} is already booked",
                            details={
                                "slot_index": index,
                                "interval": str(interval),
                                "booking_date": booking_date.isoformat(),
                            },
                        )
                    accepted.append(interval)

                booking = await self.booking_repository.create_booking(
                    user_id=actor.id,
                    court_id=court.id,
                    booking_date=booking_date,
                    status=status,
                    payment_status=payment_status,
                    notes=notes,
                    priced_slots=[(interval, slot_amount(court.price_per_hour, interval)) for interval in accepted],
                )
        except BookingConflictException as exc:
            BOOKING_CONFLICTS_TOTAL.labels(kind=kind).inc()
            logger.info(
                "Booking rejected for court %s on %s: %s",
                court.id,
                booking_date.isoformat(),
                exc.message,
            )
            raise

        BOOKINGS_CREATED_TOTAL.labels(kind=kind).inc()
        logger.info(
            "Booking %s created for court %s on %s with %d slot(s), total %s",
            booking.id,
            court.id,
            booking_date.isoformat(),
            len(accepted),
            booking.total_amount,
        )
        return booking

    async def get_booking(self, booking_id: UUID, actor: User) -> Booking:
        """Return booking owned by the actor."""
        booking = await self.booking_repository.get_booking_by_id(booking_id)
        if booking is None or booking.user_id != actor.id:
            raise NotFoundException("Booking not found")
        return booking

    async def cancel_booking(self, booking_id: UUID, actor: User) -> Booking:
        """Cancel own booking when it starts far enough in the future."""
        booking = await self.get_booking(booking_id, actor)

        now = utc_now()
        ensure_can_cancel(
            booking,
            now,
            lead_hours=settings.booking_cancellation_lead_hours,
            tz_name=settings.booking_timezone,
        )
        self._mark_cancelled(booking)
        await self.booking_repository.save(booking)

        BOOKINGS_CANCELLED_TOTAL.inc()
        logger.info("Booking %s cancelled by user %s", booking.id, actor.id)
        return booking

    async def update_status(
        self,
        booking_id: UUID,
        payload: BookingStatusUpdate,
        actor: User,
    ) -> Booking:
        """Owner/admin transition along the booking state machine."""
        booking = await self.booking_repository.get_booking_by_id(booking_id)
        if booking is None:
            raise NotFoundException("Booking not found")
        ensure_court_manager(booking.court, actor)

        ensure_status_transition(booking.status, payload.status)
        if payload.status == BookingStatusEnum.CANCELLED:
            self._mark_cancelled(booking)
            BOOKINGS_CANCELLED_TOTAL.inc()
        else:
            booking.status = payload.status
            if payload.status == BookingStatusEnum.CONFIRMED:
                booking.payment_status = PaymentStatusEnum.PAID
        await self.booking_repository.save(booking)

        logger.info("Booking %s moved to %s by %s", booking.id, booking.status, actor.id)
        return booking

    @staticmethod
    def _mark_cancelled(booking: Booking) -> None:
        booking.status = BookingStatusEnum.CANCELLED
        booking.cancelled_at = utc_now()
        if booking.payment_status == PaymentStatusEnum.PAID:
            booking.payment_status = PaymentStatusEnum.REFUNDED

    async def list_my_bookings(
        self,
        actor: User,
        status: BookingStatusEnum | None,
        limit: int,
        offset: int,
    ) -> tuple[list[Booking], int]:
        return await self.booking_repository.list_user_bookings(actor.id, status, limit, offset)

    async def list_managed_bookings(
        self,
        actor: User,
        status: BookingStatusEnum | None,
        limit: int,
        offset: int,
    ) -> tuple[list[Booking], int]:
        """Bookings on the owner's venues; admin sees every booking."""
        owner_id = None if actor.role == RoleEnum.ADMIN else actor.id
        return await self.booking_repository.list_venue_bookings(owner_id, status, limit, offset)


async def get_booking_service(session: AsyncSession = Depends(get_db_session)) -> BookingService:
    """Dependency provider for booking service."""
    return BookingService(
        booking_repository=BookingRepository(session),
        venue_repository=VenueRepository(session),
    )
