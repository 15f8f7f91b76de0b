"""Booking repository layer."""

from __future__ import annotations

from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from courtbook.core.enums import BLOCKING_BOOKING_STATUSES, BookingStatusEnum, PaymentStatusEnum
from courtbook.modules.booking.models import Booking, BookingSlot
from courtbook.modules.venues.models import Court, Venue
from courtbook.shared.intervals import TimeInterval


class BookingRepository:
    """DB operations for booking domain."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Savepoint scope: released on success, rolled back when the block raises."""
        async with self.session.begin_nested():
            yield

    async def find_overlapping_slot(
        self,
        court_id: UUID,
        booking_date: date,
        interval: TimeInterval,
    ) -> BookingSlot | None:
        """First reserved slot on the court/date overlapping ``interval`` (half-open)."""
        stmt = (
            select(BookingSlot)
            .join(BookingSlot.booking)
            .where(
                Booking.court_id == court_id,
                Booking.booking_date == booking_date,
                Booking.status.in_(BLOCKING_BOOKING_STATUSES),
                BookingSlot.start_time < interval.end,
                BookingSlot.end_time > interval.start,
            )
            .order_by(BookingSlot.start_time.asc())
            .limit(1)
        )
        return await self.session.scalar(stmt)

    async def list_reserved_intervals(self, court_id: UUID, booking_date: date) -> list[TimeInterval]:
        stmt = (
            select(BookingSlot.start_time, BookingSlot.end_time)
            .join(BookingSlot.booking)
            .where(
                Booking.court_id == court_id,
                Booking.booking_date == booking_date,
                Booking.status.in_(BLOCKING_BOOKING_STATUSES),
            )
            .order_by(BookingSlot.start_time.asc())
        )
        rows = (await self.session.execute(stmt)).all()
        return [TimeInterval(row.start_time, row.end_time) for row in rows]

    async def create_booking(
        self,
        user_id: UUID,
        court_id: UUID,
        booking_date: date,
        status: BookingStatusEnum,
        payment_status: PaymentStatusEnum,
        notes: str | None,
        priced_slots: Sequence[tuple[TimeInterval, Decimal]],
    ) -> Booking:
        """Insert booking header and one slot row per interval."""
        intervals = [interval for interval, _ in priced_slots]
        booking = Booking(
            user_id=user_id,
            court_id=court_id,
            booking_date=booking_date,
            start_time=min(interval.start for interval in intervals),
            end_time=max(interval.end for interval in intervals),
            duration_minutes=sum(interval.duration_minutes for interval in intervals),
            total_amount=sum((amount for _, amount in priced_slots), Decimal("0.00")),
            status=status,
            payment_status=payment_status,
            notes=notes,
            slots=[
                BookingSlot(
                    start_time=interval.start,
                    end_time=interval.end,
                    duration_minutes=interval.duration_minutes,
                    amount=amount,
                )
                for interval, amount in sorted(priced_slots)
            ],
        )
        self.session.add(booking)
        await self.session.flush()
        return booking

    async def get_booking_by_id(self, booking_id: UUID) -> Booking | None:
        stmt = (
            select(Booking)
            .options(
                selectinload(Booking.slots),
                selectinload(Booking.court).selectinload(Court.venue),
            )
            .where(Booking.id == booking_id)
        )
        return await self.session.scalar(stmt)

    async def _paginate(
        self,
        base_stmt: Select[tuple[Booking]],
        limit: int,
        offset: int,
    ) -> tuple[list[Booking], int]:
        count_stmt = select(func.count()).select_from(base_stmt.subquery())
        total = int((await self.session.scalar(count_stmt)) or 0)

        stmt = (
            base_stmt.options(selectinload(Booking.slots))
            .order_by(Booking.booking_date.desc(), Booking.start_time.desc())
            .limit(limit)
            .offset(offset)
        )
        items = list((await self.session.scalars(stmt)).all())
        return items, total

    async def list_user_bookings(
        self,
        user_id: UUID,
        status: BookingStatusEnum | None,
        limit: int,
        offset: int,
    ) -> tuple[list[Booking], int]:
        base_stmt = select(Booking).where(Booking.user_id == user_id)
        if status is not None:
            base_stmt = base_stmt.where(Booking.status == status)
        return await self._paginate(base_stmt, limit, offset)

    async def list_venue_bookings(
        self,
        owner_id: UUID | None,
        status: BookingStatusEnum | None,
        limit: int,
        offset: int,
    ) -> tuple[list[Booking], int]:
        """Bookings on courts of the owner's venues; every booking when owner is None."""
        base_stmt = select(Booking)
        if owner_id is not None:
            base_stmt = base_stmt.join(Booking.court).join(Court.venue).where(Venue.owner_id == owner_id)
        if status is not None:
            base_stmt = base_stmt.where(Booking.status == status)
        return await self._paginate(base_stmt, limit, offset)

    async def save(self, booking: Booking) -> Booking:
        await self.session.flush()
        return booking
