"""Booking ORM models."""

from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import CheckConstraint, Date, DateTime, Enum as SAEnum, ForeignKey, Index, Integer, Numeric, Text, Time
from sqlalchemy.orm import Mapped, mapped_column, relationship

from courtbook.core.database import Base, BaseModelMixin
from courtbook.core.enums import BookingStatusEnum, PaymentStatusEnum

if TYPE_CHECKING:
    from courtbook.modules.identity.models import User
    from courtbook.modules.venues.models import Court


class Booking(BaseModelMixin, Base):
    """Reservation header: one user, one court, one date, one or more slots."""

    __tablename__ = "bookings"
    __table_args__ = (Index("ix_bookings_court_id_booking_date", "court_id", "booking_date"),)

    user_id: Mapped[UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    court_id: Mapped[UUID] = mapped_column(ForeignKey("courts.id", ondelete="CASCADE"), nullable=False)
    booking_date: Mapped[date] = mapped_column(Date, nullable=False)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    status: Mapped[BookingStatusEnum] = mapped_column(
        SAEnum(BookingStatusEnum, name="booking_status_enum", native_enum=False),
        default=BookingStatusEnum.CONFIRMED,
        nullable=False,
        index=True,
    )
    payment_status: Mapped[PaymentStatusEnum] = mapped_column(
        SAEnum(PaymentStatusEnum, name="payment_status_enum", native_enum=False),
        default=PaymentStatusEnum.PAID,
        nullable=False,
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    cancelled_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    user: Mapped["User"] = relationship(back_populates="bookings")
    court: Mapped["Court"] = relationship(back_populates="bookings")
    slots: Mapped[list["BookingSlot"]] = relationship(
        back_populates="booking",
        cascade="all, delete-orphan",
        order_by="BookingSlot.start_time",
    )


class BookingSlot(BaseModelMixin, Base):
    """One reserved ``[start_time, end_time)`` interval of a booking."""

    __tablename__ = "booking_slots"
    __table_args__ = (CheckConstraint("start_time < end_time", name="interval_order"),)

    booking_id: Mapped[UUID] = mapped_column(
        ForeignKey("bookings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    booking: Mapped[Booking] = relationship(back_populates="slots")
