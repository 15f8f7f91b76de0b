"""Venue and court ORM models."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from courtbook.core.database import Base, BaseModelMixin

if TYPE_CHECKING:
    from courtbook.modules.booking.models import Booking
    from courtbook.modules.identity.models import User
    from courtbook.modules.scheduling.models import WeeklySlotTemplate


class Venue(BaseModelMixin, Base):
    """Sports venue owned by a facility owner and approved by admin."""

    __tablename__ = "venues"

    owner_id: Mapped[UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_approved: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    owner: Mapped["User"] = relationship(back_populates="venues")
    courts: Mapped[list["Court"]] = relationship(back_populates="venue", cascade="all, delete-orphan")


class Court(BaseModelMixin, Base):
    """Bookable court priced per hour."""

    __tablename__ = "courts"

    venue_id: Mapped[UUID] = mapped_column(ForeignKey("venues.id", ondelete="CASCADE"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    sport: Mapped[str] = mapped_column(String(64), nullable=False)
    price_per_hour: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    venue: Mapped[Venue] = relationship(back_populates="courts")
    slot_templates: Mapped[list["WeeklySlotTemplate"]] = relationship(
        back_populates="court",
        cascade="all, delete-orphan",
    )
    bookings: Mapped[list["Booking"]] = relationship(back_populates="court", cascade="all, delete-orphan")
