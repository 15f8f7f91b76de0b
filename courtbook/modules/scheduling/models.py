"""Scheduling ORM models."""

from __future__ import annotations

from datetime import time
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, SmallInteger, Time, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from courtbook.core.database import Base, BaseModelMixin

if TYPE_CHECKING:
    from courtbook.modules.venues.models import Court


class WeeklySlotTemplate(BaseModelMixin, Base):
    """Recurring bookable interval of a court on one day of week (0 = Sunday)."""

    __tablename__ = "weekly_slot_templates"
    __table_args__ = (
        UniqueConstraint(
            "court_id",
            "day_of_week",
            "start_time",
            "end_time",
            name="uq_weekly_slot_templates_court_day_interval",
        ),
        CheckConstraint("day_of_week BETWEEN 0 AND 6", name="day_of_week_range"),
        CheckConstraint("start_time < end_time", name="interval_order"),
    )

    court_id: Mapped[UUID] = mapped_column(ForeignKey("courts.id", ondelete="CASCADE"), nullable=False, index=True)
    day_of_week: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    is_available: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    is_maintenance: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    court: Mapped["Court"] = relationship(back_populates="slot_templates")
