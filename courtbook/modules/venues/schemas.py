"""Venue directory schemas."""

from __future__ import annotations

from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class CourtRead(BaseModel):
    """Public court summary."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    venue_id: UUID
    venue_name: str
    name: str
    sport: str
    price_per_hour: Decimal
    is_active: bool
    is_bookable: bool
