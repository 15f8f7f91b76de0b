"""Core enums used across modules."""

from enum import StrEnum


class RoleEnum(StrEnum):
    """System roles."""

    USER = "user"
    OWNER = "owner"
    ADMIN = "admin"


class BookingStatusEnum(StrEnum):
    """Booking lifecycle status."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class PaymentStatusEnum(StrEnum):
    """Booking payment status."""

    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"


# Statuses whose slots occupy court time.
BLOCKING_BOOKING_STATUSES = (
    BookingStatusEnum.PENDING,
    BookingStatusEnum.CONFIRMED,
    BookingStatusEnum.COMPLETED,
)
