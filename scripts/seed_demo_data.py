"""Seed idempotent demo data for local/non-production environments."""

from __future__ import annotations

import argparse
import asyncio
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from courtbook.core.config import get_settings
from courtbook.core.database import SessionLocal, close_engine
from courtbook.core.enums import RoleEnum
from courtbook.core.security import hash_password, verify_password
from courtbook.modules.booking.repository import BookingRepository
from courtbook.modules.identity.models import User
from courtbook.modules.scheduling.repository import SchedulingRepository
from courtbook.modules.scheduling.service import SchedulingService
from courtbook.modules.venues.models import Court, Venue
from courtbook.modules.venues.repository import VenueRepository

DEMO_PASSWORD = "DemoPass123!"

DEMO_OWNER_EMAIL = "demo-owner@courtbook.dev"
DEMO_USER_EMAIL = "demo-user@courtbook.dev"

DEMO_VENUE_NAME = "Demo Sports Center"
DEMO_COURT_NAME = "Court 1"
DEMO_COURT_SPORT = "tennis"
DEMO_COURT_PRICE_PER_HOUR = Decimal("20.00")


@dataclass(slots=True)
class SeedStats:
    users_created: int = 0
    users_updated: int = 0
    venue_created: bool = False
    court_created: bool = False
    court_id: str | None = None
    templates_total: int = 0


async def _ensure_user(
    session: AsyncSession,
    *,
    email: str,
    full_name: str,
    role: RoleEnum,
) -> tuple[User, bool]:
    user = await session.scalar(select(User).where(User.email == email))
    created = False
    if user is None:
        user = User(
            email=email,
            password_hash=hash_password(DEMO_PASSWORD),
            full_name=full_name,
            is_active=True,
            role=role,
        )
        session.add(user)
        created = True
    else:
        if not verify_password(DEMO_PASSWORD, user.password_hash):
            user.password_hash = hash_password(DEMO_PASSWORD)
        user.role = role
        user.is_active = True

    await session.flush()
    return user, created


async def _ensure_venue(session: AsyncSession, owner: User) -> tuple[Venue, bool]:
    venue = await session.scalar(
        select(Venue).where(Venue.owner_id == owner.id, Venue.name == DEMO_VENUE_NAME),
    )
    if venue is not None:
        venue.is_approved = True
        venue.is_active = True
        await session.flush()
        return venue, False

    venue = Venue(
        owner_id=owner.id,
        name=DEMO_VENUE_NAME,
        location="Demo Street 1",
        description="Venue for local demo scenarios.",
        is_approved=True,
        is_active=True,
    )
    session.add(venue)
    await session.flush()
    return venue, True


async def _ensure_court(session: AsyncSession, venue: Venue) -> tuple[Court, bool]:
    court = await session.scalar(
        select(Court).where(Court.venue_id == venue.id, Court.name == DEMO_COURT_NAME),
    )
    if court is not None:
        court.is_active = True
        court.price_per_hour = DEMO_COURT_PRICE_PER_HOUR
        await session.flush()
        return court, False

    court = Court(
        venue_id=venue.id,
        name=DEMO_COURT_NAME,
        sport=DEMO_COURT_SPORT,
        price_per_hour=DEMO_COURT_PRICE_PER_HOUR,
        is_active=True,
    )
    session.add(court)
    await session.flush()
    return court, True


async def _run_seed(*, allow_production: bool) -> SeedStats:
    settings = get_settings()
    app_env = settings.app_env.strip().lower()
    if app_env in {"production", "prod"} and not allow_production:
        raise RuntimeError(
            "Refusing to seed demo data in production. "
            "Re-run with --allow-production only if you are absolutely sure.",
        )

    stats = SeedStats()

    async with SessionLocal() as session:
        try:
            owner, owner_created = await _ensure_user(
                session,
                email=DEMO_OWNER_EMAIL,
                full_name="Demo Owner",
                role=RoleEnum.OWNER,
            )
            _, user_created = await _ensure_user(
                session,
                email=DEMO_USER_EMAIL,
                full_name="Demo Player",
                role=RoleEnum.USER,
            )
            stats.users_created = sum([owner_created, user_created])
            stats.users_updated = 2 - stats.users_created

            venue, stats.venue_created = await _ensure_venue(session, owner)
            court, stats.court_created = await _ensure_court(session, venue)
            stats.court_id = str(court.id)

            scheduling_service = SchedulingService(
                repository=SchedulingRepository(session),
                venue_repository=VenueRepository(session),
                booking_repository=BookingRepository(session),
            )
            templates = await scheduling_service.generate_default_templates(court.id, owner)
            stats.templates_total = len(templates)

            await session.commit()
        except Exception:
            await session.rollback()
            raise

    return stats


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Seed idempotent demo data for CourtBook (owner, player, approved venue, "
            "court with the default weekly template)."
        ),
    )
    parser.add_argument(
        "--allow-production",
        action="store_true",
        help="Allow seeding even when APP_ENV is production/prod.",
    )
    return parser


def _print_summary(stats: SeedStats) -> None:
    print("Demo seed completed.")
    print(f"- Users created: {stats.users_created}")
    print(f"- Users updated: {stats.users_updated}")
    print(f"- Venue created: {stats.venue_created}")
    print(f"- Court created: {stats.court_created}")
    print(f"- Court id: {stats.court_id}")
    print(f"- Weekly template entries: {stats.templates_total}")
    print("")
    print("Demo credentials (non-production only):")
    print(f"- owner: {DEMO_OWNER_EMAIL} / {DEMO_PASSWORD}")
    print(f"- user:  {DEMO_USER_EMAIL} / {DEMO_PASSWORD}")


def main() -> int:
    parser = _build_parser()
    args = parser.parse_args()

    try:
        stats = asyncio.run(_run_seed(allow_production=args.allow_production))
    except Exception as exc:
        print(f"Demo seed failed: {exc}")
        return 1
    finally:
        asyncio.run(close_engine())

    _print_summary(stats)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
