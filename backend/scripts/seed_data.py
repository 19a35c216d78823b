"""Seed a development database with the family houses and sample stays.

Creates the three houses with their rules, one admin profile and a handful of
bookings around last month so the usage report has something to show. The
admin profile id must match the ``sub`` of a token you can sign in with
locally (see ``housecal.auth.jwt.create_access_token``).

Run from ``backend/``:
    python -m scripts.seed_data
"""

import asyncio
import os
import sys
import uuid
from datetime import date, timedelta
from pathlib import Path

# Add backend to path so imports work when run as a script
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import delete  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from housecal.database import Base, async_session_factory, engine  # noqa: E402
from housecal.models.booking import STATUS_ACTIVE, STATUS_CANCELLED, Booking  # noqa: E402
from housecal.models.house import House  # noqa: E402
from housecal.models.profile import Profile  # noqa: E402
from housecal.services.intervals import previous_month_window  # noqa: E402
from housecal.services.profile_service import pick_color_for_user  # noqa: E402

# ---------------------------------------------------------------------------
# Seed data definitions
# ---------------------------------------------------------------------------

ADMIN_PROFILE = {
    "id": uuid.UUID(os.environ.get("SEED_ADMIN_ID", "00000000-0000-4000-8000-000000000001")),
    "email": os.environ.get("SEED_ADMIN_EMAIL", "admin@bayavebearln.com"),
    "name": "Calendar Admin",
}

HOUSES = [
    {
        "name": "112 Bear Ln",
        "rules": (
            "Check-out by 11am.\n"
            "Strip the beds and start the laundry before you leave.\n"
            "No pets upstairs."
        ),
    },
    {
        "name": "155 Bay Ave",
        "rules": "Quiet hours after 10pm.\nTake the trash to the curb on Sunday night.",
    },
    {
        "name": "156 Bay Ave",
        "rules": None,
    },
]


def build_bookings(houses: list[House], created_by: uuid.UUID, today: date) -> list[Booking]:
    """Sample stays in and around the last completed month.

    Includes a stay crossing the month start, two overlapping stays on the
    same house and a cancelled stay, so every branch of the usage report is
    visible.
    """
    window = previous_month_window(today)
    first = window.start
    specs = [
        # (house index, start offset from month start, nights, guests, status, note)
        (0, -3, 5, 4, STATUS_ACTIVE, "Long weekend"),
        (0, 9, 5, 2, STATUS_ACTIVE, None),
        (0, 13, 6, 3, STATUS_ACTIVE, "Overlaps the stay before"),
        (1, 20, 7, 6, STATUS_ACTIVE, "Cousins' week"),
        (1, 2, 3, 2, STATUS_CANCELLED, None),
    ]
    bookings: list[Booking] = []
    for house_index, offset, nights, guests, status, note in specs:
        start = first + timedelta(days=offset)
        bookings.append(
            Booking(
                house_id=houses[house_index].id,
                created_by=created_by,
                guest_count=guests,
                start_date=start,
                end_date=start + timedelta(days=nights),
                status=status,
                note=note,
            )
        )
    return bookings


async def seed_session(session: AsyncSession, today: date | None = None) -> tuple[list[House], list[Booking]]:
    """Replace all calendar data in ``session`` with the sample set."""
    await session.execute(delete(Booking))
    await session.execute(delete(House))
    await session.execute(delete(Profile).where(Profile.id == ADMIN_PROFILE["id"]))
    await session.flush()
    session.expunge_all()

    admin = Profile(
        id=ADMIN_PROFILE["id"],
        email=ADMIN_PROFILE["email"],
        name=ADMIN_PROFILE["name"],
        color=pick_color_for_user(ADMIN_PROFILE["id"]),
        is_admin=True,
    )
    session.add(admin)

    houses = [House(**data) for data in HOUSES]
    session.add_all(houses)
    await session.flush()

    bookings = build_bookings(houses, admin.id, today or date.today())
    session.add_all(bookings)
    await session.flush()
    return houses, bookings


async def seed() -> None:
    """Create missing tables and load the sample data."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_factory() as session:
        houses, bookings = await seed_session(session)
        await session.commit()

    print(f"Created {len(houses)} houses and {len(bookings)} bookings")
    print(f"Admin profile: {ADMIN_PROFILE['email']} (id={ADMIN_PROFILE['id']})")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed())
