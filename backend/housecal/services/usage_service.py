"""Usage aggregation — booked days per house over a calendar month."""

import logging
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from housecal.models.booking import STATUS_ACTIVE, Booking
from housecal.models.house import House
from housecal.schemas.usage import UsageRecord
from housecal.services.intervals import (
    BookingSnapshot,
    HouseSnapshot,
    MonthWindow,
    intersects,
    overlap_days,
)

logger = logging.getLogger(__name__)


def compute_usage(
    houses: Iterable[HouseSnapshot],
    bookings: Iterable[BookingSnapshot],
    window: MonthWindow,
) -> list[UsageRecord]:
    """Summarise how many days each house was booked during ``window``.

    Only active bookings count. Each booking is clamped to the window and
    its days are summed per house, so overlapping bookings on the same house
    are counted independently and ``usage_rate`` can exceed 1.0. Every house
    gets a record, in input order, even when nothing was booked.
    """
    total_days = window.total_days
    days_by_house: dict[int, int] = {}

    for booking in bookings:
        if not booking.is_active or not intersects(booking, window):
            continue
        days = overlap_days(booking, window.start, window.end)
        if days <= 0:
            continue
        days_by_house[booking.house_id] = days_by_house.get(booking.house_id, 0) + days

    records: list[UsageRecord] = []
    for house in houses:
        days_with_bookings = days_by_house.get(house.id, 0)
        usage_rate = days_with_bookings / total_days if total_days > 0 else 0.0
        records.append(
            UsageRecord(
                house_id=house.id,
                house_name=house.name,
                month=window.label,
                days_with_bookings=days_with_bookings,
                total_days=total_days,
                usage_rate=usage_rate,
            )
        )
    return records


async def fetch_usage(db: AsyncSession, window: MonthWindow) -> list[UsageRecord]:
    """Load houses and the active bookings touching ``window``, then aggregate.

    Booking rows that fail snapshot validation are logged and left out of
    the report rather than failing it.
    """
    house_rows = (await db.execute(select(House).order_by(House.name, House.id))).scalars().all()
    houses = [HouseSnapshot.from_row(row) for row in house_rows]

    booking_rows = (
        (
            await db.execute(
                select(Booking).where(
                    Booking.status == STATUS_ACTIVE,
                    Booking.start_date < window.end,
                    Booking.end_date > window.start,
                )
            )
        )
        .scalars()
        .all()
    )

    bookings: list[BookingSnapshot] = []
    for row in booking_rows:
        try:
            bookings.append(BookingSnapshot.from_row(row))
        except (TypeError, ValueError) as exc:
            logger.warning("Skipping malformed booking %s in usage report: %s", row.id, exc)

    logger.info(
        "Usage report for %s: %d houses, %d bookings",
        window.label,
        len(houses),
        len(bookings),
    )
    return compute_usage(houses, bookings, window)
