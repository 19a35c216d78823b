"""Booking service — create, cancel and delete stays on the shared calendar.

Overlapping bookings are allowed: two families may share a house, so no
conflict check is made against existing stays.
"""

import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from housecal.config import settings
from housecal.models.booking import STATUS_ACTIVE, STATUS_CANCELLED, Booking
from housecal.models.house import House
from housecal.models.profile import Profile
from housecal.schemas.booking import BookingCreate
from housecal.services.intervals import stay_nights

logger = logging.getLogger(__name__)


class BookingRuleError(ValueError):
    """A booking request breaks a calendar rule (bad range, stay too long)."""


class BookingNotFoundError(LookupError):
    """No booking with the requested id."""


class BookingPermissionError(PermissionError):
    """The caller may not change this booking."""


class BookingStateError(RuntimeError):
    """The booking is not in a state that allows the change."""


def validate_stay(body: BookingCreate, max_nights: int | None = None) -> int:
    """Check the stay length and return the number of nights.

    Raises:
        BookingRuleError: The range is empty or longer than the nightly cap.
    """
    max_nights = settings.max_stay_nights if max_nights is None else max_nights
    nights = stay_nights(body.start_date, body.end_date)
    if nights <= 0:
        raise BookingRuleError("Invalid date range.")
    if nights > max_nights:
        raise BookingRuleError(f"Max stay is {max_nights} nights.")
    return nights


async def get_house(db: AsyncSession, house_id: int) -> House | None:
    result = await db.execute(select(House).where(House.id == house_id))
    return result.scalar_one_or_none()


async def get_booking(db: AsyncSession, booking_id: int) -> Booking:
    """Fetch a booking by id.

    Raises:
        BookingNotFoundError: No such booking.
    """
    result = await db.execute(select(Booking).where(Booking.id == booking_id))
    booking = result.scalar_one_or_none()
    if booking is None:
        raise BookingNotFoundError(f"Booking {booking_id} not found")
    return booking


async def list_bookings(
    db: AsyncSession,
    house_id: int,
    status: str | None = STATUS_ACTIVE,
) -> list[Booking]:
    """Bookings for a house ordered by start date; ``status=None`` returns all."""
    query = select(Booking).where(Booking.house_id == house_id)
    if status is not None:
        query = query.where(Booking.status == status)
    result = await db.execute(query.order_by(Booking.start_date, Booking.id))
    return list(result.scalars().all())


async def create_booking(db: AsyncSession, profile: Profile, body: BookingCreate) -> Booking:
    """Create an active booking owned by ``profile``.

    The caller has already checked that the house exists.
    """
    nights = validate_stay(body)

    booking = Booking(
        house_id=body.house_id,
        created_by=profile.id,
        guest_count=body.guest_count,
        start_date=body.start_date,
        end_date=body.end_date,
        status=STATUS_ACTIVE,
        note=body.note,
    )
    db.add(booking)
    await db.flush()
    await db.refresh(booking)

    logger.info(
        "Booking %s created by %s: house %s, %s..%s (%d nights)",
        booking.id,
        profile.id,
        booking.house_id,
        booking.start_date,
        booking.end_date,
        nights,
    )
    return booking


async def cancel_booking(db: AsyncSession, profile: Profile, booking_id: int) -> Booking:
    """Soft-cancel one of the caller's own active bookings.

    Raises:
        BookingNotFoundError: No such booking.
        BookingPermissionError: The booking belongs to someone else.
        BookingStateError: The booking is already cancelled.
    """
    booking = await get_booking(db, booking_id)

    if booking.created_by != profile.id:
        raise BookingPermissionError("You can only cancel your own booking.")
    if booking.status != STATUS_ACTIVE:
        raise BookingStateError("This booking is already cancelled.")

    booking.status = STATUS_CANCELLED
    booking.cancelled_at = datetime.now(timezone.utc)
    db.add(booking)
    await db.flush()
    await db.refresh(booking)

    logger.info("Booking %s cancelled by %s", booking.id, profile.id)
    return booking


async def delete_booking(db: AsyncSession, booking_id: int, deleted_by: uuid.UUID) -> None:
    """Permanently delete a booking regardless of owner or status.

    Raises:
        BookingNotFoundError: No such booking.
    """
    booking = await get_booking(db, booking_id)
    await db.delete(booking)
    await db.flush()
    logger.warning("Booking %s permanently deleted by admin %s", booking_id, deleted_by)
