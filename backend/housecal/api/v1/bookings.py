"""Bookings API router — the shared calendar.

Any signed-in family member with a profile name can see every booking, book
any house, and cancel their own bookings. Overlapping stays are allowed.
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from housecal.api.deps import get_current_profile, get_db
from housecal.models.booking import BOOKING_STATUSES, STATUS_ACTIVE, Booking
from housecal.models.profile import Profile
from housecal.schemas.booking import BookingCreate, BookingListResponse, BookingResponse
from housecal.services import booking_service
from housecal.services.booking_service import (
    BookingNotFoundError,
    BookingPermissionError,
    BookingRuleError,
    BookingStateError,
)
from housecal.services.notification_service import (
    EVENT_CANCELLED,
    EVENT_CREATED,
    compose_booking_email,
    deliver_notification,
)
from housecal.services.profile_service import display_name, list_notification_emails, pick_color_for_user

router = APIRouter(prefix="/api/v1/bookings", tags=["bookings"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _creator_profiles(db: AsyncSession, bookings: list[Booking]) -> dict[uuid.UUID, Profile]:
    user_ids = {b.created_by for b in bookings}
    if not user_ids:
        return {}
    result = await db.execute(select(Profile).where(Profile.id.in_(list(user_ids))))
    return {p.id: p for p in result.scalars().all()}


def _to_response(booking: Booking, creator: Profile | None) -> BookingResponse:
    response = BookingResponse.model_validate(booking)
    response.booked_by = display_name(creator)
    response.color = (creator.color if creator else None) or pick_color_for_user(booking.created_by)
    return response


async def _queue_notification(
    db: AsyncSession,
    background_tasks: BackgroundTasks,
    *,
    event: str,
    booking: Booking,
    actor: Profile,
) -> None:
    """Compose the email now and send it after the response goes out."""
    house = await booking_service.get_house(db, booking.house_id)
    notification = compose_booking_email(
        event=event,
        recipients=await list_notification_emails(db),
        house_name=house.name if house else "Unknown house",
        start_date=booking.start_date,
        end_date=booking.end_date,
        guest_count=booking.guest_count,
        actor=actor.email or display_name(actor),
        note=booking.note,
    )
    background_tasks.add_task(deliver_notification, notification)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get(
    "",
    response_model=BookingListResponse,
    summary="List bookings for a house",
)
async def list_bookings(
    house_id: int = Query(..., description="House to show on the calendar"),
    status_filter: str | None = Query(
        STATUS_ACTIVE,
        alias="status",
        pattern="^(active|cancelled|all)$",
        description="Booking status, or 'all'",
    ),
    db: AsyncSession = Depends(get_db),
    current_profile: Profile = Depends(get_current_profile),
) -> BookingListResponse:
    """Return a house's bookings ordered by start date, annotated with who booked them."""
    status_value = status_filter if status_filter in BOOKING_STATUSES else None
    bookings = await booking_service.list_bookings(db, house_id, status_value)
    creators = await _creator_profiles(db, bookings)
    items = [_to_response(b, creators.get(b.created_by)) for b in bookings]
    return BookingListResponse(items=items, total=len(items))


@router.get(
    "/{booking_id}",
    response_model=BookingResponse,
    summary="Get a booking",
)
async def get_booking(
    booking_id: int,
    db: AsyncSession = Depends(get_db),
    current_profile: Profile = Depends(get_current_profile),
) -> BookingResponse:
    try:
        booking = await booking_service.get_booking(db, booking_id)
    except BookingNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found") from None
    creators = await _creator_profiles(db, [booking])
    return _to_response(booking, creators.get(booking.created_by))


@router.post(
    "",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Book a house",
)
async def create_booking(
    body: BookingCreate,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    current_profile: Profile = Depends(get_current_profile),
) -> BookingResponse:
    """Create an active booking for the caller and email everyone about it.

    Validates that:
    - The house exists.
    - The stay is at least one night and no longer than the nightly cap.
    """
    if await booking_service.get_house(db, body.house_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="House not found",
        )

    try:
        booking = await booking_service.create_booking(db, current_profile, body)
    except BookingRuleError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from None

    await _queue_notification(db, background_tasks, event=EVENT_CREATED, booking=booking, actor=current_profile)
    return _to_response(booking, current_profile)


@router.post(
    "/{booking_id}/cancel",
    response_model=BookingResponse,
    summary="Cancel one of your bookings",
)
async def cancel_booking(
    booking_id: int,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    current_profile: Profile = Depends(get_current_profile),
) -> BookingResponse:
    """Cancel the caller's own active booking and email everyone about it."""
    try:
        booking = await booking_service.cancel_booking(db, current_profile, booking_id)
    except BookingNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found") from None
    except BookingPermissionError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from None
    except BookingStateError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from None

    await _queue_notification(db, background_tasks, event=EVENT_CANCELLED, booking=booking, actor=current_profile)
    return _to_response(booking, current_profile)
