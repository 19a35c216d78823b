"""Admin API router — destructive operations reserved for admins."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from housecal.api.deps import get_db, require_admin
from housecal.models.profile import Profile
from housecal.schemas.common import MessageResponse
from housecal.services import booking_service
from housecal.services.booking_service import BookingNotFoundError

router = APIRouter(prefix="/api/v1/admin", tags=["admin"])


@router.delete(
    "/bookings/{booking_id}",
    response_model=MessageResponse,
    summary="Permanently delete a booking",
)
async def delete_booking(
    booking_id: int,
    db: AsyncSession = Depends(get_db),
    admin: Profile = Depends(require_admin),
) -> MessageResponse:
    """Hard-delete any booking, active or cancelled, whoever created it."""
    try:
        await booking_service.delete_booking(db, booking_id, deleted_by=admin.id)
    except BookingNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Booking not found",
        ) from None
    return MessageResponse(message="Booking deleted")
