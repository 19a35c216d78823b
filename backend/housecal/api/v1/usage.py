"""Usage API router — monthly booked-days report per house (admins only)."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from housecal.api.deps import get_db, require_admin
from housecal.models.profile import Profile
from housecal.schemas.usage import UsageReportResponse
from housecal.services.intervals import parse_month_label, previous_month_window
from housecal.services.usage_service import fetch_usage

router = APIRouter(prefix="/api/v1/usage", tags=["usage"])


@router.get("", response_model=UsageReportResponse)
async def get_usage(
    month: str | None = Query(None, description="Month as YYYY-MM; defaults to the last completed month"),
    db: AsyncSession = Depends(get_db),
    admin: Profile = Depends(require_admin),
) -> UsageReportResponse:
    """Report how many days each house was booked during one calendar month.

    Overlapping bookings on a house are each counted in full, so a house's
    ``usage_rate`` can exceed 1.0.
    """
    if month is None:
        window = previous_month_window()
    else:
        try:
            window = parse_month_label(month)
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(exc),
            ) from None

    rows = await fetch_usage(db, window)
    return UsageReportResponse(
        month=window.label,
        month_start=window.start,
        month_end=window.end,
        total_days=window.total_days,
        rows=rows,
    )
