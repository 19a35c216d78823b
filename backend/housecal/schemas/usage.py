"""Pydantic v2 schemas for the monthly usage report."""

from datetime import date

from pydantic import BaseModel, Field


class UsageRecord(BaseModel):
    """Usage of one house over one calendar month.

    ``usage_rate`` is ``days_with_bookings / total_days`` and is not capped at
    1.0: overlapping bookings on the same house are each counted in full.
    """

    house_id: int
    house_name: str
    month: str  # e.g. "2026-01"
    days_with_bookings: int = Field(..., ge=0)
    total_days: int
    usage_rate: float = Field(..., ge=0)


class UsageReportResponse(BaseModel):
    """Usage of every house over a single month window."""

    month: str
    month_start: date
    month_end: date  # exclusive
    total_days: int
    rows: list[UsageRecord]
