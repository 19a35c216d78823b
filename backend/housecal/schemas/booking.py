"""Pydantic v2 request/response schemas for booking endpoints."""

import uuid
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class BookingCreate(BaseModel):
    """Schema for creating a booking on the calendar.

    The nightly cap is a configurable product rule and is enforced by the
    booking service, not here.
    """

    house_id: int
    start_date: date
    end_date: date  # check-out day, exclusive
    guest_count: int = Field(..., ge=1)
    note: str | None = Field(None, max_length=2000)

    @field_validator("note")
    @classmethod
    def strip_note(cls, value: str | None) -> str | None:
        """Trim the note and store blank notes as null."""
        if value is None:
            return None
        value = value.strip()
        return value or None

    @model_validator(mode="after")
    def check_dates(self) -> "BookingCreate":
        """Validate that end_date is strictly after start_date."""
        if self.end_date <= self.start_date:
            raise ValueError("Invalid date range.")
        return self


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class BookingResponse(BaseModel):
    """A booking as shown on the calendar."""

    id: int
    house_id: int
    created_by: uuid.UUID
    guest_count: int
    start_date: date
    end_date: date
    status: str
    note: str | None = None
    cancelled_at: datetime | None = None
    created_at: datetime
    booked_by: str = "Unknown"
    color: str | None = None

    model_config = ConfigDict(from_attributes=True)


class BookingListResponse(BaseModel):
    """Bookings for one house."""

    items: list[BookingResponse]
    total: int
