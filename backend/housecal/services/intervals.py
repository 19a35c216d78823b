"""Booking interval model — half-open date ranges, month windows, overlap.

All ranges here are half-open ``[start, end)`` over calendar dates. A booking
from ``2026-01-30`` to ``2026-02-02`` occupies the nights of Jan 30, Jan 31
and Feb 1; against the January window it overlaps by exactly two days.
"""

from __future__ import annotations

import re
import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from typing import Any, Protocol

from housecal.models.booking import BOOKING_STATUSES, STATUS_ACTIVE

_MONTH_LABEL_RE = re.compile(r"^(\d{4})-(\d{2})$")


class DateSpan(Protocol):
    """Anything with a half-open ``[start_date, end_date)`` range."""

    start_date: date
    end_date: date


@dataclass(frozen=True)
class MonthWindow:
    """A calendar month as a half-open window ``[start, end)``."""

    start: date
    end: date

    @property
    def total_days(self) -> int:
        return (self.end - self.start).days

    @property
    def label(self) -> str:
        return f"{self.start.year:04d}-{self.start.month:02d}"


@dataclass(frozen=True)
class HouseSnapshot:
    """Read-only view of a house as the usage report sees it."""

    id: int
    name: str

    @classmethod
    def from_row(cls, row: Any) -> HouseSnapshot:
        """Build a snapshot from an ORM row or a mapping returned by the store."""
        get = row.get if isinstance(row, Mapping) else lambda key: getattr(row, key)
        return cls(id=int(get("id")), name=str(get("name")))


@dataclass(frozen=True)
class BookingSnapshot:
    """Read-only view of a booking, validated where it leaves the store."""

    id: int
    house_id: int
    created_by: uuid.UUID | str
    guest_count: int
    start_date: date
    end_date: date
    status: str
    note: str | None = None

    @property
    def is_active(self) -> bool:
        return self.status == STATUS_ACTIVE

    @classmethod
    def from_row(cls, row: Any) -> BookingSnapshot:
        """Build a snapshot from an ORM row or a mapping returned by the store.

        Raises:
            ValueError: unknown status, ``guest_count < 1`` or unparseable dates.
        """
        get = row.get if isinstance(row, Mapping) else lambda key: getattr(row, key, None)

        status = get("status")
        if status not in BOOKING_STATUSES:
            raise ValueError(f"Unknown booking status: {status!r}")

        guest_count = int(get("guest_count") or 0)
        if guest_count < 1:
            raise ValueError(f"guest_count must be >= 1, got {guest_count}")

        return cls(
            id=int(get("id")),
            house_id=int(get("house_id")),
            created_by=get("created_by"),
            guest_count=guest_count,
            start_date=_as_date(get("start_date")),
            end_date=_as_date(get("end_date")),
            status=status,
            note=get("note"),
        )


def _as_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value[:10])
    raise ValueError(f"Not a calendar date: {value!r}")


def stay_nights(start: date, end: date) -> int:
    """Number of nights in the half-open stay ``[start, end)``."""
    return (end - start).days


def overlap_days(booking: DateSpan, window_start: date, window_end: date) -> int:
    """Days shared by ``booking`` and the window ``[window_start, window_end)``.

    Never negative: disjoint ranges, and bookings whose end is not after their
    start, yield 0.
    """
    clamped_start = max(booking.start_date, window_start)
    clamped_end = min(booking.end_date, window_end)
    return max(0, (clamped_end - clamped_start).days)


def intersects(booking: DateSpan, window: MonthWindow) -> bool:
    return booking.start_date < window.end and booking.end_date > window.start


def month_window(year: int, month: int) -> MonthWindow:
    """The window covering ``month`` of ``year``."""
    start = date(year, month, 1)
    end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    return MonthWindow(start=start, end=end)


def previous_month_window(today: date | None = None) -> MonthWindow:
    """The most recently completed calendar month relative to ``today``.

    Any day in February 2026 yields ``[2026-01-01, 2026-02-01)``; any day in
    January rolls back to December of the previous year.
    """
    today = today or date.today()
    if today.month == 1:
        return month_window(today.year - 1, 12)
    return month_window(today.year, today.month - 1)


def parse_month_label(label: str) -> MonthWindow:
    """Parse ``YYYY-MM`` into a month window.

    Raises:
        ValueError: If the label is malformed or the month is out of range.
    """
    match = _MONTH_LABEL_RE.match(label.strip())
    if match is None:
        raise ValueError(f"Month must look like YYYY-MM, got {label!r}")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise ValueError(f"Month out of range in {label!r}")
    return month_window(year, month)
