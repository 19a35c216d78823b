"""Booking model — a half-open stay ``[start_date, end_date)`` at a house."""

import uuid
from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from housecal.database import Base

STATUS_ACTIVE = "active"
STATUS_CANCELLED = "cancelled"
BOOKING_STATUSES = (STATUS_ACTIVE, STATUS_CANCELLED)


class Booking(Base):
    """A stay booked by a family member on the shared calendar.

    ``end_date`` is the check-out day and is exclusive, so the stay occupies
    the nights ``start_date`` through ``end_date - 1``. Bookings on the same
    house may overlap.
    """

    __tablename__ = "bookings"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    house_id: Mapped[int] = mapped_column(
        ForeignKey("houses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_by: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    guest_count: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20),
        default=STATUS_ACTIVE,
        nullable=False,
        index=True,
    )  # active, cancelled
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
    cancelled_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())

    __table_args__ = (Index("ix_bookings_house_dates", "house_id", "start_date", "end_date"),)

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, house_id={self.house_id}, "
            f"{self.start_date}..{self.end_date}, status={self.status})>"
        )
