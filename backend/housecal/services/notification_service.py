"""Booking notifications — compose and send house-wide emails via Resend.

Every profile on the calendar is emailed when a stay is booked or cancelled.
Messages are composed inside the request (while the DB session is open) and
delivered afterwards from a FastAPI background task, so a delivery failure
never fails the booking itself.
"""

import logging
from dataclasses import dataclass
from datetime import date
from html import escape

import resend

from housecal.config import settings

logger = logging.getLogger(__name__)

EVENT_CREATED = "created"
EVENT_CANCELLED = "cancelled"

_EVENT_COPY = {
    EVENT_CREATED: {"subject": "New booking", "banner": "Booking created", "actor": "Booked by"},
    EVENT_CANCELLED: {"subject": "Cancelled booking", "banner": "Booking cancelled", "actor": "Cancelled by"},
}


@dataclass(frozen=True)
class BookingNotification:
    """A composed notification ready for delivery."""

    recipients: list[str]
    subject: str
    html: str
    event: str = EVENT_CREATED


def format_date(value: date) -> str:
    """Render a calendar date as ``MM/DD/YYYY``."""
    return f"{value.month:02d}/{value.day:02d}/{value.year:04d}"


def _row(label: str, value: str) -> str:
    return (
        "<tr>"
        f'<td style="padding:6px 0;color:#0f172a;font-weight:700;">{label}</td>'
        f'<td style="padding:6px 0;color:#334155;text-align:right;">{value}</td>'
        "</tr>"
    )


def compose_booking_email(
    *,
    event: str,
    recipients: list[str],
    house_name: str,
    start_date: date,
    end_date: date,
    guest_count: int,
    actor: str,
    note: str | None = None,
) -> BookingNotification:
    """Build the subject and HTML body for a booking event.

    Every interpolated value is HTML-escaped; the note keeps its line breaks.
    """
    copy = _EVENT_COPY[event]
    brand = escape(settings.notify_brand_name)
    subject = f"{copy['subject']}: {house_name} ({format_date(start_date)} → {format_date(end_date)})"

    note = (note or "").strip()
    note_block = ""
    if note:
        note_block = (
            '<tr><td colspan="2" style="padding:12px 0 0;color:#0f172a;font-weight:700;">Note</td></tr>'
            '<tr><td colspan="2" style="padding:0 0 12px;color:#334155;white-space:pre-wrap;">'
            f"{escape(note)}</td></tr>"
        )

    rows = "".join(
        [
            _row("House", escape(house_name)),
            _row("Check-in", format_date(start_date)),
            _row("Check-out", format_date(end_date)),
            _row("Guests", escape(str(guest_count))),
            _row(copy["actor"], escape(actor)),
        ]
    )

    html = (
        '<div style="background:#f8fafc;padding:24px;font-family:ui-sans-serif,system-ui,sans-serif;line-height:1.4;">'
        '<div style="max-width:560px;margin:0 auto;background:#ffffff;border:1px solid #e2e8f0;border-radius:14px;">'
        '<div style="padding:18px 20px;background:#064789;color:#ffffff;">'
        f'<div style="font-size:18px;font-weight:800;">{brand}</div>'
        f'<div style="opacity:.9;margin-top:4px;">{copy["banner"]}</div>'
        "</div>"
        '<div style="padding:18px 20px;">'
        f'<table role="presentation" cellpadding="0" cellspacing="0" style="width:100%;">{rows}{note_block}</table>'
        '<div style="margin-top:16px;padding-top:14px;border-top:1px solid #e2e8f0;color:#64748b;font-size:12px;">'
        "This is an automated notification."
        "</div></div></div></div>"
    )

    return BookingNotification(
        recipients=list(recipients),
        subject=subject,
        html=html,
        event=event,
    )


def send_email(notification: BookingNotification) -> dict | None:
    """Deliver a notification through Resend.

    Returns the Resend response, or ``None`` when sending was skipped.

    Raises:
        Exception: Whatever the Resend SDK raises on delivery failure.
    """
    if not notification.recipients:
        logger.info("No recipients for %s notification, skipping", notification.event)
        return None
    if not settings.resend_api_key:
        logger.info(
            "RESEND_API_KEY not configured, skipping %s notification to %d recipients",
            notification.event,
            len(notification.recipients),
        )
        return None

    resend.api_key = settings.resend_api_key
    params: resend.Emails.SendParams = {
        "from": settings.notify_from_address,
        "to": notification.recipients,
        "reply_to": settings.notify_reply_to,
        "subject": notification.subject,
        "html": notification.html,
    }
    response = resend.Emails.send(params)
    logger.info(
        "Sent %s notification to %d recipients: %s",
        notification.event,
        len(notification.recipients),
        response,
    )
    return response


def deliver_notification(notification: BookingNotification) -> None:
    """Background-task entry point: send and log, never raise."""
    try:
        send_email(notification)
    except Exception:
        logger.warning("Email notify failed for %s", notification.subject, exc_info=True)
