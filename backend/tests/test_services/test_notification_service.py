"""Tests for booking notification emails."""

from datetime import date
from unittest.mock import patch

import pytest

from housecal.config import settings
from housecal.services import notification_service
from housecal.services.notification_service import (
    EVENT_CANCELLED,
    EVENT_CREATED,
    compose_booking_email,
    deliver_notification,
    format_date,
    send_email,
)


def _compose(**overrides):
    params = {
        "event": EVENT_CREATED,
        "recipients": ["a@test.com", "b@test.com"],
        "house_name": "112 Bear Ln",
        "start_date": date(2026, 7, 3),
        "end_date": date(2026, 7, 8),
        "guest_count": 4,
        "actor": "a@test.com",
        "note": None,
    }
    params.update(overrides)
    return compose_booking_email(**params)


class TestCompose:
    """Subject and body composition."""

    def test_format_date(self):
        assert format_date(date(2026, 1, 5)) == "01/05/2026"

    def test_created_subject(self):
        notification = _compose()
        assert notification.subject == "New booking: 112 Bear Ln (07/03/2026 → 07/08/2026)"
        assert notification.recipients == ["a@test.com", "b@test.com"]

    def test_cancelled_subject_and_actor_label(self):
        notification = _compose(event=EVENT_CANCELLED)
        assert notification.subject.startswith("Cancelled booking: 112 Bear Ln")
        assert "Cancelled by" in notification.html
        assert "Booking cancelled" in notification.html

    def test_body_lists_stay_details(self):
        html = _compose().html
        assert "112 Bear Ln" in html
        assert "07/03/2026" in html
        assert "07/08/2026" in html
        assert "Booked by" in html
        assert settings.notify_brand_name.replace("&", "&amp;") in html

    def test_values_are_html_escaped(self):
        html = _compose(house_name="<b>Bear</b>", note="Bring <script>", actor="O'Neil & co").html
        assert "<b>Bear</b>" not in html
        assert "&lt;b&gt;Bear&lt;/b&gt;" in html
        assert "&lt;script&gt;" in html
        assert "O&#x27;Neil &amp; co" in html

    def test_note_block_only_when_note_present(self):
        assert "Note" not in _compose(note="   ").html
        assert "Note" in _compose(note="Arriving late").html


class TestSend:
    """Delivery through Resend."""

    def test_skips_without_api_key(self, monkeypatch):
        monkeypatch.setattr(settings, "resend_api_key", "")
        with patch.object(notification_service.resend.Emails, "send") as mock_send:
            assert send_email(_compose()) is None
        mock_send.assert_not_called()

    def test_skips_without_recipients(self, monkeypatch):
        monkeypatch.setattr(settings, "resend_api_key", "re_test")
        with patch.object(notification_service.resend.Emails, "send") as mock_send:
            assert send_email(_compose(recipients=[])) is None
        mock_send.assert_not_called()

    def test_sends_via_resend(self, monkeypatch):
        monkeypatch.setattr(settings, "resend_api_key", "re_test")
        with patch.object(notification_service.resend.Emails, "send", return_value={"id": "email-1"}) as mock_send:
            result = send_email(_compose())

        assert result == {"id": "email-1"}
        params = mock_send.call_args.args[0]
        assert params["to"] == ["a@test.com", "b@test.com"]
        assert params["from"] == settings.notify_from_address
        assert params["reply_to"] == settings.notify_reply_to
        assert params["subject"].startswith("New booking")

    def test_send_failure_propagates(self, monkeypatch):
        monkeypatch.setattr(settings, "resend_api_key", "re_test")
        with patch.object(notification_service.resend.Emails, "send", side_effect=RuntimeError("boom")):
            with pytest.raises(RuntimeError):
                send_email(_compose())

    def test_deliver_logs_and_swallows_failures(self, monkeypatch, caplog):
        monkeypatch.setattr(settings, "resend_api_key", "re_test")
        with patch.object(notification_service.resend.Emails, "send", side_effect=RuntimeError("boom")):
            deliver_notification(_compose())
        assert "Email notify failed" in caplog.text
