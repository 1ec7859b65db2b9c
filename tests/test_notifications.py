"""
Tests for the notification sink and mailer
"""

from datetime import date, time
from unittest.mock import MagicMock, patch

import pytest

from scheduling import notifications
from utils.emailer import send_email


class _Reservation:
    service_name = "Haircut"
    date = date(2030, 1, 7)
    time = time(9, 0)
    status = "confirmed"


class TestRender:
    def test_booking_confirmed(self):
        payload = notifications.reservation_payload(_Reservation())
        subject, body = notifications._render(notifications.BOOKING_CONFIRMED, "Alice", payload, "Salon")

        assert subject == "Booking Confirmed - Haircut on 2030-01-07"
        assert "Hello Alice," in body
        assert "Time: 09:00" in body
        assert body.endswith("Salon")

    def test_booking_cancelled(self):
        payload = notifications.reservation_payload(_Reservation())
        subject, _ = notifications._render(notifications.BOOKING_CANCELLED, "Alice", payload, "Salon")
        assert subject.startswith("Booking Cancelled")

    def test_registration(self):
        subject, body = notifications._render(notifications.USER_REGISTERED, "Bob", {}, "Salon")
        assert subject == "Welcome to Salon - Account Created"
        assert "successfully created" in body

    def test_unknown_event(self):
        with pytest.raises(ValueError):
            notifications._render("nope", "x", {}, "Salon")


class TestNotify:
    def test_inline_delivery_builds_payload(self, app, user):
        with patch("scheduling.notifications.send_email", return_value=(True, None)) as send:
            notifications.notify(notifications.USER_REGISTERED, user)
        assert send.call_args[0][0] == "alice@example.com"

    def test_unconfigured_smtp_is_logged_not_raised(self, app, user, caplog):
        with caplog.at_level("WARNING", logger="scheduling.notifications"):
            notifications.notify(notifications.USER_REGISTERED, user)
        assert "not sent: Email not configured" in caplog.text

    def test_exceptions_are_swallowed(self, app, user, caplog):
        with patch("scheduling.notifications.send_email", side_effect=OSError("boom")):
            notifications.notify(notifications.USER_REGISTERED, user)
        assert "failed" in caplog.text

    def test_async_delivery_runs_on_thread(self, app, user):
        app.config["NOTIFY_ASYNC"] = True
        started = []

        class FakeThread:
            def __init__(self, target, args, name, daemon):
                started.append((target, args, daemon))

            def start(self):
                pass

        with patch("scheduling.notifications.threading.Thread", FakeThread):
            notifications.notify(notifications.USER_REGISTERED, user)

        target, args, daemon = started[0]
        assert target is notifications.deliver
        assert args[1] == notifications.USER_REGISTERED
        assert args[2]["user_id"] == user.id
        assert daemon is True


class TestSendEmail:
    def test_not_configured(self, app):
        assert send_email("a@example.com", "s", "b") == (False, "Email not configured")

    def test_sends_through_smtp(self, app):
        app.config.update(SMTP_HOST="smtp.example.com", SMTP_FROM_EMAIL="noreply@example.com",
                          SMTP_USERNAME="u", SMTP_PASSWORD="p")
        server = MagicMock()
        with patch("utils.emailer.smtplib.SMTP") as smtp:
            smtp.return_value.__enter__.return_value = server
            ok, err = send_email("a@example.com", "Subject", "Body")

        assert (ok, err) == (True, None)
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("u", "p")
        msg = server.send_message.call_args[0][0]
        assert msg["To"] == "a@example.com"
        assert msg["From"] == "Reservations App <noreply@example.com>"

    def test_smtp_failure_returned(self, app):
        app.config.update(SMTP_HOST="smtp.example.com", SMTP_FROM_EMAIL="noreply@example.com")
        with patch("utils.emailer.smtplib.SMTP", side_effect=OSError("refused")):
            ok, err = send_email("a@example.com", "Subject", "Body")
        assert ok is False
        assert "refused" in err
