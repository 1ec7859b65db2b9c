"""
Best-effort notification sink.

Events are rendered to plain-text mail and handed to ``utils.emailer``.
Delivery runs on a daemon thread (``NOTIFY_ASYNC``) so a slow or broken SMTP
server never delays or fails the booking that triggered it. Failures are
logged, never raised.
"""

import logging
import threading

from flask import current_app

from utils.emailer import send_email

logger = logging.getLogger(__name__)

USER_REGISTERED = "user_registered"
BOOKING_CONFIRMED = "booking_confirmed"
BOOKING_CANCELLED = "booking_cancelled"


def reservation_payload(reservation) -> dict:
    return {
        "service_name": reservation.service_name,
        "date": reservation.date.isoformat(),
        "time": reservation.time.strftime("%H:%M"),
        "status": reservation.status,
    }


def _render(event: str, name: str, payload: dict, app_name: str):
    if event == USER_REGISTERED:
        subject = f"Welcome to {app_name} - Account Created"
        lines = [
            f"Hello {name},",
            "",
            "Your account has been successfully created.",
            "You can now sign in and book services at any time.",
        ]
    elif event == BOOKING_CONFIRMED:
        day = payload["date"]
        subject = f"Booking Confirmed - {payload['service_name']} on {day}"
        lines = [
            f"Hello {name},",
            "",
            "Your booking has been confirmed.",
            "",
            f"Service: {payload['service_name']}",
            f"Date: {day}",
            f"Time: {payload['time']}",
            f"Status: {payload['status']}",
        ]
    elif event == BOOKING_CANCELLED:
        subject = f"Booking Cancelled - {payload['service_name']} on {payload['date']}"
        lines = [
            f"Hello {name},",
            "",
            "Your booking has been cancelled.",
            "",
            f"Service: {payload['service_name']}",
            f"Date: {payload['date']}",
            f"Time: {payload['time']}",
            f"Status: {payload['status']}",
        ]
    else:
        raise ValueError(f"Unknown notification event: {event}")

    lines += ["", "-", app_name]
    return subject, "\n".join(lines)


def deliver(app, event: str, payload: dict):
    with app.app_context():
        try:
            app_name = app.config.get("EMAIL_APP_NAME") or "Reservations App"
            subject, body = _render(event, payload.get("name") or "", payload, app_name)
            ok, err = send_email(payload.get("email"), subject, body)
        except Exception:
            logger.exception("Notification %s for user %s failed", event, payload.get("user_id"))
            return False

        if not ok:
            logger.warning(
                "Notification %s for user %s not sent: %s",
                event, payload.get("user_id"), err,
            )
        else:
            logger.info("Notification %s sent to %s", event, payload.get("email"))
        return ok


def notify(event: str, user, payload: dict = None):
    """Fire ``event`` for ``user``. Never raises."""
    try:
        data = dict(payload or {})
        data["user_id"] = getattr(user, "id", None)
        data["email"] = getattr(user, "email", None)
        data["name"] = getattr(user, "name", None)

        app = current_app._get_current_object()
        if app.config.get("NOTIFY_ASYNC", True):
            worker = threading.Thread(
                target=deliver,
                args=(app, event, data),
                name=f"notify-{event}",
                daemon=True,
            )
            worker.start()
        else:
            deliver(app, event, data)
    except Exception:
        logger.exception("Could not dispatch notification %s", event)
