"""
Booking transaction manager.

Double booking is prevented in two layers:

1. an optimistic read that rejects an occupied slot early with a precise
   error, and
2. the partial unique index ``uq_reservation_confirmed_slot`` on
   (service_id, date, time) for confirmed rows, which the database enforces
   atomically at insert time.

Two requests can both pass (1); only one of them can pass (2). The loser's
IntegrityError is reported as ``SlotAlreadyBooked``.
"""

import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError

from models import db
from models.reservation import Reservation, STATUS_CANCELLED, STATUS_CONFIRMED
from scheduling import notifications, schedule_store
from scheduling.catalog import coerce_id, get_service
from scheduling.dates import day_of_week, parse_date, parse_time, utc_today
from scheduling.errors import (
    AlreadyCancelled,
    Forbidden,
    MissingField,
    NotFound,
    PastDate,
    ServiceNotFound,
    SlotAlreadyBooked,
    SlotNotOffered,
)

logger = logging.getLogger(__name__)


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def find_confirmed(service_id: int, day, start_time):
    return (
        Reservation.query
        .filter_by(service_id=service_id, date=day, time=start_time, status=STATUS_CONFIRMED)
        .first()
    )


def create_booking(user_id: int, service_id, date, time) -> Reservation:
    missing = [
        name
        for name, value in (("serviceId", service_id), ("date", date), ("time", time))
        if _is_blank(value)
    ]
    if missing:
        raise MissingField(missing)

    service = get_service(service_id)
    if service is None:
        raise ServiceNotFound()

    day = parse_date(date)
    if day < utc_today():
        raise PastDate()

    start = parse_time(time)
    if schedule_store.find_template(service.id, day_of_week(day), start) is None:
        raise SlotNotOffered()

    # Fast path: reject before attempting the write
    if find_confirmed(service.id, day, start) is not None:
        raise SlotAlreadyBooked()

    reservation = Reservation(
        user_id=user_id,
        service_id=service.id,
        service_name=service.name,
        date=day,
        time=start,
        status=STATUS_CONFIRMED,
    )
    db.session.add(reservation)

    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        if find_confirmed(service.id, day, start) is not None:
            # Lost the race on uq_reservation_confirmed_slot
            logger.info(
                "Concurrent booking lost for service=%s date=%s time=%s",
                service.id, day.isoformat(), start.strftime("%H:%M"),
            )
            raise SlotAlreadyBooked() from None
        raise

    notifications.notify(notifications.BOOKING_CONFIRMED, reservation.user, notifications.reservation_payload(reservation))
    return reservation


def cancel_booking(user_id: int, reservation_id) -> Reservation:
    rid = coerce_id(reservation_id)
    reservation = db.session.get(Reservation, rid) if rid is not None else None
    if reservation is None:
        raise NotFound()

    if reservation.user_id != user_id:
        raise Forbidden()

    if not reservation.is_confirmed:
        raise AlreadyCancelled()

    reservation.status = STATUS_CANCELLED
    reservation.cancelled_at = datetime.utcnow()
    db.session.commit()

    notifications.notify(notifications.BOOKING_CANCELLED, reservation.user, notifications.reservation_payload(reservation))
    return reservation


def list_reservations(user_id: int, status=None):
    q = Reservation.query.filter_by(user_id=user_id)
    if status:
        q = q.filter_by(status=status)
    return q.order_by(Reservation.date.desc(), Reservation.time.desc()).all()
