"""
Weekly schedule templates per service.

Reads are what the availability and booking paths use at request time;
``add_template`` is the administrative write used when a service is set up.
"""

from sqlalchemy.exc import IntegrityError

from models import db
from models.timeslot_template import WeeklyTimeslotTemplate
from scheduling.dates import parse_time
from scheduling.errors import BookingError, DuplicateTemplate


def templates_for(service_id: int, day_of_week: int):
    return (
        WeeklyTimeslotTemplate.query
        .filter_by(service_id=service_id, day_of_week=day_of_week, enabled=True)
        .order_by(WeeklyTimeslotTemplate.start_time.asc())
        .all()
    )


def find_template(service_id: int, day_of_week: int, start_time):
    return (
        WeeklyTimeslotTemplate.query
        .filter_by(
            service_id=service_id,
            day_of_week=day_of_week,
            start_time=start_time,
            enabled=True,
        )
        .first()
    )


def weekly_schedule(service_id: int):
    return (
        WeeklyTimeslotTemplate.query
        .filter_by(service_id=service_id)
        .order_by(WeeklyTimeslotTemplate.day_of_week.asc(), WeeklyTimeslotTemplate.start_time.asc())
        .all()
    )


def add_template(service_id: int, day_of_week: int, start_time, end_time, enabled: bool = True):
    if not isinstance(day_of_week, int) or not 0 <= day_of_week <= 6:
        raise BookingError("day_of_week must be between 0 (Sunday) and 6 (Saturday)")

    st = parse_time(start_time)
    et = parse_time(end_time)
    if et <= st:
        raise BookingError("end_time must be after start_time")

    template = WeeklyTimeslotTemplate(
        service_id=service_id,
        day_of_week=day_of_week,
        start_time=st,
        end_time=et,
        enabled=enabled,
    )
    db.session.add(template)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        # Unique constraint uq_template_service_day_start triggers here
        raise DuplicateTemplate() from None
    return template
