from datetime import datetime, timedelta
from decimal import Decimal

from models import db
from models.service import Service
from scheduling.errors import DuplicateTemplate
from scheduling.schedule_store import add_template

DEFAULT_SERVICES = [
    {"name": "Haircut", "description": "Professional haircut", "price": Decimal("50.00"), "duration_minutes": 60},
    {"name": "Manicure", "description": "Nail care service", "price": Decimal("30.00"), "duration_minutes": 45},
    {"name": "Massage", "description": "Relaxing massage", "price": Decimal("80.00"), "duration_minutes": 90},
]

# Monday..Friday
WORKING_DAYS = (1, 2, 3, 4, 5)
OPENING = "09:00"
CLOSING = "17:00"


def day_windows(duration_minutes: int, opening: str = OPENING, closing: str = CLOSING):
    """Back-to-back (start, end) windows of ``duration_minutes`` that fit between opening and closing."""
    cursor = datetime.strptime(opening, "%H:%M")
    end_of_day = datetime.strptime(closing, "%H:%M")
    step = timedelta(minutes=duration_minutes)

    windows = []
    while cursor + step <= end_of_day:
        windows.append((cursor.time(), (cursor + step).time()))
        cursor += step
    return windows


def seed_catalog():
    """Create the default services and their weekday schedule. Safe to run repeatedly."""
    created = 0
    existing = {s.name: s for s in Service.query.all()}
    for defaults in DEFAULT_SERVICES:
        service = existing.get(defaults["name"])
        if service is None:
            service = Service(**defaults)
            db.session.add(service)
            db.session.commit()

        for dow in WORKING_DAYS:
            for start, end in day_windows(service.duration_minutes):
                try:
                    add_template(service.id, dow, start, end)
                    created += 1
                except DuplicateTemplate:
                    continue
    return created
