"""
Availability resolver: the weekly template for a date minus its confirmed
reservations.

Reads are not isolated from concurrent bookings. A slot reported open here
may be taken a moment later; the booking path re-checks and the database
constraint has the final word.
"""

from dataclasses import dataclass
from datetime import time
from typing import List

from models.reservation import Reservation, STATUS_CONFIRMED
from scheduling import schedule_store
from scheduling.dates import day_of_week, format_time, parse_date


@dataclass(frozen=True)
class Slot:
    start_time: time
    end_time: time

    def to_dict(self):
        return {
            "start_time": format_time(self.start_time),
            "end_time": format_time(self.end_time),
        }


def booked_times(service_id: int, day) -> set:
    rows = (
        Reservation.query
        .with_entities(Reservation.time)
        .filter_by(service_id=service_id, date=day, status=STATUS_CONFIRMED)
        .all()
    )
    return {r.time for r in rows}


def available_slots(service_id: int, date) -> List[Slot]:
    day = parse_date(date)

    templates = schedule_store.templates_for(service_id, day_of_week(day))
    if not templates:
        return []

    taken = booked_times(service_id, day)
    return [
        Slot(start_time=t.start_time, end_time=t.end_time)
        for t in templates
        if t.start_time not in taken
    ]
