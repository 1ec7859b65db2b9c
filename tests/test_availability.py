"""
Tests for the availability resolver
"""

from datetime import time, timedelta
from decimal import Decimal

import pytest

from models import db
from models.reservation import Reservation, STATUS_CANCELLED, STATUS_CONFIRMED
from models.service import Service
from scheduling import InvalidDate, available_slots, cancel_booking, create_booking
from scheduling.availability import Slot
from scheduling.schedule_store import add_template
from tests.conftest import MONDAY, next_weekday


def _reserve(user, service, day, start, status=STATUS_CONFIRMED):
    row = Reservation(
        user_id=user.id,
        service_id=service.id,
        service_name=service.name,
        date=day,
        time=start,
        status=status,
    )
    db.session.add(row)
    db.session.commit()
    return row


class TestAvailableSlots:
    def test_all_templates_open_without_reservations(self, haircut, monday):
        assert available_slots(haircut.id, monday.isoformat()) == [
            Slot(time(9, 0), time(10, 0)),
            Slot(time(10, 0), time(11, 0)),
        ]

    def test_confirmed_reservation_removes_slot(self, haircut, monday, user):
        _reserve(user, haircut, monday, time(9, 0))
        assert available_slots(haircut.id, monday) == [Slot(time(10, 0), time(11, 0))]

    def test_cancelled_reservation_does_not_remove_slot(self, haircut, monday, user):
        _reserve(user, haircut, monday, time(9, 0), status=STATUS_CANCELLED)
        assert len(available_slots(haircut.id, monday)) == 2

    def test_reservation_on_other_date_is_ignored(self, haircut, monday, user):
        _reserve(user, haircut, monday + timedelta(days=7), time(9, 0))
        assert len(available_slots(haircut.id, monday)) == 2

    def test_day_without_templates_is_empty(self, haircut, monday):
        tuesday = monday + timedelta(days=1)
        assert available_slots(haircut.id, tuesday) == []

    def test_service_without_templates_is_empty_every_day(self, app, monday):
        bare = Service(name="Consultation", price=Decimal("10.00"), duration_minutes=30)
        db.session.add(bare)
        db.session.commit()
        for offset in range(7):
            assert available_slots(bare.id, monday + timedelta(days=offset)) == []

    def test_disabled_template_not_offered(self, haircut, monday):
        add_template(haircut.id, MONDAY, "11:00", "12:00", enabled=False)
        assert [s.start_time for s in available_slots(haircut.id, monday)] == [time(9, 0), time(10, 0)]

    def test_results_sorted_by_start(self, haircut, monday):
        add_template(haircut.id, MONDAY, "08:00", "09:00")
        starts = [s.start_time for s in available_slots(haircut.id, monday)]
        assert starts == sorted(starts)

    def test_past_dates_are_still_resolved(self, haircut):
        last_monday = next_weekday(MONDAY) - timedelta(days=7)
        assert len(available_slots(haircut.id, last_monday)) == 2

    @pytest.mark.parametrize("value", ["2026-13-01", "tomorrow", "", None])
    def test_invalid_date(self, haircut, value):
        with pytest.raises(InvalidDate):
            available_slots(haircut.id, value)

    def test_slot_to_dict(self):
        assert Slot(time(9, 0), time(10, 0)).to_dict() == {"start_time": "09:00", "end_time": "10:00"}


class TestHaircutScenario:
    """Book, repeat, cancel and re-query a Monday 09:00 slot"""

    def test_full_cycle(self, app, user, monday):
        service = Service(name="Haircut", price=Decimal("50.00"), duration_minutes=60)
        db.session.add(service)
        db.session.commit()
        add_template(service.id, MONDAY, "09:00", "10:00")

        assert available_slots(service.id, monday) == [Slot(time(9, 0), time(10, 0))]

        reservation = create_booking(user.id, service.id, monday.isoformat(), "09:00")
        assert reservation.status == STATUS_CONFIRMED
        assert available_slots(service.id, monday) == []

        cancel_booking(user.id, reservation.id)
        assert available_slots(service.id, monday) == [Slot(time(9, 0), time(10, 0))]
