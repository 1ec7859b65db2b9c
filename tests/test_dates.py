"""
Tests for calendar parsing helpers
"""

from datetime import date, datetime, time

import pytest

from scheduling.dates import day_of_week, format_time, parse_date, parse_time
from scheduling.errors import InvalidDate, InvalidTime


class TestParseDate:
    def test_iso_date(self):
        assert parse_date("2026-11-02") == date(2026, 11, 2)

    def test_iso_datetime_truncated_to_day(self):
        assert parse_date("2026-11-02T18:30:00") == date(2026, 11, 2)

    def test_date_and_datetime_objects_pass_through(self):
        assert parse_date(date(2026, 1, 5)) == date(2026, 1, 5)
        assert parse_date(datetime(2026, 1, 5, 23, 59)) == date(2026, 1, 5)

    @pytest.mark.parametrize("value", ["", "   ", None, "2026-02-30", "not-a-date", "02/11/2026", 20261102])
    def test_rejects_malformed(self, value):
        with pytest.raises(InvalidDate):
            parse_date(value)


class TestParseTime:
    def test_hours_minutes(self):
        assert parse_time("09:00") == time(9, 0)

    def test_hours_minutes_seconds(self):
        assert parse_time("17:45:00") == time(17, 45)

    def test_time_object_drops_microseconds(self):
        assert parse_time(time(9, 0, 0, 500)) == time(9, 0)

    @pytest.mark.parametrize("value", ["", None, "25:00", "9h", "noon"])
    def test_rejects_malformed(self, value):
        with pytest.raises(InvalidTime):
            parse_time(value)

    def test_format_time(self):
        assert format_time(time(9, 5)) == "09:05"


class TestDayOfWeek:
    """Sunday=0 .. Saturday=6"""

    @pytest.mark.parametrize(
        "day,expected",
        [
            (date(2026, 10, 18), 0),  # Sunday
            (date(2026, 10, 19), 1),  # Monday
            (date(2026, 10, 24), 6),  # Saturday
            (date(2000, 2, 29), 2),   # leap day, Tuesday
            (date(1970, 1, 1), 4),    # Thursday
        ],
    )
    def test_known_dates(self, day, expected):
        assert day_of_week(day) == expected
