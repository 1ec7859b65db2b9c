"""
Calendar helpers shared by the availability and booking paths.

All dates are naive calendar days; "today" is taken from the UTC clock so
that every worker agrees on the boundary regardless of host timezone.
"""

from datetime import date, datetime, time

from scheduling.errors import InvalidDate, InvalidTime


def parse_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidDate()

    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    # Full ISO timestamps are accepted and truncated to their calendar day
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise InvalidDate() from None


def parse_time(value) -> time:
    if isinstance(value, time):
        return value.replace(microsecond=0)
    if not isinstance(value, str) or not value.strip():
        raise InvalidTime()

    text = value.strip()
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(text, fmt).time()
        except ValueError:
            continue
    raise InvalidTime()


def day_of_week(day: date) -> int:
    """0=Sunday .. 6=Saturday (proleptic Gregorian)."""
    return day.isoweekday() % 7


def utc_today() -> date:
    return datetime.utcnow().date()


def format_time(value: time) -> str:
    return value.strftime("%H:%M")
