"""
Named outcomes of the scheduling core.

Each error carries a stable ``code`` (returned to API clients) and the HTTP
status the route layer should answer with.
"""


class BookingError(Exception):
    code = "BookingError"
    status_code = 400
    message = "Booking request rejected"

    def __init__(self, message=None):
        super().__init__(message or self.message)
        self.message = message or self.message

    def to_dict(self):
        return {"error": self.message, "code": self.code}


# ---------- validation (client-fixable, no retry) ----------
class MissingField(BookingError):
    code = "MissingField"
    message = "Missing required fields"

    def __init__(self, fields=None):
        self.fields = list(fields or [])
        msg = self.message
        if self.fields:
            msg = f"Missing required fields: {', '.join(self.fields)}"
        super().__init__(msg)


class InvalidDate(BookingError):
    code = "InvalidDate"
    message = "Invalid date format. Use YYYY-MM-DD"


class InvalidTime(BookingError):
    code = "InvalidTime"
    message = "Invalid time format. Use HH:MM"


class PastDate(BookingError):
    code = "PastDate"
    message = "Cannot book past dates"


class SlotNotOffered(BookingError):
    code = "SlotNotOffered"
    message = "Service is not offered at that time"


# ---------- not found ----------
class ServiceNotFound(BookingError):
    code = "ServiceNotFound"
    status_code = 404
    message = "Service not found"


class NotFound(BookingError):
    code = "NotFound"
    status_code = 404
    message = "Booking not found"


# ---------- authorization ----------
class Forbidden(BookingError):
    code = "Forbidden"
    status_code = 403
    message = "Unauthorized"


# ---------- conflicts ----------
class SlotAlreadyBooked(BookingError):
    code = "SlotAlreadyBooked"
    status_code = 409
    message = "Slot already booked"


class AlreadyCancelled(BookingError):
    code = "AlreadyCancelled"
    status_code = 409
    message = "Booking not cancellable"


class DuplicateTemplate(BookingError):
    code = "DuplicateTemplate"
    status_code = 409
    message = "Timeslot already defined for that service, day and start time"
