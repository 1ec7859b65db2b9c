from .errors import (
    BookingError,
    MissingField,
    InvalidDate,
    InvalidTime,
    PastDate,
    SlotNotOffered,
    ServiceNotFound,
    NotFound,
    Forbidden,
    SlotAlreadyBooked,
    AlreadyCancelled,
    DuplicateTemplate,
)
from .availability import Slot, available_slots
from .bookings import create_booking, cancel_booking, list_reservations
