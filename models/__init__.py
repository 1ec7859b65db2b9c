from .db import db
from .user import User
from .session import Session
from .audit_log import AuditLog
from .service import Service
from .timeslot_template import WeeklyTimeslotTemplate
from .reservation import Reservation, STATUS_CONFIRMED, STATUS_CANCELLED
