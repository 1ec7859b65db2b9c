from models import db
from models.service import Service

# Signed 64-bit, the widest INTEGER the stores accept
MIN_ID = -2 ** 63
MAX_ID = 2 ** 63 - 1


def coerce_id(value):
    """Turn a path/JSON id into an int, or None when it is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    else:
        try:
            number = int(str(value).strip())
        except (TypeError, ValueError):
            return None
    if not MIN_ID <= number <= MAX_ID:
        return None
    return number


def get_service(service_id):
    sid = coerce_id(service_id)
    if sid is None:
        return None
    return db.session.get(Service, sid)


def list_services():
    return Service.query.order_by(Service.name.asc()).all()
