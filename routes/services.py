from flask import Blueprint, request, jsonify

from scheduling import ServiceNotFound, available_slots
from scheduling.catalog import get_service, list_services
from scheduling.schedule_store import weekly_schedule

services_bp = Blueprint("services", __name__, url_prefix="/api/services")


@services_bp.get("")
def list_all():
    return jsonify([s.to_dict() for s in list_services()]), 200


@services_bp.get("/<service_id>")
def get_one(service_id):
    service = get_service(service_id)
    if service is None:
        raise ServiceNotFound()

    out = service.to_dict()
    out["schedule"] = [t.to_dict() for t in weekly_schedule(service.id)]
    return jsonify(out), 200


# ---------- public: open slots for one calendar day ----------
@services_bp.get("/<service_id>/availability")
def availability(service_id):
    service = get_service(service_id)
    if service is None:
        raise ServiceNotFound()

    date_str = request.args.get("date")
    slots = available_slots(service.id, date_str)
    return jsonify([s.to_dict() for s in slots]), 200
