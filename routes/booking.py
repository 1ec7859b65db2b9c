from flask import Blueprint, request, jsonify, g

from models.reservation import STATUS_CANCELLED, STATUS_CONFIRMED
from scheduling import (
    SlotAlreadyBooked,
    cancel_booking,
    create_booking,
    list_reservations,
)
from utils.audit import log_event
from utils.auth_context import login_required

booking_bp = Blueprint("booking", __name__, url_prefix="/api/bookings")


# ---------- own bookings, newest date first ----------
@booking_bp.get("")
@login_required
def my_bookings():
    status = (request.args.get("status") or "").strip().lower() or None
    if status and status not in (STATUS_CONFIRMED, STATUS_CANCELLED):
        return jsonify(error="Invalid status filter"), 400

    rows = list_reservations(g.user.id, status=status)
    return jsonify([r.to_dict() for r in rows]), 200


# ---------- book a slot (DOUBLE-BOOKING SAFE) ----------
@booking_bp.post("")
@login_required
def create():
    data = request.get_json(silent=True) or {}
    service_id = data.get("serviceId", data.get("service_id"))

    try:
        reservation = create_booking(g.user.id, service_id, data.get("date"), data.get("time"))
    except SlotAlreadyBooked:
        log_event(
            "BOOKING_FAIL_ALREADY_BOOKED",
            user_id=g.user.id,
            entity="service",
            entity_id=service_id,
            metadata={"date": data.get("date"), "time": data.get("time")},
        )
        raise

    log_event(
        "BOOKING_CREATE",
        user_id=g.user.id,
        entity="reservation",
        entity_id=reservation.id,
        metadata={"service_id": reservation.service_id},
    )
    return jsonify(message="Booking created successfully", booking=reservation.to_dict()), 201


# ---------- cancel own booking ----------
@booking_bp.delete("/<booking_id>")
@login_required
def cancel(booking_id):
    reservation = cancel_booking(g.user.id, booking_id)

    log_event("BOOKING_CANCEL", user_id=g.user.id, entity="reservation", entity_id=reservation.id)
    return jsonify(message="Booking cancelled", booking=reservation.to_dict()), 200
