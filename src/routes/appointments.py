from flask import Blueprint, jsonify, request

from src.routes.common import not_found, parse_payload, success
from src.schemas import AppointmentCreate, AppointmentUpdate
from src.services import clinic_service
from src.services.schedule import parse_day


appointments_bp = Blueprint("appointments", __name__, url_prefix="/api/appointments")


@appointments_bp.route("", methods=["GET"])
def list_appointments():
    """
    All appointments ordered by date. With ?date=YYYY-MM-DD only that day's
    appointments are returned.
    """
    raw = request.args.get("date")
    day = None
    if raw:
        try:
            day = parse_day(raw)
        except ValueError as e:
            return jsonify({"message": str(e)}), 400
    appointments = clinic_service.list_appointments(day)
    return jsonify([a.to_dict() for a in appointments])


@appointments_bp.route("/upcoming", methods=["GET"])
def upcoming_appointments():
    return jsonify(clinic_service.get_upcoming_appointments())


@appointments_bp.route("/month/<int:year>/<int:month>", methods=["GET"])
def appointments_by_month(year: int, month: int):
    """Calendar view: every appointment in the given month."""
    try:
        appointments = clinic_service.get_appointments_by_month(year, month)
    except ValueError as e:
        return jsonify({"message": str(e)}), 400
    return jsonify(appointments)


@appointments_bp.route("/slots", methods=["GET"])
def available_slots():
    """Free booking slots for ?date=YYYY-MM-DD (empty on weekends)."""
    try:
        day = parse_day(request.args.get("date", ""))
    except ValueError as e:
        return jsonify({"message": str(e)}), 400
    return jsonify({"date": day.isoformat(), "slots": clinic_service.get_available_slots(day)})


@appointments_bp.route("/<int:appointment_id>", methods=["GET"])
def get_appointment(appointment_id: int):
    appt = clinic_service.get_appointment(appointment_id)
    if appt is None:
        return not_found("Appointment")
    return jsonify(appt.to_dict())


@appointments_bp.route("", methods=["POST"])
def create_appointment():
    payload = parse_payload(AppointmentCreate, "appointment")
    appt = clinic_service.create_appointment(payload.model_dump())
    return jsonify(appt.to_dict()), 201


@appointments_bp.route("/<int:appointment_id>", methods=["PUT", "PATCH"])
def update_appointment(appointment_id: int):
    payload = parse_payload(AppointmentUpdate, "appointment")
    appt = clinic_service.update_appointment(appointment_id, payload.changes())
    if appt is None:
        return not_found("Appointment")
    return jsonify(appt.to_dict())


@appointments_bp.route("/<int:appointment_id>", methods=["DELETE"])
def delete_appointment(appointment_id: int):
    if not clinic_service.delete_appointment(appointment_id):
        return not_found("Appointment")
    return success()
