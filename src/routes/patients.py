from flask import Blueprint, jsonify, request

from src.routes.common import not_found, parse_payload, success
from src.schemas import PatientCreate, PatientUpdate
from src.services import clinic_service


patients_bp = Blueprint("patients", __name__, url_prefix="/api")


@patients_bp.route("/patients", methods=["GET"])
def list_patients():
    """Patient list for the records page, optionally filtered by name."""
    search = (request.args.get("search") or "").strip() or None
    patients = clinic_service.list_patients(search)
    return jsonify([p.to_dict() for p in patients])


@patients_bp.route("/patients/<int:patient_id>", methods=["GET"])
def get_patient(patient_id: int):
    patient = clinic_service.get_patient(patient_id)
    if patient is None:
        return not_found("Patient")
    return jsonify(patient.to_dict())


@patients_bp.route("/patients", methods=["POST"])
def create_patient():
    payload = parse_payload(PatientCreate, "patient")
    patient = clinic_service.create_patient(payload.model_dump())
    return jsonify(patient.to_dict()), 201


@patients_bp.route("/patients/<int:patient_id>", methods=["PUT", "PATCH"])
def update_patient(patient_id: int):
    payload = parse_payload(PatientUpdate, "patient")
    patient = clinic_service.update_patient(patient_id, payload.changes())
    if patient is None:
        return not_found("Patient")
    return jsonify(patient.to_dict())


@patients_bp.route("/patients/<int:patient_id>", methods=["DELETE"])
def delete_patient(patient_id: int):
    """
    Delete a patient. Their appointments and medical records stay in the
    database and remain reachable by id.
    """
    if not clinic_service.delete_patient(patient_id):
        return not_found("Patient")
    return success()


@patients_bp.route("/patients/<int:patient_id>/records", methods=["GET"])
def list_patient_records(patient_id: int):
    records = clinic_service.list_medical_records(patient_id)
    return jsonify([r.to_dict() for r in records])


@patients_bp.route("/search/patients/condition", methods=["GET"])
def search_by_condition():
    condition = (request.args.get("condition") or "").strip()
    if not condition:
        return jsonify({"message": "Condition parameter is required"}), 400
    patients = clinic_service.search_patients_by_condition(condition)
    return jsonify([p.to_dict() for p in patients])
