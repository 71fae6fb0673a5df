from flask import Blueprint, jsonify

from src.routes.common import not_found, parse_payload, success
from src.schemas import MedicalRecordCreate, MedicalRecordUpdate
from src.services import clinic_service


records_bp = Blueprint("medical_records", __name__, url_prefix="/api/medical-records")


@records_bp.route("/<int:record_id>", methods=["GET"])
def get_medical_record(record_id: int):
    record = clinic_service.get_medical_record(record_id)
    if record is None:
        return not_found("Medical record")
    return jsonify(record.to_dict())


@records_bp.route("", methods=["POST"])
def create_medical_record():
    """Create a visit entry; ``files`` holds names returned by /api/upload."""
    payload = parse_payload(MedicalRecordCreate, "medical record")
    record = clinic_service.create_medical_record(payload.model_dump())
    return jsonify(record.to_dict()), 201


@records_bp.route("/<int:record_id>", methods=["PUT", "PATCH"])
def update_medical_record(record_id: int):
    payload = parse_payload(MedicalRecordUpdate, "medical record")
    record = clinic_service.update_medical_record(record_id, payload.changes())
    if record is None:
        return not_found("Medical record")
    return jsonify(record.to_dict())


@records_bp.route("/<int:record_id>", methods=["DELETE"])
def delete_medical_record(record_id: int):
    if not clinic_service.delete_medical_record(record_id):
        return not_found("Medical record")
    return success()
