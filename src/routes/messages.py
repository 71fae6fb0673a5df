from flask import Blueprint, jsonify

from src.routes.common import not_found, parse_payload, success
from src.schemas import MessageCreate
from src.services import inbox_service


messages_bp = Blueprint("messages", __name__, url_prefix="/api/messages")


@messages_bp.route("", methods=["GET"])
def list_messages():
    return jsonify([m.to_dict() for m in inbox_service.list_messages()])


@messages_bp.route("/unread", methods=["GET"])
def list_unread_messages():
    return jsonify([m.to_dict() for m in inbox_service.list_messages(unread_only=True)])


@messages_bp.route("", methods=["POST"])
def create_message():
    """Public contact form submission."""
    payload = parse_payload(MessageCreate, "message")
    msg = inbox_service.create_message(payload.model_dump())
    return jsonify(msg.to_dict()), 201


@messages_bp.route("/mark-all-read", methods=["PUT"])
def mark_all_read():
    updated = inbox_service.mark_all_messages_as_read()
    return jsonify({"success": True, "updated": updated})


@messages_bp.route("/<int:message_id>/read", methods=["PUT"])
def mark_read(message_id: int):
    msg = inbox_service.mark_message_as_read(message_id)
    if msg is None:
        return not_found("Message")
    return jsonify(msg.to_dict())


@messages_bp.route("/<int:message_id>", methods=["DELETE"])
def delete_message(message_id: int):
    if not inbox_service.delete_message(message_id):
        return not_found("Message")
    return success()
