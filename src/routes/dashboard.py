import hmac
import logging

from flask import Blueprint, current_app, jsonify

from src.routes.common import parse_payload
from src.schemas import LoginRequest
from src.services.clinic_service import get_stats


logger = logging.getLogger("dashboard")

dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/api")


@dashboard_bp.route("/auth/login", methods=["POST"])
def login():
    """
    Shared-password check for the admin area. There is no session or token;
    the client keeps its own "authenticated" flag.
    """
    payload = parse_payload(LoginRequest, "login")
    expected = current_app.config.get("ADMIN_PASSWORD", "")
    given = str(payload.password)
    if expected and hmac.compare_digest(given.encode(), expected.encode()):
        return jsonify({"success": True, "message": "Logged in successfully"})
    logger.warning("[login] Rejected admin login attempt")
    return jsonify({"success": False, "message": "Invalid password"}), 401


@dashboard_bp.route("/stats", methods=["GET"])
def stats():
    """Counters shown at the top of the receptionist dashboard."""
    return jsonify(get_stats())


@dashboard_bp.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "ok"})
