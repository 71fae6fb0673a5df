from flask import Blueprint, jsonify

from src.routes.common import not_found, parse_payload
from src.schemas import ReviewCreate
from src.services import inbox_service


reviews_bp = Blueprint("reviews", __name__, url_prefix="/api/reviews")


@reviews_bp.route("", methods=["GET"])
def list_reviews():
    """Approved testimonials for the public home page."""
    return jsonify([r.to_dict() for r in inbox_service.list_approved_reviews()])


@reviews_bp.route("", methods=["POST"])
def create_review():
    payload = parse_payload(ReviewCreate, "review")
    review = inbox_service.create_review(payload.model_dump())
    return jsonify(review.to_dict()), 201


@reviews_bp.route("/<int:review_id>/approve", methods=["PUT"])
def approve_review(review_id: int):
    review = inbox_service.approve_review(review_id)
    if review is None:
        return not_found("Review")
    return jsonify(review.to_dict())
