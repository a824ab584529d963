from flask import Blueprint, jsonify, request
from flask_login import login_required, current_user

from schemas import ReviewFilters, ReviewModeration, ReviewPayload, ReviewResponsePayload, parse, parse_args
from security import admin_required
from services import reviews as review_service

reviews_bp = Blueprint("reviews", __name__)


@reviews_bp.route("", methods=["GET"])
def list_reviews():
    filters = parse_args(ReviewFilters, request.args)
    return jsonify({"reviews": review_service.list_reviews(filters)})


@reviews_bp.route("", methods=["POST"])
@login_required
def create_review():
    payload = parse(ReviewPayload, request.get_json(silent=True))
    review = review_service.create_review(current_user, payload)
    return jsonify(review_service.shape_review(review)), 201


@reviews_bp.route("/<int:review_id>")
def review_detail(review_id):
    return jsonify(review_service.get_review(review_id))


@reviews_bp.route("/<int:review_id>/response", methods=["POST"])
@login_required
@admin_required
def respond(review_id):
    payload = parse(ReviewResponsePayload, request.get_json(silent=True))
    return jsonify(review_service.respond_to_review(review_id, current_user, payload.content))


@reviews_bp.route("/<int:review_id>/moderation", methods=["PATCH"])
@login_required
@admin_required
def moderate(review_id):
    payload = parse(ReviewModeration, request.get_json(silent=True))
    return jsonify(review_service.set_verified(review_id, payload.verified))
