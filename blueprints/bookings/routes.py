from flask import Blueprint, jsonify, request
from flask_login import login_required, current_user

from errors import NotFound
from schemas import BookingFilters, BookingPayload, BookingStatusUpdate, LimitQuery, parse, parse_args
from security import admin_required, is_admin
from services import bookings as booking_service

bookings_bp = Blueprint("bookings", __name__)


@bookings_bp.route("/recent")
@login_required
def recent():
    query = parse_args(LimitQuery, request.args)
    return jsonify(booking_service.recent_bookings(query.limit))


@bookings_bp.route("/stats")
@login_required
def stats():
    return jsonify(booking_service.booking_stats())


@bookings_bp.route("", methods=["GET"])
@login_required
def list_bookings():
    filters = parse_args(BookingFilters, request.args)
    # customers only ever see their own bookings
    if not is_admin(current_user):
        filters.customer_id = current_user.id
    return jsonify(booking_service.list_bookings(filters))


@bookings_bp.route("", methods=["POST"])
@login_required
def create_booking():
    payload = parse(BookingPayload, request.get_json(silent=True))
    booking = booking_service.create_booking(current_user, payload)
    return jsonify(booking_service.summarize(booking)), 201


@bookings_bp.route("/<int:booking_id>")
@login_required
def booking_detail(booking_id):
    booking = booking_service.get_booking(booking_id)
    if booking.customer_id != current_user.id and not is_admin(current_user):
        raise NotFound("Booking not found")

    data = booking_service.summarize(booking)
    data["guideId"] = booking.guide_id
    return jsonify(data)


@bookings_bp.route("/<int:booking_id>/status", methods=["PATCH"])
@login_required
@admin_required
def update_status(booking_id):
    payload = parse(BookingStatusUpdate, request.get_json(silent=True))
    booking = booking_service.update_booking_status(booking_id, payload.status)
    return jsonify(booking_service.summarize(booking))
