from flask import Blueprint, jsonify, request
from flask_login import login_required

from schemas import DestinationFilters, DestinationPayload, DestinationUpdate, LimitQuery, parse, parse_args
from security import admin_required
from services import destinations as destination_service

destinations_bp = Blueprint("destinations", __name__)


@destinations_bp.route("", methods=["GET"])
def list_destinations():
    filters = parse_args(DestinationFilters, request.args)
    return jsonify(destination_service.list_destinations(filters))


@destinations_bp.route("", methods=["POST"])
@login_required
@admin_required
def create_destination():
    payload = parse(DestinationPayload, request.get_json(silent=True))
    destination = destination_service.create_destination(payload)
    return jsonify(destination.to_dict()), 201


@destinations_bp.route("/countries")
def countries():
    return jsonify(destination_service.list_countries())


@destinations_bp.route("/popular")
def popular():
    query = parse_args(LimitQuery, request.args)
    destinations = destination_service.popular_destinations(query.limit)
    return jsonify([d.to_dict() for d in destinations])


# Admin only, anonymous callers are refused with 403 as well
@destinations_bp.route("/stats")
@admin_required
def stats():
    return jsonify(destination_service.destination_stats())


@destinations_bp.route("/<int:destination_id>")
def destination_detail(destination_id):
    destination = destination_service.get_destination(destination_id)
    return jsonify(destination.to_dict())


@destinations_bp.route("/<int:destination_id>", methods=["PUT", "PATCH"])
@login_required
@admin_required
def update_destination(destination_id):
    payload = parse(DestinationUpdate, request.get_json(silent=True))
    destination = destination_service.update_destination(destination_id, payload)
    return jsonify(destination.to_dict())


@destinations_bp.route("/<int:destination_id>", methods=["DELETE"])
@login_required
@admin_required
def delete_destination(destination_id):
    destination_service.delete_destination(destination_id)
    return jsonify({"success": True})
