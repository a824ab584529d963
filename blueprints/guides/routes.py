from flask import Blueprint, jsonify, request
from flask_login import login_required

from schemas import (
    GuideFilters, GuidePayload, GuideUpdate, LimitQuery, ScheduleFilters, TourPayload, TourUpdate,
    parse, parse_args,
)
from security import admin_required
from services import guides as guide_service

guides_bp = Blueprint("guides", __name__)


@guides_bp.route("", methods=["GET"])
def list_guides():
    filters = parse_args(GuideFilters, request.args)
    return jsonify(guide_service.list_guides(filters))


@guides_bp.route("", methods=["POST"])
@login_required
@admin_required
def create_guide():
    payload = parse(GuidePayload, request.get_json(silent=True))
    guide = guide_service.create_guide(payload)
    return jsonify(guide.to_dict()), 201


@guides_bp.route("/<int:guide_id>")
def guide_detail(guide_id):
    return jsonify(guide_service.get_guide(guide_id).to_dict())


@guides_bp.route("/<int:guide_id>", methods=["PUT", "PATCH"])
@login_required
@admin_required
def update_guide(guide_id):
    payload = parse(GuideUpdate, request.get_json(silent=True))
    guide = guide_service.update_guide(guide_id, payload)
    return jsonify(guide.to_dict())


@guides_bp.route("/<int:guide_id>", methods=["DELETE"])
@login_required
@admin_required
def delete_guide(guide_id):
    guide_service.delete_guide(guide_id)
    return jsonify({"success": True})


# ----------------------------
# Aggregates
# ----------------------------

@guides_bp.route("/languages")
@login_required
def languages():
    return jsonify(guide_service.languages_across_guides())


@guides_bp.route("/specialties")
@login_required
def specialties():
    return jsonify(guide_service.specialties_across_guides())


@guides_bp.route("/top-rated")
@login_required
def top_rated():
    query = parse_args(LimitQuery, request.args)
    return jsonify([g.to_dict() for g in guide_service.top_rated_guides(query.limit)])


@guides_bp.route("/stats")
@login_required
def stats():
    return jsonify(guide_service.guide_stats())


# ----------------------------
# Schedules
# ----------------------------

@guides_bp.route("/<int:guide_id>/schedules", methods=["GET"])
@login_required
def list_schedules(guide_id):
    filters = parse_args(ScheduleFilters, request.args)
    tours = guide_service.list_schedules(guide_id, filters)
    return jsonify([t.to_dict() for t in tours])


@guides_bp.route("/<int:guide_id>/schedules", methods=["POST"])
@login_required
def create_schedule(guide_id):
    # guide existence is checked before the body is validated
    guide_service.get_guide(guide_id)
    payload = parse(TourPayload, request.get_json(silent=True))
    tour = guide_service.create_schedule(guide_id, payload)
    return jsonify(tour.to_dict()), 201


@guides_bp.route("/<int:guide_id>/schedules/<int:schedule_id>", methods=["GET"])
@login_required
def schedule_detail(guide_id, schedule_id):
    return jsonify(guide_service.get_schedule(guide_id, schedule_id).to_dict())


@guides_bp.route("/<int:guide_id>/schedules/<int:schedule_id>", methods=["PUT", "PATCH"])
@login_required
def update_schedule(guide_id, schedule_id):
    payload = parse(TourUpdate, request.get_json(silent=True))
    tour = guide_service.update_schedule(guide_id, schedule_id, payload)
    return jsonify(tour.to_dict())


@guides_bp.route("/<int:guide_id>/schedules/<int:schedule_id>", methods=["DELETE"])
@login_required
def delete_schedule(guide_id, schedule_id):
    guide_service.delete_schedule(guide_id, schedule_id)
    return jsonify({"success": True})
