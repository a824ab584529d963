from flask import Blueprint, jsonify, request
from flask_login import login_required, current_user

from errors import Forbidden
from schemas import NotificationFilters, NotificationPayload, ReadFlag, parse, parse_args
from security import is_admin
from services import notifications as notification_service

notifications_bp = Blueprint("notifications", __name__)


@notifications_bp.route("", methods=["GET"])
@login_required
def list_notifications():
    filters = parse_args(NotificationFilters, request.args)
    result = notification_service.list_notifications(current_user.id, filters)
    return jsonify({
        "notifications": [n.to_dict() for n in result["notifications"]],
        "total": result["total"],
    })


@notifications_bp.route("", methods=["POST"])
@login_required
def create_notification():
    payload = parse(NotificationPayload, request.get_json(silent=True))

    recipient_id = payload.recipient_id or current_user.id
    if recipient_id != current_user.id and not is_admin(current_user):
        raise Forbidden("Only admins can notify other users.")

    notif = notification_service.create_notification(recipient_id, payload)
    return jsonify(notif.to_dict()), 201


@notifications_bp.route("/unread-count")
@login_required
def unread_count():
    return jsonify({"count": notification_service.unread_count(current_user.id)})


@notifications_bp.route("/mark-all-read", methods=["POST"])
@login_required
def mark_all_read():
    updated = notification_service.mark_all_read(current_user.id)
    return jsonify({"success": True, "updated": updated})


@notifications_bp.route("/<int:notification_id>", methods=["PATCH"])
@login_required
def mark_read(notification_id):
    payload = parse(ReadFlag, request.get_json(silent=True))
    notif = notification_service.mark_read(notification_id, current_user.id, payload.read)
    return jsonify(notif.to_dict())


@notifications_bp.route("/<int:notification_id>", methods=["DELETE"])
@login_required
def delete_notification(notification_id):
    notification_service.delete_notification(notification_id, current_user.id)
    return jsonify({"success": True})
