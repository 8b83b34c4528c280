from flask import Blueprint, jsonify, request

from utils.auth import current_user_id, login_required
from utils.notification_manager import NotificationManager

notification_bp = Blueprint("notifications", __name__, url_prefix="/notifications")


# Own notifications, newest first
@notification_bp.route("")
@login_required
def my_notifications():
    limit = max(1, min(request.args.get("limit", 50, type=int), 200))
    return jsonify({"notifications": NotificationManager.get_user_notifications(current_user_id(), limit)})


@notification_bp.route("/unread-count")
@login_required
def unread_count():
    return jsonify({"unread": NotificationManager.get_unread_count(current_user_id())})


@notification_bp.route("/<notification_id>/read", methods=["POST"])
@login_required
def mark_read(notification_id):
    NotificationManager.mark_as_read(notification_id, current_user_id())
    return jsonify({"success": True, "_id": notification_id})


@notification_bp.route("/read-all", methods=["POST"])
@login_required
def mark_all_read():
    updated = NotificationManager.mark_all_as_read(current_user_id())
    return jsonify({"success": True, "updated": updated})
