from flask import Blueprint, jsonify, request

from utils.auth import current_user_id, login_required, permission_required
from utils.errors import create_authorization_error, create_validation_error
from utils.leave_manager import LeaveManager
from utils.permissions import Permission, PermissionManager
from utils.validation import validate_leave_request

leave_bp = Blueprint("leaves", __name__, url_prefix="/leaves")


def _can_manage_leaves(user_id):
    return PermissionManager.has_any_permission(user_id, [Permission.MANAGE_LEAVES, Permission.VIEW_LEAVES])


# -----------------------------
# REQUEST LEAVE
# -----------------------------
@leave_bp.route("", methods=["POST"])
@permission_required(Permission.REQUEST_LEAVE, Permission.MANAGE_LEAVES)
def request_leave():
    data = request.get_json(silent=True) or {}

    errors = validate_leave_request(data)
    if errors:
        return jsonify({"success": False, "errors": errors}), 400

    actor_id = current_user_id()
    # Filing on behalf of someone else needs leave management rights
    if data.get("user_id") and data["user_id"] != actor_id and not PermissionManager.has_permission(
            actor_id, Permission.MANAGE_LEAVES):
        raise create_authorization_error("Cannot request leave for another employee")

    leave = LeaveManager.request_leave(actor_id, data)
    return jsonify({"success": True, "leave": leave}), 201


# -----------------------------
# APPROVE / REJECT
# -----------------------------
@leave_bp.route("/<leave_id>/approve", methods=["POST"])
@permission_required(Permission.APPROVE_LEAVE, Permission.MANAGE_LEAVES)
def approve_leave(leave_id):
    LeaveManager.approve_leave(leave_id, current_user_id())
    return jsonify({"success": True, "_id": leave_id, "status": "approved"})


@leave_bp.route("/<leave_id>/reject", methods=["POST"])
@permission_required(Permission.REJECT_LEAVE, Permission.MANAGE_LEAVES)
def reject_leave(leave_id):
    data = request.get_json(silent=True) or {}
    reason = data.get("reason")
    if not reason:
        raise create_validation_error("Rejection reason is required")

    LeaveManager.reject_leave(leave_id, current_user_id(), reason)
    return jsonify({"success": True, "_id": leave_id, "status": "rejected"})


# -----------------------------
# BALANCE / STATISTICS
# -----------------------------
@leave_bp.route("/balance/<user_id>")
@login_required
def leave_balance(user_id):
    if user_id != current_user_id() and not _can_manage_leaves(current_user_id()):
        raise create_authorization_error()
    return jsonify(LeaveManager.get_leave_balance(user_id))


@leave_bp.route("/statistics/<user_id>")
@login_required
def leave_statistics(user_id):
    if user_id != current_user_id() and not _can_manage_leaves(current_user_id()):
        raise create_authorization_error()

    year = request.args.get("year", type=int)
    if not year:
        raise create_validation_error("year is required")
    return jsonify(LeaveManager.get_leave_statistics(user_id, year))
