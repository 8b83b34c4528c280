from flask import Blueprint, jsonify, request

from utils.attendance_manager import AttendanceManager
from utils.auth import current_user_id, login_required, permission_required
from utils.errors import create_authorization_error, create_validation_error
from utils.permissions import Permission, PermissionManager

attendance_bp = Blueprint("attendance", __name__, url_prefix="/attendance")


# -----------------------------
# CHECK-IN / CHECK-OUT (self service)
# -----------------------------
@attendance_bp.route("/check-in", methods=["POST"])
@permission_required(Permission.SUBMIT_ATTENDANCE, Permission.MANAGE_ATTENDANCE)
def check_in():
    data = request.get_json(silent=True) or {}
    record = AttendanceManager.record_check_in(current_user_id(), location=data.get("location"))
    return jsonify({"success": True, "attendance": record}), 201


@attendance_bp.route("/check-out", methods=["POST"])
@permission_required(Permission.SUBMIT_ATTENDANCE, Permission.MANAGE_ATTENDANCE)
def check_out():
    record = AttendanceManager.record_check_out(current_user_id())
    return jsonify({"success": True, "attendance": record})


# -----------------------------
# HISTORY (own, or anyone's with attendance rights)
# -----------------------------
@attendance_bp.route("/<user_id>")
@login_required
def attendance_history(user_id):
    actor_id = current_user_id()
    if user_id != actor_id and not PermissionManager.has_any_permission(
            actor_id, [Permission.MANAGE_ATTENDANCE, Permission.VIEW_ATTENDANCE]):
        raise create_authorization_error()

    start = request.args.get("start")
    end = request.args.get("end")
    if not (start and end):
        raise create_validation_error("start and end dates are required (YYYY-MM-DD)")

    return jsonify({
        "records": AttendanceManager.get_user_attendance_history(user_id, start, end),
        "statistics": AttendanceManager.get_attendance_statistics(user_id, start, end)
    })
