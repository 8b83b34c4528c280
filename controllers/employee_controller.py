from flask import Blueprint, jsonify, request

from models.users import User
from utils.activity_logger import ActivityAction, ActivityType, log_activity
from utils.auth import current_user_id, permission_required
from utils.errors import create_validation_error
from utils.permissions import Permission
from utils.relationships import RelationshipManager
from utils.seed import default_leave_balance
from utils.validation import validate_employee_data

employee_bp = Blueprint("employees", __name__, url_prefix="/employees")


# -------------------------------------------------------------
# EMPLOYEE DETAILS (profile + attendance, leaves, payroll, ...)
# -------------------------------------------------------------
@employee_bp.route("/<user_id>")
@permission_required(Permission.VIEW_EMPLOYEES, Permission.MANAGE_EMPLOYEES)
def employee_details(user_id):
    return jsonify(RelationshipManager.get_employee_details(user_id))


# -------------------------------------------------------------
# ADD EMPLOYEE
# -------------------------------------------------------------
@employee_bp.route("", methods=["POST"])
@permission_required(Permission.MANAGE_EMPLOYEES)
def add_employee():
    data = request.get_json(silent=True) or {}

    errors = validate_employee_data(data)
    if errors:
        return jsonify({"success": False, "errors": errors}), 400

    if User.find_by_email(data["email"]):
        raise create_validation_error("Email already registered!", {"email": data["email"]})

    actor_id = current_user_id()
    user = User(
        email=data["email"],
        password=data.get("password"),
        first_name=data["first_name"],
        last_name=data.get("last_name"),
        phone=data.get("phone"),
        role_id=data.get("role_id") or "employee",
        department=data["department"],
        position=data["position"],
        leave_balance=data.get("leave_balance") or default_leave_balance(),
        working_hours=data.get("working_hours"),
        created_by=actor_id,
    )
    user_id = str(user.save().inserted_id)

    log_activity(
        user_id=actor_id,
        type=ActivityType.EMPLOYEE,
        action=ActivityAction.CREATE,
        title="Employee added",
        description=f"{user.display_name} joined {user.department} as {user.position}",
        related_id=user_id,
    )

    return jsonify({"success": True, "_id": user_id}), 201


# -------------------------------------------------------------
# UPDATE EMPLOYEE STATUS (termination cascades to projects/checklists)
# -------------------------------------------------------------
@employee_bp.route("/<user_id>/status", methods=["PUT"])
@permission_required(Permission.MANAGE_EMPLOYEES)
def update_status(user_id):
    data = request.get_json(silent=True) or {}
    status = data.get("status")
    if not status:
        return jsonify({"success": False, "errors": {"status": "Status is required"}}), 400

    RelationshipManager.update_employee_status(user_id, status, actor_id=current_user_id())
    return jsonify({"success": True, "_id": user_id, "status": status})
