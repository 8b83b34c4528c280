from flask import Blueprint, jsonify

from utils.auth import permission_required
from utils.permissions import Permission
from utils.relationships import RelationshipManager

department_bp = Blueprint("departments", __name__, url_prefix="/departments")


# Department with its employees
@department_bp.route("/<department_id>")
@permission_required(
    Permission.VIEW_DEPARTMENTS,
    Permission.MANAGE_DEPARTMENTS,
    Permission.VIEW_DEPARTMENT_EMPLOYEES,
)
def department_details(department_id):
    return jsonify(RelationshipManager.get_department_details(department_id))
