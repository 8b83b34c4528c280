from flask import Blueprint, jsonify

from utils.auth import current_user_id, login_required, permission_required
from utils.errors import create_authorization_error
from utils.permissions import Permission, PermissionManager

permission_bp = Blueprint("permissions", __name__, url_prefix="/permissions")


# Effective permissions of a user (own, or anyone's for user managers)
@permission_bp.route("/users/<user_id>")
@login_required
def user_permissions(user_id):
    actor_id = current_user_id()
    if user_id != actor_id and not PermissionManager.has_any_permission(
            actor_id, [Permission.MANAGE_USERS, Permission.VIEW_USERS]):
        raise create_authorization_error()

    return jsonify({"user_id": user_id, "permissions": sorted(PermissionManager.get_user_permissions(user_id))})


# Users holding a permission
@permission_bp.route("/<permission>/users")
@permission_required(Permission.MANAGE_USERS, Permission.VIEW_USERS)
def users_with_permission(permission):
    return jsonify({"permission": permission, "users": PermissionManager.get_users_with_permission(permission)})
