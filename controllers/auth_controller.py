from flask import Blueprint, jsonify, request, session

from models.roles import Role
from models.users import User
from utils.auth import current_user_id, login_required, logout_user
from utils.errors import create_authentication_error, NotFoundError

auth_bp = Blueprint("auth", __name__, url_prefix="/auth")


# Login
@auth_bp.route("/login", methods=["POST"])
def login():
    data = request.get_json(silent=True) or {}
    email = data.get("email")
    password = data.get("password")

    user = User.verify_password(email, password) if email and password else None
    if not user:
        raise create_authentication_error("Invalid email or password")

    if user.get("status") == "terminated":
        raise create_authentication_error("Account is no longer active")

    # Save user info in session
    session["user_id"] = str(user["_id"])
    session["user_name"] = user.get("display_name")

    return jsonify({"success": True, "user": User.public(user)})


# Logout
@auth_bp.route("/logout", methods=["POST"])
def logout():
    logout_user()
    return jsonify({"success": True})


# View Profile
@auth_bp.route("/profile")
@login_required
def view_profile():
    user = User.find_by_id(current_user_id())
    if not user:
        raise NotFoundError("User not found", {"user_id": current_user_id()})

    role = Role.find_by_id(user["role_id"]) if user.get("role_id") else None

    return jsonify({
        "user": User.public(user),
        "role": {"_id": str(role["_id"]), "name": role.get("name"), "level": role.get("level")} if role else None
    })
