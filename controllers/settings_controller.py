from flask import Blueprint, jsonify

from utils.auth import permission_required
from utils.db import serialize_doc
from utils.permissions import Permission
from utils.seed import get_company_settings

settings_bp = Blueprint("settings", __name__, url_prefix="/settings")


# Company profile, working hours and working days
@settings_bp.route("/company")
@permission_required(Permission.VIEW_SETTINGS, Permission.MANAGE_SETTINGS, Permission.VIEW_PROFILE)
def company_settings():
    return jsonify(serialize_doc(get_company_settings()))
