from flask import Blueprint, jsonify, request

from utils.activity_logger import get_recent_activities
from utils.auth import permission_required
from utils.permissions import Permission

activity_bp = Blueprint("activities", __name__, url_prefix="/activities")


# Recent activity, newest first; filter by actor and/or type
@activity_bp.route("")
@permission_required(Permission.VIEW_REPORTS, Permission.MANAGE_REPORTS)
def recent_activities():
    limit = max(1, min(request.args.get("limit", 50, type=int), 500))
    activities = get_recent_activities(
        user_id=request.args.get("user_id"),
        type=request.args.get("type"),
        limit=limit,
    )
    return jsonify({"activities": activities})
