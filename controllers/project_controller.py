from flask import Blueprint, jsonify, request

from models.project import Project
from utils.activity_logger import ActivityAction, ActivityType, log_activity
from utils.auth import current_user_id, permission_required
from utils.notification_manager import NotificationManager
from utils.permissions import Permission
from utils.relationships import RelationshipManager
from utils.validation import validate_project

project_bp = Blueprint("projects", __name__, url_prefix="/projects")


# Project with resolved team members
@project_bp.route("/<project_id>")
@permission_required(Permission.VIEW_PROJECTS, Permission.MANAGE_PROJECTS)
def project_details(project_id):
    return jsonify(RelationshipManager.get_project_details(project_id))


# Add Project
@project_bp.route("", methods=["POST"])
@permission_required(Permission.MANAGE_PROJECTS)
def add_project():
    data = request.get_json(silent=True) or {}

    errors = validate_project(data)
    if errors:
        return jsonify({"success": False, "errors": errors}), 400

    actor_id = current_user_id()
    project = Project(
        name=data["name"],
        description=data["description"],
        department=data["department"],
        start_date=data["start_date"],
        end_date=data.get("end_date"),
        team=[str(member) for member in data.get("team", [])],
        status=data.get("status", "active"),
        created_by=actor_id,
    )
    project_id = str(project.save().inserted_id)

    log_activity(
        user_id=actor_id,
        type=ActivityType.PROJECT,
        action=ActivityAction.CREATE,
        title="Project created",
        description=project.name,
        related_id=project_id,
        metadata={"team_size": len(project.team)},
    )

    for member_id in project.team:
        NotificationManager.create_project_assignment_notification(member_id, project_id, project.name)

    return jsonify({"success": True, "_id": project_id}), 201
