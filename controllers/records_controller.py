from flask import Blueprint, jsonify, request

from models.checklist import Checklist
from models.job import JobPosting
from models.performance import Performance
from models.training import Training
from models.users import User
from utils.activity_logger import ActivityAction, ActivityType, log_activity
from utils.auth import current_user_id, permission_required
from utils.errors import NotFoundError
from utils.notification_manager import NotificationManager
from utils.permissions import Permission
from utils.validation import (
    validate_job_posting,
    validate_performance_review,
    validate_required,
    validate_training,
)

records_bp = Blueprint("records", __name__, url_prefix="/records")


def _invalid(errors):
    return jsonify({"success": False, "errors": errors}), 400


# -----------------------------
# JOB POSTINGS
# -----------------------------
@records_bp.route("/jobs", methods=["POST"])
@permission_required(Permission.MANAGE_RECRUITMENT, Permission.POST_JOB)
def add_job():
    data = request.get_json(silent=True) or {}
    errors = validate_job_posting(data)
    if errors:
        return _invalid(errors)

    actor_id = current_user_id()
    job = JobPosting(
        title=data["title"],
        department=data["department"],
        description=data["description"],
        requirements=data["requirements"],
        vacancies=data["vacancies"],
        created_by=actor_id,
    )
    job_id = str(job.save().inserted_id)

    log_activity(actor_id, ActivityType.RECRUITMENT, ActivityAction.CREATE,
                 "Job posted", job.title, related_id=job_id)
    return jsonify({"success": True, "_id": job_id}), 201


# -----------------------------
# TRAININGS
# -----------------------------
@records_bp.route("/trainings", methods=["POST"])
@permission_required(Permission.MANAGE_TRAINING, Permission.SCHEDULE_TRAINING)
def add_training():
    data = request.get_json(silent=True) or {}
    errors = validate_training(data)
    if errors:
        return _invalid(errors)

    actor_id = current_user_id()
    training = Training(
        title=data["title"],
        description=data["description"],
        start_date=data["start_date"],
        end_date=data["end_date"],
        capacity=data["capacity"],
        created_by=actor_id,
    )
    training_id = str(training.save().inserted_id)

    log_activity(actor_id, ActivityType.TRAINING, ActivityAction.CREATE,
                 "Training scheduled", training.title, related_id=training_id)
    return jsonify({"success": True, "_id": training_id}), 201


# -----------------------------
# PERFORMANCE REVIEWS
# -----------------------------
@records_bp.route("/performance", methods=["POST"])
@permission_required(Permission.MANAGE_PERFORMANCE, Permission.CONDUCT_REVIEW)
def add_performance_review():
    data = request.get_json(silent=True) or {}
    errors = validate_performance_review(data)
    if errors:
        return _invalid(errors)

    actor_id = current_user_id()
    review = Performance(
        user_id=str(data["employee_id"]),
        reviewer_id=str(data["reviewer_id"]),
        review_date=data["review_date"],
        ratings=data["ratings"],
        comments=data["comments"],
        period=data.get("period"),
    )
    review_id = str(review.save().inserted_id)

    log_activity(actor_id, ActivityType.PERFORMANCE, ActivityAction.REVIEW,
                 "Performance review submitted", f"Review for employee {review.user_id}",
                 related_id=review_id, metadata={"employee_id": review.user_id})
    return jsonify({"success": True, "_id": review_id}), 201


# -----------------------------
# CHECKLISTS
# -----------------------------
@records_bp.route("/checklists", methods=["POST"])
@permission_required(Permission.MANAGE_CHECKLISTS, Permission.ASSIGN_CHECKLIST)
def add_checklist():
    data = request.get_json(silent=True) or {}
    errors = {}
    if not validate_required(data.get("title")):
        errors["title"] = "Checklist title is required"
    if not isinstance(data.get("items", []), list):
        errors["items"] = "Items must be a list"
    if errors:
        return _invalid(errors)

    assigned_to = data.get("assigned_to")
    if assigned_to and not User.find_by_id(assigned_to):
        raise NotFoundError("Employee not found", {"user_id": assigned_to})

    actor_id = current_user_id()
    checklist = Checklist(
        title=data["title"],
        items=data.get("items", []),
        assigned_to=str(assigned_to) if assigned_to else None,
        status="in_progress" if assigned_to else "pending",
    )
    record = checklist.to_dict()
    record["_id"] = str(checklist.save().inserted_id)

    if checklist.assigned_to:
        log_activity(actor_id, ActivityType.CHECKLIST, ActivityAction.ASSIGN,
                     "Checklist assigned", checklist.title, related_id=record["_id"],
                     metadata={"assigned_to": checklist.assigned_to})
        NotificationManager.create_checklist_assigned_notification(record)
    else:
        log_activity(actor_id, ActivityType.CHECKLIST, ActivityAction.CREATE,
                     "Checklist created", checklist.title, related_id=record["_id"])
    return jsonify({"success": True, "_id": record["_id"]}), 201
