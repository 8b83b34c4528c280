"""
utils/notification_manager.py
-----------------
In-app notifications addressed to a single user.

Unlike activity entries, notifications are written synchronously: a failed
write raises, because the recipient would otherwise never learn about the
request waiting for them.
"""

import logging
from enum import Enum

from models.notification import Notification
from utils.db import id_str, serialize_docs
from utils.errors import NotFoundError

logger = logging.getLogger(__name__)


class NotificationType(str, Enum):
    LEAVE_REQUEST = "leave_request"
    LEAVE_APPROVED = "leave_approved"
    LEAVE_REJECTED = "leave_rejected"
    DOCUMENT_EXPIRY = "document_expiry"
    PERFORMANCE_REVIEW = "performance_review"
    PAYROLL_PROCESSED = "payroll_processed"
    ATTENDANCE_ANOMALY = "attendance_anomaly"
    PROJECT_ASSIGNMENT = "project_assignment"
    TRAINING_SCHEDULED = "training_scheduled"
    CHECKLIST_ASSIGNED = "checklist_assigned"
    SYSTEM_ALERT = "system_alert"


class NotificationManager:

    @staticmethod
    def create_notification(user_id, type, title, message, data=None, priority="normal"):
        notification = Notification(
            user_id=id_str(user_id),
            type=NotificationType(type).value,
            title=title,
            message=message,
            data=data,
            priority=priority,
        )
        notification_id = str(notification.save().inserted_id)
        logger.debug("Notification %s (%s) for %s", notification_id, notification.type, notification.user_id)

        result = notification.to_dict()
        result["_id"] = notification_id
        return result

    @staticmethod
    def get_user_notifications(user_id, limit=50):
        return serialize_docs(Notification.find_by_user(id_str(user_id), limit))

    @staticmethod
    def get_unread_count(user_id):
        return Notification.count_unread(id_str(user_id))

    @staticmethod
    def mark_as_read(notification_id, user_id):
        result = Notification.mark_read(notification_id, id_str(user_id))
        if result.matched_count == 0:
            raise NotFoundError("Notification not found", {"notification_id": id_str(notification_id)})
        return True

    @staticmethod
    def mark_all_as_read(user_id):
        return Notification.mark_all_read(id_str(user_id)).modified_count

    # -----------------------------
    # Domain notifications
    # -----------------------------
    @staticmethod
    def create_leave_request_notification(leave, employee_name):
        return NotificationManager.create_notification(
            user_id=leave["approver_id"],
            type=NotificationType.LEAVE_REQUEST,
            title="New Leave Request",
            message=f"{employee_name} has requested {leave['type']} leave",
            data={"leave_id": leave["_id"], "user_id": leave["user_id"],
                  "start_date": leave["start_date"], "end_date": leave["end_date"]},
            priority="high",
        )

    @staticmethod
    def create_leave_decision_notification(leave, approved):
        status = "approved" if approved else "rejected"
        return NotificationManager.create_notification(
            user_id=leave["user_id"],
            type=NotificationType.LEAVE_APPROVED if approved else NotificationType.LEAVE_REJECTED,
            title=f"Leave {status.title()}",
            message=f"Your {leave['type']} leave from {leave['start_date']} to {leave['end_date']} was {status}",
            data={"leave_id": id_str(leave["_id"])},
        )

    @staticmethod
    def create_document_expiry_notification(document):
        return NotificationManager.create_notification(
            user_id=document["user_id"],
            type=NotificationType.DOCUMENT_EXPIRY,
            title="Document Expiry Alert",
            message=f"Your {document.get('type') or document['category']} document "
                    f"will expire on {document['expiry_date']}",
            data={"document_id": id_str(document["_id"]), "expiry_date": document["expiry_date"]},
            priority="high",
        )

    @staticmethod
    def create_project_assignment_notification(user_id, project_id, project_name):
        return NotificationManager.create_notification(
            user_id=user_id,
            type=NotificationType.PROJECT_ASSIGNMENT,
            title="New Project Assignment",
            message=f"You have been assigned to project: {project_name}",
            data={"project_id": project_id},
        )

    @staticmethod
    def create_checklist_assigned_notification(checklist):
        return NotificationManager.create_notification(
            user_id=checklist["assigned_to"],
            type=NotificationType.CHECKLIST_ASSIGNED,
            title="New Checklist Assigned",
            message=f"You have been assigned a new checklist: {checklist['title']}",
            data={"checklist_id": id_str(checklist["_id"])},
        )
