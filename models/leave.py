from utils.db import mongo, as_document_id
from datetime import datetime, timezone


class Leave:

    @staticmethod
    def collection():
        return mongo.db.leaves

    def __init__(self, user_id, type, start_date, end_date, reason, approver_id=None,
                 status="pending", created_at=None, updated_at=None):
        self.user_id = user_id
        self.type = type  # annual | sick | maternity | paternity | unpaid
        self.start_date = start_date  # "YYYY-MM-DD"
        self.end_date = end_date
        self.reason = reason
        self.approver_id = approver_id
        self.status = status  # pending | approved | rejected
        self.created_at = created_at or datetime.now(timezone.utc)
        self.updated_at = updated_at or datetime.now(timezone.utc)

    def to_dict(self):
        return {
            "user_id": self.user_id,
            "type": self.type,
            "start_date": self.start_date,
            "end_date": self.end_date,
            "reason": self.reason,
            "approver_id": self.approver_id,
            "status": self.status,
            "created_at": self.created_at,
            "updated_at": self.updated_at
        }

    def save(self):
        return Leave.collection().insert_one(self.to_dict())

    @staticmethod
    def find_by_id(leave_id):
        return Leave.collection().find_one({"_id": as_document_id(leave_id)})

    @staticmethod
    def find_by_user(user_id):
        return list(Leave.collection().find({"user_id": user_id}))

    # Moves a pending request to `status` in one write; returns the request as
    # it was before the update, or None when it was no longer pending
    @staticmethod
    def decide(leave_id, status, approver_id, extra=None):
        now = datetime.now(timezone.utc)
        fields = {
            "status": status,
            "approved_by": approver_id,
            "approved_at": now,
            "updated_at": now
        }
        fields.update(extra or {})
        return Leave.collection().find_one_and_update(
            {"_id": as_document_id(leave_id), "status": "pending"},
            {"$set": fields}
        )
