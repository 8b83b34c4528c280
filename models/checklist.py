from utils.db import mongo, as_document_id
from datetime import datetime, timezone


class Checklist:

    @staticmethod
    def collection():
        return mongo.db.checklists

    def __init__(self, title, items=None, assigned_to=None, status="pending",
                 created_at=None, updated_at=None):
        self.title = title
        self.items = items or []
        self.assigned_to = assigned_to  # single user id
        self.status = status  # pending | in_progress | completed
        self.created_at = created_at or datetime.now(timezone.utc)
        self.updated_at = updated_at or datetime.now(timezone.utc)

    def to_dict(self):
        return {
            "title": self.title,
            "items": self.items,
            "assigned_to": self.assigned_to,
            "status": self.status,
            "created_at": self.created_at,
            "updated_at": self.updated_at
        }

    def save(self):
        return Checklist.collection().insert_one(self.to_dict())

    @staticmethod
    def find_by_assignee(user_id):
        return list(Checklist.collection().find({"assigned_to": user_id}))

    @staticmethod
    def unassign(checklist_id):
        return Checklist.collection().update_one(
            {"_id": as_document_id(checklist_id)},
            {"$set": {
                "status": "pending",
                "assigned_to": None,
                "updated_at": datetime.now(timezone.utc)
            }}
        )
