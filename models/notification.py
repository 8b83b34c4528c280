from utils.db import mongo, as_document_id
from datetime import datetime, timezone


class Notification:

    @staticmethod
    def collection():
        return mongo.db.notifications

    def __init__(self, user_id, type, title, message, data=None, priority="normal",
                 is_read=False, created_at=None):
        self.user_id = user_id  # the recipient
        self.type = type
        self.title = title
        self.message = message
        self.data = data or {}
        self.priority = priority  # low | normal | high
        self.is_read = is_read
        self.created_at = created_at or datetime.now(timezone.utc)

    def to_dict(self):
        return {
            "user_id": self.user_id,
            "type": self.type,
            "title": self.title,
            "message": self.message,
            "data": self.data,
            "priority": self.priority,
            "is_read": self.is_read,
            "created_at": self.created_at
        }

    def save(self):
        return Notification.collection().insert_one(self.to_dict())

    @staticmethod
    def find_by_user(user_id, limit=50):
        return list(Notification.collection().find({"user_id": user_id}).sort("created_at", -1).limit(limit))

    @staticmethod
    def count_unread(user_id):
        return Notification.collection().count_documents({"user_id": user_id, "is_read": False})

    # Scoped to the recipient so nobody can mark someone else's notification
    @staticmethod
    def mark_read(notification_id, user_id):
        return Notification.collection().update_one(
            {"_id": as_document_id(notification_id), "user_id": user_id},
            {"$set": {"is_read": True}}
        )

    @staticmethod
    def mark_all_read(user_id):
        return Notification.collection().update_many(
            {"user_id": user_id, "is_read": False},
            {"$set": {"is_read": True}}
        )
