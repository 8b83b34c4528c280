from utils.db import mongo
from datetime import datetime, timezone


class Activity:
    """Append-only audit record; no update or delete."""

    @staticmethod
    def collection():
        return mongo.db.activities

    def __init__(self, user_id, type, action, title, description,
                 related_id=None, metadata=None, timestamp=None):
        self.user_id = user_id  # the actor
        self.type = type
        self.action = action
        self.title = title
        self.description = description
        self.related_id = related_id
        self.metadata = metadata or {}
        self.timestamp = timestamp or datetime.now(timezone.utc)

    def to_dict(self):
        return {
            "user_id": self.user_id,
            "type": self.type,
            "action": self.action,
            "title": self.title,
            "description": self.description,
            "related_id": self.related_id,
            "metadata": self.metadata,
            "timestamp": self.timestamp
        }

    def save(self):
        return Activity.collection().insert_one(self.to_dict())

    @staticmethod
    def recent(user_id=None, type=None, limit=50):
        query = {}
        if user_id:
            query["user_id"] = user_id
        if type:
            query["type"] = type
        return list(Activity.collection().find(query).sort("timestamp", -1).limit(limit))
