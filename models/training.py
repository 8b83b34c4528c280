from utils.db import mongo
from datetime import datetime, timezone


class Training:

    @staticmethod
    def collection():
        return mongo.db.trainings

    def __init__(self, title, description, start_date, end_date, capacity,
                 participants=None, created_by=None, created_at=None):
        self.title = title
        self.description = description
        self.start_date = start_date
        self.end_date = end_date
        self.capacity = int(float(capacity))
        self.participants = participants or []
        self.created_by = created_by
        self.created_at = created_at or datetime.now(timezone.utc)

    def to_dict(self):
        return {
            "title": self.title,
            "description": self.description,
            "start_date": self.start_date,
            "end_date": self.end_date,
            "capacity": self.capacity,
            "participants": self.participants,
            "created_by": self.created_by,
            "created_at": self.created_at
        }

    def save(self):
        return Training.collection().insert_one(self.to_dict())
