from utils.db import mongo
from datetime import datetime, timezone


class JobPosting:

    @staticmethod
    def collection():
        return mongo.db.jobs

    def __init__(self, title, department, description, requirements, vacancies,
                 status="open", created_by=None, created_at=None):
        self.title = title
        self.department = department
        self.description = description
        self.requirements = requirements
        self.vacancies = int(float(vacancies))
        self.status = status  # open | closed
        self.created_by = created_by
        self.created_at = created_at or datetime.now(timezone.utc)

    def to_dict(self):
        return {
            "title": self.title,
            "department": self.department,
            "description": self.description,
            "requirements": self.requirements,
            "vacancies": self.vacancies,
            "status": self.status,
            "created_by": self.created_by,
            "created_at": self.created_at
        }

    def save(self):
        return JobPosting.collection().insert_one(self.to_dict())
