from utils.db import mongo, as_document_id
from datetime import datetime, timezone


class Project:

    @staticmethod
    def collection():
        return mongo.db.projects

    def __init__(self, name, description, department, start_date, end_date=None,
                 team=None, status="active", created_by=None, created_at=None, updated_at=None):
        self.name = name
        self.description = description
        self.department = department
        self.start_date = start_date
        self.end_date = end_date
        self.team = list(team or [])  # user ids
        self.status = status  # planned | active | completed | on_hold
        self.created_by = created_by
        self.created_at = created_at or datetime.now(timezone.utc)
        self.updated_at = updated_at or datetime.now(timezone.utc)

    def to_dict(self):
        return {
            "name": self.name,
            "description": self.description,
            "department": self.department,
            "start_date": self.start_date,
            "end_date": self.end_date,
            "team": self.team,
            "status": self.status,
            "created_by": self.created_by,
            "created_at": self.created_at,
            "updated_at": self.updated_at
        }

    def save(self):
        return Project.collection().insert_one(self.to_dict())

    @staticmethod
    def find_by_id(project_id):
        return Project.collection().find_one({"_id": as_document_id(project_id)})

    @staticmethod
    def find_by_member(user_id):
        # Matches any project whose team array contains user_id
        return list(Project.collection().find({"team": user_id}))

    @staticmethod
    def set_team(project_id, team):
        return Project.collection().update_one(
            {"_id": as_document_id(project_id)},
            {"$set": {"team": list(team), "updated_at": datetime.now(timezone.utc)}}
        )
