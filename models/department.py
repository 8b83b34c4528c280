from utils.db import mongo, as_document_id
from datetime import datetime, timezone


class Department:

    @staticmethod
    def collection():
        return mongo.db.departments

    def __init__(self, department_id, name, code=None, description=None, manager_id=None,
                 is_active=True, created_at=None, updated_at=None):
        self.department_id = department_id  # slug, e.g. "hr"
        self.name = name
        self.code = code
        self.description = description
        self.manager_id = manager_id
        self.is_active = is_active
        self.created_at = created_at or datetime.now(timezone.utc)
        self.updated_at = updated_at or datetime.now(timezone.utc)

    def to_dict(self):
        return {
            "_id": self.department_id,
            "name": self.name,
            "code": self.code,
            "description": self.description,
            "manager_id": self.manager_id,
            "is_active": self.is_active,
            "created_at": self.created_at,
            "updated_at": self.updated_at
        }

    @staticmethod
    def find_by_id(department_id):
        return Department.collection().find_one({"_id": as_document_id(department_id)})
