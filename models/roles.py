from utils.db import mongo, as_document_id
from datetime import datetime, timezone

WILDCARD_PERMISSION = "*"


class Role:

    @staticmethod
    def collection():
        return mongo.db.roles

    def __init__(self, role_id, name, level, permissions=None, description=None, created_at=None):
        self.role_id = role_id
        self.name = name
        self.level = level  # display only; lower is more privileged
        self.permissions = list(permissions or [])
        self.description = description
        self.created_at = created_at or datetime.now(timezone.utc)

    def to_dict(self):
        return {
            "_id": self.role_id,
            "name": self.name,
            "level": self.level,
            "permissions": self.permissions,
            "description": self.description,
            "created_at": self.created_at
        }

    @staticmethod
    def find_by_id(role_id):
        return Role.collection().find_one({"_id": as_document_id(role_id)})

    # Roles whose permission list names any of the given permissions
    @staticmethod
    def find_granting(permissions):
        return list(Role.collection().find({"permissions": {"$in": list(permissions)}}))
