from utils.db import mongo, as_document_id
from datetime import datetime, timezone


class Document:

    @staticmethod
    def collection():
        return mongo.db.documents

    def __init__(self, user_id, title, category, type=None, url=None, file_name=None,
                 file_size=None, file_type=None, expiry_date=None, status="active",
                 uploaded_by=None, created_at=None, updated_at=None):
        self.user_id = user_id
        self.title = title
        self.category = category  # personal | employment | financial | training
        self.type = type  # e.g. passport, contract, certificate
        self.url = url
        self.file_name = file_name
        self.file_size = file_size
        self.file_type = file_type
        self.expiry_date = expiry_date  # "YYYY-MM-DD" or None
        self.status = status  # active | archived
        self.uploaded_by = uploaded_by
        self.created_at = created_at or datetime.now(timezone.utc)
        self.updated_at = updated_at or datetime.now(timezone.utc)

    def to_dict(self):
        return {
            "user_id": self.user_id,
            "title": self.title,
            "category": self.category,
            "type": self.type,
            "url": self.url,
            "file_name": self.file_name,
            "file_size": self.file_size,
            "file_type": self.file_type,
            "expiry_date": self.expiry_date,
            "status": self.status,
            "uploaded_by": self.uploaded_by,
            "created_at": self.created_at,
            "updated_at": self.updated_at
        }

    def save(self):
        return Document.collection().insert_one(self.to_dict())

    @staticmethod
    def find_by_id(document_id):
        return Document.collection().find_one({"_id": as_document_id(document_id)})

    @staticmethod
    def find_by_user(user_id):
        return list(Document.collection().find({"user_id": user_id}))

    @staticmethod
    def find_by_type(type):
        return list(Document.collection().find({"type": type}))

    @staticmethod
    def find_by_category(category):
        return list(Document.collection().find({"category": category}))

    # Active documents expiring on or before `until` (already expired ones included)
    @staticmethod
    def find_expiring(until):
        return list(Document.collection().find({
            "status": "active",
            "expiry_date": {"$ne": None, "$lte": until}
        }).sort("expiry_date", 1))

    @staticmethod
    def update(document_id, updates):
        updates = dict(updates)
        updates["updated_at"] = datetime.now(timezone.utc)
        return Document.collection().update_one(
            {"_id": as_document_id(document_id)},
            {"$set": updates}
        )

    @staticmethod
    def delete(document_id):
        return Document.collection().delete_one({"_id": as_document_id(document_id)})
