import logging
from datetime import date, timedelta

from models.document import Document
from utils.activity_logger import ActivityAction, ActivityType, log_activity
from utils.db import id_str, mongo, serialize_doc, serialize_docs
from utils.errors import NotFoundError
from utils.notification_manager import NotificationManager
from utils.validation import parse_date

logger = logging.getLogger(__name__)

# Fields a document record may change after upload
UPDATABLE_FIELDS = ("title", "category", "type", "url", "expiry_date", "status")


def _iso_day_or_none(value):
    parsed = parse_date(value)
    return parsed.date().isoformat() if parsed else None


class DocumentManager:
    """
    Employee document records. Files themselves live in external storage;
    this layer keeps the metadata and the URL pointing at the file.
    """

    @staticmethod
    def add_document(actor_id, data):
        """``data`` is expected to have passed validate_document."""
        document = Document(
            user_id=id_str(data["user_id"]),
            title=data["title"],
            category=data["category"],
            type=data.get("type"),
            url=data["url"],
            file_name=data.get("file_name"),
            file_size=data.get("file_size"),
            file_type=data.get("file_type"),
            expiry_date=_iso_day_or_none(data.get("expiry_date")),
            uploaded_by=actor_id,
        )
        document_id = str(document.save().inserted_id)

        log_activity(
            user_id=actor_id,
            type=ActivityType.DOCUMENT,
            action=ActivityAction.CREATE,
            title="Document uploaded",
            description=document.title,
            related_id=document_id,
            metadata={"user_id": document.user_id, "category": document.category},
        )

        result = document.to_dict()
        result["_id"] = document_id
        if result["expiry_date"]:
            NotificationManager.create_document_expiry_notification(result)
        return result

    @staticmethod
    def get_document(document_id):
        document = Document.find_by_id(document_id)
        if not document:
            raise NotFoundError("Document not found", {"document_id": id_str(document_id)})
        return serialize_doc(document)

    @staticmethod
    def get_user_documents(user_id):
        return serialize_docs(Document.find_by_user(id_str(user_id)))

    @staticmethod
    def update_document(document_id, updates, actor_id=None):
        changes = {key: value for key, value in updates.items() if key in UPDATABLE_FIELDS}
        if "expiry_date" in changes:
            changes["expiry_date"] = _iso_day_or_none(changes["expiry_date"])

        result = Document.update(document_id, changes)
        if result.matched_count == 0:
            raise NotFoundError("Document not found", {"document_id": id_str(document_id)})

        log_activity(
            user_id=actor_id,
            type=ActivityType.DOCUMENT,
            action=ActivityAction.UPDATE,
            title="Document updated",
            description=", ".join(sorted(changes)) or "no changes",
            related_id=id_str(document_id),
        )
        return True

    @staticmethod
    def delete_document(document_id, actor_id=None):
        document = DocumentManager.get_document(document_id)
        Document.delete(document_id)

        log_activity(
            user_id=actor_id,
            type=ActivityType.DOCUMENT,
            action=ActivityAction.DELETE,
            title="Document deleted",
            description=document["title"],
            related_id=document["_id"],
            metadata={"user_id": document["user_id"], "url": document.get("url")},
        )
        return True

    @staticmethod
    def get_expiring_documents(days_threshold=30, today=None):
        until = ((today or date.today()) + timedelta(days=days_threshold)).isoformat()
        return serialize_docs(Document.find_expiring(until))

    @staticmethod
    def get_documents_by_type(type):
        return serialize_docs(Document.find_by_type(type))

    @staticmethod
    def get_documents_by_category(category):
        return serialize_docs(Document.find_by_category(category))

    @staticmethod
    def get_document_categories():
        return serialize_docs(mongo.db.document_categories.find())
