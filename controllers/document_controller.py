from flask import Blueprint, jsonify, request

from utils.auth import current_user_id, login_required, permission_required
from utils.document_manager import DocumentManager
from utils.errors import create_authorization_error, create_validation_error
from utils.permissions import Permission, PermissionManager
from utils.validation import validate_document

document_bp = Blueprint("documents", __name__, url_prefix="/documents")


def _can_view_documents(user_id):
    return PermissionManager.has_any_permission(user_id, [Permission.MANAGE_DOCUMENTS, Permission.VIEW_DOCUMENTS])


# -----------------------------
# UPLOAD (record the stored file)
# -----------------------------
@document_bp.route("", methods=["POST"])
@permission_required(Permission.UPLOAD_DOCUMENT, Permission.MANAGE_DOCUMENTS)
def add_document():
    data = request.get_json(silent=True) or {}
    actor_id = current_user_id()
    data.setdefault("user_id", actor_id)

    errors = validate_document(data)
    if errors:
        return jsonify({"success": False, "errors": errors}), 400

    if data["user_id"] != actor_id and not PermissionManager.has_permission(actor_id, Permission.MANAGE_DOCUMENTS):
        raise create_authorization_error("Cannot upload documents for another employee")

    document = DocumentManager.add_document(actor_id, data)
    return jsonify({"success": True, "document": document}), 201


# -----------------------------
# LOOKUPS
# -----------------------------
@document_bp.route("/user/<user_id>")
@login_required
def user_documents(user_id):
    if user_id != current_user_id() and not _can_view_documents(current_user_id()):
        raise create_authorization_error()
    return jsonify({"documents": DocumentManager.get_user_documents(user_id)})


@document_bp.route("")
@permission_required(Permission.VIEW_DOCUMENTS, Permission.MANAGE_DOCUMENTS)
def documents():
    doc_type = request.args.get("type")
    category = request.args.get("category")
    if doc_type:
        return jsonify({"documents": DocumentManager.get_documents_by_type(doc_type)})
    if category:
        return jsonify({"documents": DocumentManager.get_documents_by_category(category)})
    raise create_validation_error("type or category is required")


@document_bp.route("/expiring")
@permission_required(Permission.VIEW_DOCUMENTS, Permission.MANAGE_DOCUMENTS)
def expiring_documents():
    days = request.args.get("days", 30, type=int)
    if days < 0:
        raise create_validation_error("days must not be negative")
    return jsonify({"documents": DocumentManager.get_expiring_documents(days)})


@document_bp.route("/categories")
@login_required
def document_categories():
    return jsonify({"categories": DocumentManager.get_document_categories()})


@document_bp.route("/<document_id>")
@login_required
def document_detail(document_id):
    document = DocumentManager.get_document(document_id)
    if document["user_id"] != current_user_id() and not _can_view_documents(current_user_id()):
        raise create_authorization_error()
    return jsonify(document)


# -----------------------------
# UPDATE / DELETE
# -----------------------------
@document_bp.route("/<document_id>", methods=["PUT"])
@permission_required(Permission.MANAGE_DOCUMENTS)
def update_document(document_id):
    data = request.get_json(silent=True) or {}
    DocumentManager.update_document(document_id, data, actor_id=current_user_id())
    return jsonify({"success": True, "_id": document_id})


@document_bp.route("/<document_id>", methods=["DELETE"])
@permission_required(Permission.DELETE_DOCUMENT, Permission.MANAGE_DOCUMENTS)
def delete_document(document_id):
    DocumentManager.delete_document(document_id, actor_id=current_user_id())
    return jsonify({"success": True, "_id": document_id})
