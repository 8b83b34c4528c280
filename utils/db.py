"""
utils/db.py
-----------------
This module initializes and manages the MongoDB connection
for the entire Flask application, plus the small helpers every
model uses to address documents by id.
"""

import logging

from bson import ObjectId
from flask_pymongo import PyMongo

logger = logging.getLogger(__name__)

# Create a global MongoDB instance
mongo = PyMongo()


def init_db_connection(app):
    """
    Initialize MongoDB connection with Flask app.
    Settings (like MONGO_URI) come from the app's config object.
    """
    mongo.init_app(app)
    logger.info("MongoDB connection initialized")
    return mongo


def as_document_id(value):
    """
    Users get generated ObjectIds while seeded catalogs (roles, departments)
    use readable slugs such as "admin", so both forms must be addressable.
    """
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return value


def id_str(value):
    return str(value) if value is not None else None


def serialize_doc(doc):
    """Return a copy of a Mongo document with its _id as a string."""
    if doc is None:
        return None
    data = dict(doc)
    if "_id" in data:
        data["_id"] = str(data["_id"])
    return data


def serialize_docs(cursor):
    return [serialize_doc(doc) for doc in cursor]
