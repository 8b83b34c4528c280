"""
utils/seed.py
-----------------
First-run bootstrap: role catalog, departments, lookup tables, company
settings and the initial admin account.

The whole seed is skipped when any user already holds the admin role, and
each catalog document is upserted under its slug id, so running it twice
never duplicates anything.
"""

import copy
import logging
from datetime import datetime, timezone

from bson import ObjectId

from models.department import Department
from models.roles import Role, WILDCARD_PERMISSION
from models.users import User
from utils.db import mongo

logger = logging.getLogger(__name__)

ADMIN_ROLE_ID = "admin"

ROLES = [
    Role("admin", "Administrator", 1, [WILDCARD_PERMISSION], "Full system access"),
    Role("hr_manager", "HR Manager", 2, [
        "view_employees",
        "manage_employees",
        "view_attendance",
        "manage_attendance",
        "view_payroll",
        "manage_payroll",
        "view_leaves",
        "manage_leaves",
        "approve_leave",
        "reject_leave",
        "view_recruitment",
        "manage_recruitment",
        "view_training",
        "manage_training",
        "view_performance",
        "manage_performance",
        "view_projects",
        "view_reports",
        "view_documents",
        "manage_documents",
        "view_settings",
    ], "HR department management access"),
    Role("department_head", "Department Head", 3, [
        "view_department_employees",
        "manage_department_attendance",
        "approve_department_leaves",
        "view_department_reports",
    ], "Department management access"),
    Role("employee", "Employee", 4, [
        "view_profile",
        "view_attendance",
        "submit_attendance",
        "request_leave",
        "view_payslips",
        "view_training",
        "upload_document",
    ], "Basic employee access"),
]

DEPARTMENTS = [
    Department("hr", "Human Resources", "HR", "HR Department"),
    Department("it", "Information Technology", "IT", "IT Department"),
    Department("finance", "Finance", "FIN", "Finance Department"),
]

CATALOGS = {
    "employment_types": [
        {"_id": "full-time", "name": "Full Time"},
        {"_id": "part-time", "name": "Part Time"},
        {"_id": "contract", "name": "Contract"},
        {"_id": "intern", "name": "Intern"},
    ],
    "leave_types": [
        {"_id": "annual", "name": "Annual Leave", "default_days": 21},
        {"_id": "sick", "name": "Sick Leave", "default_days": 14},
        {"_id": "maternity", "name": "Maternity Leave", "default_days": 90},
        {"_id": "paternity", "name": "Paternity Leave", "default_days": 14},
    ],
    "document_categories": [
        {"_id": "personal", "name": "Personal Documents"},
        {"_id": "employment", "name": "Employment Documents"},
        {"_id": "financial", "name": "Financial Documents"},
        {"_id": "training", "name": "Training Certificates"},
    ],
}

COMPANY_SETTINGS = {
    "_id": "company",
    "name": "EDECS Business",
    "email": "contact@edecs.com",
    "phone": "",
    "address": "",
    "logo": "",
    "working_hours": {"start": "09:00", "end": "17:00"},
    "working_days": ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"],
}


def default_leave_balance():
    return {item["_id"]: item["default_days"] for item in CATALOGS["leave_types"]}


def is_database_initialized():
    try:
        return User.collection().find_one({"role_id": ADMIN_ROLE_ID}) is not None
    except Exception:
        logger.exception("Error checking database initialization")
        return False


def _upsert(collection, document, created_by):
    now = datetime.now(timezone.utc)
    fields = {k: v for k, v in document.items() if k not in ("_id", "created_at")}
    fields.update({"created_by": created_by, "updated_at": now})
    collection.update_one(
        {"_id": document["_id"]},
        {"$set": fields, "$setOnInsert": {"created_at": now}},
        upsert=True,
    )


def initialize_database(admin_email, admin_password, admin_name="System Admin"):
    """
    Seed the database unless an admin user already exists.
    Returns the new admin's id, or None when the seed was skipped.
    """
    if is_database_initialized():
        logger.info("Admin already exists; skipping database seed")
        return None

    # The admin document is written last: it is the "already seeded" marker,
    # so an interrupted seed is completed by the next run.
    admin_oid = ObjectId()
    admin_id = str(admin_oid)

    for role in ROLES:
        _upsert(Role.collection(), role.to_dict(), admin_id)

    for department in DEPARTMENTS:
        _upsert(Department.collection(), department.to_dict(), admin_id)

    for collection_name, items in CATALOGS.items():
        for item in items:
            _upsert(mongo.db[collection_name], item, admin_id)

    _upsert(mongo.db.settings, COMPANY_SETTINGS, admin_id)

    admin = User(
        email=admin_email,
        password=admin_password,
        display_name=admin_name,
        role_id=ADMIN_ROLE_ID,
        leave_balance=default_leave_balance(),
    ).to_dict()
    admin["_id"] = admin_oid
    User.collection().insert_one(admin)

    logger.info("Database initialized with admin %s", admin_email)
    return admin_id


def get_company_settings():
    settings = mongo.db.settings.find_one({"_id": "company"})
    return settings if settings is not None else copy.deepcopy(COMPANY_SETTINGS)
