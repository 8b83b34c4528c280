"""
utils/permissions.py
-----------------
Resolves a user's effective permissions through their single role and
answers authorization questions.

Every lookup failure is converted to a denial. A database outage therefore
shows up as "permission denied", never as an exception, and callers that
need to tell the two apart should use ``PermissionManager.check`` which
reports ``Access.UNKNOWN`` for failed lookups.
"""

import logging
from enum import Enum

from models.roles import Role, WILDCARD_PERMISSION
from models.users import User
from utils.db import id_str

logger = logging.getLogger(__name__)


class Permission(str, Enum):
    # Employee management
    MANAGE_EMPLOYEES = "manage_employees"
    VIEW_EMPLOYEES = "view_employees"
    VIEW_PROFILE = "view_profile"

    # User management
    MANAGE_USERS = "manage_users"
    VIEW_USERS = "view_users"
    EDIT_USER = "edit_user"
    DELETE_USER = "delete_user"

    # Department management
    MANAGE_DEPARTMENTS = "manage_departments"
    VIEW_DEPARTMENTS = "view_departments"
    EDIT_DEPARTMENT = "edit_department"
    DELETE_DEPARTMENT = "delete_department"
    VIEW_DEPARTMENT_EMPLOYEES = "view_department_employees"

    # Attendance management
    MANAGE_ATTENDANCE = "manage_attendance"
    VIEW_ATTENDANCE = "view_attendance"
    EDIT_ATTENDANCE = "edit_attendance"
    DELETE_ATTENDANCE = "delete_attendance"
    SUBMIT_ATTENDANCE = "submit_attendance"
    MANAGE_DEPARTMENT_ATTENDANCE = "manage_department_attendance"

    # Leave management
    MANAGE_LEAVES = "manage_leaves"
    VIEW_LEAVES = "view_leaves"
    APPROVE_LEAVE = "approve_leave"
    REJECT_LEAVE = "reject_leave"
    REQUEST_LEAVE = "request_leave"
    APPROVE_DEPARTMENT_LEAVES = "approve_department_leaves"

    # Payroll management
    MANAGE_PAYROLL = "manage_payroll"
    VIEW_PAYROLL = "view_payroll"
    PROCESS_PAYROLL = "process_payroll"
    GENERATE_PAYSLIP = "generate_payslip"
    VIEW_PAYSLIPS = "view_payslips"

    # Recruitment management
    MANAGE_RECRUITMENT = "manage_recruitment"
    VIEW_RECRUITMENT = "view_recruitment"
    POST_JOB = "post_job"
    REVIEW_APPLICATIONS = "review_applications"

    # Training management
    MANAGE_TRAINING = "manage_training"
    VIEW_TRAINING = "view_training"
    SCHEDULE_TRAINING = "schedule_training"
    ASSIGN_TRAINING = "assign_training"

    # Performance management
    MANAGE_PERFORMANCE = "manage_performance"
    VIEW_PERFORMANCE = "view_performance"
    CONDUCT_REVIEW = "conduct_review"
    APPROVE_REVIEW = "approve_review"

    # Document management
    MANAGE_DOCUMENTS = "manage_documents"
    VIEW_DOCUMENTS = "view_documents"
    UPLOAD_DOCUMENT = "upload_document"
    DELETE_DOCUMENT = "delete_document"

    # Project management
    MANAGE_PROJECTS = "manage_projects"
    VIEW_PROJECTS = "view_projects"
    ASSIGN_PROJECT = "assign_project"
    UPDATE_PROJECT = "update_project"

    # Freelancer management
    MANAGE_FREELANCERS = "manage_freelancers"
    VIEW_FREELANCERS = "view_freelancers"
    HIRE_FREELANCER = "hire_freelancer"
    PAY_FREELANCER = "pay_freelancer"

    # Checklist management
    MANAGE_CHECKLISTS = "manage_checklists"
    VIEW_CHECKLISTS = "view_checklists"
    ASSIGN_CHECKLIST = "assign_checklist"
    UPDATE_CHECKLIST = "update_checklist"

    # Settings management
    MANAGE_SETTINGS = "manage_settings"
    VIEW_SETTINGS = "view_settings"
    UPDATE_SETTINGS = "update_settings"

    # Reports management
    MANAGE_REPORTS = "manage_reports"
    VIEW_REPORTS = "view_reports"
    GENERATE_REPORT = "generate_report"
    EXPORT_REPORT = "export_report"
    VIEW_DEPARTMENT_REPORTS = "view_department_reports"


class Access(Enum):
    GRANTED = "granted"
    DENIED = "denied"
    # Lookup failed; treated as DENIED by every boolean check
    UNKNOWN = "unknown"


class _Resolution:
    __slots__ = ("access", "permissions")

    def __init__(self, access, permissions=frozenset()):
        self.access = access
        self.permissions = frozenset(permissions)

    @property
    def resolved(self):
        return self.access is Access.GRANTED


def _value(permission):
    return permission.value if isinstance(permission, Permission) else permission


def _load_permission_list(role):
    permissions = role.get("permissions")
    if not isinstance(permissions, (list, tuple, set)):
        raise ValueError(f"role {role.get('_id')!r} has malformed permissions: {permissions!r}")
    return permissions


def _grants(permission_set, permission):
    return WILDCARD_PERMISSION in permission_set or _value(permission) in permission_set


class PermissionManager:

    @staticmethod
    def _resolve(user_id):
        """
        GRANTED here means "resolved": the user and their role were both
        found and well formed. DENIED means one of them does not exist.
        """
        try:
            user = User.find_by_id(user_id)
            if not user:
                return _Resolution(Access.DENIED)

            role = Role.find_by_id(user.get("role_id")) if user.get("role_id") else None
            if not role:
                return _Resolution(Access.DENIED)

            return _Resolution(Access.GRANTED, _load_permission_list(role))
        except Exception:
            logger.exception("Error resolving permissions for user %s", user_id)
            return _Resolution(Access.UNKNOWN)

    @staticmethod
    def check(user_id, permission):
        resolution = PermissionManager._resolve(user_id)
        if not resolution.resolved:
            return resolution.access
        return Access.GRANTED if _grants(resolution.permissions, permission) else Access.DENIED

    @staticmethod
    def has_permission(user_id, permission):
        return PermissionManager.check(user_id, permission) is Access.GRANTED

    @staticmethod
    def get_user_permissions(user_id):
        return set(PermissionManager._resolve(user_id).permissions)

    @staticmethod
    def get_role_permissions(role_id):
        try:
            role = Role.find_by_id(role_id)
            if not role:
                return set()
            return set(_load_permission_list(role))
        except Exception:
            logger.exception("Error getting permissions for role %s", role_id)
            return set()

    @staticmethod
    def has_any_permission(user_id, permissions):
        resolution = PermissionManager._resolve(user_id)
        if not resolution.resolved:
            return False
        return any(_grants(resolution.permissions, p) for p in permissions)

    @staticmethod
    def has_all_permissions(user_id, permissions):
        resolution = PermissionManager._resolve(user_id)
        if not resolution.resolved:
            return False
        return all(_grants(resolution.permissions, p) for p in permissions)

    @staticmethod
    def get_users_with_permission(permission):
        return PermissionManager.get_users_with_any_permission([permission])

    @staticmethod
    def get_users_with_any_permission(permissions):
        """
        Reverse lookup in two scans: roles granting any of the permissions
        (wildcard roles included), then the users holding one of those roles.
        """
        wanted = [_value(p) for p in permissions] + [WILDCARD_PERMISSION]
        try:
            role_ids = {role["_id"] for role in Role.find_granting(wanted)}
            if not role_ids:
                return []

            # role_id may be stored as the raw _id or its string form
            role_ids |= {id_str(role_id) for role_id in role_ids}
            return [User.public(user) for user in User.find_by_roles(role_ids)]
        except Exception:
            logger.exception("Error getting users with permissions %s", list(permissions))
            return []
