from utils.db import mongo, as_document_id
from datetime import datetime, timezone
from enum import Enum
from werkzeug.security import generate_password_hash, check_password_hash


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    ON_LEAVE = "on_leave"
    TERMINATED = "terminated"


class User:

    @staticmethod
    def collection():
        return mongo.db.users

    def __init__(self, email, password=None, first_name=None, last_name=None, display_name=None,
                 phone=None, role_id=None, department=None, position=None,
                 status=EmployeeStatus.ACTIVE.value, leave_balance=None, working_hours=None,
                 created_by=None, created_at=None, updated_at=None):
        self.email = email
        self.password = generate_password_hash(password) if password else None
        self.first_name = first_name
        self.last_name = last_name
        self.display_name = display_name or " ".join(p for p in (first_name, last_name) if p) or email
        self.phone = phone
        self.role_id = role_id
        self.department = department
        self.position = position
        self.status = EmployeeStatus(status).value

        # e.g. {"annual": 21, "sick": 14}
        self.leave_balance = leave_balance or {}
        # e.g. {"start": "09:00", "end": "17:00"}
        self.working_hours = working_hours

        self.created_by = created_by
        self.created_at = created_at or datetime.now(timezone.utc)
        self.updated_at = updated_at or datetime.now(timezone.utc)

    # Convert to dictionary for MongoDB
    def to_dict(self):
        return {
            "email": self.email,
            "password": self.password,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "display_name": self.display_name,
            "phone": self.phone,
            "role_id": self.role_id,
            "department": self.department,
            "position": self.position,
            "status": self.status,
            "leave_balance": self.leave_balance,
            "working_hours": self.working_hours,
            "created_by": self.created_by,
            "created_at": self.created_at,
            "updated_at": self.updated_at
        }

    # Save new user
    def save(self):
        return self.collection().insert_one(self.to_dict())

    # Find user by ID
    @staticmethod
    def find_by_id(user_id):
        return User.collection().find_one({"_id": as_document_id(user_id)})

    # Find user by email
    @staticmethod
    def find_by_email(email):
        return User.collection().find_one({"email": email})

    @staticmethod
    def find_by_department(department_id):
        return list(User.collection().find({"department": department_id}))

    @staticmethod
    def find_by_roles(role_ids):
        return list(User.collection().find({"role_id": {"$in": list(role_ids)}}))

    # Verify password
    @staticmethod
    def verify_password(email, password):
        user = User.find_by_email(email)
        if user and user.get("password") and check_password_hash(user["password"], password):
            return user
        return None

    @staticmethod
    def update_status(user_id, status):
        return User.collection().update_one(
            {"_id": as_document_id(user_id)},
            {"$set": {
                "status": EmployeeStatus(status).value,
                "updated_at": datetime.now(timezone.utc)
            }}
        )

    # Only leave types that already carry a balance are deducted
    @staticmethod
    def deduct_leave(user_id, leave_type, days):
        field = f"leave_balance.{leave_type}"
        return User.collection().update_one(
            {"_id": as_document_id(user_id), field: {"$exists": True}},
            {
                "$inc": {field: -days},
                "$set": {"updated_at": datetime.now(timezone.utc)}
            }
        )

    # Strip the password hash before a user leaves the service
    @staticmethod
    def public(user):
        if user is None:
            return None
        data = dict(user)
        data.pop("password", None)
        if "_id" in data:
            data["_id"] = str(data["_id"])
        return data
