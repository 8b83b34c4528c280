from utils.db import mongo
from datetime import datetime, timezone


class Payroll:

    @staticmethod
    def collection():
        return mongo.db.payroll

    def __init__(self, user_id, month, basic_salary=0, allowances=None, deductions=None,
                 net_salary=None, status="draft", created_at=None):
        self.user_id = user_id
        self.month = month  # "YYYY-MM"
        self.basic_salary = basic_salary
        self.allowances = allowances or {}
        self.deductions = deductions or {}
        self.net_salary = net_salary if net_salary is not None else (
            basic_salary + sum(self.allowances.values()) - sum(self.deductions.values())
        )
        self.status = status  # draft | processed | paid
        self.created_at = created_at or datetime.now(timezone.utc)

    def to_dict(self):
        return {
            "user_id": self.user_id,
            "month": self.month,
            "basic_salary": self.basic_salary,
            "allowances": self.allowances,
            "deductions": self.deductions,
            "net_salary": self.net_salary,
            "status": self.status,
            "created_at": self.created_at
        }

    def save(self):
        return Payroll.collection().insert_one(self.to_dict())

    @staticmethod
    def find_by_user(user_id):
        return list(Payroll.collection().find({"user_id": user_id}))
