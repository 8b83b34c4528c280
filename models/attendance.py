from utils.db import mongo, as_document_id
from datetime import datetime, timezone


class Attendance:
    @staticmethod
    def collection():
        return mongo.db.attendance

    def __init__(self, user_id, date, check_in=None, check_out=None, status=None, location=None,
                 working_hours=0, notes="", marked_by=None, created_at=None, updated_at=None):
        self.user_id = user_id
        self.date = date  # "YYYY-MM-DD"
        self.check_in = check_in
        self.check_out = check_out
        self.status = status or "present"  # present | late | early | absent
        self.location = location
        self.working_hours = working_hours
        self.notes = notes
        self.marked_by = marked_by or "System"
        self.created_at = created_at or datetime.now(timezone.utc)
        self.updated_at = updated_at or datetime.now(timezone.utc)

    def to_dict(self):
        return {
            "user_id": self.user_id,
            "date": self.date,
            "check_in": self.check_in,
            "check_out": self.check_out,
            "status": self.status,
            "location": self.location,
            "working_hours": self.working_hours,
            "notes": self.notes,
            "marked_by": self.marked_by,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    def save(self):
        return Attendance.collection().insert_one(self.to_dict())

    @staticmethod
    def find_by_user(user_id):
        return list(Attendance.collection().find({"user_id": user_id}))

    @staticmethod
    def find_for_day(user_id, date):
        return Attendance.collection().find_one({"user_id": user_id, "date": date})

    @staticmethod
    def find_between(user_id, start_date, end_date):
        return list(Attendance.collection().find({
            "user_id": user_id,
            "date": {"$gte": start_date, "$lte": end_date}
        }).sort("date", 1))

    @staticmethod
    def update(attendance_id, updates):
        updates = dict(updates)
        updates["updated_at"] = datetime.now(timezone.utc)
        return Attendance.collection().update_one(
            {"_id": as_document_id(attendance_id)},
            {"$set": updates}
        )
