import logging
from datetime import datetime

from models.attendance import Attendance
from models.users import User
from utils.db import id_str, serialize_doc, serialize_docs
from utils.errors import NotFoundError, create_validation_error

logger = logging.getLogger(__name__)

# Overridden from app config (DEFAULT_WORK_START / DEFAULT_WORK_END)
DEFAULT_WORKING_HOURS = {"start": "09:00", "end": "17:00"}


# ============================
# UTILITIES
# ============================
def _parse_time_str(tstr):
    for fmt in ("%H:%M:%S", "%H:%M"):
        try:
            return datetime.strptime(tstr, fmt)
        except ValueError:
            continue
    raise ValueError(f"Bad time: {tstr}")


def _minutes_of_day(value):
    if isinstance(value, str):
        value = _parse_time_str(value)
    return value.hour * 60 + value.minute


# Attendance times are wall-clock times; tz info is dropped, not converted
def _wall_clock(value):
    return value.replace(tzinfo=None) if value.tzinfo else value


def _working_hours(user):
    hours = dict(DEFAULT_WORKING_HOURS)
    hours.update(user.get("working_hours") or {})
    return hours


class AttendanceManager:

    @staticmethod
    def get_today_attendance(user_id, now=None):
        today = (now or datetime.now()).strftime("%Y-%m-%d")
        return serialize_doc(Attendance.find_for_day(id_str(user_id), today))

    @staticmethod
    def record_check_in(user_id, location=None, now=None):
        user_id = id_str(user_id)
        now = _wall_clock(now or datetime.now())

        if AttendanceManager.get_today_attendance(user_id, now):
            raise create_validation_error("Already checked in today", {"user_id": user_id})

        user = User.find_by_id(user_id)
        if not user:
            raise NotFoundError("User not found", {"user_id": user_id})

        start = _working_hours(user)["start"]
        status = "late" if _minutes_of_day(now) > _minutes_of_day(start) else "present"

        record = Attendance(
            user_id=user_id,
            date=now.strftime("%Y-%m-%d"),
            check_in=now,
            location=location,
            status=status,
            marked_by="self",
        )
        attendance_id = str(record.save().inserted_id)
        logger.info("Check-in %s at %s (%s)", user_id, now.strftime("%H:%M"), status)

        result = record.to_dict()
        result["_id"] = attendance_id
        return result

    @staticmethod
    def record_check_out(user_id, now=None):
        user_id = id_str(user_id)
        now = _wall_clock(now or datetime.now())

        attendance = AttendanceManager.get_today_attendance(user_id, now)
        if not attendance:
            raise create_validation_error("No check-in record found for today", {"user_id": user_id})
        if attendance.get("check_out"):
            raise create_validation_error("Already checked out today", {"user_id": user_id})

        user = User.find_by_id(user_id)
        if not user:
            raise NotFoundError("User not found", {"user_id": user_id})

        check_in = _wall_clock(attendance["check_in"])
        worked = round((now - check_in).total_seconds() / 3600, 2)

        end = _working_hours(user)["end"]
        status = "early" if _minutes_of_day(now) < _minutes_of_day(end) else attendance["status"]

        Attendance.update(attendance["_id"], {
            "check_out": now,
            "working_hours": worked,
            "status": status
        })
        logger.info("Check-out %s at %s (%sh, %s)", user_id, now.strftime("%H:%M"), worked, status)

        attendance.update({"check_out": now, "working_hours": worked, "status": status})
        return attendance

    @staticmethod
    def get_user_attendance_history(user_id, start_date, end_date):
        return serialize_docs(Attendance.find_between(id_str(user_id), start_date, end_date))

    @staticmethod
    def get_attendance_statistics(user_id, start_date, end_date):
        records = AttendanceManager.get_user_attendance_history(user_id, start_date, end_date)

        def count(status):
            return sum(1 for r in records if r.get("status") == status)

        return {
            "total_days": len(records),
            "present": count("present"),
            "late": count("late"),
            "early": count("early"),
            "absent": count("absent"),
            "total_working_hours": round(sum(r.get("working_hours") or 0 for r in records), 2),
        }

    @staticmethod
    def update_attendance_record(attendance_id, updates):
        result = Attendance.update(attendance_id, updates)
        if result.matched_count == 0:
            raise NotFoundError("Attendance record not found", {"attendance_id": id_str(attendance_id)})
        return True
