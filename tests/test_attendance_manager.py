from datetime import datetime, timezone

import pytest

from models.attendance import Attendance
from utils.attendance_manager import AttendanceManager
from utils.errors import AppError, ErrorType, NotFoundError

MISSING_ID = "64b7f0f0f0f0f0f0f0f0f0f0"


def at(hour, minute=0, day=6):
    return datetime(2024, 5, day, hour, minute)


@pytest.fixture
def employee(make_user):
    return make_user("dev@edecs.com")


class TestCheckIn:

    def test_on_time(self, employee):
        record = AttendanceManager.record_check_in(employee, location="HQ", now=at(8, 55))

        assert record["status"] == "present"
        assert record["date"] == "2024-05-06"
        assert record["marked_by"] == "self"
        assert AttendanceManager.get_today_attendance(employee, at(12))["location"] == "HQ"

    def test_late(self, employee):
        assert AttendanceManager.record_check_in(employee, now=at(9, 1))["status"] == "late"

    def test_personal_working_hours(self, make_user):
        user_id = make_user("night@edecs.com", working_hours={"start": "22:00", "end": "06:00"})
        assert AttendanceManager.record_check_in(user_id, now=at(21, 45))["status"] == "present"

    def test_aware_times_use_wall_clock(self, employee):
        now = datetime(2024, 5, 6, 8, 30, tzinfo=timezone.utc)
        assert AttendanceManager.record_check_in(employee, now=now)["status"] == "present"

    def test_twice_on_the_same_day(self, employee):
        AttendanceManager.record_check_in(employee, now=at(9))
        with pytest.raises(AppError) as excinfo:
            AttendanceManager.record_check_in(employee, now=at(10))
        assert excinfo.value.message == "Already checked in today"
        assert excinfo.value.type is ErrorType.VALIDATION

    def test_next_day_is_a_new_record(self, employee):
        AttendanceManager.record_check_in(employee, now=at(9))
        AttendanceManager.record_check_in(employee, now=at(9, day=7))
        assert Attendance.collection().count_documents({"user_id": employee}) == 2

    def test_unknown_user(self, db):
        with pytest.raises(NotFoundError):
            AttendanceManager.record_check_in(MISSING_ID, now=at(9))


class TestCheckOut:

    def test_full_day(self, employee):
        AttendanceManager.record_check_in(employee, now=at(8, 30))
        record = AttendanceManager.record_check_out(employee, now=at(17, 15))

        assert record["working_hours"] == 8.75
        assert record["status"] == "present"
        stored = Attendance.find_for_day(employee, "2024-05-06")
        assert stored["check_out"] == at(17, 15)

    def test_leaving_early(self, employee):
        AttendanceManager.record_check_in(employee, now=at(9, 30))
        record = AttendanceManager.record_check_out(employee, now=at(15))
        assert record["status"] == "early"
        assert record["working_hours"] == 5.5

    def test_without_check_in(self, employee):
        with pytest.raises(AppError) as excinfo:
            AttendanceManager.record_check_out(employee, now=at(17))
        assert excinfo.value.message == "No check-in record found for today"

    def test_twice(self, employee):
        AttendanceManager.record_check_in(employee, now=at(9))
        AttendanceManager.record_check_out(employee, now=at(17))
        with pytest.raises(AppError) as excinfo:
            AttendanceManager.record_check_out(employee, now=at(18))
        assert excinfo.value.message == "Already checked out today"


class TestHistory:

    @pytest.fixture
    def week(self, employee):
        AttendanceManager.record_check_in(employee, now=at(9, 0, day=6))
        AttendanceManager.record_check_out(employee, now=at(17, 0, day=6))
        AttendanceManager.record_check_in(employee, now=at(9, 30, day=7))
        AttendanceManager.record_check_out(employee, now=at(17, 30, day=7))
        AttendanceManager.record_check_in(employee, now=at(9, 0, day=8))
        AttendanceManager.record_check_out(employee, now=at(13, 0, day=8))
        Attendance(user_id=employee, date="2024-05-09", status="absent").save()
        Attendance(user_id=employee, date="2024-05-20", status="present").save()
        return employee

    def test_history_in_date_order(self, week):
        history = AttendanceManager.get_user_attendance_history(week, "2024-05-06", "2024-05-09")
        assert [r["date"] for r in history] == ["2024-05-06", "2024-05-07", "2024-05-08", "2024-05-09"]

    def test_statistics(self, week):
        statistics = AttendanceManager.get_attendance_statistics(week, "2024-05-06", "2024-05-09")
        assert statistics == {
            "total_days": 4,
            "present": 1,
            "late": 1,
            "early": 1,
            "absent": 1,
            "total_working_hours": 20.0,
        }

    def test_update_record(self, week):
        record = AttendanceManager.get_today_attendance(week, at(12, day=9))
        AttendanceManager.update_attendance_record(record["_id"], {"status": "present", "notes": "Sick note"})
        assert Attendance.find_for_day(week, "2024-05-09")["notes"] == "Sick note"

    def test_update_unknown_record(self, db):
        with pytest.raises(NotFoundError):
            AttendanceManager.update_attendance_record(MISSING_ID, {"status": "present"})
