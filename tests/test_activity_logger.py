from datetime import datetime, timedelta

from models.activity import Activity
from utils import activity_logger
from utils.activity_logger import ActivityAction, ActivityType, get_recent_activities, log_activity


class TestLogActivity:

    def test_write_lands_in_the_store(self, db):
        future = log_activity("u1", ActivityType.LEAVE, ActivityAction.APPROVE,
                              "Leave approved", "annual leave approved for 3 day(s)",
                              related_id="l1", metadata={"days": 3})
        assert future.result(timeout=5) is True

        entry = db.activities.find_one({"related_id": "l1"})
        assert entry["user_id"] == "u1"
        assert entry["type"] == "leave"
        assert entry["action"] == "approve"
        assert entry["metadata"] == {"days": 3}
        assert entry["timestamp"] is not None

    def test_plain_strings_are_accepted(self, db):
        future = log_activity("u1", "project", "assign", "Assigned", "Assigned to Portal")
        assert future.result(timeout=5) is True
        assert db.activities.count_documents({"type": "project"}) == 1

    def test_unknown_type_or_action_is_rejected(self, db):
        assert log_activity("u1", "spaceship", "create", "t", "d") is None
        assert log_activity("u1", "leave", "launch", "t", "d") is None
        activity_logger.shutdown()
        assert db.activities.count_documents({}) == 0

    def test_failed_write_is_swallowed(self, db, monkeypatch):
        def broken(self):
            raise ConnectionError("mongo is down")

        monkeypatch.setattr(Activity, "save", broken)

        future = log_activity("u1", ActivityType.USER, ActivityAction.UPDATE, "t", "d")
        assert future.result(timeout=5) is False

    def test_reconfigured_pool_keeps_logging(self, db):
        activity_logger.configure(1)
        log_activity("u1", ActivityType.REPORT, ActivityAction.CREATE, "t", "d")
        activity_logger.shutdown()
        assert db.activities.count_documents({"type": "report"}) == 1


class TestRecentActivities:

    def test_newest_first_and_filtered(self, db):
        start = datetime(2024, 5, 1, 9, 0)
        for index in range(3):
            Activity("u1", "leave", "submit", f"Leave {index}", "d",
                     timestamp=start + timedelta(minutes=index)).save()
        Activity("u2", "payroll", "create", "Payroll", "d", timestamp=start).save()

        recent = get_recent_activities(user_id="u1", limit=2)
        assert [a["title"] for a in recent] == ["Leave 2", "Leave 1"]
        assert all(isinstance(a["_id"], str) for a in recent)

        assert [a["user_id"] for a in get_recent_activities(type="payroll")] == ["u2"]
        assert len(get_recent_activities()) == 4
