from datetime import datetime, timedelta

import pytest

from models.notification import Notification
from utils.errors import NotFoundError
from utils.notification_manager import NotificationManager, NotificationType


class TestNotificationManager:

    def test_create(self, db):
        notification = NotificationManager.create_notification(
            "u1", NotificationType.SYSTEM_ALERT, "Maintenance", "Down at 22:00", priority="high")

        assert notification["is_read"] is False
        stored = db.notifications.find_one()
        assert str(stored["_id"]) == notification["_id"]
        assert (stored["type"], stored["priority"]) == ("system_alert", "high")

    def test_unknown_type_is_rejected(self, db):
        with pytest.raises(ValueError):
            NotificationManager.create_notification("u1", "carrier_pigeon", "t", "m")
        assert db.notifications.count_documents({}) == 0

    def test_user_notifications_newest_first(self, db):
        start = datetime(2024, 5, 1, 9, 0)
        for index in range(3):
            Notification("u1", "system_alert", f"N{index}", "m",
                         created_at=start + timedelta(minutes=index)).save()
        Notification("u2", "system_alert", "Other", "m", created_at=start).save()

        titles = [n["title"] for n in NotificationManager.get_user_notifications("u1", limit=2)]
        assert titles == ["N2", "N1"]

    def test_unread_count_and_mark_read(self, db):
        first = NotificationManager.create_notification("u1", "system_alert", "a", "m")
        NotificationManager.create_notification("u1", "system_alert", "b", "m")
        assert NotificationManager.get_unread_count("u1") == 2

        NotificationManager.mark_as_read(first["_id"], "u1")
        assert NotificationManager.get_unread_count("u1") == 1

        assert NotificationManager.mark_all_as_read("u1") == 1
        assert NotificationManager.get_unread_count("u1") == 0

    def test_cannot_mark_someone_elses_notification(self, db):
        notification = NotificationManager.create_notification("u1", "system_alert", "a", "m")
        with pytest.raises(NotFoundError):
            NotificationManager.mark_as_read(notification["_id"], "u2")
        assert NotificationManager.get_unread_count("u1") == 1

    def test_checklist_assigned(self, db):
        notification = NotificationManager.create_checklist_assigned_notification(
            {"_id": "c1", "title": "Onboarding", "assigned_to": "u1"})
        assert notification["user_id"] == "u1"
        assert notification["type"] == "checklist_assigned"
        assert notification["message"] == "You have been assigned a new checklist: Onboarding"
        assert notification["data"] == {"checklist_id": "c1"}

    def test_project_assignment(self, db):
        notification = NotificationManager.create_project_assignment_notification("u1", "p1", "Portal")
        assert notification["message"] == "You have been assigned to project: Portal"
