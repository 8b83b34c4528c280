import logging

from models.leave import Leave
from models.users import User
from utils.activity_logger import ActivityAction, ActivityType, log_activity
from utils.db import id_str, serialize_doc, serialize_docs
from utils.errors import NotFoundError, create_validation_error
from utils.notification_manager import NotificationManager
from utils.validation import parse_date

logger = logging.getLogger(__name__)

LEAVE_STATUSES = ("pending", "approved", "rejected")


def _iso_day(value):
    parsed = parse_date(value)
    if parsed is None:
        raise create_validation_error("Invalid date", {"value": value})
    return parsed.date().isoformat()


class LeaveManager:

    # Both start and end dates count as leave days
    @staticmethod
    def calculate_leave_days(start_date, end_date):
        start, end = parse_date(start_date), parse_date(end_date)
        return abs((end.date() - start.date()).days) + 1

    @staticmethod
    def request_leave(actor_id, data):
        """
        Create a pending leave request for data["user_id"] (defaults to the
        actor). ``data`` is expected to have passed validate_leave_request.
        """
        user_id = id_str(data.get("user_id") or actor_id)
        start_date, end_date = _iso_day(data["start_date"]), _iso_day(data["end_date"])
        if start_date > end_date:
            raise create_validation_error("Start date cannot be after end date")

        user = User.find_by_id(user_id)
        if not user:
            raise NotFoundError("User not found", {"user_id": user_id})

        days = LeaveManager.calculate_leave_days(start_date, end_date)
        balance = (user.get("leave_balance") or {}).get(data["type"])
        if balance is not None and balance < days:
            raise create_validation_error(
                "Insufficient leave balance",
                {"type": data["type"], "requested": days, "available": balance},
            )

        leave = Leave(
            user_id=user_id,
            type=data["type"],
            start_date=start_date,
            end_date=end_date,
            reason=data["reason"],
            approver_id=data.get("approver_id"),
        )
        leave_id = str(leave.save().inserted_id)

        log_activity(
            user_id=actor_id,
            type=ActivityType.LEAVE,
            action=ActivityAction.SUBMIT,
            title="Leave requested",
            description=f"{data['type']} leave from {start_date} to {end_date}",
            related_id=leave_id,
            metadata={"days": days, "user_id": user_id},
        )

        result = leave.to_dict()
        result["_id"] = leave_id

        if result["approver_id"]:
            NotificationManager.create_leave_request_notification(result, user.get("display_name") or user_id)
        return result

    @staticmethod
    def _decide(leave_id, status, approver_id, extra=None):
        """
        Apply an approval decision. The pending check and the status write are
        a single conditional update, so of two concurrent deciders only one
        wins; the other gets "not pending".
        """
        leave = Leave.find_by_id(leave_id)
        if not leave:
            raise NotFoundError("Leave request not found", {"leave_id": id_str(leave_id)})

        decided = Leave.decide(leave["_id"], status, approver_id, extra)
        if decided is None:
            current = Leave.find_by_id(leave["_id"]) or leave
            raise create_validation_error(
                "Leave request is not pending", {"leave_id": id_str(leave_id), "status": current.get("status")}
            )
        return decided

    @staticmethod
    def approve_leave(leave_id, approver_id):
        leave = LeaveManager._decide(leave_id, "approved", approver_id)

        # Deduct from the employee's balance
        days = LeaveManager.calculate_leave_days(leave["start_date"], leave["end_date"])
        User.deduct_leave(leave["user_id"], leave["type"], days)

        log_activity(
            user_id=approver_id,
            type=ActivityType.LEAVE,
            action=ActivityAction.APPROVE,
            title="Leave approved",
            description=f"{leave['type']} leave approved for {days} day(s)",
            related_id=str(leave["_id"]),
            metadata={"user_id": leave["user_id"], "days": days},
        )
        NotificationManager.create_leave_decision_notification(leave, approved=True)
        return True

    @staticmethod
    def reject_leave(leave_id, approver_id, reason):
        leave = LeaveManager._decide(leave_id, "rejected", approver_id, {"rejection_reason": reason})

        log_activity(
            user_id=approver_id,
            type=ActivityType.LEAVE,
            action=ActivityAction.REJECT,
            title="Leave rejected",
            description=f"{leave['type']} leave rejected",
            related_id=str(leave["_id"]),
            metadata={"user_id": leave["user_id"], "reason": reason},
        )
        NotificationManager.create_leave_decision_notification(leave, approved=False)
        return True

    @staticmethod
    def get_user_leave_requests(user_id):
        return serialize_docs(Leave.find_by_user(id_str(user_id)))

    @staticmethod
    def get_pending_leave_requests(approver_id):
        return serialize_docs(Leave.collection().find({
            "approver_id": approver_id,
            "status": "pending"
        }))

    @staticmethod
    def get_leave_balance(user_id):
        user = User.find_by_id(user_id)
        if not user:
            raise NotFoundError("User not found", {"user_id": id_str(user_id)})
        return user.get("leave_balance") or {}

    @staticmethod
    def get_leave_statistics(user_id, year):
        leaves = Leave.collection().find({
            "user_id": id_str(user_id),
            "start_date": {"$gte": f"{year:04d}-01-01"},
            "end_date": {"$lte": f"{year:04d}-12-31"}
        })

        statistics = {"total": 0, "by_type": {}}
        statistics.update({status: 0 for status in LEAVE_STATUSES})

        for leave in leaves:
            status = leave.get("status", "pending")
            statistics["total"] += 1
            statistics[status] = statistics.get(status, 0) + 1

            by_type = statistics["by_type"].setdefault(
                leave["type"], {"total": 0, **{s: 0 for s in LEAVE_STATUSES}}
            )
            by_type["total"] += 1
            by_type[status] = by_type.get(status, 0) + 1

        return statistics

    @staticmethod
    def get_leave(leave_id):
        leave = Leave.find_by_id(leave_id)
        if not leave:
            raise NotFoundError("Leave request not found", {"leave_id": id_str(leave_id)})
        return serialize_doc(leave)
