"""
utils/activity_logger.py
-----------------
Best-effort audit trail.

``log_activity`` hands the write to a background executor and returns
immediately. A failed write is logged and dropped; it never reaches the
caller and never undoes the operation it describes.
"""

import atexit
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from enum import Enum

from models.activity import Activity
from utils.db import serialize_docs

logger = logging.getLogger(__name__)


class ActivityType(str, Enum):
    USER = "user"
    EMPLOYEE = "employee"
    DEPARTMENT = "department"
    LEAVE = "leave"
    PAYROLL = "payroll"
    RECRUITMENT = "recruitment"
    PROJECT = "project"
    TRAINING = "training"
    PERFORMANCE = "performance"
    DOCUMENT = "document"
    FREELANCER = "freelancer"
    CHECKLIST = "checklist"
    REPORT = "report"


class ActivityAction(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    APPROVE = "approve"
    REJECT = "reject"
    ASSIGN = "assign"
    COMPLETE = "complete"
    SUBMIT = "submit"
    REVIEW = "review"


_executor = None
_executor_lock = threading.Lock()
DEFAULT_WORKERS = 2


def _get_executor():
    global _executor
    with _executor_lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(max_workers=DEFAULT_WORKERS, thread_name_prefix="activity-log")
        return _executor


def configure(max_workers):
    """Resize the background pool; pending writes on the old pool still finish."""
    global _executor, DEFAULT_WORKERS
    with _executor_lock:
        DEFAULT_WORKERS = max_workers
        old, _executor = _executor, None
    if old is not None:
        old.shutdown(wait=False)


@atexit.register
def shutdown():
    global _executor
    with _executor_lock:
        old, _executor = _executor, None
    if old is not None:
        old.shutdown(wait=True)


def _write(activity):
    try:
        activity.save()
    except Exception:
        logger.exception("Error logging activity %s/%s", activity.type, activity.action)
        return False
    return True


def log_activity(user_id, type, action, title, description, related_id=None, metadata=None):
    """
    Queue one activity document. Returns the Future of the write, or None
    when the entry was rejected before queueing (unknown type/action).
    """
    try:
        activity_type = ActivityType(type).value
        activity_action = ActivityAction(action).value
    except ValueError:
        logger.error("Rejected activity with unknown type/action: %r/%r", type, action)
        return None

    activity = Activity(
        user_id=user_id,
        type=activity_type,
        action=activity_action,
        title=title,
        description=description,
        related_id=related_id,
        metadata=metadata,
    )
    try:
        return _get_executor().submit(_write, activity)
    except RuntimeError:
        # executor already shut down (interpreter exit)
        logger.warning("Activity log executor unavailable; dropped %s/%s", activity_type, activity_action)
        return None


def get_recent_activities(user_id=None, type=None, limit=50):
    return serialize_docs(Activity.recent(user_id=user_id, type=type, limit=limit))
