# models/__init__.py

from .roles import Role, WILDCARD_PERMISSION
from .users import User, EmployeeStatus
from .department import Department
from .project import Project
from .checklist import Checklist
from .attendance import Attendance
from .leave import Leave
from .payroll import Payroll
from .document import Document
from .performance import Performance
from .job import JobPosting
from .training import Training
from .activity import Activity
from .notification import Notification

__all__ = [
    "Role",
    "WILDCARD_PERMISSION",
    "User",
    "EmployeeStatus",
    "Department",
    "Project",
    "Checklist",
    "Attendance",
    "Leave",
    "Payroll",
    "Document",
    "Performance",
    "JobPosting",
    "Training",
    "Activity",
    "Notification"
]
