"""
utils/relationships.py
-----------------
Composite views across collections and the cascade that runs when an
employee is terminated.

MongoDB is used without joins or multi-document transactions here, so a
composite view is assembled from parallel reads merged in memory. The parts
may reflect slightly different points in time.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

from models.attendance import Attendance
from models.checklist import Checklist
from models.department import Department
from models.document import Document
from models.leave import Leave
from models.payroll import Payroll
from models.performance import Performance
from models.project import Project
from models.users import EmployeeStatus, User
from utils.activity_logger import ActivityAction, ActivityType, log_activity
from utils.db import id_str, serialize_docs
from utils.errors import AppError, CascadeError, ErrorType, NotFoundError, create_validation_error

logger = logging.getLogger(__name__)

MAX_WORKERS = 5


class _LookupFailed(Exception):
    def __init__(self, name, cause):
        super().__init__(f"{name}: {cause}")
        self.name = name
        self.cause = cause


def _fan_out(calls):
    """
    Run the {name: zero-arg callable} mapping concurrently and return
    {name: result}. The first failure (in mapping order) is re-raised with
    the name attached once every call has finished.
    """
    with ThreadPoolExecutor(max_workers=max(1, min(MAX_WORKERS, len(calls)))) as pool:
        futures = {name: pool.submit(call) for name, call in calls.items()}

    results = {}
    for name, future in futures.items():
        try:
            results[name] = future.result()
        except Exception as exc:
            raise _LookupFailed(name, exc) from exc
    return results


class RelationshipManager:

    @staticmethod
    def get_employee_attendance(user_id):
        return serialize_docs(Attendance.find_by_user(user_id))

    @staticmethod
    def get_employee_leaves(user_id):
        return serialize_docs(Leave.find_by_user(user_id))

    @staticmethod
    def get_employee_payroll(user_id):
        return serialize_docs(Payroll.find_by_user(user_id))

    @staticmethod
    def get_employee_documents(user_id):
        return serialize_docs(Document.find_by_user(user_id))

    @staticmethod
    def get_employee_performance(user_id):
        return serialize_docs(Performance.find_by_user(user_id))

    @staticmethod
    def get_employee_details(user_id):
        user_id = id_str(user_id)
        try:
            user = User.find_by_id(user_id)
        except Exception as exc:
            logger.exception("Error getting employee %s", user_id)
            raise AppError(ErrorType.DATABASE, "Failed to load employee", {"user_id": user_id}) from exc

        if not user:
            raise NotFoundError("Employee not found", {"user_id": user_id})

        calls = {
            "attendance": lambda: RelationshipManager.get_employee_attendance(user_id),
            "leaves": lambda: RelationshipManager.get_employee_leaves(user_id),
            "payroll": lambda: RelationshipManager.get_employee_payroll(user_id),
            "documents": lambda: RelationshipManager.get_employee_documents(user_id),
            "performance": lambda: RelationshipManager.get_employee_performance(user_id),
        }
        try:
            related = _fan_out(calls)
        except _LookupFailed as exc:
            logger.error("Error getting employee details for %s (%s): %s", user_id, exc.name, exc.cause)
            raise AppError(
                ErrorType.DATABASE,
                "Failed to load employee details",
                {"user_id": user_id, "relation": exc.name},
            ) from exc.cause

        details = User.public(user)
        details.update(related)
        return details

    @staticmethod
    def get_project_details(project_id):
        project_id = id_str(project_id)
        try:
            project = Project.find_by_id(project_id)
        except Exception as exc:
            logger.exception("Error getting project %s", project_id)
            raise AppError(ErrorType.DATABASE, "Failed to load project", {"project_id": project_id}) from exc

        if not project:
            raise NotFoundError("Project not found", {"project_id": project_id})

        team_ids = list(project.get("team") or [])
        calls = {
            index: (lambda member_id=member_id: User.find_by_id(member_id))
            for index, member_id in enumerate(team_ids)
        }
        try:
            members = _fan_out(calls) if calls else {}
        except _LookupFailed as exc:
            logger.error("Error resolving team of project %s: %s", project_id, exc.cause)
            raise AppError(
                ErrorType.DATABASE,
                "Failed to load project details",
                {"project_id": project_id, "member_id": team_ids[exc.name]},
            ) from exc.cause

        details = dict(project)
        details["_id"] = str(project["_id"])
        # Dangling team references are dropped so the view stays renderable
        details["team"] = [
            User.public(members[index]) for index in range(len(team_ids)) if members.get(index)
        ]
        return details

    @staticmethod
    def get_department_details(department_id):
        try:
            department = Department.find_by_id(department_id)
            if not department:
                raise NotFoundError("Department not found", {"department_id": department_id})
            employees = User.find_by_department(id_str(department["_id"]))
        except AppError:
            raise
        except Exception as exc:
            logger.exception("Error getting department details for %s", department_id)
            raise AppError(
                ErrorType.DATABASE, "Failed to load department details", {"department_id": department_id}
            ) from exc

        details = dict(department)
        details["_id"] = str(department["_id"])
        details["employees"] = [User.public(employee) for employee in employees]
        return details

    @staticmethod
    def update_employee_status(user_id, new_status, actor_id=None):
        """
        Set an employee's status. On termination also remove them from every
        project team and unassign every checklist they hold.

        The cascade is a series of independent single-document updates with
        no rollback: if one fails a CascadeError is raised listing the steps
        that were already applied, and the caller has to reconcile.
        """
        user_id = id_str(user_id)
        try:
            status = EmployeeStatus(new_status)
        except ValueError:
            raise create_validation_error(
                f"Unknown employee status: {new_status}",
                {"status": new_status, "allowed": [s.value for s in EmployeeStatus]},
            )

        try:
            result = User.update_status(user_id, status)
        except Exception as exc:
            logger.exception("Error updating status of employee %s", user_id)
            raise AppError(ErrorType.DATABASE, "Failed to update employee status", {"user_id": user_id}) from exc

        if result.matched_count == 0:
            raise NotFoundError("Employee not found", {"user_id": user_id})

        # Audit the primary change on its own, before the cascade runs
        log_activity(
            user_id=actor_id,
            type=ActivityType.EMPLOYEE,
            action=ActivityAction.UPDATE,
            title="Employee status updated",
            description=f"Employee status changed to {status.value}",
            related_id=user_id,
            metadata={"status": status.value},
        )

        if status is EmployeeStatus.TERMINATED:
            RelationshipManager._cascade_termination(user_id)

        return True

    @staticmethod
    def _cascade_termination(user_id):
        applied = []
        step = "find_projects"
        try:
            for project in Project.find_by_member(user_id):
                step = f"projects/{project['_id']}"
                team = [member for member in project.get("team", []) if member != user_id]
                Project.set_team(project["_id"], team)
                applied.append(step)

            step = "find_checklists"
            for checklist in Checklist.find_by_assignee(user_id):
                step = f"checklists/{checklist['_id']}"
                Checklist.unassign(checklist["_id"])
                applied.append(step)
        except Exception as exc:
            logger.exception(
                "Termination cascade for %s failed at %s after %d applied step(s)",
                user_id, step, len(applied),
            )
            raise CascadeError(
                "Employee status updated but related records were only partially updated",
                applied=applied,
                failed_step=step,
                details={"user_id": user_id},
            ) from exc

        logger.info("Termination cascade for %s applied %d update(s)", user_id, len(applied))
        return applied
