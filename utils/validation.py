"""
utils/validation.py
-----------------
Structural validation for records before they are written.

Each ``validate_<record>`` function returns a dict mapping a field name to a
human readable message for every rule the record breaks; an empty dict means
the record is valid. Nothing here touches the database, so uniqueness and
other stored-state rules are the caller's job.
"""

import math
import re
from datetime import date, datetime, timezone
from urllib.parse import urlparse

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
# At least 8 characters, 1 uppercase, 1 lowercase, 1 number
PASSWORD_RE = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)[a-zA-Z\d]{8,}$")
PHONE_RE = re.compile(r"^\+?[\d\s-]{10,}$")

ALLOWED_DOCUMENT_TYPES = (
    "application/pdf",
    "image/jpeg",
    "image/png",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
)
MAX_DOCUMENT_SIZE = 10 * 1024 * 1024  # bytes


def validate_email(email):
    return isinstance(email, str) and bool(EMAIL_RE.match(email))


def validate_password(password):
    return isinstance(password, str) and bool(PASSWORD_RE.match(password))


def validate_phone(phone):
    return isinstance(phone, str) and bool(PHONE_RE.match(phone))


def validate_required(value):
    if value is None:
        return False
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) > 0
    return str(value).strip() != ""


def validate_length(value, min_length, max_length):
    if not value:
        return False
    return min_length <= len(str(value)) <= max_length


def parse_date(value):
    """Coerce a date, datetime or ISO-8601 string to a naive UTC datetime."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def validate_date(value):
    return parse_date(value) is not None


def validate_date_range(start_date, end_date):
    start, end = parse_date(start_date), parse_date(end_date)
    if start is None or end is None:
        return False
    return start <= end


def validate_number(value, minimum, maximum):
    if value is None or isinstance(value, bool):
        return False
    try:
        number = float(value)
    except (TypeError, ValueError):
        return False
    return not math.isnan(number) and minimum <= number <= maximum


def validate_url(url):
    if not isinstance(url, str):
        return False
    parsed = urlparse(url)
    return bool(parsed.scheme and parsed.netloc)


def validate_file_type(content_type, allowed_types):
    return content_type in allowed_types


def validate_file_size(size, max_size):
    return size is not None and size <= max_size


def validate_employee_data(data):
    errors = {}

    if not validate_required(data.get("first_name")):
        errors["first_name"] = "First name is required"

    if not validate_email(data.get("email")):
        errors["email"] = "Invalid email address"

    if data.get("phone") and not validate_phone(data.get("phone")):
        errors["phone"] = "Invalid phone number"

    if not validate_required(data.get("department")):
        errors["department"] = "Department is required"

    if not validate_required(data.get("position")):
        errors["position"] = "Position is required"

    return errors


def validate_leave_request(data):
    errors = {}

    if not validate_required(data.get("type")):
        errors["type"] = "Leave type is required"

    if not validate_date(data.get("start_date")):
        errors["start_date"] = "Invalid start date"

    if not validate_date(data.get("end_date")):
        errors["end_date"] = "Invalid end date"

    if not validate_date_range(data.get("start_date"), data.get("end_date")):
        errors["date_range"] = "End date must be after start date"

    if not validate_required(data.get("reason")):
        errors["reason"] = "Reason is required"

    return errors


def validate_job_posting(data):
    errors = {}

    if not validate_required(data.get("title")):
        errors["title"] = "Job title is required"

    if not validate_required(data.get("department")):
        errors["department"] = "Department is required"

    if not validate_required(data.get("description")):
        errors["description"] = "Job description is required"

    if not validate_required(data.get("requirements")):
        errors["requirements"] = "Job requirements are required"

    if not validate_number(data.get("vacancies"), 1, 100):
        errors["vacancies"] = "Invalid number of vacancies"

    return errors


def validate_project(data):
    errors = {}

    if not validate_required(data.get("name")):
        errors["name"] = "Project name is required"

    if not validate_required(data.get("description")):
        errors["description"] = "Project description is required"

    if not validate_required(data.get("department")):
        errors["department"] = "Department is required"

    if not validate_date(data.get("start_date")):
        errors["start_date"] = "Invalid start date"

    # end date is optional for open-ended projects
    end_date = data.get("end_date")
    if end_date and not validate_date(end_date):
        errors["end_date"] = "Invalid end date"

    if end_date and not validate_date_range(data.get("start_date"), end_date):
        errors["date_range"] = "End date must be after start date"

    return errors


def validate_training(data):
    errors = {}

    if not validate_required(data.get("title")):
        errors["title"] = "Training title is required"

    if not validate_required(data.get("description")):
        errors["description"] = "Training description is required"

    if not validate_date(data.get("start_date")):
        errors["start_date"] = "Invalid start date"

    if not validate_date(data.get("end_date")):
        errors["end_date"] = "Invalid end date"

    if not validate_date_range(data.get("start_date"), data.get("end_date")):
        errors["date_range"] = "End date must be after start date"

    if not validate_number(data.get("capacity"), 1, 100):
        errors["capacity"] = "Invalid capacity"

    return errors


def validate_document(data):
    errors = {}

    if not validate_required(data.get("user_id")):
        errors["user_id"] = "Employee is required"

    if not validate_required(data.get("title")):
        errors["title"] = "Document title is required"

    if not validate_required(data.get("category")):
        errors["category"] = "Document category is required"

    if not validate_url(data.get("url")):
        errors["url"] = "Invalid document URL"

    if data.get("file_type") and not validate_file_type(data["file_type"], ALLOWED_DOCUMENT_TYPES):
        errors["file_type"] = "File type not allowed"

    if data.get("file_size") is not None and not (
            validate_number(data["file_size"], 0, MAX_DOCUMENT_SIZE)):
        errors["file_size"] = "File is too large"

    if data.get("expiry_date") and not validate_date(data["expiry_date"]):
        errors["expiry_date"] = "Invalid expiry date"

    return errors


def validate_performance_review(data):
    errors = {}

    if not validate_required(data.get("employee_id")):
        errors["employee_id"] = "Employee is required"

    if not validate_required(data.get("reviewer_id")):
        errors["reviewer_id"] = "Reviewer is required"

    if not validate_date(data.get("review_date")):
        errors["review_date"] = "Invalid review date"

    if not validate_required(data.get("ratings")):
        errors["ratings"] = "Ratings are required"

    if not validate_required(data.get("comments")):
        errors["comments"] = "Comments are required"

    return errors
