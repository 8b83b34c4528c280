from datetime import date

import pytest

from utils.validation import (
    validate_date,
    validate_date_range,
    validate_email,
    validate_employee_data,
    validate_job_posting,
    validate_leave_request,
    validate_number,
    validate_password,
    validate_performance_review,
    validate_phone,
    validate_project,
    validate_required,
    validate_training,
    validate_url,
)

VALID_LEAVE = {
    "type": "annual",
    "start_date": "2024-05-01",
    "end_date": "2024-05-10",
    "reason": "Family trip",
}


class TestPredicates:

    @pytest.mark.parametrize("email,expected", [
        ("jane@example.com", True),
        ("jane.doe+hr@corp.co.uk", True),
        ("not-an-email", False),
        ("jane@example", False),
        ("jane @example.com", False),
        (None, False),
    ])
    def test_email(self, email, expected):
        assert validate_email(email) is expected

    def test_phone(self):
        assert validate_phone("+20 115 626 5436")
        assert validate_phone("0115-626-5436")
        assert not validate_phone("12345")
        assert not validate_phone("phone-number")

    def test_password(self):
        assert validate_password("Secret123")
        assert not validate_password("secret123")
        assert not validate_password("Sh0rt")

    def test_required(self):
        assert validate_required("x")
        assert validate_required(0)
        assert not validate_required("   ")
        assert not validate_required(None)
        assert not validate_required([])
        assert validate_required({"quality": 4})

    def test_dates(self):
        assert validate_date("2024-05-01")
        assert validate_date(date(2024, 5, 1))
        assert not validate_date("2024-13-01")
        assert not validate_date("")
        assert validate_date_range("2024-05-01", "2024-05-01")
        assert not validate_date_range("2024-05-10", "2024-05-01")
        assert not validate_date_range("garbage", "2024-05-01")

    def test_number(self):
        assert validate_number("5", 1, 100)
        assert validate_number(100, 1, 100)
        assert not validate_number(0, 1, 100)
        assert not validate_number("five", 1, 100)
        assert not validate_number(None, 1, 100)
        assert not validate_number(float("nan"), 1, 100)

    def test_url(self):
        assert validate_url("https://www.edecs.com/logo.png")
        assert not validate_url("www.edecs.com")


class TestEmployeeData:

    def test_reports_only_broken_fields(self):
        errors = validate_employee_data({
            "first_name": "",
            "email": "not-an-email",
            "department": "eng",
            "position": "dev",
        })
        assert set(errors) == {"first_name", "email"}

    def test_valid_employee(self):
        assert validate_employee_data({
            "first_name": "Jane",
            "last_name": "Doe",
            "email": "jane@example.com",
            "phone": "+1 555 123 4567",
            "department": "it",
            "position": "Engineer",
        }) == {}

    def test_phone_checked_only_when_present(self):
        errors = validate_employee_data({
            "first_name": "Jane",
            "email": "jane@example.com",
            "phone": "123",
            "department": "it",
            "position": "Engineer",
        })
        assert errors == {"phone": "Invalid phone number"}


class TestLeaveRequest:

    def test_reversed_dates_flag_only_the_range(self):
        errors = validate_leave_request(dict(VALID_LEAVE, start_date="2024-05-10", end_date="2024-05-01"))
        assert errors == {"date_range": "End date must be after start date"}

    def test_valid_leave(self):
        assert validate_leave_request(VALID_LEAVE) == {}

    def test_invalid_start_date_also_breaks_range(self):
        errors = validate_leave_request(dict(VALID_LEAVE, start_date="soon"))
        assert set(errors) == {"start_date", "date_range"}

    def test_missing_everything(self):
        assert set(validate_leave_request({})) == {"type", "start_date", "end_date", "date_range", "reason"}


class TestOtherRecords:

    def test_job_posting(self):
        valid = {
            "title": "Backend Engineer",
            "department": "it",
            "description": "Build services",
            "requirements": "Python",
            "vacancies": 2,
        }
        assert validate_job_posting(valid) == {}
        assert set(validate_job_posting(dict(valid, vacancies=0))) == {"vacancies"}
        assert set(validate_job_posting(dict(valid, vacancies=101))) == {"vacancies"}

    def test_project_end_date_is_optional(self):
        valid = {
            "name": "Payroll revamp",
            "description": "Rewrite payroll",
            "department": "finance",
            "start_date": "2024-01-01",
        }
        assert validate_project(valid) == {}
        assert validate_project(dict(valid, end_date="2024-06-30")) == {}
        assert set(validate_project(dict(valid, end_date="2023-12-31"))) == {"date_range"}
        assert set(validate_project(dict(valid, end_date="someday"))) == {"end_date", "date_range"}

    def test_training(self):
        valid = {
            "title": "Onboarding",
            "description": "First week",
            "start_date": "2024-02-01",
            "end_date": "2024-02-05",
            "capacity": 20,
        }
        assert validate_training(valid) == {}
        assert set(validate_training(dict(valid, capacity=500))) == {"capacity"}
        assert set(validate_training(dict(valid, end_date="2024-01-01"))) == {"date_range"}

    def test_performance_review(self):
        valid = {
            "employee_id": "u1",
            "reviewer_id": "u2",
            "review_date": "2024-03-01",
            "ratings": {"quality": 4},
            "comments": "Solid quarter",
        }
        assert validate_performance_review(valid) == {}
        assert set(validate_performance_review(dict(valid, ratings={}))) == {"ratings"}
        assert set(validate_performance_review({})) == {
            "employee_id", "reviewer_id", "review_date", "ratings", "comments",
        }
