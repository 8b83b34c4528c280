import pytest

from utils.errors import (
    AppError,
    CascadeError,
    ErrorType,
    NotFoundError,
    create_authentication_error,
    create_authorization_error,
    create_database_error,
    create_network_error,
    create_unknown_error,
    create_validation_error,
    error_response,
    handle_error,
    is_authentication_error,
    is_authorization_error,
    is_database_error,
    is_network_error,
    is_validation_error,
)


class TestAppError:

    @pytest.mark.parametrize("factory,error_type,status", [
        (create_validation_error, ErrorType.VALIDATION, 400),
        (create_authentication_error, ErrorType.AUTHENTICATION, 401),
        (create_authorization_error, ErrorType.AUTHORIZATION, 403),
        (create_database_error, ErrorType.DATABASE, 500),
        (create_network_error, ErrorType.NETWORK, 502),
        (create_unknown_error, ErrorType.UNKNOWN, 500),
    ])
    def test_factories(self, factory, error_type, status):
        error = factory()
        assert error.type is error_type
        assert error.http_status == status
        assert error.message
        assert error.details == {}

    def test_custom_message_and_details(self):
        error = create_validation_error("Email already registered!", {"email": "a@b.co"})
        assert str(error) == "Email already registered!"
        assert error.to_dict() == {
            "type": "validation",
            "message": "Email already registered!",
            "details": {"email": "a@b.co"},
        }

    def test_not_found_is_a_database_error_with_404(self):
        error = NotFoundError("Employee not found")
        assert is_database_error(error)
        assert error.http_status == 404

    def test_cascade_error_carries_progress(self):
        error = CascadeError("partial", applied=["projects/1"], failed_step="checklists/2",
                             details={"user_id": "u1"})
        assert error.applied == ["projects/1"]
        assert error.failed_step == "checklists/2"
        assert error.details == {"user_id": "u1", "applied": ["projects/1"], "failed_step": "checklists/2"}
        assert error.http_status == 500


class TestPredicates:

    def test_each_predicate_matches_only_its_type(self):
        predicates = {
            ErrorType.VALIDATION: is_validation_error,
            ErrorType.AUTHENTICATION: is_authentication_error,
            ErrorType.AUTHORIZATION: is_authorization_error,
            ErrorType.DATABASE: is_database_error,
            ErrorType.NETWORK: is_network_error,
        }
        for error_type, predicate in predicates.items():
            for other_type in predicates:
                assert predicate(AppError(other_type)) is (other_type is error_type)

    def test_plain_exceptions_match_nothing(self):
        assert not is_validation_error(ValueError("x"))
        assert not is_database_error(ConnectionError("x"))


class TestHandleError:

    def test_app_error(self):
        result = handle_error(create_authorization_error(details={"required": ["manage_users"]}),
                              {"route": "/permissions"})
        assert result == {
            "type": "authorization",
            "message": "Not authorized to perform this action",
            "details": {"required": ["manage_users"]},
        }

    def test_unexpected_exception(self):
        result = handle_error(KeyError("boom"))
        assert result["type"] == "unknown"
        assert "boom" in result["message"]


class TestErrorResponse:

    def test_envelope(self, app):
        with app.app_context():
            response, status = error_response(404, "database", "Employee not found", {"user_id": "u1"})
        assert status == 404
        assert response.get_json() == {
            "success": False,
            "error": {
                "code": 404,
                "type": "database",
                "message": "Employee not found",
                "details": {"user_id": "u1"},
            },
        }
