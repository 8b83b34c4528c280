"""
Application error types and the Flask handlers that turn them into
consistent JSON error responses.
"""

import logging
from datetime import datetime, timezone
from enum import Enum

from flask import jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class ErrorType(str, Enum):
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    DATABASE = "database"
    NETWORK = "network"
    UNKNOWN = "unknown"


ERROR_MESSAGES = {
    ErrorType.VALIDATION: "Invalid data provided",
    ErrorType.AUTHENTICATION: "Authentication failed",
    ErrorType.AUTHORIZATION: "Not authorized to perform this action",
    ErrorType.DATABASE: "Database operation failed",
    ErrorType.NETWORK: "Network error occurred",
    ErrorType.UNKNOWN: "An unexpected error occurred",
}

HTTP_STATUS = {
    ErrorType.VALIDATION: 400,
    ErrorType.AUTHENTICATION: 401,
    ErrorType.AUTHORIZATION: 403,
    ErrorType.DATABASE: 500,
    ErrorType.NETWORK: 502,
    ErrorType.UNKNOWN: 500,
}


class AppError(Exception):
    status_code = None

    def __init__(self, error_type=ErrorType.UNKNOWN, message=None, details=None):
        self.type = ErrorType(error_type)
        self.message = message or ERROR_MESSAGES[self.type]
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc)
        super().__init__(self.message)

    @property
    def http_status(self):
        return self.status_code or HTTP_STATUS[self.type]

    def to_dict(self):
        return {
            "type": self.type.value,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(AppError):
    """A document the operation depends on does not exist."""

    status_code = 404

    def __init__(self, message="Document not found", details=None):
        super().__init__(ErrorType.DATABASE, message, details)


class CascadeError(AppError):
    """
    A cascading multi-document update stopped partway through.
    details["applied"] lists the steps that already took effect; they are
    not rolled back.
    """

    def __init__(self, message, applied, failed_step, details=None):
        merged = dict(details or {})
        merged.update({"applied": list(applied), "failed_step": failed_step})
        super().__init__(ErrorType.DATABASE, message, merged)
        self.applied = list(applied)
        self.failed_step = failed_step


def handle_error(error, context=None):
    """Log an error with its context and return its serializable form."""
    context = context or {}
    if isinstance(error, AppError):
        error_type, message, details = error.type, error.message, error.details
    else:
        error_type, message, details = ErrorType.UNKNOWN, str(error) or ERROR_MESSAGES[ErrorType.UNKNOWN], {}

    logger.error(
        "%s error: %s", error_type.value, message,
        extra={"error_details": details, "error_context": context},
    )
    return {"type": error_type.value, "message": message, "details": details}


def is_validation_error(error):
    return isinstance(error, AppError) and error.type is ErrorType.VALIDATION


def is_authentication_error(error):
    return isinstance(error, AppError) and error.type is ErrorType.AUTHENTICATION


def is_authorization_error(error):
    return isinstance(error, AppError) and error.type is ErrorType.AUTHORIZATION


def is_database_error(error):
    return isinstance(error, AppError) and error.type is ErrorType.DATABASE


def is_network_error(error):
    return isinstance(error, AppError) and error.type is ErrorType.NETWORK


def create_validation_error(message=None, details=None):
    return AppError(ErrorType.VALIDATION, message, details)


def create_authentication_error(message=None, details=None):
    return AppError(ErrorType.AUTHENTICATION, message, details)


def create_authorization_error(message=None, details=None):
    return AppError(ErrorType.AUTHORIZATION, message, details)


def create_database_error(message=None, details=None):
    return AppError(ErrorType.DATABASE, message, details)


def create_network_error(message=None, details=None):
    return AppError(ErrorType.NETWORK, message, details)


def create_unknown_error(message=None, details=None):
    return AppError(ErrorType.UNKNOWN, message, details)


def error_response(code, error_type, message, details=None):
    body = {
        "success": False,
        "error": {
            "code": code,
            "type": error_type,
            "message": message,
            "details": details or {},
        },
    }
    return jsonify(body), code


def register_error_handlers(app):

    @app.errorhandler(AppError)
    def _app_error(error):
        handle_error(error)
        return error_response(error.http_status, error.type.value, error.message, error.details)

    @app.errorhandler(HTTPException)
    def _http_error(error):
        return error_response(error.code, "http", error.name, {"detail": error.description})

    @app.errorhandler(Exception)
    def _unexpected_error(error):
        logger.exception("Unexpected error: %s", error)
        return error_response(
            500, ErrorType.UNKNOWN.value, "Internal Server Error",
            {"detail": ERROR_MESSAGES[ErrorType.UNKNOWN]},
        )
