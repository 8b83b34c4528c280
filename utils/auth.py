import logging
from functools import wraps

from flask import session

from utils.errors import create_authentication_error, create_authorization_error
from utils.permissions import PermissionManager

logger = logging.getLogger(__name__)


def current_user_id():
    return session.get("user_id")


# This decorator makes sure that only logged-in users can access protected routes
def login_required(view_function):
    @wraps(view_function)
    def decorated_function(*args, **kwargs):
        if "user_id" not in session:
            raise create_authentication_error("Please log in to access this resource.")
        return view_function(*args, **kwargs)
    return decorated_function


def permission_required(*permissions):
    """
    Allow the route when the logged-in user holds any of ``permissions``.
    Lookup failures deny, same as a missing permission.
    """
    def decorator(view_function):
        @wraps(view_function)
        @login_required
        def decorated_function(*args, **kwargs):
            user_id = current_user_id()
            if not PermissionManager.has_any_permission(user_id, permissions):
                required = [getattr(p, "value", p) for p in permissions]
                logger.warning("User %s denied, requires one of %s", user_id, required)
                raise create_authorization_error(details={"required": required})
            return view_function(*args, **kwargs)
        return decorated_function
    return decorator


def is_logged_in():
    return "user_id" in session


def logout_user():
    session.clear()
