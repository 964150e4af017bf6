from functools import wraps
from flask import session, g

from models.users import User
from utils.messages import (
    MESSAGE_NOT_LOGGED_IN_YET,
    MESSAGE_ACCESS_DENIED_NO_ROLES,
    MESSAGE_ACCESS_DENIED_NO_PERMISSION,
)
from utils.responses import ApiError, STATUS_CODE_BAD_REQUEST, STATUS_CODE_UNAUTHORIZED


def is_logged_in():
    return "user_code" in session


def login_user(user):
    session.clear()
    g.pop("current_user", None)
    session.permanent = True
    session["user_code"] = user["userCode"]
    session["username"] = user["username"]


def logout_user():
    session.clear()
    g.pop("current_user", None)


def get_current_user():
    """The logged-in user with role and permissions resolved, cached per request."""
    if "current_user" not in g:
        user_code = session.get("user_code")
        g.current_user = User.get_current_user(user_code) if user_code else None
    return g.current_user


# This decorator makes sure that only logged-in users can reach the view
def login_required(view_function):
    @wraps(view_function)
    def decorated_function(*args, **kwargs):
        if not is_logged_in() or get_current_user() is None:
            session.clear()
            raise ApiError(STATUS_CODE_BAD_REQUEST, MESSAGE_NOT_LOGGED_IN_YET)
        return view_function(*args, **kwargs)
    return decorated_function


def permission_required(permission_name):
    """Allow the view only when the current user's role grants permission_name."""
    def decorator(view_function):
        @wraps(view_function)
        @login_required
        def decorated_function(*args, **kwargs):
            current_user = get_current_user()
            if not current_user.get("role"):
                raise ApiError(STATUS_CODE_UNAUTHORIZED, MESSAGE_ACCESS_DENIED_NO_ROLES)
            if permission_name not in User.permission_names(current_user):
                raise ApiError(STATUS_CODE_UNAUTHORIZED, MESSAGE_ACCESS_DENIED_NO_PERMISSION)
            return view_function(*args, **kwargs)
        return decorated_function
    return decorator
