from flask import Blueprint

from controllers.common import actor, delete_or_fail, details, ensure_deletable, list_response, require
from models.roles import Role
from models.users import User
from schemas.access import (
    ChangePasswordRequest, LoginRequest, RegisterRequest, UserCodeRequest, UserUpdate,
)
from utils import messages
from utils.audit import (
    AuditAction, AuditCollection, change_label, log_audit,
    USER_LOGGED_IN, USER_LOGGED_OUT, PASSWORD_CHANGED,
)
from utils.auth import get_current_user, login_required, login_user, logout_user, permission_required
from utils.helpers import get_json_body
from utils.logger import get_logger
from utils.permissions import (
    VIEW_USERS, VIEW_OWN_USER_ONLY, CREATE_USER, UPDATE_USER, DELETE_USER,
    CHANGE_PASSWORDS, CHANGE_OWN_PASSWORD,
)
from utils.regex import VALID_EMAIL, VALID_PASSWORD, trim_and_test
from utils.responses import (
    ApiError, handle_success, STATUS_CODE_BAD_REQUEST, STATUS_CODE_CONFLICT, STATUS_CODE_UNAUTHORIZED,
)

logger = get_logger(__name__)

users_bp = Blueprint("users", __name__, url_prefix="/users")

DEFAULT_ROLE_NAME = "GUEST USER"


def _check_email(email):
    if not trim_and_test(email, VALID_EMAIL):
        raise ApiError(STATUS_CODE_BAD_REQUEST, messages.MESSAGE_INVALID_EMAIL_FORMAT)


def _check_password_strength(password):
    if not VALID_PASSWORD.match(password or ""):
        raise ApiError(STATUS_CODE_BAD_REQUEST, messages.MESSAGE_PASSWORD_CONSTRAINTS_NOT_MET)


def _resolve_role(role_code):
    if role_code:
        return require(Role.find_by_code(role_code), messages.ROLE.not_found, STATUS_CODE_CONFLICT)
    return Role.find_by_name(DEFAULT_ROLE_NAME)


def _change_password(body, own_only=False):
    if not (body.email or body.username) or not body.oldPassword or not body.newPassword:
        raise ApiError(STATUS_CODE_BAD_REQUEST, messages.MESSAGE_MISSING_REQUIRED_FIELDS)
    _check_password_strength(body.newPassword)

    user = require(
        User.find_by_email_or_username(body.email, body.username),
        messages.MESSAGE_EMAIL_USERNAME_NOT_EXIST,
        STATUS_CODE_CONFLICT,
    )
    if own_only and user["userCode"] != get_current_user()["userCode"]:
        raise ApiError(STATUS_CODE_CONFLICT, messages.MESSAGE_NOT_AUTHORIZED)
    if not User.check_password(user, body.oldPassword):
        raise ApiError(STATUS_CODE_CONFLICT, messages.MESSAGE_OLD_PASSWORD_ERROR)

    User.set_password(user["userCode"], body.newPassword)
    log_audit(AuditAction.CHANGE, AuditCollection.USERS, user["userCode"],
              PASSWORD_CHANGED, None, None, actor())
    return handle_success(messages.MESSAGE_PASSWORD_CHANGE_SUCCESS)


# -----------------------------
# REGISTER
# -----------------------------
@users_bp.route("/register", methods=["POST"])
@permission_required(CREATE_USER)
def register():
    body = RegisterRequest.model_validate(get_json_body())

    if not body.email or not body.username or not body.password:
        raise ApiError(STATUS_CODE_BAD_REQUEST, messages.MESSAGE_MISSING_REQUIRED_FIELDS)
    _check_email(body.email)
    _check_password_strength(body.password)

    if User.find_by_email_or_username(body.email, body.username):
        raise ApiError(STATUS_CODE_CONFLICT, messages.MESSAGE_EMAIL_USERNAME_EXIST)

    role = _resolve_role(body.roleCode)

    user = User(
        email=body.email,
        username=body.username,
        password=body.password,
        role_id=role["_id"] if role else None,
        allow_deletion=body.userAllowDeletion,
    )
    user.save()

    created = User.find_details({"userCode": user.code})
    log_audit(AuditAction.CREATE, AuditCollection.USERS, user.code,
              change_label(AuditAction.CREATE, "User"), None, created, actor())
    return handle_success(messages.MESSAGE_USER_REGISTER_SUCCESS, created)


# -----------------------------
# LOGIN / LOGOUT
# -----------------------------
@users_bp.route("/login", methods=["POST"])
def login():
    body = LoginRequest.model_validate(get_json_body())

    user = User.verify_password(body.username, body.password)
    if not user:
        logger.warning("Failed login attempt for %s", body.username)
        raise ApiError(STATUS_CODE_UNAUTHORIZED, messages.MESSAGE_UNAUTHENTICATED)

    # Save user info in session
    login_user(user)
    current_user = get_current_user()
    logger.info("User %s logged in", user["userCode"])

    log_audit(AuditAction.LOGIN, AuditCollection.USERS, user["userCode"],
              USER_LOGGED_IN, None, None, current_user)
    return handle_success(messages.MESSAGE_USER_LOGIN_SUCCESS, current_user)


@users_bp.route("/logout", methods=["GET"])
@login_required
def logout():
    current_user = get_current_user()
    log_audit(AuditAction.LOGOUT, AuditCollection.USERS, current_user["userCode"],
              USER_LOGGED_OUT, None, None, current_user)
    logout_user()
    logger.info("User %s logged out", current_user["userCode"])
    return handle_success(messages.MESSAGE_USER_LOGOUT_SUCCESS)


# -----------------------------
# PASSWORDS
# -----------------------------
@users_bp.route("/changePassword", methods=["POST"])
@permission_required(CHANGE_PASSWORDS)
def change_password():
    return _change_password(ChangePasswordRequest.model_validate(get_json_body()))


@users_bp.route("/changeOwnPassword", methods=["POST"])
@permission_required(CHANGE_OWN_PASSWORD)
def change_own_password():
    return _change_password(ChangePasswordRequest.model_validate(get_json_body()), own_only=True)


# -----------------------------
# VIEW USERS
# -----------------------------
@users_bp.route("/GetUsers", methods=["GET"])
@permission_required(VIEW_USERS)
def get_users():
    return list_response(User, messages.USER)


@users_bp.route("/GetOwnUser", methods=["GET"])
@permission_required(VIEW_OWN_USER_ONLY)
def get_own_user():
    user = require(
        User.find_details({"userCode": get_current_user()["userCode"]}),
        messages.USER.not_found,
    )
    return handle_success(messages.USER.get_one, user)


@users_bp.route("/GetUserByCode", methods=["POST"])
@permission_required(VIEW_USERS)
def get_user_by_code():
    body = UserCodeRequest.model_validate(get_json_body())
    user = require(User.find_details({"userCode": body.userCode}), messages.USER.not_found)
    return handle_success(messages.USER.get_one, user)


# -----------------------------
# UPDATE / DELETE
# -----------------------------
@users_bp.route("/UpdateUser", methods=["POST"])
@permission_required(UPDATE_USER)
def update_user():
    body = UserUpdate.model_validate(get_json_body())

    user = require(User.find_by_code(body.userCode), messages.USER.not_found)
    _check_email(body.email)

    if User.find_by_email_or_username(body.email, body.username, exclude_code=body.userCode):
        raise ApiError(STATUS_CODE_CONFLICT, messages.MESSAGE_EMAIL_USERNAME_EXIST)

    values = {"email": User.normalize_email(body.email), "username": body.username}
    if body.roleCode:
        values["role"] = _resolve_role(body.roleCode)["_id"]

    before = details(User, user)
    User.update_by_code(body.userCode, values)
    after = User.find_details({"userCode": body.userCode})

    log_audit(AuditAction.UPDATE, AuditCollection.USERS, body.userCode,
              change_label(AuditAction.UPDATE, "User"), before, after, actor())
    return handle_success(messages.USER.updated, after)


@users_bp.route("/DeleteUser", methods=["POST"])
@permission_required(DELETE_USER)
def delete_user():
    body = UserCodeRequest.model_validate(get_json_body())

    user = require(User.find_by_code(body.userCode), messages.USER.not_found)

    if not user.get("userAllowDeletion", True):
        raise ApiError(STATUS_CODE_CONFLICT, messages.USER.not_allowed_delete)
    ensure_deletable(user, messages.USER)

    before = details(User, user)
    delete_or_fail(User, body.userCode, messages.USER)

    log_audit(AuditAction.DELETE, AuditCollection.USERS, body.userCode,
              change_label(AuditAction.DELETE, "User"), before, None, actor())
    return handle_success(messages.USER.deleted)
