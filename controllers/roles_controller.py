from flask import Blueprint

from controllers.common import actor, delete_or_fail, details, ensure_deletable, list_response, require
from models.permission import Permission
from models.roles import Role
from schemas.access import RoleCodeRequest, RoleCreate, RoleUpdate
from utils import messages
from utils.audit import AuditAction, AuditCollection, change_label, log_audit
from utils.auth import get_current_user, permission_required
from utils.helpers import get_json_body
from utils.permissions import (
    VIEW_ROLES, VIEW_OWN_ROLE_ONLY, CREATE_ROLE, UPDATE_ROLE, DELETE_ROLE,
)
from utils.responses import (
    ApiError, handle_success, STATUS_CODE_BAD_REQUEST, STATUS_CODE_CONFLICT,
)

roles_bp = Blueprint("roles", __name__, url_prefix="/roles")


def _permission_ids(permission_codes):
    ids, invalid = Permission.resolve_codes(permission_codes)
    if invalid:
        raise ApiError(STATUS_CODE_BAD_REQUEST, messages.MESSAGE_ROLE_PERMISSION_NOT_FOUND)
    return ids


# View Roles
@roles_bp.route("/GetRoles", methods=["GET"])
@permission_required(VIEW_ROLES)
def get_roles():
    return list_response(Role, messages.ROLE)


# View the role of the logged-in user
@roles_bp.route("/GetOwnRole", methods=["GET"])
@permission_required(VIEW_OWN_ROLE_ONLY)
def get_own_role():
    role_code = (get_current_user().get("role") or {}).get("roleCode")
    role = require(Role.find_details({"roleCode": role_code}), messages.ROLE.not_found)
    return handle_success(messages.ROLE.get_one, role)


# View Role
@roles_bp.route("/GetRoleByCode", methods=["POST"])
@permission_required(VIEW_ROLES)
def get_role_by_code():
    body = RoleCodeRequest.model_validate(get_json_body())
    role = require(Role.find_details({"roleCode": body.roleCode}), messages.ROLE.not_found)
    return handle_success(messages.ROLE.get_one, role)


# Add Role
@roles_bp.route("/CreateRole", methods=["POST"])
@permission_required(CREATE_ROLE)
def create_role():
    body = RoleCreate.model_validate(get_json_body())

    if Role.find_by_name(body.roleName):
        raise ApiError(STATUS_CODE_BAD_REQUEST, messages.ROLE.exist)

    role = Role(
        name=body.roleName,
        description=body.roleDescription,
        allow_deletion=body.roleAllowDeletion,
        permissions=_permission_ids(body.rolePermissions),
    )
    role.save()

    created = Role.find_details({"roleCode": role.code})
    log_audit(AuditAction.CREATE, AuditCollection.ROLES, role.code,
              change_label(AuditAction.CREATE, "Role"), None, created, actor())
    return handle_success(messages.ROLE.created, created)


# Edit / Update Existing Role
@roles_bp.route("/UpdateRole", methods=["POST"])
@permission_required(UPDATE_ROLE)
def update_role():
    body = RoleUpdate.model_validate(get_json_body())

    role = require(Role.find_by_code(body.roleCode), messages.ROLE.not_found)

    name = Role.normalize_name(body.roleName)
    taken = Role.find_one({"roleName": name, "roleCode": {"$ne": body.roleCode}})
    if taken:
        raise ApiError(STATUS_CODE_CONFLICT, messages.ROLE.taken)

    permission_ids = _permission_ids(body.rolePermissions)

    before = details(Role, role)
    Role.update_by_code(body.roleCode, {
        "roleName": name,
        "roleDescription": body.roleDescription,
        "rolePermissions": permission_ids,
    })
    after = Role.find_details({"roleCode": body.roleCode})

    log_audit(AuditAction.UPDATE, AuditCollection.ROLES, body.roleCode,
              change_label(AuditAction.UPDATE, "Role"), before, after, actor())
    return handle_success(messages.ROLE.updated, after)


# Delete Role
@roles_bp.route("/DeleteRole", methods=["POST"])
@permission_required(DELETE_ROLE)
def delete_role():
    body = RoleCodeRequest.model_validate(get_json_body())

    role = require(Role.find_by_code(body.roleCode), messages.ROLE.not_found)

    if not role.get("roleAllowDeletion", True):
        raise ApiError(STATUS_CODE_CONFLICT, messages.ROLE.not_allowed_delete)
    ensure_deletable(role, messages.ROLE)

    before = details(Role, role)
    delete_or_fail(Role, body.roleCode, messages.ROLE)

    log_audit(AuditAction.DELETE, AuditCollection.ROLES, body.roleCode,
              change_label(AuditAction.DELETE, "Role"), before, None, actor())
    return handle_success(messages.ROLE.deleted)
