from flask import Blueprint

from controllers.common import list_response, require
from models.permission import Permission
from models.roles import Role
from schemas.access import PermissionCodeRequest, RoleCodeRequest
from utils import messages
from utils.auth import permission_required
from utils.helpers import get_json_body
from utils.permissions import VIEW_PERMISSIONS
from utils.responses import handle_success

permissions_bp = Blueprint("permissions", __name__, url_prefix="/permissions")


# View Permissions
@permissions_bp.route("/GetPermissions", methods=["GET"])
@permission_required(VIEW_PERMISSIONS)
def get_permissions():
    return list_response(Permission, messages.PERMISSION)


# View Permission
@permissions_bp.route("/GetPermissionByCode", methods=["POST"])
@permission_required(VIEW_PERMISSIONS)
def get_permission_by_code():
    body = PermissionCodeRequest.model_validate(get_json_body())
    permission = require(
        Permission.find_details({"permissionCode": body.permissionCode}),
        messages.PERMISSION.not_found,
    )
    return handle_success(messages.PERMISSION.get_one, permission)


# Permissions granted by one role
@permissions_bp.route("/GetPermissionsByRoleCode", methods=["POST"])
@permission_required(VIEW_PERMISSIONS)
def get_permissions_by_role_code():
    body = RoleCodeRequest.model_validate(get_json_body())
    role = require(Role.find_by_code(body.roleCode), messages.ROLE.not_found)
    return list_response(
        Permission, messages.PERMISSION,
        query={"_id": {"$in": role.get("rolePermissions", [])}},
    )
