from typing import List, Optional

from pydantic import Field

from schemas.base import RequestSchema, code_request

PermissionCodeRequest = code_request("permissionCode")
RoleCodeRequest = code_request("roleCode")
UserCodeRequest = code_request("userCode")
AuditCodeRequest = code_request("auditCode")


class RoleCreate(RequestSchema):
    roleName: str = Field(min_length=1, max_length=100)
    roleDescription: Optional[str] = Field(default=None, max_length=500)
    roleAllowDeletion: bool = True
    rolePermissions: List[str]


class RoleUpdate(RequestSchema):
    roleCode: str = Field(min_length=1)
    roleName: str = Field(min_length=1, max_length=100)
    roleDescription: Optional[str] = Field(default=None, max_length=500)
    rolePermissions: List[str]


# Field checks for register / password changes happen in the controller so
# each failure maps to its own message
class RegisterRequest(RequestSchema):
    email: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    roleCode: Optional[str] = None
    userAllowDeletion: bool = True


class LoginRequest(RequestSchema):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class ChangePasswordRequest(RequestSchema):
    email: Optional[str] = None
    username: Optional[str] = None
    oldPassword: Optional[str] = None
    newPassword: Optional[str] = None


class UserUpdate(RequestSchema):
    userCode: str = Field(min_length=1)
    email: str = Field(min_length=3)
    username: str = Field(min_length=1, max_length=100)
    roleCode: Optional[str] = None
