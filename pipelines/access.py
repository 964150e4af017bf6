"""
pipelines/access.py
-------------------
Pipelines for the access-control collections: permissions, roles, users
and the audit log.
"""

from pipelines.common import Lookup, PipelineSpec

TIMESTAMPS = ("createdAt", "updatedAt")

PERMISSION_PIPELINE = PipelineSpec(
    search_fields=("permissionCode", "permissionName", "permissionDescription"),
    projection=("permissionCode", "permissionName", "permissionDescription") + TIMESTAMPS,
)

ROLE_PIPELINE = PipelineSpec(
    search_fields=("roleCode", "roleName", "roleDescription"),
    lookups=(
        Lookup("rolePermissions", "permissions", ("permissionName",), many=True),
    ),
    projection=(
        "roleCode", "roleName", "roleDescription", "roleAllowDeletion", "rolePermissions",
    ) + TIMESTAMPS,
)

USER_PIPELINE = PipelineSpec(
    search_fields=("userCode", "email", "username"),
    lookups=(
        Lookup("role", "roles", ("roleName", "roleCode")),
        Lookup("role.rolePermissions", "permissions", many=True),
    ),
    projection=("userCode", "email", "username", "userAllowDeletion", "role") + TIMESTAMPS,
)

AUDIT_PIPELINE = PipelineSpec(
    search_fields=("auditCode", "action", "collection", "document", "changes",
                   "user.username", "user.email"),
    projection=("auditCode", "action", "collection", "document", "changes",
                "before", "after", "user", "timeStamp"),
)
