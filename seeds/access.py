"""
seeds/access.py
---------------
Reset permissions, base roles and the admin account.
Every existing permission, role and user is removed first.
"""

from models.permission import Permission
from models.roles import Role
from models.users import User
from utils.logger import get_logger
from utils.permissions import ALL_PERMISSIONS, SELF_SERVICE_PERMISSIONS

logger = get_logger(__name__)

ADMIN_ROLE = "ADMIN"

BASE_ROLES = [
    (ADMIN_ROLE, "System Admin", None),
    ("TEACHER", "Teaching staff", SELF_SERVICE_PERMISSIONS),
    ("GUEST USER", "Guest / default user", SELF_SERVICE_PERMISSIONS),
]


def seed_permissions():
    Permission.collection().delete_many({})
    for name, description in ALL_PERMISSIONS.items():
        Permission(name=name, description=description).save()
    logger.info("Seeded %d permissions", len(ALL_PERMISSIONS))
    return {p["permissionName"]: p["_id"] for p in Permission.collection().find()}


def seed_roles(permission_ids):
    Role.collection().delete_many({})
    for name, description, granted in BASE_ROLES:
        # None grants every permission
        names = permission_ids.keys() if granted is None else granted
        Role(
            name=name,
            description=description,
            allow_deletion=False,
            permissions=[permission_ids[n] for n in names],
        ).save()
    logger.info("Seeded roles: %s", ", ".join(name for name, _, _ in BASE_ROLES))


def seed_admin(email, username, password):
    User.collection().delete_many({})
    admin_role = Role.find_by_name(ADMIN_ROLE)
    admin = User(
        email=email,
        username=username,
        password=password,
        role_id=admin_role["_id"],
        allow_deletion=False,
    )
    admin.save()
    logger.info("Seeded admin user %s (%s)", username, admin.code)
    return admin.code


def seed_access(config):
    """Permissions, roles and the admin user, with credentials from app config."""
    permission_ids = seed_permissions()
    seed_roles(permission_ids)
    return seed_admin(config["ADMIN_MAIL_ID"], config["ADMIN_USERNAME"], config["ADMIN_PASSWORD"])
