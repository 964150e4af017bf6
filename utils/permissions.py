"""
utils/permissions.py
--------------------
Every permission name a route can require, with its seed description.
Routes reference the constants; seeds/access.py writes ALL_PERMISSIONS.
"""

VIEW_PERMISSIONS = "VIEW PERMISSIONS"

VIEW_ROLES = "VIEW ROLES"
VIEW_OWN_ROLE_ONLY = "VIEW OWN ROLE ONLY"
CREATE_ROLE = "CREATE ROLE"
UPDATE_ROLE = "UPDATE ROLE"
DELETE_ROLE = "DELETE ROLE"

VIEW_USERS = "VIEW USER"
VIEW_OWN_USER_ONLY = "VIEW OWN USER ONLY"
CREATE_USER = "CREATE USER"
UPDATE_USER = "UPDATE USER"
DELETE_USER = "DELETE USER"
CHANGE_PASSWORDS = "CHANGE PASSWORDS"
CHANGE_OWN_PASSWORD = "CHANGE OWN PASSWORD"

VIEW_PROFILES = "VIEW PROFILE"
VIEW_OWN_PROFILE_ONLY = "VIEW OWN PROFILE ONLY"
CREATE_PROFILE = "CREATE PROFILE"
UPDATE_PROFILE = "UPDATE PROFILE"
DELETE_PROFILE = "DELETE PROFILE"

VIEW_AUDIT = "VIEW AUDIT"

# Plain CRUD entities share the VIEW/CREATE/UPDATE/DELETE <ENTITY> pattern
CRUD_ENTITIES = [
    "GENDER", "COUNTRY", "STATE", "CITY", "CLASS", "SECTION",
    "SUBJECT", "STUDENT", "EXAM", "MARK", "QUESTION",
]


def crud(entity):
    """crud("CITY") -> ("VIEW CITY", "CREATE CITY", "UPDATE CITY", "DELETE CITY")"""
    return tuple(f"{verb} {entity}" for verb in ("VIEW", "CREATE", "UPDATE", "DELETE"))


ALL_PERMISSIONS = {
    VIEW_PERMISSIONS: "Can view the permission catalogue",
    VIEW_ROLES: "Can view all roles",
    VIEW_OWN_ROLE_ONLY: "Can view only the role assigned to them",
    CREATE_ROLE: "Can create roles",
    UPDATE_ROLE: "Can update roles",
    DELETE_ROLE: "Can delete roles",
    VIEW_USERS: "Can view all users",
    VIEW_OWN_USER_ONLY: "Can view only their own user account",
    CREATE_USER: "Can register new users",
    UPDATE_USER: "Can update users",
    DELETE_USER: "Can delete users",
    CHANGE_PASSWORDS: "Can change the password of any user",
    CHANGE_OWN_PASSWORD: "Can change their own password",
    VIEW_PROFILES: "Can view all profiles",
    VIEW_OWN_PROFILE_ONLY: "Can view only their own profile",
    CREATE_PROFILE: "Can create profiles",
    UPDATE_PROFILE: "Can update profiles",
    DELETE_PROFILE: "Can delete profiles",
    VIEW_AUDIT: "Can view and export the audit log",
}

for _entity in CRUD_ENTITIES:
    for _name in crud(_entity):
        ALL_PERMISSIONS[_name] = f"Can {_name.split(' ', 1)[0].lower()} {_entity.lower()} records"

# Self-service permissions granted to the TEACHER and GUEST USER roles
SELF_SERVICE_PERMISSIONS = [
    CHANGE_OWN_PASSWORD,
    VIEW_OWN_PROFILE_ONLY,
    VIEW_OWN_USER_ONLY,
    VIEW_OWN_ROLE_ONLY,
]
