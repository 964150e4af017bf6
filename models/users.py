from bson import ObjectId
from werkzeug.security import generate_password_hash, check_password_hash

from models.base import Document
from models.permission import Permission
from models.roles import Role
from pipelines import USER_PIPELINE
from utils.helpers import serialize_document, utc_now


class User(Document):
    collection_name = "users"
    code_field = "userCode"
    code_entity = "user"
    pipeline = USER_PIPELINE

    def __init__(self, email, username, password, role_id=None, allow_deletion=True, **kwargs):
        super().__init__(**kwargs)
        self.email = User.normalize_email(email)
        self.username = username.strip()
        self.hash = generate_password_hash(password)
        self.role_id = ObjectId(role_id) if role_id else None
        self.allow_deletion = allow_deletion

    def fields(self):
        return {
            "email": self.email,
            "username": self.username,
            "hash": self.hash,
            "userAllowDeletion": self.allow_deletion,
            "role": self.role_id,
        }

    @staticmethod
    def normalize_email(email):
        return (email or "").strip().lower()

    # Find user by email or username (login accepts either)
    @staticmethod
    def find_by_login(identifier):
        identifier = (identifier or "").strip()
        if not identifier:
            return None
        return User.collection().find_one({"$or": [
            {"email": User.normalize_email(identifier)},
            {"username": identifier},
        ]})

    @staticmethod
    def find_by_email_or_username(email, username, exclude_code=None):
        conditions = []
        if email:
            conditions.append({"email": User.normalize_email(email)})
        if username:
            conditions.append({"username": username.strip()})
        if not conditions:
            return None
        query = {"$or": conditions}
        if exclude_code:
            query["userCode"] = {"$ne": exclude_code}
        return User.collection().find_one(query)

    # Verify password
    @staticmethod
    def verify_password(identifier, password):
        user = User.find_by_login(identifier)
        if user and password and check_password_hash(user["hash"], password):
            return user
        return None

    @staticmethod
    def check_password(user, password):
        return bool(password) and check_password_hash(user["hash"], password)

    @staticmethod
    def set_password(user_code, password):
        return User.collection().update_one(
            {"userCode": user_code},
            {"$set": {"hash": generate_password_hash(password), "updatedAt": utc_now()}},
        )

    @staticmethod
    def get_current_user(user_code):
        """
        The user with role and role permissions resolved, serialised
        (no _id, no hash). Used for permission checks and audit snapshots.
        """
        user = User.find_by_code(user_code)
        if not user:
            return None

        role = Role.find_one({"_id": user["role"]}) if user.get("role") else None
        if role:
            role = dict(role)
            role["rolePermissions"] = Permission.find_by_ids(role.get("rolePermissions", []))
        user = dict(user)
        user["role"] = role
        return serialize_document(user)

    @staticmethod
    def permission_names(current_user):
        role = (current_user or {}).get("role") or {}
        return {p.get("permissionName") for p in role.get("rolePermissions", [])}
