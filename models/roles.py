from bson import ObjectId

from models.base import Document
from pipelines import ROLE_PIPELINE


class Role(Document):
    collection_name = "roles"
    code_field = "roleCode"
    code_entity = "role"
    pipeline = ROLE_PIPELINE

    def __init__(self, name, description=None, allow_deletion=True, permissions=None, **kwargs):
        super().__init__(**kwargs)
        self.name = Role.normalize_name(name)
        self.description = description
        self.allow_deletion = allow_deletion
        self.permissions = [ObjectId(p) for p in (permissions or [])]

    def fields(self):
        return {
            "roleName": self.name,
            "roleDescription": self.description,
            "roleAllowDeletion": self.allow_deletion,
            "rolePermissions": self.permissions,
        }

    # Role names are stored trimmed and upper-cased
    @staticmethod
    def normalize_name(name):
        return (name or "").strip().upper()

    @staticmethod
    def find_by_name(name):
        return Role.collection().find_one({"roleName": Role.normalize_name(name)})
