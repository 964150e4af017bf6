from models.base import Document
from pipelines import PERMISSION_PIPELINE


class Permission(Document):
    collection_name = "permissions"
    code_field = "permissionCode"
    code_entity = "permission"
    pipeline = PERMISSION_PIPELINE

    def __init__(self, name, description=None, **kwargs):
        super().__init__(**kwargs)
        self.name = name
        self.description = description

    def fields(self):
        return {
            "permissionName": self.name,
            "permissionDescription": self.description,
        }

    @staticmethod
    def find_by_ids(permission_ids):
        return list(Permission.collection().find({"_id": {"$in": list(permission_ids)}}))

    @staticmethod
    def resolve_codes(permission_codes):
        """
        Map permission codes to ObjectIds.
        Returns (ids, invalid_codes); invalid_codes lists codes that do not exist.
        """
        codes = list(dict.fromkeys(permission_codes or []))
        found = {p["permissionCode"]: p["_id"] for p in Permission.find_by_codes(codes)}
        invalid = [code for code in codes if code not in found]
        return [found[code] for code in codes if code in found], invalid
