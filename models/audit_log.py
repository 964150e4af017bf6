from models.base import Document
from pipelines import AUDIT_PIPELINE
from utils.helpers import utc_now


class AuditLog(Document):
    collection_name = "auditlogs"
    code_field = "auditCode"
    code_entity = "audit"
    pipeline = AUDIT_PIPELINE

    def __init__(self, action, collection_name, document, changes,
                 before=None, after=None, user=None, timestamp=None, **kwargs):
        super().__init__(**kwargs)
        self.action = action  # CREATE, UPDATE, CHANGE, DELETE, LOGIN, LOGOUT
        self.target_collection = collection_name
        self.document = document
        self.changes = changes
        self.before = before
        self.after = after
        self.user = user
        self.timestamp = timestamp or utc_now()

    def fields(self):
        return {
            "action": self.action,
            "collection": self.target_collection,
            "document": self.document,
            "changes": self.changes,
            "before": self.before,
            "after": self.after,
            "user": self.user,
            "timeStamp": self.timestamp,
        }

    # Audit entries are append-only: only code + timestamp, no updatedAt
    def to_dict(self):
        document = {self.code_field: self.code}
        document.update(self.fields())
        return document
