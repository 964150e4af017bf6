"""
utils/audit.py
--------------
Append-only audit trail. Every mutation writes one AuditLog entry holding
the actor snapshot and the before/after state of the document.

The write is not transactional with the mutation it records: if it fails
the failure is logged and the request carries on.
"""

from pymongo.errors import PyMongoError

from models.audit_log import AuditLog
from utils.logger import get_logger

logger = get_logger(__name__)


class AuditAction:
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    CHANGE = "CHANGE"
    DELETE = "DELETE"
    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"


class AuditCollection:
    ROLES = "ROLES"
    USERS = "USERS"
    PROFILES = "PROFILES"
    GENDERS = "GENDERS"
    COUNTRIES = "COUNTRIES"
    STATES = "STATES"
    CITIES = "CITIES"
    CLASSES = "CLASSES"
    SECTIONS = "SECTIONS"
    SUBJECTS = "SUBJECTS"
    STUDENTS = "STUDENTS"
    EXAMS = "EXAMS"
    MARKS = "MARKS"
    QUESTIONS = "QUESTIONS"


_PAST_TENSE = {
    AuditAction.CREATE: "Created",
    AuditAction.UPDATE: "Updated",
    AuditAction.DELETE: "Deleted",
}

USER_LOGGED_IN = "A User Logged in"
USER_LOGGED_OUT = "A User Logged out"
PASSWORD_CHANGED = "A Password Changed"


def change_label(action, entity):
    """change_label(AuditAction.CREATE, "Role") -> "A Role Created" """
    return f"A {entity} {_PAST_TENSE[action]}"


def log_audit(action, collection, document, changes, before=None, after=None, user=None):
    try:
        entry = AuditLog(
            action=action,
            collection_name=collection,
            document=document,
            changes=changes,
            before=before,
            after=after,
            user=user,
        )
        entry.save()
        return entry.code
    except PyMongoError as e:
        logger.error("Audit log write failed for %s %s %s: %s", action, collection, document, e)
        return None
