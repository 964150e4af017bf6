"""
utils/helpers.py
----------------
Small shared helpers: business codes, name normalisation, request body and
query-string parsing, document serialisation and the reference-integrity
check used before every delete.
"""

import uuid
from datetime import datetime, timezone

from bson import ObjectId
from flask import request

from utils.db import mongo
from utils.messages import MESSAGE_INVALID_BODY
from utils.responses import ApiError, STATUS_CODE_BAD_REQUEST

# Prefixes of the human readable business codes, e.g. ROLE-<uuid4>
CODE_PREFIXES = {
    "audit": "AUDIT",
    "permission": "PRIV",
    "role": "ROLE",
    "user": "USER",
    "gender": "GENDER",
    "country": "COUNTRY",
    "state": "STATE",
    "city": "CITY",
    "profile": "PROFILE",
    "class": "CLASS",
    "section": "SECTION",
    "subject": "SUBJECT",
    "student": "STUDENT",
    "question": "QUESTION",
    "exam": "EXAM",
    "mark": "MARK",
}

# (collection, field) pairs holding ObjectId references to other documents
REFERENCE_FIELDS = [
    ("users", "role"),
    ("roles", "rolePermissions"),
    ("profiles", "user"),
    ("profiles", "gender"),
    ("profiles", "address.city"),
    ("profiles", "address.state"),
    ("profiles", "address.country"),
    ("states", "country"),
    ("cities", "state"),
    ("cities", "country"),
    ("sections", "class"),
    ("students", "section"),
    ("marks", "exam"),
    ("marks", "student"),
    ("marks", "subject"),
]

# Never sent back to a client
HIDDEN_FIELDS = {"_id", "hash"}

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


def generate_code(entity):
    return f"{CODE_PREFIXES[entity]}-{uuid.uuid4()}"


def utc_now():
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_capitalize(value):
    """'new south wales' -> 'New South Wales'"""
    if not value:
        return value
    return " ".join(word[:1].upper() + word[1:].lower() for word in value.strip().split())


def to_epoch_ms(value):
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp() * 1000)


def serialize_document(value):
    """
    Make a Mongo document JSON safe: drop hidden fields at every depth,
    ObjectId -> str, datetime -> epoch milliseconds.
    """
    if isinstance(value, dict):
        return {
            key: serialize_document(item)
            for key, item in value.items()
            if key not in HIDDEN_FIELDS
        }
    if isinstance(value, list):
        return [serialize_document(item) for item in value]
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return to_epoch_ms(value)
    return value


def sanitize(value):
    """Strip keys that would be read as Mongo operators ($where, $gt, ...)."""
    if isinstance(value, dict):
        return {
            key: sanitize(item)
            for key, item in value.items()
            if not str(key).startswith("$") and "." not in str(key)
        }
    if isinstance(value, list):
        return [sanitize(item) for item in value]
    return value


def get_json_body():
    """JSON body of the current request, sanitised; form data is accepted too."""
    data = request.get_json(silent=True)
    if data is None:
        data = request.form.to_dict() if request.form else {}
    if not isinstance(data, dict):
        raise ApiError(STATUS_CODE_BAD_REQUEST, MESSAGE_INVALID_BODY)
    return sanitize(data)


def _positive_int(value, default):
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def _sort_field(value):
    field = (value or "").strip()
    parts = field.split(".")
    if not field or any(not part or part.startswith("$") for part in parts):
        return "_id"
    return field


def get_list_params(args=None):
    """Read keyword / sortField / sortValue / page / limit / all from the query string."""
    args = request.args if args is None else args
    keyword = (args.get("keyword") or "").strip()
    return {
        "keyword": keyword or None,
        "sort_field": _sort_field(args.get("sortField")),
        "sort_value": (args.get("sortValue") or "desc").strip().lower(),
        "page": _positive_int(args.get("page"), DEFAULT_PAGE),
        "limit": min(_positive_int(args.get("limit"), DEFAULT_LIMIT), MAX_LIMIT),
        "all_results": str(args.get("all", "")).lower() == "true",
    }


def is_object_id_referenced(object_id):
    """
    Check every (collection, field) pair in REFERENCE_FIELDS for a document
    pointing at object_id. Returns the first hit.
    """
    for collection, field in REFERENCE_FIELDS:
        if mongo.db[collection].find_one({field: object_id}, {"_id": 1}):
            return {"isReferenced": True, "by": collection}
    return {"isReferenced": False, "by": None}
