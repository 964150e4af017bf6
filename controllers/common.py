"""
controllers/common.py
---------------------
Steps shared by the entity controllers: paginated listing, mandatory
lookups and the delete guard.
"""

from utils.auth import get_current_user
from utils.helpers import get_list_params, is_object_id_referenced
from utils.responses import (
    ApiError,
    handle_success,
    STATUS_CODE_BAD_REQUEST,
    STATUS_CODE_CONFLICT,
    STATUS_CODE_INTERNAL_SERVER_ERROR,
)


def list_response(model, messages, query=None):
    """GET list endpoint body: query-string params -> page of results + total."""
    results, total = model.find_many(query=query, **get_list_params())
    return handle_success(messages.get_all, results, total)


def list_under_parent(model, messages, query, parent_name):
    """Like list_response, but an empty result is an error for "by parent" lists."""
    results, total = model.find_many(query=query, **get_list_params())
    if total == 0:
        raise ApiError(STATUS_CODE_BAD_REQUEST, messages.none_under(parent_name))
    return handle_success(messages.get_all, results, total)


def require(document, message, status_code=STATUS_CODE_BAD_REQUEST):
    if not document:
        raise ApiError(status_code, message)
    return document


def details(model, document):
    """Populated public view of a raw document."""
    return model.find_details({model.code_field: document[model.code_field]})


def ensure_deletable(document, messages):
    if is_object_id_referenced(document["_id"])["isReferenced"]:
        raise ApiError(STATUS_CODE_CONFLICT, messages.in_use)


def delete_or_fail(model, code, messages):
    if model.delete_by_code(code) == 0:
        raise ApiError(STATUS_CODE_INTERNAL_SERVER_ERROR, messages.delete_error)


def actor():
    """Snapshot of the current user for audit entries."""
    return get_current_user()
