from datetime import datetime

from bson import ObjectId

from models.school_class import SchoolClass
from models.section import Section
from utils.audit import AuditAction, change_label
from utils.helpers import (
    generate_code, get_list_params, is_object_id_referenced, sanitize, serialize_document, to_capitalize,
)
from utils.messages import CITY, STATE


def test_generate_code_uses_entity_prefix():
    assert generate_code("permission").startswith("PRIV-")
    assert generate_code("role").startswith("ROLE-")
    assert generate_code("role") != generate_code("role")


def test_to_capitalize():
    assert to_capitalize("  new SOUTH wales ") == "New South Wales"
    assert to_capitalize("") == ""
    assert to_capitalize(None) is None


def test_serialize_document_hides_internal_fields():
    oid = ObjectId()
    document = {
        "_id": ObjectId(),
        "hash": "secret",
        "role": {"_id": oid, "roleName": "ADMIN", "rolePermissions": [{"_id": ObjectId(), "permissionName": "X"}]},
        "ref": oid,
        "createdAt": datetime(2024, 1, 1),
    }
    result = serialize_document(document)
    assert "_id" not in result
    assert "hash" not in result
    assert result["role"] == {"roleName": "ADMIN", "rolePermissions": [{"permissionName": "X"}]}
    assert result["ref"] == str(oid)
    assert result["createdAt"] == 1704067200000


def test_sanitize_drops_operator_keys():
    body = {"name": "x", "$where": "1", "nested": {"$gt": 1, "ok": [{"a.b": 1, "c": 2}]}}
    assert sanitize(body) == {"name": "x", "nested": {"ok": [{"c": 2}]}}


def test_list_params_defaults():
    assert get_list_params({}) == {
        "keyword": None,
        "sort_field": "_id",
        "sort_value": "desc",
        "page": 1,
        "limit": 10,
        "all_results": False,
    }


def test_list_params_parsing_and_limits():
    params = get_list_params({
        "keyword": " surat ", "sortField": "name", "sortValue": "ASC",
        "page": "2", "limit": "500", "all": "true",
    })
    assert params["keyword"] == "surat"
    assert params["sort_value"] == "asc"
    assert params["page"] == 2
    assert params["limit"] == 100
    assert params["all_results"] is True


def test_list_params_bad_numbers_fall_back():
    params = get_list_params({"page": "-1", "limit": "abc"})
    assert params["page"] == 1
    assert params["limit"] == 10


def test_list_params_unusable_sort_field_falls_back():
    for value in ("   ", "$where", "name.$x", "address..city"):
        assert get_list_params({"sortField": value})["sort_field"] == "_id"
    assert get_list_params({"sortField": " state.name "})["sort_field"] == "state.name"


def test_reference_check(app):
    with app.app_context():
        SchoolClass(name="Grade 1").save()
        school_class = SchoolClass.find_by_name("Grade 1")
        assert is_object_id_referenced(school_class["_id"]) == {"isReferenced": False, "by": None}

        Section(name="A", class_id=school_class["_id"]).save()
        assert is_object_id_referenced(school_class["_id"]) == {"isReferenced": True, "by": "sections"}


def test_reference_check_finds_array_members(app, db):
    permission = db.permissions.find_one()
    assert is_object_id_referenced(permission["_id"]) == {"isReferenced": True, "by": "roles"}


def test_entity_messages():
    assert CITY.none_under("state") == "There are no cities available under the given state"
    assert STATE.not_found_under("country") == "The selected state could not be found in the selected country"
    assert change_label(AuditAction.CREATE, "Role") == "A Role Created"
