from flask import Blueprint

from controllers.common import actor, delete_or_fail, details, ensure_deletable, list_response, require
from models.school_class import SchoolClass
from schemas.school import ClassCodeRequest, ClassCreate, ClassUpdate
from utils import messages
from utils.audit import AuditAction, AuditCollection, change_label, log_audit
from utils.auth import permission_required
from utils.helpers import get_json_body
from utils.permissions import crud
from utils.responses import ApiError, handle_success, STATUS_CODE_CONFLICT

classes_bp = Blueprint("classes", __name__, url_prefix="/classes")

VIEW_CLASS, CREATE_CLASS, UPDATE_CLASS, DELETE_CLASS = crud("CLASS")


@classes_bp.route("/GetClasses", methods=["GET"])
@permission_required(VIEW_CLASS)
def get_classes():
    return list_response(SchoolClass, messages.CLASS)


@classes_bp.route("/GetClassByCode", methods=["POST"])
@permission_required(VIEW_CLASS)
def get_class_by_code():
    body = ClassCodeRequest.model_validate(get_json_body())
    school_class = require(SchoolClass.find_details({"classCode": body.classCode}), messages.CLASS.not_found)
    return handle_success(messages.CLASS.get_one, school_class)


@classes_bp.route("/CreateClass", methods=["POST"])
@permission_required(CREATE_CLASS)
def create_class():
    body = ClassCreate.model_validate(get_json_body())

    if SchoolClass.find_by_name(body.name):
        raise ApiError(STATUS_CODE_CONFLICT, messages.CLASS.exist)

    school_class = SchoolClass(name=body.name)
    school_class.save()

    created = SchoolClass.find_details({"classCode": school_class.code})
    log_audit(AuditAction.CREATE, AuditCollection.CLASSES, school_class.code,
              change_label(AuditAction.CREATE, "Class"), None, created, actor())
    return handle_success(messages.CLASS.created, created)


@classes_bp.route("/UpdateClass", methods=["POST"])
@permission_required(UPDATE_CLASS)
def update_class():
    body = ClassUpdate.model_validate(get_json_body())

    school_class = require(SchoolClass.find_by_code(body.classCode), messages.CLASS.not_found)
    if SchoolClass.find_by_name(body.name, exclude_code=body.classCode):
        raise ApiError(STATUS_CODE_CONFLICT, messages.CLASS.taken)

    before = details(SchoolClass, school_class)
    SchoolClass.update_by_code(body.classCode, {"name": body.name})
    after = SchoolClass.find_details({"classCode": body.classCode})

    log_audit(AuditAction.UPDATE, AuditCollection.CLASSES, body.classCode,
              change_label(AuditAction.UPDATE, "Class"), before, after, actor())
    return handle_success(messages.CLASS.updated, after)


@classes_bp.route("/DeleteClass", methods=["POST"])
@permission_required(DELETE_CLASS)
def delete_class():
    body = ClassCodeRequest.model_validate(get_json_body())

    school_class = require(SchoolClass.find_by_code(body.classCode), messages.CLASS.not_found)
    ensure_deletable(school_class, messages.CLASS)

    before = details(SchoolClass, school_class)
    delete_or_fail(SchoolClass, body.classCode, messages.CLASS)

    log_audit(AuditAction.DELETE, AuditCollection.CLASSES, body.classCode,
              change_label(AuditAction.DELETE, "Class"), before, None, actor())
    return handle_success(messages.CLASS.deleted)
