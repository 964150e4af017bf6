from flask import Blueprint

from controllers.common import (
    actor, delete_or_fail, details, ensure_deletable, list_response, list_under_parent, require,
)
from models.school_class import SchoolClass
from models.section import Section
from schemas.school import ClassCodeRequest, SectionCodeRequest, SectionCreate, SectionUpdate
from utils import messages
from utils.audit import AuditAction, AuditCollection, change_label, log_audit
from utils.auth import permission_required
from utils.helpers import get_json_body
from utils.permissions import crud
from utils.responses import ApiError, handle_success, STATUS_CODE_CONFLICT

sections_bp = Blueprint("sections", __name__, url_prefix="/sections")

VIEW_SECTION, CREATE_SECTION, UPDATE_SECTION, DELETE_SECTION = crud("SECTION")


@sections_bp.route("/GetSections", methods=["GET"])
@permission_required(VIEW_SECTION)
def get_sections():
    return list_response(Section, messages.SECTION)


@sections_bp.route("/GetSectionByCode", methods=["POST"])
@permission_required(VIEW_SECTION)
def get_section_by_code():
    body = SectionCodeRequest.model_validate(get_json_body())
    section = require(Section.find_details({"sectionCode": body.sectionCode}), messages.SECTION.not_found)
    return handle_success(messages.SECTION.get_one, section)


@sections_bp.route("/GetSectionsByClassCode", methods=["POST"])
@permission_required(VIEW_SECTION)
def get_sections_by_class_code():
    body = ClassCodeRequest.model_validate(get_json_body())
    school_class = require(SchoolClass.find_by_code(body.classCode), messages.CLASS.not_found)
    return list_under_parent(Section, messages.SECTION, {"class": school_class["_id"]}, "class")


@sections_bp.route("/CreateSection", methods=["POST"])
@permission_required(CREATE_SECTION)
def create_section():
    body = SectionCreate.model_validate(get_json_body())

    school_class = require(SchoolClass.find_by_code(body.classCode), messages.CLASS.not_found, STATUS_CODE_CONFLICT)
    if Section.find_conflict(body.name, school_class["_id"]):
        raise ApiError(STATUS_CODE_CONFLICT, messages.SECTION.exist)

    section = Section(name=body.name, class_id=school_class["_id"])
    section.save()

    created = Section.find_details({"sectionCode": section.code})
    log_audit(AuditAction.CREATE, AuditCollection.SECTIONS, section.code,
              change_label(AuditAction.CREATE, "Section"), None, created, actor())
    return handle_success(messages.SECTION.created, created)


@sections_bp.route("/UpdateSection", methods=["POST"])
@permission_required(UPDATE_SECTION)
def update_section():
    body = SectionUpdate.model_validate(get_json_body())

    section = require(Section.find_by_code(body.sectionCode), messages.SECTION.not_found)
    school_class = require(SchoolClass.find_by_code(body.classCode), messages.CLASS.not_found, STATUS_CODE_CONFLICT)
    if Section.find_conflict(body.name, school_class["_id"], exclude_code=body.sectionCode):
        raise ApiError(STATUS_CODE_CONFLICT, messages.SECTION.taken)

    before = details(Section, section)
    Section.update_by_code(body.sectionCode, {"name": body.name, "class": school_class["_id"]})
    after = Section.find_details({"sectionCode": body.sectionCode})

    log_audit(AuditAction.UPDATE, AuditCollection.SECTIONS, body.sectionCode,
              change_label(AuditAction.UPDATE, "Section"), before, after, actor())
    return handle_success(messages.SECTION.updated, after)


@sections_bp.route("/DeleteSection", methods=["POST"])
@permission_required(DELETE_SECTION)
def delete_section():
    body = SectionCodeRequest.model_validate(get_json_body())

    section = require(Section.find_by_code(body.sectionCode), messages.SECTION.not_found)
    ensure_deletable(section, messages.SECTION)

    before = details(Section, section)
    delete_or_fail(Section, body.sectionCode, messages.SECTION)

    log_audit(AuditAction.DELETE, AuditCollection.SECTIONS, body.sectionCode,
              change_label(AuditAction.DELETE, "Section"), before, None, actor())
    return handle_success(messages.SECTION.deleted)
