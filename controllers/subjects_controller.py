from flask import Blueprint

from controllers.common import actor, delete_or_fail, details, ensure_deletable, list_response, require
from models.subject import Subject
from schemas.school import SubjectCodeRequest, SubjectCreate, SubjectUpdate
from utils import messages
from utils.audit import AuditAction, AuditCollection, change_label, log_audit
from utils.auth import permission_required
from utils.helpers import get_json_body
from utils.permissions import crud
from utils.responses import ApiError, handle_success, STATUS_CODE_CONFLICT

subjects_bp = Blueprint("subjects", __name__, url_prefix="/subjects")

VIEW_SUBJECT, CREATE_SUBJECT, UPDATE_SUBJECT, DELETE_SUBJECT = crud("SUBJECT")


@subjects_bp.route("/GetSubjects", methods=["GET"])
@permission_required(VIEW_SUBJECT)
def get_subjects():
    return list_response(Subject, messages.SUBJECT)


@subjects_bp.route("/GetSubjectByCode", methods=["POST"])
@permission_required(VIEW_SUBJECT)
def get_subject_by_code():
    body = SubjectCodeRequest.model_validate(get_json_body())
    subject = require(Subject.find_details({"subjectCode": body.subjectCode}), messages.SUBJECT.not_found)
    return handle_success(messages.SUBJECT.get_one, subject)


@subjects_bp.route("/CreateSubject", methods=["POST"])
@permission_required(CREATE_SUBJECT)
def create_subject():
    body = SubjectCreate.model_validate(get_json_body())

    if Subject.find_by_name(body.name):
        raise ApiError(STATUS_CODE_CONFLICT, messages.SUBJECT.exist)

    subject = Subject(name=body.name)
    subject.save()

    created = Subject.find_details({"subjectCode": subject.code})
    log_audit(AuditAction.CREATE, AuditCollection.SUBJECTS, subject.code,
              change_label(AuditAction.CREATE, "Subject"), None, created, actor())
    return handle_success(messages.SUBJECT.created, created)


@subjects_bp.route("/UpdateSubject", methods=["POST"])
@permission_required(UPDATE_SUBJECT)
def update_subject():
    body = SubjectUpdate.model_validate(get_json_body())

    subject = require(Subject.find_by_code(body.subjectCode), messages.SUBJECT.not_found)
    if Subject.find_by_name(body.name, exclude_code=body.subjectCode):
        raise ApiError(STATUS_CODE_CONFLICT, messages.SUBJECT.taken)

    before = details(Subject, subject)
    Subject.update_by_code(body.subjectCode, {"name": body.name})
    after = Subject.find_details({"subjectCode": body.subjectCode})

    log_audit(AuditAction.UPDATE, AuditCollection.SUBJECTS, body.subjectCode,
              change_label(AuditAction.UPDATE, "Subject"), before, after, actor())
    return handle_success(messages.SUBJECT.updated, after)


@subjects_bp.route("/DeleteSubject", methods=["POST"])
@permission_required(DELETE_SUBJECT)
def delete_subject():
    body = SubjectCodeRequest.model_validate(get_json_body())

    subject = require(Subject.find_by_code(body.subjectCode), messages.SUBJECT.not_found)
    ensure_deletable(subject, messages.SUBJECT)

    before = details(Subject, subject)
    delete_or_fail(Subject, body.subjectCode, messages.SUBJECT)

    log_audit(AuditAction.DELETE, AuditCollection.SUBJECTS, body.subjectCode,
              change_label(AuditAction.DELETE, "Subject"), before, None, actor())
    return handle_success(messages.SUBJECT.deleted)
