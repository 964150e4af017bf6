from flask import Blueprint

from controllers.common import (
    actor, delete_or_fail, details, ensure_deletable, list_response, list_under_parent, require,
)
from models.section import Section
from models.student import Student
from schemas.school import SectionCodeRequest, StudentCodeRequest, StudentCreate, StudentUpdate
from utils import messages
from utils.audit import AuditAction, AuditCollection, change_label, log_audit
from utils.auth import permission_required
from utils.helpers import get_json_body
from utils.permissions import crud
from utils.responses import ApiError, handle_success, STATUS_CODE_CONFLICT

students_bp = Blueprint("students", __name__, url_prefix="/students")

VIEW_STUDENT, CREATE_STUDENT, UPDATE_STUDENT, DELETE_STUDENT = crud("STUDENT")


@students_bp.route("/GetStudents", methods=["GET"])
@permission_required(VIEW_STUDENT)
def get_students():
    return list_response(Student, messages.STUDENT)


@students_bp.route("/GetStudentByCode", methods=["POST"])
@permission_required(VIEW_STUDENT)
def get_student_by_code():
    body = StudentCodeRequest.model_validate(get_json_body())
    student = require(Student.find_details({"studentCode": body.studentCode}), messages.STUDENT.not_found)
    return handle_success(messages.STUDENT.get_one, student)


@students_bp.route("/GetStudentsBySectionCode", methods=["POST"])
@permission_required(VIEW_STUDENT)
def get_students_by_section_code():
    body = SectionCodeRequest.model_validate(get_json_body())
    section = require(Section.find_by_code(body.sectionCode), messages.SECTION.not_found)
    return list_under_parent(Student, messages.STUDENT, {"section": section["_id"]}, "section")


@students_bp.route("/CreateStudent", methods=["POST"])
@permission_required(CREATE_STUDENT)
def create_student():
    body = StudentCreate.model_validate(get_json_body())

    if Student.find_by_roll_number(body.rollNumber):
        raise ApiError(STATUS_CODE_CONFLICT, messages.STUDENT.exist)
    section = require(Section.find_by_code(body.sectionCode), messages.SECTION.not_found, STATUS_CODE_CONFLICT)

    student = Student(name=body.name, roll_number=body.rollNumber, section_id=section["_id"])
    student.save()

    created = Student.find_details({"studentCode": student.code})
    log_audit(AuditAction.CREATE, AuditCollection.STUDENTS, student.code,
              change_label(AuditAction.CREATE, "Student"), None, created, actor())
    return handle_success(messages.STUDENT.created, created)


@students_bp.route("/UpdateStudent", methods=["POST"])
@permission_required(UPDATE_STUDENT)
def update_student():
    body = StudentUpdate.model_validate(get_json_body())

    student = require(Student.find_by_code(body.studentCode), messages.STUDENT.not_found, STATUS_CODE_CONFLICT)
    section = require(Section.find_by_code(body.sectionCode), messages.SECTION.not_found, STATUS_CODE_CONFLICT)
    if Student.find_by_roll_number(body.rollNumber, exclude_code=body.studentCode):
        raise ApiError(STATUS_CODE_CONFLICT, messages.STUDENT.taken)

    before = details(Student, student)
    Student.update_by_code(body.studentCode, {
        "name": body.name,
        "rollNumber": Student.normalize_roll_number(body.rollNumber),
        "section": section["_id"],
    })
    after = Student.find_details({"studentCode": body.studentCode})

    log_audit(AuditAction.UPDATE, AuditCollection.STUDENTS, body.studentCode,
              change_label(AuditAction.UPDATE, "Student"), before, after, actor())
    return handle_success(messages.STUDENT.updated, after)


@students_bp.route("/DeleteStudent", methods=["POST"])
@permission_required(DELETE_STUDENT)
def delete_student():
    body = StudentCodeRequest.model_validate(get_json_body())

    student = require(Student.find_by_code(body.studentCode), messages.STUDENT.not_found, STATUS_CODE_CONFLICT)
    ensure_deletable(student, messages.STUDENT)

    before = details(Student, student)
    delete_or_fail(Student, body.studentCode, messages.STUDENT)

    log_audit(AuditAction.DELETE, AuditCollection.STUDENTS, body.studentCode,
              change_label(AuditAction.DELETE, "Student"), before, None, actor())
    return handle_success(messages.STUDENT.deleted)
