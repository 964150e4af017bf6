from flask import Blueprint

from controllers.common import (
    actor, delete_or_fail, details, ensure_deletable, list_response, list_under_parent, require,
)
from models.exam import Exam
from models.mark import Mark
from models.student import Student
from models.subject import Subject
from schemas.school import (
    ExamCodeRequest, MarkCodeRequest, MarkCreate, MarkUpdate, StudentCodeRequest, SubjectCodeRequest,
)
from utils import messages
from utils.audit import AuditAction, AuditCollection, change_label, log_audit
from utils.auth import permission_required
from utils.helpers import get_json_body
from utils.permissions import crud
from utils.responses import ApiError, handle_success, STATUS_CODE_CONFLICT

marks_bp = Blueprint("marks", __name__, url_prefix="/marks")

VIEW_MARK, CREATE_MARK, UPDATE_MARK, DELETE_MARK = crud("MARK")


def _references(body):
    exam = require(Exam.find_by_code(body.examCode), messages.EXAM.not_found, STATUS_CODE_CONFLICT)
    student = require(Student.find_by_code(body.studentCode), messages.STUDENT.not_found, STATUS_CODE_CONFLICT)
    subject = require(Subject.find_by_code(body.subjectCode), messages.SUBJECT.not_found, STATUS_CODE_CONFLICT)
    return exam["_id"], student["_id"], subject["_id"]


@marks_bp.route("/GetMarks", methods=["GET"])
@permission_required(VIEW_MARK)
def get_marks():
    return list_response(Mark, messages.MARK)


@marks_bp.route("/GetMarkByCode", methods=["POST"])
@permission_required(VIEW_MARK)
def get_mark_by_code():
    body = MarkCodeRequest.model_validate(get_json_body())
    mark = require(Mark.find_details({"markCode": body.markCode}), messages.MARK.not_found)
    return handle_success(messages.MARK.get_one, mark)


@marks_bp.route("/GetMarksByExamCode", methods=["POST"])
@permission_required(VIEW_MARK)
def get_marks_by_exam_code():
    body = ExamCodeRequest.model_validate(get_json_body())
    exam = require(Exam.find_by_code(body.examCode), messages.EXAM.not_found)
    return list_under_parent(Mark, messages.MARK, {"exam": exam["_id"]}, "exam")


@marks_bp.route("/GetMarksByStudentCode", methods=["POST"])
@permission_required(VIEW_MARK)
def get_marks_by_student_code():
    body = StudentCodeRequest.model_validate(get_json_body())
    student = require(Student.find_by_code(body.studentCode), messages.STUDENT.not_found)
    return list_under_parent(Mark, messages.MARK, {"student": student["_id"]}, "student")


@marks_bp.route("/GetMarksBySubjectCode", methods=["POST"])
@permission_required(VIEW_MARK)
def get_marks_by_subject_code():
    body = SubjectCodeRequest.model_validate(get_json_body())
    subject = require(Subject.find_by_code(body.subjectCode), messages.SUBJECT.not_found)
    return list_under_parent(Mark, messages.MARK, {"subject": subject["_id"]}, "subject")


@marks_bp.route("/CreateMark", methods=["POST"])
@permission_required(CREATE_MARK)
def create_mark():
    body = MarkCreate.model_validate(get_json_body())

    exam_id, student_id, subject_id = _references(body)
    if Mark.find_conflict(exam_id, student_id, subject_id):
        raise ApiError(STATUS_CODE_CONFLICT, messages.MARK.exist)

    mark = Mark(
        mark_earned=body.markEarned,
        mark_total=body.markTotal,
        exam_id=exam_id,
        student_id=student_id,
        subject_id=subject_id,
    )
    mark.save()

    created = Mark.find_details({"markCode": mark.code})
    log_audit(AuditAction.CREATE, AuditCollection.MARKS, mark.code,
              change_label(AuditAction.CREATE, "Mark"), None, created, actor())
    return handle_success(messages.MARK.created, created)


@marks_bp.route("/UpdateMark", methods=["POST"])
@permission_required(UPDATE_MARK)
def update_mark():
    body = MarkUpdate.model_validate(get_json_body())

    mark = require(Mark.find_by_code(body.markCode), messages.MARK.not_found)
    exam_id, student_id, subject_id = _references(body)
    if Mark.find_conflict(exam_id, student_id, subject_id, exclude_code=body.markCode):
        raise ApiError(STATUS_CODE_CONFLICT, messages.MARK.taken)

    before = details(Mark, mark)
    Mark.update_by_code(body.markCode, {
        "markEarned": body.markEarned,
        "markTotal": body.markTotal,
        "exam": exam_id,
        "student": student_id,
        "subject": subject_id,
    })
    after = Mark.find_details({"markCode": body.markCode})

    log_audit(AuditAction.UPDATE, AuditCollection.MARKS, body.markCode,
              change_label(AuditAction.UPDATE, "Mark"), before, after, actor())
    return handle_success(messages.MARK.updated, after)


@marks_bp.route("/DeleteMark", methods=["POST"])
@permission_required(DELETE_MARK)
def delete_mark():
    body = MarkCodeRequest.model_validate(get_json_body())

    mark = require(Mark.find_by_code(body.markCode), messages.MARK.not_found)
    ensure_deletable(mark, messages.MARK)

    before = details(Mark, mark)
    delete_or_fail(Mark, body.markCode, messages.MARK)

    log_audit(AuditAction.DELETE, AuditCollection.MARKS, body.markCode,
              change_label(AuditAction.DELETE, "Mark"), before, None, actor())
    return handle_success(messages.MARK.deleted)
