from flask import Blueprint

from controllers.common import actor, delete_or_fail, details, ensure_deletable, list_response, require
from models.exam import Exam
from schemas.school import ExamCodeRequest, ExamCreate, ExamUpdate
from utils import messages
from utils.audit import AuditAction, AuditCollection, change_label, log_audit
from utils.auth import permission_required
from utils.helpers import get_json_body
from utils.permissions import crud
from utils.responses import ApiError, handle_success, STATUS_CODE_CONFLICT

exams_bp = Blueprint("exams", __name__, url_prefix="/exams")

VIEW_EXAM, CREATE_EXAM, UPDATE_EXAM, DELETE_EXAM = crud("EXAM")


@exams_bp.route("/GetExams", methods=["GET"])
@permission_required(VIEW_EXAM)
def get_exams():
    return list_response(Exam, messages.EXAM)


@exams_bp.route("/GetExamByCode", methods=["POST"])
@permission_required(VIEW_EXAM)
def get_exam_by_code():
    body = ExamCodeRequest.model_validate(get_json_body())
    exam = require(Exam.find_details({"examCode": body.examCode}), messages.EXAM.not_found)
    return handle_success(messages.EXAM.get_one, exam)


@exams_bp.route("/CreateExam", methods=["POST"])
@permission_required(CREATE_EXAM)
def create_exam():
    body = ExamCreate.model_validate(get_json_body())

    if Exam.find_by_title(body.title):
        raise ApiError(STATUS_CODE_CONFLICT, messages.EXAM.exist)

    exam = Exam(title=body.title)
    exam.save()

    created = Exam.find_details({"examCode": exam.code})
    log_audit(AuditAction.CREATE, AuditCollection.EXAMS, exam.code,
              change_label(AuditAction.CREATE, "Exam"), None, created, actor())
    return handle_success(messages.EXAM.created, created)


@exams_bp.route("/UpdateExam", methods=["POST"])
@permission_required(UPDATE_EXAM)
def update_exam():
    body = ExamUpdate.model_validate(get_json_body())

    exam = require(Exam.find_by_code(body.examCode), messages.EXAM.not_found)
    if Exam.find_by_title(body.title, exclude_code=body.examCode):
        raise ApiError(STATUS_CODE_CONFLICT, messages.EXAM.taken)

    before = details(Exam, exam)
    Exam.update_by_code(body.examCode, {"title": body.title})
    after = Exam.find_details({"examCode": body.examCode})

    log_audit(AuditAction.UPDATE, AuditCollection.EXAMS, body.examCode,
              change_label(AuditAction.UPDATE, "Exam"), before, after, actor())
    return handle_success(messages.EXAM.updated, after)


@exams_bp.route("/DeleteExam", methods=["POST"])
@permission_required(DELETE_EXAM)
def delete_exam():
    body = ExamCodeRequest.model_validate(get_json_body())

    exam = require(Exam.find_by_code(body.examCode), messages.EXAM.not_found)
    ensure_deletable(exam, messages.EXAM)

    before = details(Exam, exam)
    delete_or_fail(Exam, body.examCode, messages.EXAM)

    log_audit(AuditAction.DELETE, AuditCollection.EXAMS, body.examCode,
              change_label(AuditAction.DELETE, "Exam"), before, None, actor())
    return handle_success(messages.EXAM.deleted)
