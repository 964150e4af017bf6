from flask import Blueprint

from controllers.common import actor, delete_or_fail, details, ensure_deletable, list_response, require
from models.question import Question
from schemas.school import QuestionCodeRequest, QuestionCreate, QuestionUpdate
from utils import messages
from utils.audit import AuditAction, AuditCollection, change_label, log_audit
from utils.auth import permission_required
from utils.helpers import get_json_body
from utils.permissions import crud
from utils.responses import ApiError, handle_success, STATUS_CODE_CONFLICT

questions_bp = Blueprint("questions", __name__, url_prefix="/questions")

VIEW_QUESTION, CREATE_QUESTION, UPDATE_QUESTION, DELETE_QUESTION = crud("QUESTION")


@questions_bp.route("/GetQuestions", methods=["GET"])
@permission_required(VIEW_QUESTION)
def get_questions():
    return list_response(Question, messages.QUESTION)


@questions_bp.route("/GetQuestionByCode", methods=["POST"])
@permission_required(VIEW_QUESTION)
def get_question_by_code():
    body = QuestionCodeRequest.model_validate(get_json_body())
    question = require(Question.find_details({"questionCode": body.questionCode}), messages.QUESTION.not_found)
    return handle_success(messages.QUESTION.get_one, question)


@questions_bp.route("/CreateQuestion", methods=["POST"])
@permission_required(CREATE_QUESTION)
def create_question():
    body = QuestionCreate.model_validate(get_json_body())

    if Question.find_conflict(body.level, body.total):
        raise ApiError(STATUS_CODE_CONFLICT, messages.QUESTION.exist)

    question = Question(level=body.level, total=body.total)
    question.save()

    created = Question.find_details({"questionCode": question.code})
    log_audit(AuditAction.CREATE, AuditCollection.QUESTIONS, question.code,
              change_label(AuditAction.CREATE, "Question"), None, created, actor())
    return handle_success(messages.QUESTION.created, created)


@questions_bp.route("/UpdateQuestion", methods=["POST"])
@permission_required(UPDATE_QUESTION)
def update_question():
    body = QuestionUpdate.model_validate(get_json_body())

    question = require(Question.find_by_code(body.questionCode), messages.QUESTION.not_found)
    if Question.find_conflict(body.level, body.total, exclude_code=body.questionCode):
        raise ApiError(STATUS_CODE_CONFLICT, messages.QUESTION.taken)

    before = details(Question, question)
    Question.update_by_code(body.questionCode, {"level": body.level, "total": body.total})
    after = Question.find_details({"questionCode": body.questionCode})

    log_audit(AuditAction.UPDATE, AuditCollection.QUESTIONS, body.questionCode,
              change_label(AuditAction.UPDATE, "Question"), before, after, actor())
    return handle_success(messages.QUESTION.updated, after)


@questions_bp.route("/DeleteQuestion", methods=["POST"])
@permission_required(DELETE_QUESTION)
def delete_question():
    body = QuestionCodeRequest.model_validate(get_json_body())

    question = require(Question.find_by_code(body.questionCode), messages.QUESTION.not_found)
    ensure_deletable(question, messages.QUESTION)

    before = details(Question, question)
    delete_or_fail(Question, body.questionCode, messages.QUESTION)

    log_audit(AuditAction.DELETE, AuditCollection.QUESTIONS, body.questionCode,
              change_label(AuditAction.DELETE, "Question"), before, None, actor())
    return handle_success(messages.QUESTION.deleted)
