from flask import Blueprint

from controllers.common import actor, delete_or_fail, details, ensure_deletable, list_response, require
from models.gender import Gender
from schemas.geo import GenderCodeRequest, GenderCreate, GenderUpdate
from utils import messages
from utils.audit import AuditAction, AuditCollection, change_label, log_audit
from utils.auth import permission_required
from utils.helpers import get_json_body
from utils.permissions import crud
from utils.responses import ApiError, handle_success, STATUS_CODE_CONFLICT

genders_bp = Blueprint("genders", __name__, url_prefix="/genders")

VIEW_GENDER, CREATE_GENDER, UPDATE_GENDER, DELETE_GENDER = crud("GENDER")


@genders_bp.route("/GetGenders", methods=["GET"])
@permission_required(VIEW_GENDER)
def get_genders():
    return list_response(Gender, messages.GENDER)


@genders_bp.route("/GetGenderByCode", methods=["POST"])
@permission_required(VIEW_GENDER)
def get_gender_by_code():
    body = GenderCodeRequest.model_validate(get_json_body())
    gender = require(Gender.find_details({"genderCode": body.genderCode}), messages.GENDER.not_found)
    return handle_success(messages.GENDER.get_one, gender)


@genders_bp.route("/CreateGender", methods=["POST"])
@permission_required(CREATE_GENDER)
def create_gender():
    body = GenderCreate.model_validate(get_json_body())

    if Gender.find_by_name(body.genderName):
        raise ApiError(STATUS_CODE_CONFLICT, messages.GENDER.exist)

    gender = Gender(name=body.genderName)
    gender.save()

    created = Gender.find_details({"genderCode": gender.code})
    log_audit(AuditAction.CREATE, AuditCollection.GENDERS, gender.code,
              change_label(AuditAction.CREATE, "Gender"), None, created, actor())
    return handle_success(messages.GENDER.created, created)


@genders_bp.route("/UpdateGender", methods=["POST"])
@permission_required(UPDATE_GENDER)
def update_gender():
    body = GenderUpdate.model_validate(get_json_body())

    gender = require(Gender.find_by_code(body.genderCode), messages.GENDER.not_found)
    if Gender.find_by_name(body.genderName, exclude_code=body.genderCode):
        raise ApiError(STATUS_CODE_CONFLICT, messages.GENDER.taken)

    before = details(Gender, gender)
    Gender.update_by_code(body.genderCode, {"genderName": Gender.normalize_name(body.genderName)})
    after = Gender.find_details({"genderCode": body.genderCode})

    log_audit(AuditAction.UPDATE, AuditCollection.GENDERS, body.genderCode,
              change_label(AuditAction.UPDATE, "Gender"), before, after, actor())
    return handle_success(messages.GENDER.updated, after)


@genders_bp.route("/DeleteGender", methods=["POST"])
@permission_required(DELETE_GENDER)
def delete_gender():
    body = GenderCodeRequest.model_validate(get_json_body())

    gender = require(Gender.find_by_code(body.genderCode), messages.GENDER.not_found)
    ensure_deletable(gender, messages.GENDER)

    before = details(Gender, gender)
    delete_or_fail(Gender, body.genderCode, messages.GENDER)

    log_audit(AuditAction.DELETE, AuditCollection.GENDERS, body.genderCode,
              change_label(AuditAction.DELETE, "Gender"), before, None, actor())
    return handle_success(messages.GENDER.deleted)
