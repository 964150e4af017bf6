import json

from flask import Blueprint, request
from pymongo.errors import PyMongoError

from controllers.common import actor, delete_or_fail, details, ensure_deletable, list_response, require
from models.city import City
from models.country import Country
from models.gender import Gender
from models.profile import Profile
from models.state import State
from models.users import User
from schemas.access import UserCodeRequest
from schemas.geo import ProfileCodeRequest, ProfileCreate, ProfileUpdate
from utils import messages
from utils.audit import AuditAction, AuditCollection, change_label, log_audit
from utils.auth import get_current_user, permission_required
from utils.helpers import get_json_body, sanitize
from utils.permissions import (
    VIEW_PROFILES, VIEW_OWN_PROFILE_ONLY, CREATE_PROFILE, UPDATE_PROFILE, DELETE_PROFILE,
)
from utils.responses import ApiError, handle_success, STATUS_CODE_BAD_REQUEST, STATUS_CODE_CONFLICT
from utils.uploads import destroy_image, upload_image

profiles_bp = Blueprint("profiles", __name__, url_prefix="/profiles")

PICTURE_FIELD = "profilePicture"


def _profile_payload():
    """
    Profile writes may be multipart (picture + JSON in the "data" field)
    or a plain JSON body when no picture is sent.
    """
    if request.files or request.form:
        try:
            data = json.loads(request.form.get("data") or "{}")
        except ValueError:
            raise ApiError(STATUS_CODE_BAD_REQUEST, messages.MESSAGE_INVALID_BODY)
        if not isinstance(data, dict):
            raise ApiError(STATUS_CODE_BAD_REQUEST, messages.MESSAGE_INVALID_BODY)
        return sanitize(data)
    return get_json_body()


def _resolve_references(body, profile_code=None):
    """Check every referenced document exists and map codes to ObjectIds."""
    user = require(User.find_by_code(body.userCode), messages.USER.not_found, STATUS_CODE_CONFLICT)

    existing = Profile.find_by_user(user["_id"])
    if existing and existing["profileCode"] != profile_code:
        raise ApiError(STATUS_CODE_CONFLICT, messages.MESSAGE_PROFILE_EXIST)

    if Profile.find_by_phone(body.phoneNumber, exclude_code=profile_code):
        raise ApiError(STATUS_CODE_CONFLICT, messages.MESSAGE_PHONE_NUMBER_TAKEN)

    gender = require(Gender.find_by_code(body.genderCode), messages.GENDER.not_found, STATUS_CODE_CONFLICT)

    address = body.address
    country = require(
        Country.find_by_code(address.countryCode), messages.COUNTRY.not_found, STATUS_CODE_CONFLICT,
    )
    state = require(
        State.find_one({"stateCode": address.stateCode, "country": country["_id"]}),
        messages.STATE.not_found_under("country"),
        STATUS_CODE_CONFLICT,
    )
    city = require(
        City.find_one({"cityCode": address.cityCode, "state": state["_id"]}),
        messages.CITY.not_found_under("state"),
        STATUS_CODE_CONFLICT,
    )

    return {
        "user": user["_id"],
        "gender": gender["_id"],
        "address": {
            "addressLineOne": address.addressLineOne,
            "addressLineTwo": address.addressLineTwo,
            "city": city["_id"],
            "state": state["_id"],
            "country": country["_id"],
            "postalCode": address.postalCode,
        },
    }


# -----------------------------
# VIEW PROFILES
# -----------------------------
@profiles_bp.route("/GetProfiles", methods=["GET"])
@permission_required(VIEW_PROFILES)
def get_profiles():
    return list_response(Profile, messages.PROFILE)


@profiles_bp.route("/GetOwnProfile", methods=["GET"])
@permission_required(VIEW_OWN_PROFILE_ONLY)
def get_own_profile():
    user = User.find_by_code(get_current_user()["userCode"])
    profile = require(Profile.find_details({"user": user["_id"]}), messages.MESSAGE_OWN_PROFILE_NOT_FOUND)
    return handle_success(messages.PROFILE.get_one, profile)


@profiles_bp.route("/GetProfileByCode", methods=["POST"])
@permission_required(VIEW_PROFILES)
def get_profile_by_code():
    body = ProfileCodeRequest.model_validate(get_json_body())
    profile = require(Profile.find_details({"profileCode": body.profileCode}), messages.PROFILE.not_found)
    return handle_success(messages.PROFILE.get_one, profile)


@profiles_bp.route("/GetProfileByUserCode", methods=["POST"])
@permission_required(VIEW_PROFILES)
def get_profile_by_user_code():
    body = UserCodeRequest.model_validate(get_json_body())
    user = require(User.find_by_code(body.userCode), messages.USER.not_found)
    profile = require(Profile.find_details({"user": user["_id"]}), messages.MESSAGE_PROFILE_NOT_FOUND_UNDER_USER)
    return handle_success(messages.PROFILE.get_one, profile)


# -----------------------------
# CREATE / UPDATE / DELETE
# -----------------------------
@profiles_bp.route("/CreateProfile", methods=["POST"])
@permission_required(CREATE_PROFILE)
def create_profile():
    body = ProfileCreate.model_validate(_profile_payload())
    references = _resolve_references(body)

    picture = upload_image(request.files.get(PICTURE_FIELD))
    profile = Profile(
        user_id=references["user"],
        first_name=body.firstName,
        last_name=body.lastName,
        picture=picture,
        dob=body.dob,
        gender_id=references["gender"],
        phone_number=body.phoneNumber,
        address=references["address"],
        social=body.social.model_dump(),
        notification=body.notification.model_dump(),
    )
    try:
        profile.save()
    except PyMongoError:
        destroy_image(picture["filename"])
        raise

    created = Profile.find_details({"profileCode": profile.code})
    log_audit(AuditAction.CREATE, AuditCollection.PROFILES, profile.code,
              change_label(AuditAction.CREATE, "Profile"), None, created, actor())
    return handle_success(messages.PROFILE.created, created)


@profiles_bp.route("/UpdateProfile", methods=["POST"])
@permission_required(UPDATE_PROFILE)
def update_profile():
    body = ProfileUpdate.model_validate(_profile_payload())

    profile = require(Profile.find_by_code(body.profileCode), messages.PROFILE.not_found)
    references = _resolve_references(body, profile_code=body.profileCode)

    values = {
        "firstName": body.firstName,
        "lastName": body.lastName,
        "dob": body.dob,
        "gender": references["gender"],
        "phoneNumber": body.phoneNumber,
        "address": references["address"],
        "social": body.social.model_dump(),
        "notification": body.notification.model_dump(),
        "user": references["user"],
    }

    new_picture = None
    if request.files.get(PICTURE_FIELD):
        new_picture = upload_image(request.files[PICTURE_FIELD])
        values["profilePicture"] = Profile.picture_document(new_picture)

    before = details(Profile, profile)
    try:
        Profile.update_by_code(body.profileCode, values)
    except PyMongoError:
        if new_picture:
            destroy_image(new_picture["filename"])
        raise

    # the old picture is only removed once the new one is stored
    if new_picture and profile.get("profilePicture"):
        destroy_image(profile["profilePicture"].get("filename"))

    after = Profile.find_details({"profileCode": body.profileCode})
    log_audit(AuditAction.UPDATE, AuditCollection.PROFILES, body.profileCode,
              change_label(AuditAction.UPDATE, "Profile"), before, after, actor())
    return handle_success(messages.PROFILE.updated, after)


@profiles_bp.route("/DeleteProfile", methods=["POST"])
@permission_required(DELETE_PROFILE)
def delete_profile():
    body = ProfileCodeRequest.model_validate(get_json_body())

    profile = require(Profile.find_by_code(body.profileCode), messages.PROFILE.not_found)
    ensure_deletable(profile, messages.PROFILE)

    before = details(Profile, profile)
    delete_or_fail(Profile, body.profileCode, messages.PROFILE)
    if profile.get("profilePicture"):
        destroy_image(profile["profilePicture"].get("filename"))

    log_audit(AuditAction.DELETE, AuditCollection.PROFILES, body.profileCode,
              change_label(AuditAction.DELETE, "Profile"), before, None, actor())
    return handle_success(messages.PROFILE.deleted)
