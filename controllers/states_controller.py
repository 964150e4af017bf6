from flask import Blueprint

from controllers.common import (
    actor, delete_or_fail, details, ensure_deletable, list_response, list_under_parent, require,
)
from models.country import Country
from models.state import State
from schemas.geo import CountryCodeRequest, StateCodeRequest, StateCreate, StateUpdate
from utils import messages
from utils.audit import AuditAction, AuditCollection, change_label, log_audit
from utils.auth import permission_required
from utils.helpers import get_json_body, to_capitalize
from utils.permissions import crud
from utils.responses import ApiError, handle_success, STATUS_CODE_CONFLICT

states_bp = Blueprint("states", __name__, url_prefix="/states")

VIEW_STATE, CREATE_STATE, UPDATE_STATE, DELETE_STATE = crud("STATE")


@states_bp.route("/GetStates", methods=["GET"])
@permission_required(VIEW_STATE)
def get_states():
    return list_response(State, messages.STATE)


@states_bp.route("/GetStateByCode", methods=["POST"])
@permission_required(VIEW_STATE)
def get_state_by_code():
    body = StateCodeRequest.model_validate(get_json_body())
    state = require(State.find_details({"stateCode": body.stateCode}), messages.STATE.not_found)
    return handle_success(messages.STATE.get_one, state)


@states_bp.route("/GetStatesByCountryCode", methods=["POST"])
@permission_required(VIEW_STATE)
def get_states_by_country_code():
    body = CountryCodeRequest.model_validate(get_json_body())
    country = require(Country.find_by_code(body.countryCode), messages.COUNTRY.not_found)
    return list_under_parent(State, messages.STATE, {"country": country["_id"]}, "country")


@states_bp.route("/CreateState", methods=["POST"])
@permission_required(CREATE_STATE)
def create_state():
    body = StateCreate.model_validate(get_json_body())

    country = require(Country.find_by_code(body.countryCode), messages.COUNTRY.not_found, STATUS_CODE_CONFLICT)
    if State.find_conflict(body.name, body.iso, country["_id"]):
        raise ApiError(STATUS_CODE_CONFLICT, messages.STATE.exist)

    state = State(name=body.name, iso=body.iso, country_id=country["_id"])
    state.save()

    created = State.find_details({"stateCode": state.code})
    log_audit(AuditAction.CREATE, AuditCollection.STATES, state.code,
              change_label(AuditAction.CREATE, "State"), None, created, actor())
    return handle_success(messages.STATE.created, created)


@states_bp.route("/UpdateState", methods=["POST"])
@permission_required(UPDATE_STATE)
def update_state():
    body = StateUpdate.model_validate(get_json_body())

    state = require(State.find_by_code(body.stateCode), messages.STATE.not_found)
    country = require(Country.find_by_code(body.countryCode), messages.COUNTRY.not_found, STATUS_CODE_CONFLICT)
    if State.find_conflict(body.name, body.iso, country["_id"], exclude_code=body.stateCode):
        raise ApiError(STATUS_CODE_CONFLICT, messages.STATE.taken)

    before = details(State, state)
    State.update_by_code(body.stateCode, {
        "name": to_capitalize(body.name),
        "iso": body.iso.upper(),
        "country": country["_id"],
    })
    after = State.find_details({"stateCode": body.stateCode})

    log_audit(AuditAction.UPDATE, AuditCollection.STATES, body.stateCode,
              change_label(AuditAction.UPDATE, "State"), before, after, actor())
    return handle_success(messages.STATE.updated, after)


@states_bp.route("/DeleteState", methods=["POST"])
@permission_required(DELETE_STATE)
def delete_state():
    body = StateCodeRequest.model_validate(get_json_body())

    state = require(State.find_by_code(body.stateCode), messages.STATE.not_found)
    ensure_deletable(state, messages.STATE)

    before = details(State, state)
    delete_or_fail(State, body.stateCode, messages.STATE)

    log_audit(AuditAction.DELETE, AuditCollection.STATES, body.stateCode,
              change_label(AuditAction.DELETE, "State"), before, None, actor())
    return handle_success(messages.STATE.deleted)
