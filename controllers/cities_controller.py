from flask import Blueprint

from controllers.common import (
    actor, delete_or_fail, details, ensure_deletable, list_response, list_under_parent, require,
)
from models.city import City
from models.country import Country
from models.state import State
from schemas.geo import CityCodeRequest, CityCreate, CityUpdate, CountryCodeRequest, StateCodeRequest
from utils import messages
from utils.audit import AuditAction, AuditCollection, change_label, log_audit
from utils.auth import permission_required
from utils.helpers import get_json_body, to_capitalize
from utils.permissions import crud
from utils.responses import ApiError, handle_success, STATUS_CODE_CONFLICT

cities_bp = Blueprint("cities", __name__, url_prefix="/cities")

VIEW_CITY, CREATE_CITY, UPDATE_CITY, DELETE_CITY = crud("CITY")


def _state_in_country(state_code, country_code):
    """Both must exist and the state must belong to the country."""
    country = require(Country.find_by_code(country_code), messages.COUNTRY.not_found, STATUS_CODE_CONFLICT)
    state = require(
        State.find_one({"stateCode": state_code, "country": country["_id"]}),
        messages.STATE.not_found_under("country"),
        STATUS_CODE_CONFLICT,
    )
    return state, country


@cities_bp.route("/GetCities", methods=["GET"])
@permission_required(VIEW_CITY)
def get_cities():
    return list_response(City, messages.CITY)


@cities_bp.route("/GetCityByCode", methods=["POST"])
@permission_required(VIEW_CITY)
def get_city_by_code():
    body = CityCodeRequest.model_validate(get_json_body())
    city = require(City.find_details({"cityCode": body.cityCode}), messages.CITY.not_found)
    return handle_success(messages.CITY.get_one, city)


@cities_bp.route("/GetCitiesByStateCode", methods=["POST"])
@permission_required(VIEW_CITY)
def get_cities_by_state_code():
    body = StateCodeRequest.model_validate(get_json_body())
    state = require(State.find_by_code(body.stateCode), messages.STATE.not_found)
    return list_under_parent(City, messages.CITY, {"state": state["_id"]}, "state")


@cities_bp.route("/GetCitiesByCountryCode", methods=["POST"])
@permission_required(VIEW_CITY)
def get_cities_by_country_code():
    body = CountryCodeRequest.model_validate(get_json_body())
    country = require(Country.find_by_code(body.countryCode), messages.COUNTRY.not_found)
    return list_under_parent(City, messages.CITY, {"country": country["_id"]}, "country")


@cities_bp.route("/CreateCity", methods=["POST"])
@permission_required(CREATE_CITY)
def create_city():
    body = CityCreate.model_validate(get_json_body())

    state, country = _state_in_country(body.stateCode, body.countryCode)
    if City.find_conflict(body.name, state["_id"]):
        raise ApiError(STATUS_CODE_CONFLICT, messages.CITY.exist)

    city = City(name=body.name, state_id=state["_id"], country_id=country["_id"])
    city.save()

    created = City.find_details({"cityCode": city.code})
    log_audit(AuditAction.CREATE, AuditCollection.CITIES, city.code,
              change_label(AuditAction.CREATE, "City"), None, created, actor())
    return handle_success(messages.CITY.created, created)


@cities_bp.route("/UpdateCity", methods=["POST"])
@permission_required(UPDATE_CITY)
def update_city():
    body = CityUpdate.model_validate(get_json_body())

    city = require(City.find_by_code(body.cityCode), messages.CITY.not_found)
    state, country = _state_in_country(body.stateCode, body.countryCode)
    if City.find_conflict(body.name, state["_id"], exclude_code=body.cityCode):
        raise ApiError(STATUS_CODE_CONFLICT, messages.CITY.taken)

    before = details(City, city)
    City.update_by_code(body.cityCode, {
        "name": to_capitalize(body.name),
        "state": state["_id"],
        "country": country["_id"],
    })
    after = City.find_details({"cityCode": body.cityCode})

    log_audit(AuditAction.UPDATE, AuditCollection.CITIES, body.cityCode,
              change_label(AuditAction.UPDATE, "City"), before, after, actor())
    return handle_success(messages.CITY.updated, after)


@cities_bp.route("/DeleteCity", methods=["POST"])
@permission_required(DELETE_CITY)
def delete_city():
    body = CityCodeRequest.model_validate(get_json_body())

    city = require(City.find_by_code(body.cityCode), messages.CITY.not_found)
    ensure_deletable(city, messages.CITY)

    before = details(City, city)
    delete_or_fail(City, body.cityCode, messages.CITY)

    log_audit(AuditAction.DELETE, AuditCollection.CITIES, body.cityCode,
              change_label(AuditAction.DELETE, "City"), before, None, actor())
    return handle_success(messages.CITY.deleted)
