from flask import Blueprint

from controllers.common import actor, delete_or_fail, details, ensure_deletable, list_response, require
from models.country import Country
from schemas.geo import CountryCodeRequest, CountryCreate, CountryUpdate
from utils import messages
from utils.audit import AuditAction, AuditCollection, change_label, log_audit
from utils.auth import permission_required
from utils.helpers import get_json_body, to_capitalize
from utils.permissions import crud
from utils.responses import ApiError, handle_success, STATUS_CODE_CONFLICT

countries_bp = Blueprint("countries", __name__, url_prefix="/countries")

VIEW_COUNTRY, CREATE_COUNTRY, UPDATE_COUNTRY, DELETE_COUNTRY = crud("COUNTRY")


@countries_bp.route("/GetCountries", methods=["GET"])
@permission_required(VIEW_COUNTRY)
def get_countries():
    return list_response(Country, messages.COUNTRY)


@countries_bp.route("/GetCountryByCode", methods=["POST"])
@permission_required(VIEW_COUNTRY)
def get_country_by_code():
    body = CountryCodeRequest.model_validate(get_json_body())
    country = require(Country.find_details({"countryCode": body.countryCode}), messages.COUNTRY.not_found)
    return handle_success(messages.COUNTRY.get_one, country)


@countries_bp.route("/CreateCountry", methods=["POST"])
@permission_required(CREATE_COUNTRY)
def create_country():
    body = CountryCreate.model_validate(get_json_body())

    if Country.find_conflict(body.name, body.iso2, body.iso3):
        raise ApiError(STATUS_CODE_CONFLICT, messages.COUNTRY.exist)

    country = Country(name=body.name, iso2=body.iso2, iso3=body.iso3)
    country.save()

    created = Country.find_details({"countryCode": country.code})
    log_audit(AuditAction.CREATE, AuditCollection.COUNTRIES, country.code,
              change_label(AuditAction.CREATE, "Country"), None, created, actor())
    return handle_success(messages.COUNTRY.created, created)


@countries_bp.route("/UpdateCountry", methods=["POST"])
@permission_required(UPDATE_COUNTRY)
def update_country():
    body = CountryUpdate.model_validate(get_json_body())

    country = require(Country.find_by_code(body.countryCode), messages.COUNTRY.not_found)
    if Country.find_conflict(body.name, body.iso2, body.iso3, exclude_code=body.countryCode):
        raise ApiError(STATUS_CODE_CONFLICT, messages.COUNTRY.taken)

    before = details(Country, country)
    Country.update_by_code(body.countryCode, {
        "name": to_capitalize(body.name),
        "iso2": body.iso2.upper(),
        "iso3": body.iso3.upper(),
    })
    after = Country.find_details({"countryCode": body.countryCode})

    log_audit(AuditAction.UPDATE, AuditCollection.COUNTRIES, body.countryCode,
              change_label(AuditAction.UPDATE, "Country"), before, after, actor())
    return handle_success(messages.COUNTRY.updated, after)


@countries_bp.route("/DeleteCountry", methods=["POST"])
@permission_required(DELETE_COUNTRY)
def delete_country():
    body = CountryCodeRequest.model_validate(get_json_body())

    country = require(Country.find_by_code(body.countryCode), messages.COUNTRY.not_found)
    ensure_deletable(country, messages.COUNTRY)

    before = details(Country, country)
    delete_or_fail(Country, body.countryCode, messages.COUNTRY)

    log_audit(AuditAction.DELETE, AuditCollection.COUNTRIES, body.countryCode,
              change_label(AuditAction.DELETE, "Country"), before, None, actor())
    return handle_success(messages.COUNTRY.deleted)
