"""
pipelines/geo.py
----------------
Pipelines for countries, states, cities, genders and user profiles.
"""

from pipelines.common import Lookup, PipelineSpec
from pipelines.access import TIMESTAMPS

GENDER_PIPELINE = PipelineSpec(
    search_fields=("genderCode", "genderName"),
    projection=("genderCode", "genderName") + TIMESTAMPS,
)

COUNTRY_PIPELINE = PipelineSpec(
    search_fields=("countryCode", "name", "iso2", "iso3"),
    projection=("countryCode", "name", "iso2", "iso3") + TIMESTAMPS,
)

STATE_PIPELINE = PipelineSpec(
    search_fields=("stateCode", "name", "iso"),
    lookups=(
        Lookup("country", "countries", ("name", "countryCode")),
    ),
    projection=("stateCode", "name", "iso", "country") + TIMESTAMPS,
)

CITY_PIPELINE = PipelineSpec(
    search_fields=("cityCode", "name"),
    lookups=(
        Lookup("state", "states", ("name", "stateCode")),
        Lookup("country", "countries", ("name", "countryCode")),
    ),
    projection=("cityCode", "name", "state", "country") + TIMESTAMPS,
)

PROFILE_PIPELINE = PipelineSpec(
    search_fields=("profileCode", "firstName", "lastName", "phoneNumber"),
    lookups=(
        Lookup("user", "users", ("username", "email")),
        Lookup("gender", "genders", ("genderName",)),
        Lookup("address.city", "cities", ("name",)),
        Lookup("address.state", "states", ("name",)),
        Lookup("address.country", "countries", ("name",)),
    ),
    projection=(
        "profileCode", "firstName", "lastName", "profilePicture", "dob", "gender",
        "phoneNumber", "address", "social", "notification", "user",
    ) + TIMESTAMPS,
)
