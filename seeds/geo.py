"""
seeds/geo.py
------------
Load countries, states and cities from a JSON file shaped like:

    [{"name": "India", "iso2": "IN", "iso3": "IND",
      "states": [{"name": "Gujarat", "state_code": "GJ",
                  "cities": [{"name": "Surat"}]}]}]

States without a state_code are skipped, along with their cities.
"""

import json

from bson import ObjectId

from models.city import City
from models.country import Country
from models.state import State
from utils.logger import get_logger

logger = get_logger(__name__)


def build_geo_documents(countries):
    """Turn the nested JSON into flat country/state/city documents with ObjectId links."""
    all_countries, all_states, all_cities = [], [], []

    for country in countries:
        country_doc = Country(name=country["name"], iso2=country.get("iso2"), iso3=country.get("iso3")).to_dict()
        country_doc["_id"] = ObjectId()
        all_countries.append(country_doc)

        for state in country.get("states") or []:
            if not (state.get("state_code") or "").strip():
                continue
            state_doc = State(name=state["name"], iso=state["state_code"], country_id=country_doc["_id"]).to_dict()
            state_doc["_id"] = ObjectId()
            all_states.append(state_doc)

            for city in state.get("cities") or []:
                all_cities.append(
                    City(name=city["name"], state_id=state_doc["_id"], country_id=country_doc["_id"]).to_dict()
                )

    return all_countries, all_states, all_cities


def seed_geo(path):
    with open(path, encoding="utf-8") as fh:
        countries = json.load(fh)

    all_countries, all_states, all_cities = build_geo_documents(countries)

    City.collection().delete_many({})
    State.collection().delete_many({})
    Country.collection().delete_many({})

    for model, documents in ((Country, all_countries), (State, all_states), (City, all_cities)):
        if documents:
            model.collection().insert_many(documents)

    logger.info("Seeded %d countries, %d states, %d cities",
                len(all_countries), len(all_states), len(all_cities))
    return len(all_countries), len(all_states), len(all_cities)
