from models.base import Document
from pipelines import COUNTRY_PIPELINE
from utils.helpers import to_capitalize


class Country(Document):
    collection_name = "countries"
    code_field = "countryCode"
    code_entity = "country"
    pipeline = COUNTRY_PIPELINE

    def __init__(self, name, iso2, iso3, **kwargs):
        super().__init__(**kwargs)
        self.name = to_capitalize(name)
        self.iso2 = (iso2 or "").strip().upper()
        self.iso3 = (iso3 or "").strip().upper()

    def fields(self):
        return {"name": self.name, "iso2": self.iso2, "iso3": self.iso3}

    # Name, iso2 and iso3 are each unique across countries
    @staticmethod
    def find_conflict(name, iso2, iso3, exclude_code=None):
        query = {"$or": [
            {"name": to_capitalize(name)},
            {"iso2": (iso2 or "").strip().upper()},
            {"iso3": (iso3 or "").strip().upper()},
        ]}
        if exclude_code:
            query["countryCode"] = {"$ne": exclude_code}
        return Country.collection().find_one(query)
