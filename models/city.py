from models.base import Document
from pipelines import CITY_PIPELINE
from utils.helpers import to_capitalize


class City(Document):
    collection_name = "cities"
    code_field = "cityCode"
    code_entity = "city"
    pipeline = CITY_PIPELINE

    def __init__(self, name, state_id, country_id, **kwargs):
        super().__init__(**kwargs)
        self.name = to_capitalize(name)
        self.state_id = state_id
        self.country_id = country_id

    def fields(self):
        return {"name": self.name, "state": self.state_id, "country": self.country_id}

    # City names are unique within one state
    @staticmethod
    def find_conflict(name, state_id, exclude_code=None):
        query = {"name": to_capitalize(name), "state": state_id}
        if exclude_code:
            query["cityCode"] = {"$ne": exclude_code}
        return City.collection().find_one(query)
