from models.base import Document
from pipelines import STATE_PIPELINE
from utils.helpers import to_capitalize


class State(Document):
    collection_name = "states"
    code_field = "stateCode"
    code_entity = "state"
    pipeline = STATE_PIPELINE

    def __init__(self, name, iso, country_id, **kwargs):
        super().__init__(**kwargs)
        self.name = to_capitalize(name)
        self.iso = (iso or "").strip().upper()
        self.country_id = country_id

    def fields(self):
        return {"name": self.name, "iso": self.iso, "country": self.country_id}

    # Name and iso are unique within one country
    @staticmethod
    def find_conflict(name, iso, country_id, exclude_code=None):
        query = {
            "country": country_id,
            "$or": [{"name": to_capitalize(name)}, {"iso": (iso or "").strip().upper()}],
        }
        if exclude_code:
            query["stateCode"] = {"$ne": exclude_code}
        return State.collection().find_one(query)
