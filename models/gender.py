from models.base import Document
from pipelines import GENDER_PIPELINE


class Gender(Document):
    collection_name = "genders"
    code_field = "genderCode"
    code_entity = "gender"
    pipeline = GENDER_PIPELINE

    def __init__(self, name, **kwargs):
        super().__init__(**kwargs)
        self.name = Gender.normalize_name(name)

    def fields(self):
        return {"genderName": self.name}

    @staticmethod
    def normalize_name(name):
        return (name or "").strip().capitalize()

    @staticmethod
    def find_by_name(name, exclude_code=None):
        query = {"genderName": Gender.normalize_name(name)}
        if exclude_code:
            query["genderCode"] = {"$ne": exclude_code}
        return Gender.collection().find_one(query)
