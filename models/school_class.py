from models.base import Document
from pipelines import CLASS_PIPELINE


class SchoolClass(Document):
    collection_name = "classes"
    code_field = "classCode"
    code_entity = "class"
    pipeline = CLASS_PIPELINE

    def __init__(self, name, **kwargs):
        super().__init__(**kwargs)
        self.name = name.strip()

    def fields(self):
        return {"name": self.name}

    @staticmethod
    def find_by_name(name, exclude_code=None):
        query = {"name": (name or "").strip()}
        if exclude_code:
            query["classCode"] = {"$ne": exclude_code}
        return SchoolClass.collection().find_one(query)
