from models.base import Document
from pipelines import SUBJECT_PIPELINE


class Subject(Document):
    collection_name = "subjects"
    code_field = "subjectCode"
    code_entity = "subject"
    pipeline = SUBJECT_PIPELINE

    def __init__(self, name, **kwargs):
        super().__init__(**kwargs)
        self.name = name.strip()

    def fields(self):
        return {"name": self.name}

    @staticmethod
    def find_by_name(name, exclude_code=None):
        query = {"name": (name or "").strip()}
        if exclude_code:
            query["subjectCode"] = {"$ne": exclude_code}
        return Subject.collection().find_one(query)
