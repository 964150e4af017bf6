from models.base import Document
from pipelines import SECTION_PIPELINE


class Section(Document):
    collection_name = "sections"
    code_field = "sectionCode"
    code_entity = "section"
    pipeline = SECTION_PIPELINE

    def __init__(self, name, class_id, **kwargs):
        super().__init__(**kwargs)
        self.name = name.strip()
        self.class_id = class_id

    def fields(self):
        return {"name": self.name, "class": self.class_id}

    # Section names repeat across classes ("A", "B", ...) but not within one
    @staticmethod
    def find_conflict(name, class_id, exclude_code=None):
        query = {"name": (name or "").strip(), "class": class_id}
        if exclude_code:
            query["sectionCode"] = {"$ne": exclude_code}
        return Section.collection().find_one(query)
