from models.base import Document
from pipelines import EXAM_PIPELINE


class Exam(Document):
    collection_name = "exams"
    code_field = "examCode"
    code_entity = "exam"
    pipeline = EXAM_PIPELINE

    def __init__(self, title, **kwargs):
        super().__init__(**kwargs)
        self.title = title.strip()

    def fields(self):
        return {"title": self.title}

    @staticmethod
    def find_by_title(title, exclude_code=None):
        query = {"title": (title or "").strip()}
        if exclude_code:
            query["examCode"] = {"$ne": exclude_code}
        return Exam.collection().find_one(query)
