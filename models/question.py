from models.base import Document
from pipelines import QUESTION_PIPELINE


class Question(Document):
    collection_name = "questions"
    code_field = "questionCode"
    code_entity = "question"
    pipeline = QUESTION_PIPELINE

    def __init__(self, level, total, **kwargs):
        super().__init__(**kwargs)
        self.level = level
        self.total = total

    def fields(self):
        return {"level": self.level, "total": self.total}

    @staticmethod
    def find_conflict(level, total, exclude_code=None):
        query = {"level": level, "total": total}
        if exclude_code:
            query["questionCode"] = {"$ne": exclude_code}
        return Question.collection().find_one(query)
