from models.base import Document
from pipelines import MARK_PIPELINE


class Mark(Document):
    collection_name = "marks"
    code_field = "markCode"
    code_entity = "mark"
    pipeline = MARK_PIPELINE

    def __init__(self, mark_earned, mark_total, exam_id, student_id, subject_id, **kwargs):
        super().__init__(**kwargs)
        self.mark_earned = mark_earned
        self.mark_total = mark_total
        self.exam_id = exam_id
        self.student_id = student_id
        self.subject_id = subject_id

    def fields(self):
        return {
            "markEarned": self.mark_earned,
            "markTotal": self.mark_total,
            "exam": self.exam_id,
            "student": self.student_id,
            "subject": self.subject_id,
        }

    # One mark per (exam, student, subject)
    @staticmethod
    def find_conflict(exam_id, student_id, subject_id, exclude_code=None):
        query = {"exam": exam_id, "student": student_id, "subject": subject_id}
        if exclude_code:
            query["markCode"] = {"$ne": exclude_code}
        return Mark.collection().find_one(query)
