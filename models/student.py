from models.base import Document
from pipelines import STUDENT_PIPELINE


class Student(Document):
    collection_name = "students"
    code_field = "studentCode"
    code_entity = "student"
    pipeline = STUDENT_PIPELINE

    def __init__(self, name, roll_number, section_id, **kwargs):
        super().__init__(**kwargs)
        self.name = name.strip()
        self.roll_number = Student.normalize_roll_number(roll_number)
        self.section_id = section_id

    def fields(self):
        return {"name": self.name, "rollNumber": self.roll_number, "section": self.section_id}

    @staticmethod
    def normalize_roll_number(roll_number):
        return (roll_number or "").strip().upper()

    @staticmethod
    def find_by_roll_number(roll_number, exclude_code=None):
        query = {"rollNumber": Student.normalize_roll_number(roll_number)}
        if exclude_code:
            query["studentCode"] = {"$ne": exclude_code}
        return Student.collection().find_one(query)
