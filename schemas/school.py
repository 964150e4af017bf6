from pydantic import Field

from schemas.base import RequestSchema, code_request

ClassCodeRequest = code_request("classCode")
SectionCodeRequest = code_request("sectionCode")
SubjectCodeRequest = code_request("subjectCode")
StudentCodeRequest = code_request("studentCode")
ExamCodeRequest = code_request("examCode")
MarkCodeRequest = code_request("markCode")
QuestionCodeRequest = code_request("questionCode")


class ClassCreate(RequestSchema):
    name: str = Field(min_length=1, max_length=100)


class ClassUpdate(ClassCreate):
    classCode: str = Field(min_length=1)


class SectionCreate(RequestSchema):
    name: str = Field(min_length=1, max_length=100)
    classCode: str = Field(min_length=1)


class SectionUpdate(SectionCreate):
    sectionCode: str = Field(min_length=1)


class SubjectCreate(RequestSchema):
    name: str = Field(min_length=1, max_length=100)


class SubjectUpdate(SubjectCreate):
    subjectCode: str = Field(min_length=1)


class StudentCreate(RequestSchema):
    name: str = Field(min_length=1, max_length=150)
    rollNumber: str = Field(min_length=1, max_length=50)
    sectionCode: str = Field(min_length=1)


class StudentUpdate(StudentCreate):
    studentCode: str = Field(min_length=1)


class ExamCreate(RequestSchema):
    title: str = Field(min_length=1, max_length=150)


class ExamUpdate(ExamCreate):
    examCode: str = Field(min_length=1)


class MarkCreate(RequestSchema):
    markEarned: str = Field(min_length=1)
    markTotal: str = Field(min_length=1)
    examCode: str = Field(min_length=1)
    studentCode: str = Field(min_length=1)
    subjectCode: str = Field(min_length=1)


class MarkUpdate(MarkCreate):
    markCode: str = Field(min_length=1)


class QuestionCreate(RequestSchema):
    level: int = Field(ge=0)
    total: int = Field(ge=0)


class QuestionUpdate(QuestionCreate):
    questionCode: str = Field(min_length=1)
