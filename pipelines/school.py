"""
pipelines/school.py
-------------------
Pipelines for classes, sections, subjects, students, exams, marks and
questions.
"""

from pipelines.common import Lookup, PipelineSpec
from pipelines.access import TIMESTAMPS

CLASS_PIPELINE = PipelineSpec(
    search_fields=("classCode", "name"),
    projection=("classCode", "name") + TIMESTAMPS,
)

SECTION_PIPELINE = PipelineSpec(
    search_fields=("sectionCode", "name"),
    lookups=(
        Lookup("class", "classes", ("name", "classCode")),
    ),
    projection=("sectionCode", "name", "class") + TIMESTAMPS,
)

SUBJECT_PIPELINE = PipelineSpec(
    search_fields=("subjectCode", "name"),
    projection=("subjectCode", "name") + TIMESTAMPS,
)

STUDENT_PIPELINE = PipelineSpec(
    search_fields=("studentCode", "name", "rollNumber"),
    lookups=(
        Lookup("section", "sections", ("name", "sectionCode")),
    ),
    projection=("studentCode", "name", "rollNumber", "section") + TIMESTAMPS,
)

EXAM_PIPELINE = PipelineSpec(
    search_fields=("examCode", "title"),
    projection=("examCode", "title") + TIMESTAMPS,
)

MARK_PIPELINE = PipelineSpec(
    search_fields=("markCode", "markEarned", "markTotal"),
    lookups=(
        Lookup("exam", "exams", ("title", "examCode")),
        Lookup("student", "students", ("name", "rollNumber", "studentCode")),
        Lookup("subject", "subjects", ("name", "subjectCode")),
    ),
    projection=("markCode", "markEarned", "markTotal", "exam", "student", "subject") + TIMESTAMPS,
)

QUESTION_PIPELINE = PipelineSpec(
    search_fields=("questionCode",),
    projection=("questionCode", "level", "total") + TIMESTAMPS,
)
