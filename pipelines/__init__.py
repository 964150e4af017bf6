# pipelines/__init__.py

from .common import Lookup, PipelineSpec
from .access import PERMISSION_PIPELINE, ROLE_PIPELINE, USER_PIPELINE, AUDIT_PIPELINE
from .geo import (
    GENDER_PIPELINE, COUNTRY_PIPELINE, STATE_PIPELINE, CITY_PIPELINE, PROFILE_PIPELINE,
)
from .school import (
    CLASS_PIPELINE, SECTION_PIPELINE, SUBJECT_PIPELINE, STUDENT_PIPELINE,
    EXAM_PIPELINE, MARK_PIPELINE, QUESTION_PIPELINE,
)

__all__ = [
    "Lookup",
    "PipelineSpec",
    "PERMISSION_PIPELINE",
    "ROLE_PIPELINE",
    "USER_PIPELINE",
    "AUDIT_PIPELINE",
    "GENDER_PIPELINE",
    "COUNTRY_PIPELINE",
    "STATE_PIPELINE",
    "CITY_PIPELINE",
    "PROFILE_PIPELINE",
    "CLASS_PIPELINE",
    "SECTION_PIPELINE",
    "SUBJECT_PIPELINE",
    "STUDENT_PIPELINE",
    "EXAM_PIPELINE",
    "MARK_PIPELINE",
    "QUESTION_PIPELINE",
]
