# models/__init__.py

from .permission import Permission
from .roles import Role
from .users import User
from .audit_log import AuditLog
from .gender import Gender
from .country import Country
from .state import State
from .city import City
from .profile import Profile
from .school_class import SchoolClass
from .section import Section
from .subject import Subject
from .student import Student
from .exam import Exam
from .mark import Mark
from .question import Question

__all__ = [
    "Permission",
    "Role",
    "User",
    "AuditLog",
    "Gender",
    "Country",
    "State",
    "City",
    "Profile",
    "SchoolClass",
    "Section",
    "Subject",
    "Student",
    "Exam",
    "Mark",
    "Question",
]
