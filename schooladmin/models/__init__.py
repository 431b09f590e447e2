# schooladmin/models/__init__.py
"""Import all models here so Alembic and create_all see every table."""
from .base import Base
from .school import School, SchoolClass
from .subject import Subject
from .teacher import Teacher, TeacherSubject, TeacherAttendance
from .student import Student, StudentExamResult, StudentAttendance

__all__ = [
    "Base",
    "School",
    "SchoolClass",
    "Subject",
    "Teacher",
    "TeacherSubject",
    "TeacherAttendance",
    "Student",
    "StudentExamResult",
    "StudentAttendance",
]
