from . import health, schools, subjects, teachers, students

__all__ = [
    "health",
    "schools",
    "subjects",
    "teachers",
    "students",
]
