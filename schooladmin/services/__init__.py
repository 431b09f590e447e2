from .base_service import BaseService
from .school_service import SchoolService, ClassService
from .subject_service import SubjectService
from .teacher_service import TeacherService
from .student_service import StudentService
from .consistency_coordinator import ConsistencyCoordinator

__all__ = [
    "BaseService",
    "SchoolService",
    "ClassService",
    "SubjectService",
    "TeacherService",
    "StudentService",
    "ConsistencyCoordinator",
]
