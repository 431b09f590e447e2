# schooladmin/services/consistency_coordinator.py
"""Multi-store writes for subjects, teachers and students.

Subjects, teachers and students hold denormalised references to each other
(``Subject.teacher_id``, the teacher's subject set, the subject ids on student
exam results and attendance) with no foreign keys behind them. Every write
that touches more than one store goes through ``ConsistencyCoordinator`` so
that a removed or reassigned entity never leaves a dangling reference.

Each public operation runs in the request session and commits once at the
end; a storage error rolls the whole operation back and propagates.
"""
import functools
import logging
from typing import Any, Dict, Iterable, List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.results import ServiceResult
from ..core.security import get_password_hash, verify_password
from .base_service import calendar_day
from .subject_service import SubjectService
from .teacher_service import TeacherService
from .student_service import StudentService

logger = logging.getLogger(__name__)

OPTIONAL_TEACHER_FIELDS = ("role", "school_id", "teach_class_id")


def transactional(func):
    """Commit after the wrapped operation, roll back if storage fails."""
    @functools.wraps(func)
    async def wrapper(self, *args, **kwargs):
        try:
            result = await func(self, *args, **kwargs)
            await self.db.commit()
            return result
        except SQLAlchemyError as e:
            logger.error(f"{func.__name__} failed, rolling back: {e}")
            await self.db.rollback()
            raise
    return wrapper


class ConsistencyCoordinator:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.subjects = SubjectService(db)
        self.teachers = TeacherService(db)
        self.students = StudentService(db)

    # Subjects

    @transactional
    async def create_subjects(self, class_id: UUID, school_id: UUID, specs: List[Dict[str, Any]]) -> ServiceResult:
        codes = [spec["sub_code"] for spec in specs]
        repeated = sorted({code for code in codes if codes.count(code) > 1})
        if repeated:
            return ServiceResult.conflict(f"Subject codes repeated in request: {', '.join(repeated)}")

        existing = await self.subjects.find_existing_codes(school_id, codes)
        if existing:
            return ServiceResult.conflict(
                f"Sorry this subcode must be unique as it already exists: {', '.join(sorted(existing))}"
            )

        try:
            subjects = await self.subjects.create_many(school_id, class_id, specs)
        except IntegrityError as e:
            # Another request inserted one of the codes after the check above
            logger.warning(f"Subject code clash for school {school_id}: {e.orig}")
            await self.db.rollback()
            return ServiceResult.conflict("Sorry this subcode must be unique as it already exists")
        logger.info(f"Created {len(subjects)} subjects for class {class_id}")
        return ServiceResult.success(subjects)

    @transactional
    async def delete_subject(self, subject_id: UUID) -> ServiceResult:
        subject = await self.subjects.get(subject_id)
        if subject is None:
            return ServiceResult.not_found("No subject found")

        await self.db.delete(subject)
        await self.db.flush()

        teachers_updated = await self.teachers.pull_subjects([subject_id])
        exams, attendance = await self.students.pull_subject_records(subject_id)
        logger.info(
            f"Subject {subject_id} deleted; pulled from {teachers_updated} teachers, "
            f"{exams} exam results and {attendance} attendance entries removed"
        )
        return ServiceResult.success(subject)

    async def delete_subjects_by_school(self, school_id: UUID) -> ServiceResult:
        return await self._delete_subjects(await self.subjects.ids_by_school(school_id), f"school {school_id}")

    async def delete_subjects_by_class(self, class_id: UUID) -> ServiceResult:
        return await self._delete_subjects(await self.subjects.ids_by_class(class_id), f"class {class_id}")

    @transactional
    async def _delete_subjects(self, subject_ids: List[UUID], scope: str) -> ServiceResult:
        # Ids are collected by the caller before anything is deleted
        deleted = await self.subjects.delete_by_ids(subject_ids)
        teachers_updated = await self.teachers.pull_subjects(subject_ids)
        # Bulk removal resets academic records of every student, not only the affected ones
        students_reset = await self.students.reset_academic_records()
        logger.info(
            f"Deleted {deleted} subjects of {scope}; pulled from {teachers_updated} teachers, "
            f"reset records of {students_reset} students"
        )
        return ServiceResult.success({
            "deleted_count": deleted,
            "deleted_ids": subject_ids,
            "teachers_updated": teachers_updated,
            "students_reset": students_reset,
        })

    # Teachers

    @transactional
    async def register_teacher(self, name: str, email: str, password: Optional[str] = None,
                               subject_ids: Iterable[UUID] = (), **fields) -> ServiceResult:
        """Create a teacher, or merge into the existing one with the same email."""
        subject_ids = await self._known_subjects(subject_ids)
        teacher = await self.teachers.get_by_email(email)

        if teacher is None:
            if not password:
                return ServiceResult.invalid("A password is required to register a new teacher")
            values = {key: value for key, value in fields.items() if key in OPTIONAL_TEACHER_FIELDS and value}
            try:
                teacher = await self.teachers.create_teacher(
                    {"name": name, "email": email, "password_hash": get_password_hash(password), **values},
                    subject_ids,
                )
            except IntegrityError as e:
                logger.warning(f"Teacher email clash for {email}: {e.orig}")
                await self.db.rollback()
                return ServiceResult.conflict(f"A teacher with email {email} already exists")
            logger.info(f"Registered teacher {teacher.id} with {len(subject_ids)} subjects")
        else:
            added = await self.teachers.add_subjects(teacher, subject_ids)
            for key in OPTIONAL_TEACHER_FIELDS:
                if fields.get(key):
                    setattr(teacher, key, fields[key])
            if password:
                teacher.password_hash = get_password_hash(password)
            await self.db.flush()
            logger.info(f"Merged registration for teacher {teacher.id}; {len(added)} new subjects")

        await self._assign_subjects(teacher.id, subject_ids)
        return ServiceResult.success(await self.teachers.get_with_relations(teacher.id))

    @transactional
    async def append_teacher_subjects(self, teacher_id: UUID, subject_ids: Iterable[UUID]) -> ServiceResult:
        teacher = await self.teachers.get_with_relations(teacher_id)
        if teacher is None:
            return ServiceResult.not_found("Teacher not found")

        subject_ids = await self._known_subjects(subject_ids)
        added = await self.teachers.add_subjects(teacher, subject_ids)
        await self._assign_subjects(teacher.id, subject_ids)
        logger.info(f"Teacher {teacher_id}: {len(added)} subjects appended")
        return ServiceResult.success(await self.teachers.get_with_relations(teacher.id))

    async def authenticate_teacher(self, email: str, password: str) -> ServiceResult:
        teacher = await self.teachers.get_by_email(email)
        if teacher is None:
            return ServiceResult.not_found("Teacher not found")
        if not verify_password(password, teacher.password_hash):
            return ServiceResult.invalid_credential("Invalid password")
        return ServiceResult.success(await self.teachers.describe(teacher))

    @transactional
    async def delete_teacher(self, teacher_id: UUID) -> ServiceResult:
        teacher = await self.teachers.get_with_relations(teacher_id)
        if teacher is None:
            return ServiceResult.not_found("Teacher not found")

        await self.teachers.delete_by_ids([teacher_id])
        released = await self.subjects.unassign_teachers([teacher_id])
        logger.info(f"Teacher {teacher_id} deleted; released {released} subjects")
        return ServiceResult.success(teacher)

    async def delete_teachers_by_school(self, school_id: UUID) -> ServiceResult:
        return await self._delete_teachers(await self.teachers.ids_by_school(school_id), f"school {school_id}")

    async def delete_teachers_by_class(self, class_id: UUID) -> ServiceResult:
        return await self._delete_teachers(await self.teachers.ids_by_class(class_id), f"class {class_id}")

    @transactional
    async def _delete_teachers(self, teacher_ids: List[UUID], scope: str) -> ServiceResult:
        if not teacher_ids:
            logger.info(f"No teachers to delete for {scope}")
            return ServiceResult.empty("No teachers found to delete")

        deleted = await self.teachers.delete_by_ids(teacher_ids)
        released = await self.subjects.unassign_teachers(teacher_ids)
        logger.info(f"Deleted {deleted} teachers of {scope}; released {released} subjects")
        return ServiceResult.success({
            "deleted_count": deleted,
            "deleted_ids": teacher_ids,
            "subjects_updated": released,
        })

    @transactional
    async def mark_teacher_attendance(self, teacher_id: UUID, when, status: str) -> ServiceResult:
        teacher = await self.teachers.get_with_relations(teacher_id)
        if teacher is None:
            return ServiceResult.not_found("Teacher not found")

        await self.teachers.upsert_attendance(teacher, calendar_day(when), status)
        return ServiceResult.success(await self.teachers.get_with_relations(teacher_id))

    # Helpers

    async def _known_subjects(self, subject_ids: Iterable[UUID]) -> List[UUID]:
        """Deduplicate ``subject_ids`` and drop ids with no subject behind them."""
        subject_ids = list(dict.fromkeys(subject_ids))
        known = await self.subjects.existing_ids(subject_ids)
        unknown = [str(subject_id) for subject_id in subject_ids if subject_id not in known]
        if unknown:
            logger.warning(f"Ignoring unknown subject ids: {', '.join(unknown)}")
        return [subject_id for subject_id in subject_ids if subject_id in known]

    async def _assign_subjects(self, teacher_id: UUID, subject_ids: List[UUID]) -> None:
        """Point the subjects at ``teacher_id`` and take them out of other teachers' sets."""
        if not subject_ids:
            return
        await self.subjects.assign_teacher(subject_ids, teacher_id)
        taken_from = await self.teachers.pull_subjects(subject_ids, keep_teacher_id=teacher_id)
        if taken_from:
            logger.info(f"Reassigned subjects to teacher {teacher_id}; removed from {taken_from} other teachers")
