# schooladmin/services/teacher_service.py
from typing import Iterable, List, Optional, Set
from uuid import UUID
from datetime import date
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from sqlalchemy.orm import selectinload
from .base_service import BaseService
from ..core.results import ServiceResult
from ..models.teacher import Teacher, TeacherSubject, TeacherAttendance
from ..models.subject import Subject
from ..models.school import School, SchoolClass

class TeacherService(BaseService[Teacher]):
    def __init__(self, db: AsyncSession):
        super().__init__(Teacher, db)

    def _with_relations(self):
        return select(self.model).options(
            selectinload(self.model.subject_links),
            selectinload(self.model.attendance),
        ).execution_options(populate_existing=True)

    async def get_with_relations(self, teacher_id: UUID) -> Optional[Teacher]:
        """Get teacher with subject set and attendance log loaded"""
        result = await self.db.execute(self._with_relations().where(self.model.id == teacher_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[Teacher]:
        result = await self.db.execute(self._with_relations().where(self.model.email == email))
        return result.scalar_one_or_none()

    async def list_by_school(self, school_id: UUID) -> ServiceResult[List[dict]]:
        """Get all teachers for a specific school, described like the detail view"""
        stmt = self._with_relations().where(self.model.school_id == school_id).order_by(self.model.name)
        result = await self.db.execute(stmt)
        teachers = list(result.scalars().all())
        if not teachers:
            return ServiceResult.empty("No teachers found")
        return ServiceResult.success([await self.describe(teacher) for teacher in teachers])

    async def get_detail(self, teacher_id: UUID) -> ServiceResult[dict]:
        teacher = await self.get_with_relations(teacher_id)
        if teacher is None:
            return ServiceResult.not_found("No teacher found")
        return ServiceResult.success(await self.describe(teacher))

    async def describe(self, teacher: Teacher) -> dict:
        """Teacher fields with subject, school and class names populated.

        Only public attributes are copied; the password hash never leaves here.
        """
        subjects = []
        if teacher.subject_links:
            stmt = (
                select(Subject, SchoolClass.class_name)
                .outerjoin(SchoolClass, SchoolClass.id == Subject.class_id)
                .where(Subject.id.in_(list(teacher.teach_subjects)))
                .order_by(Subject.sub_name)
            )
            for subject, class_name in (await self.db.execute(stmt)).all():
                subjects.append({
                    "id": subject.id,
                    "sub_name": subject.sub_name,
                    "sessions": subject.sessions,
                    "class_id": subject.class_id,
                    "class_name": class_name,
                })

        school_name = None
        if teacher.school_id:
            school_name = (await self.db.execute(
                select(School.school_name).where(School.id == teacher.school_id)
            )).scalar_one_or_none()

        class_name = None
        if teacher.teach_class_id:
            class_name = (await self.db.execute(
                select(SchoolClass.class_name).where(SchoolClass.id == teacher.teach_class_id)
            )).scalar_one_or_none()

        return {
            "id": teacher.id,
            "name": teacher.name,
            "email": teacher.email,
            "role": teacher.role,
            "school_id": teacher.school_id,
            "teach_class_id": teacher.teach_class_id,
            "teach_subjects": teacher.teach_subjects,
            "attendance": [{"date": a.date, "status": a.status} for a in teacher.attendance],
            "subjects": subjects,
            "school_name": school_name,
            "class_name": class_name,
        }

    async def create_teacher(self, obj_in: dict, subject_ids: Iterable[UUID]) -> Teacher:
        teacher = self.model(
            **obj_in,
            subject_links=[TeacherSubject(subject_id=subject_id) for subject_id in dict.fromkeys(subject_ids)],
            attendance=[],
        )
        self.db.add(teacher)
        await self.db.flush()
        return teacher

    async def add_subjects(self, teacher: Teacher, subject_ids: Iterable[UUID]) -> Set[UUID]:
        """Set-union ``subject_ids`` into the teacher's subject set.

        Returns the ids that were not already present.
        """
        current = teacher.teach_subjects
        added = [subject_id for subject_id in dict.fromkeys(subject_ids) if subject_id not in current]
        for subject_id in added:
            teacher.subject_links.append(TeacherSubject(subject_id=subject_id))
        if added:
            await self.db.flush()
        return set(added)

    async def pull_subjects(self, subject_ids: Iterable[UUID], keep_teacher_id: Optional[UUID] = None) -> int:
        """Remove ``subject_ids`` from every teacher's subject set.

        ``keep_teacher_id`` is left untouched. Returns the number of teachers changed.
        """
        subject_ids = list(subject_ids)
        if not subject_ids:
            return 0

        conditions = [TeacherSubject.subject_id.in_(subject_ids)]
        if keep_teacher_id is not None:
            conditions.append(TeacherSubject.teacher_id != keep_teacher_id)

        affected = await self.db.execute(select(TeacherSubject.teacher_id).where(*conditions).distinct())
        teacher_count = len(affected.scalars().all())
        if teacher_count:
            await self.db.execute(delete(TeacherSubject).where(*conditions))
        return teacher_count

    async def ids_by_school(self, school_id: UUID) -> List[UUID]:
        return await self.ids_where(school_id=school_id)

    async def ids_by_class(self, class_id: UUID) -> List[UUID]:
        return await self.ids_where(teach_class_id=class_id)

    async def delete_by_ids(self, ids: Iterable[UUID]) -> int:
        """Delete teachers along with their subject set and attendance log."""
        ids = list(ids)
        if not ids:
            return 0
        await self.db.execute(delete(TeacherSubject).where(TeacherSubject.teacher_id.in_(ids)))
        await self.db.execute(delete(TeacherAttendance).where(TeacherAttendance.teacher_id.in_(ids)))
        return await super().delete_by_ids(ids)

    async def upsert_attendance(self, teacher: Teacher, day: date, status: str) -> TeacherAttendance:
        """Overwrite the entry for ``day`` or append a new one."""
        entry = next((a for a in teacher.attendance if a.date == day), None)
        if entry is not None:
            entry.status = status
        else:
            entry = TeacherAttendance(date=day, status=status)
            teacher.attendance.append(entry)
        await self.db.flush()
        return entry
