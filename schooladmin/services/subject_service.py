# schooladmin/services/subject_service.py
from typing import Iterable, List, Set
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update
from .base_service import BaseService
from ..core.results import ServiceResult
from ..models.subject import Subject
from ..models.school import SchoolClass
from ..models.teacher import Teacher

class SubjectService(BaseService[Subject]):
    def __init__(self, db: AsyncSession):
        super().__init__(Subject, db)

    async def list_by_school(self, school_id: UUID) -> ServiceResult[List[dict]]:
        """Get all subjects for a school, each with its class name"""
        return await self._listing(self.model.school_id == school_id)

    async def list_by_class(self, class_id: UUID) -> ServiceResult[List[dict]]:
        return await self._listing(self.model.class_id == class_id)

    async def list_unassigned(self, class_id: UUID) -> ServiceResult[List[dict]]:
        """Subjects of a class that no teacher has taken yet"""
        return await self._listing(self.model.class_id == class_id, self.model.teacher_id.is_(None))

    async def _listing(self, *conditions) -> ServiceResult[List[dict]]:
        stmt = (
            select(self.model, SchoolClass.class_name)
            .outerjoin(SchoolClass, SchoolClass.id == self.model.class_id)
            .where(*conditions)
            .order_by(self.model.sub_code)
        )
        rows = (await self.db.execute(stmt)).all()
        if not rows:
            return ServiceResult.empty("No subjects found")
        return ServiceResult.success([
            {**self._fields(subject), "class_name": class_name} for subject, class_name in rows
        ])

    @staticmethod
    def _fields(subject: Subject) -> dict:
        return {
            "id": subject.id,
            "sub_name": subject.sub_name,
            "sub_code": subject.sub_code,
            "sessions": subject.sessions,
            "class_id": subject.class_id,
            "school_id": subject.school_id,
            "teacher_id": subject.teacher_id,
        }

    async def get_detail(self, subject_id: UUID) -> ServiceResult[dict]:
        """Get a subject with its class and teacher names"""
        stmt = (
            select(self.model, SchoolClass.class_name, Teacher.name)
            .outerjoin(SchoolClass, SchoolClass.id == self.model.class_id)
            .outerjoin(Teacher, Teacher.id == self.model.teacher_id)
            .where(self.model.id == subject_id)
        )
        row = (await self.db.execute(stmt)).first()
        if row is None:
            return ServiceResult.not_found("No subject found")

        subject, class_name, teacher_name = row
        detail = {
            **self._fields(subject),
            "class_ref": {"id": subject.class_id, "name": class_name} if class_name else None,
            "teacher": {"id": subject.teacher_id, "name": teacher_name} if teacher_name else None,
        }
        return ServiceResult.success(detail)

    async def find_existing_codes(self, school_id: UUID, codes: Iterable[str]) -> Set[str]:
        codes = list(codes)
        if not codes:
            return set()
        stmt = select(self.model.sub_code).where(
            self.model.school_id == school_id,
            self.model.sub_code.in_(codes)
        )
        result = await self.db.execute(stmt)
        return set(result.scalars().all())

    async def create_many(self, school_id: UUID, class_id: UUID, specs: List[dict]) -> List[Subject]:
        subjects = [
            self.model(school_id=school_id, class_id=class_id, **spec)
            for spec in specs
        ]
        self.db.add_all(subjects)
        await self.db.flush()
        return subjects

    async def existing_ids(self, subject_ids: Iterable[UUID]) -> Set[UUID]:
        subject_ids = list(subject_ids)
        if not subject_ids:
            return set()
        result = await self.db.execute(select(self.model.id).where(self.model.id.in_(subject_ids)))
        return set(result.scalars().all())

    async def ids_by_school(self, school_id: UUID) -> List[UUID]:
        return await self.ids_where(school_id=school_id)

    async def ids_by_class(self, class_id: UUID) -> List[UUID]:
        return await self.ids_where(class_id=class_id)

    async def assign_teacher(self, subject_ids: Iterable[UUID], teacher_id: UUID) -> int:
        """Point the back-reference of every listed subject at ``teacher_id``."""
        subject_ids = list(subject_ids)
        if not subject_ids:
            return 0
        result = await self.db.execute(
            update(self.model)
            .where(self.model.id.in_(subject_ids))
            .values(teacher_id=teacher_id)
        )
        return result.rowcount

    async def unassign_teachers(self, teacher_ids: Iterable[UUID]) -> int:
        """Clear the back-reference on subjects owned by any of ``teacher_ids``."""
        teacher_ids = list(teacher_ids)
        if not teacher_ids:
            return 0
        result = await self.db.execute(
            update(self.model)
            .where(self.model.teacher_id.in_(teacher_ids))
            .values(teacher_id=None)
        )
        return result.rowcount

