# schooladmin/services/student_service.py
from typing import Optional, Tuple
from uuid import UUID
from datetime import date
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func
from sqlalchemy.orm import selectinload
from .base_service import BaseService
from ..models.student import Student, StudentExamResult, StudentAttendance

class StudentService(BaseService[Student]):
    def __init__(self, db: AsyncSession):
        super().__init__(Student, db)

    async def get_with_records(self, student_id: UUID) -> Optional[Student]:
        stmt = select(self.model).options(
            selectinload(self.model.exam_results),
            selectinload(self.model.attendance),
        ).where(self.model.id == student_id).execution_options(populate_existing=True)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def create_student(self, obj_in: dict) -> Student:
        student = self.model(**obj_in, exam_results=[], attendance=[])
        self.db.add(student)
        await self.db.flush()
        return student

    async def upsert_exam_result(self, student: Student, subject_id: UUID, marks: float) -> StudentExamResult:
        """One exam result per subject; a second submission overwrites the marks"""
        entry = next((r for r in student.exam_results if r.subject_id == subject_id), None)
        if entry is not None:
            entry.marks_obtained = marks
        else:
            entry = StudentExamResult(subject_id=subject_id, marks_obtained=marks)
            student.exam_results.append(entry)
        await self.db.flush()
        return entry

    async def upsert_attendance(self, student: Student, subject_id: UUID, day: date, status: str) -> StudentAttendance:
        entry = next(
            (a for a in student.attendance if a.subject_id == subject_id and a.date == day),
            None
        )
        if entry is not None:
            entry.status = status
        else:
            entry = StudentAttendance(subject_id=subject_id, date=day, status=status)
            student.attendance.append(entry)
        await self.db.flush()
        return entry

    async def pull_subject_records(self, subject_id: UUID) -> Tuple[int, int]:
        """Remove exam results and attendance entries that reference ``subject_id``."""
        exams = await self.db.execute(
            delete(StudentExamResult).where(StudentExamResult.subject_id == subject_id)
        )
        attendance = await self.db.execute(
            delete(StudentAttendance).where(StudentAttendance.subject_id == subject_id)
        )
        return exams.rowcount, attendance.rowcount

    async def reset_academic_records(self) -> int:
        """Empty the exam results and attendance of every student.

        Returns the number of students whose collections were reset.
        """
        await self.db.execute(delete(StudentExamResult))
        await self.db.execute(delete(StudentAttendance))
        result = await self.db.execute(select(func.count()).select_from(self.model))
        return result.scalar()
