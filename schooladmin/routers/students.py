# schooladmin/routers/students.py
from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.exceptions import NotFoundError
from ..core.security import get_password_hash
from ..schemas.student_schemas import StudentCreate, StudentOut, ExamResultUpsert, StudentAttendanceMark
from ..services.base_service import calendar_day
from ..services.student_service import StudentService
from ..services.subject_service import SubjectService

router = APIRouter(prefix="/students", tags=["Students"])


@router.post("", response_model=StudentOut, status_code=201)
async def create_student(data: StudentCreate, db: AsyncSession = Depends(get_db)):
    values = data.model_dump(exclude={"password"})
    if data.password:
        values["password_hash"] = get_password_hash(data.password)
    service = StudentService(db)
    student = await service.create_student(values)
    await db.commit()
    return student


@router.get("/{student_id}", response_model=StudentOut)
async def get_student(student_id: UUID, db: AsyncSession = Depends(get_db)):
    student = await StudentService(db).get_with_records(student_id)
    if not student:
        raise NotFoundError("No student found")
    return student


async def _load(db: AsyncSession, student_id: UUID, subject_id: UUID):
    student = await StudentService(db).get_with_records(student_id)
    if not student:
        raise NotFoundError("No student found")
    if not await SubjectService(db).get(subject_id):
        raise NotFoundError("No subject found")
    return student


@router.put("/{student_id}/exam-result", response_model=StudentOut)
async def update_exam_result(student_id: UUID, data: ExamResultUpsert, db: AsyncSession = Depends(get_db)):
    """Record marks for a subject, replacing earlier marks for the same subject"""
    service = StudentService(db)
    student = await _load(db, student_id, data.subject_id)
    await service.upsert_exam_result(student, data.subject_id, data.marks_obtained)
    await db.commit()
    return await service.get_with_records(student_id)


@router.put("/{student_id}/attendance", response_model=StudentOut)
async def mark_student_attendance(student_id: UUID, data: StudentAttendanceMark, db: AsyncSession = Depends(get_db)):
    service = StudentService(db)
    student = await _load(db, student_id, data.subject_id)
    await service.upsert_attendance(student, data.subject_id, calendar_day(data.date), data.status)
    await db.commit()
    return await service.get_with_records(student_id)
