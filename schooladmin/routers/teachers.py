# schooladmin/routers/teachers.py
from typing import List, Union
from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.cache_decorators import cache_response, invalidate_cache_pattern
from ..core.exceptions import raise_for_result
from ..core.results import Outcome
from ..schemas.common_schemas import DeletionSummary, MessageResponse
from ..schemas.teacher_schemas import (
    TeacherRegister,
    TeacherLogin,
    TeacherSubjectsUpdate,
    AttendanceMark,
    TeacherOut,
    TeacherDetail,
)
from ..services.consistency_coordinator import ConsistencyCoordinator
from ..services.teacher_service import TeacherService

router = APIRouter(prefix="/teachers", tags=["Teachers"])

TeacherListing = Union[List[TeacherDetail], MessageResponse]
TeacherDeletion = Union[DeletionSummary, MessageResponse]


@router.post("/register", response_model=TeacherOut)
@invalidate_cache_pattern("subjects:*", "teachers:*")
async def register_teacher(data: TeacherRegister, db: AsyncSession = Depends(get_db)):
    """Register a teacher, or merge subjects into an existing one with the same email"""
    result = await ConsistencyCoordinator(db).register_teacher(
        name=data.name,
        email=data.email,
        password=data.password,
        subject_ids=data.teach_subjects,
        role=data.role,
        school_id=data.school_id,
        teach_class_id=data.teach_class_id,
    )
    raise_for_result(result)
    return result.value


@router.post("/login", response_model=TeacherDetail)
async def login_teacher(data: TeacherLogin, db: AsyncSession = Depends(get_db)):
    result = await ConsistencyCoordinator(db).authenticate_teacher(data.email, data.password)
    raise_for_result(result)
    return result.value


@router.get("/school/{school_id}", response_model=TeacherListing)
@cache_response("teachers:school")
async def list_teachers(school_id: UUID, db: AsyncSession = Depends(get_db)):
    """All teachers of a school"""
    result = await TeacherService(db).list_by_school(school_id)
    if result.outcome is Outcome.EMPTY:
        return MessageResponse(message=result.message).model_dump()
    return [TeacherDetail(**teacher).model_dump(mode="json") for teacher in result.value]


@router.put("/subjects", response_model=TeacherOut)
@invalidate_cache_pattern("subjects:*", "teachers:*")
async def append_teacher_subjects(data: TeacherSubjectsUpdate, db: AsyncSession = Depends(get_db)):
    result = await ConsistencyCoordinator(db).append_teacher_subjects(data.teacher_id, data.teach_subjects)
    raise_for_result(result)
    return result.value


@router.delete("/school/{school_id}", response_model=TeacherDeletion)
@invalidate_cache_pattern("subjects:*", "teachers:*")
async def delete_school_teachers(school_id: UUID, db: AsyncSession = Depends(get_db)):
    result = await ConsistencyCoordinator(db).delete_teachers_by_school(school_id)
    if result.outcome is Outcome.EMPTY:
        return MessageResponse(message=result.message)
    return DeletionSummary(**result.value)


@router.delete("/class/{class_id}", response_model=TeacherDeletion)
@invalidate_cache_pattern("subjects:*", "teachers:*")
async def delete_class_teachers(class_id: UUID, db: AsyncSession = Depends(get_db)):
    result = await ConsistencyCoordinator(db).delete_teachers_by_class(class_id)
    if result.outcome is Outcome.EMPTY:
        return MessageResponse(message=result.message)
    return DeletionSummary(**result.value)


@router.get("/{teacher_id}", response_model=TeacherDetail)
async def get_teacher_detail(teacher_id: UUID, db: AsyncSession = Depends(get_db)):
    result = await TeacherService(db).get_detail(teacher_id)
    raise_for_result(result)
    return result.value


@router.delete("/{teacher_id}", response_model=TeacherOut)
@invalidate_cache_pattern("subjects:*", "teachers:*")
async def delete_teacher(teacher_id: UUID, db: AsyncSession = Depends(get_db)):
    """Delete a teacher and release the subjects it was assigned"""
    result = await ConsistencyCoordinator(db).delete_teacher(teacher_id)
    raise_for_result(result)
    return result.value


@router.post("/{teacher_id}/attendance", response_model=TeacherOut)
@invalidate_cache_pattern("teachers:*")
async def mark_teacher_attendance(teacher_id: UUID, data: AttendanceMark, db: AsyncSession = Depends(get_db)):
    result = await ConsistencyCoordinator(db).mark_teacher_attendance(teacher_id, data.date, data.status)
    raise_for_result(result)
    return result.value
