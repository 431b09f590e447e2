# schooladmin/routers/subjects.py
from typing import List, Union
from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.cache_decorators import cache_response, invalidate_cache_pattern
from ..core.exceptions import raise_for_result
from ..core.results import Outcome, ServiceResult
from ..schemas.common_schemas import DeletionSummary, MessageResponse
from ..schemas.subject_schemas import SubjectBatchCreate, SubjectOut, SubjectListItem, SubjectDetail
from ..services.consistency_coordinator import ConsistencyCoordinator
from ..services.subject_service import SubjectService

router = APIRouter(prefix="/subjects", tags=["Subjects"])

SubjectListing = Union[List[SubjectListItem], MessageResponse]


def _subject_list(result: ServiceResult):
    if result.outcome is Outcome.EMPTY:
        return MessageResponse(message=result.message).model_dump()
    return [SubjectListItem(**subject).model_dump(mode="json") for subject in result.value]


@router.post("", status_code=201)
@invalidate_cache_pattern("subjects:*")
async def create_subjects(data: SubjectBatchCreate, db: AsyncSession = Depends(get_db)):
    """Create a batch of subjects for one class"""
    coordinator = ConsistencyCoordinator(db)
    result = await coordinator.create_subjects(
        data.class_id, data.school_id, [spec.model_dump() for spec in data.subjects]
    )
    raise_for_result(result)
    return [SubjectOut.model_validate(subject).model_dump(mode="json") for subject in result.value]


@router.get("/school/{school_id}", response_model=SubjectListing)
@cache_response("subjects:school")
async def list_subjects(school_id: UUID, db: AsyncSession = Depends(get_db)):
    return _subject_list(await SubjectService(db).list_by_school(school_id))


@router.get("/class/{class_id}", response_model=SubjectListing)
@cache_response("subjects:class")
async def list_class_subjects(class_id: UUID, db: AsyncSession = Depends(get_db)):
    return _subject_list(await SubjectService(db).list_by_class(class_id))


@router.get("/class/{class_id}/free", response_model=SubjectListing)
@cache_response("subjects:free")
async def list_free_subjects(class_id: UUID, db: AsyncSession = Depends(get_db)):
    """Subjects of the class without a teacher"""
    return _subject_list(await SubjectService(db).list_unassigned(class_id))


@router.get("/{subject_id}", response_model=SubjectDetail)
async def get_subject_detail(subject_id: UUID, db: AsyncSession = Depends(get_db)):
    result = await SubjectService(db).get_detail(subject_id)
    raise_for_result(result)
    return result.value


@router.delete("/school/{school_id}", response_model=DeletionSummary)
@invalidate_cache_pattern("subjects:*", "teachers:*")
async def delete_school_subjects(school_id: UUID, db: AsyncSession = Depends(get_db)):
    """Delete every subject of a school and clean up teachers and students"""
    result = await ConsistencyCoordinator(db).delete_subjects_by_school(school_id)
    return result.value


@router.delete("/class/{class_id}", response_model=DeletionSummary)
@invalidate_cache_pattern("subjects:*", "teachers:*")
async def delete_class_subjects(class_id: UUID, db: AsyncSession = Depends(get_db)):
    result = await ConsistencyCoordinator(db).delete_subjects_by_class(class_id)
    return result.value


@router.delete("/{subject_id}", response_model=SubjectOut)
@invalidate_cache_pattern("subjects:*", "teachers:*")
async def delete_subject(subject_id: UUID, db: AsyncSession = Depends(get_db)):
    """Delete a subject and every reference to it"""
    result = await ConsistencyCoordinator(db).delete_subject(subject_id)
    raise_for_result(result)
    return result.value
