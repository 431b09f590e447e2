# schooladmin/routers/schools.py
from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.exceptions import ConflictError, NotFoundError
from ..schemas.school_schemas import SchoolCreate, SchoolOut, ClassCreate, ClassOut
from ..services.school_service import SchoolService, ClassService

router = APIRouter(tags=["Schools and Classes"])

@router.post("/schools", response_model=SchoolOut, status_code=201)
async def create_school(data: SchoolCreate, db: AsyncSession = Depends(get_db)):
    school = await SchoolService(db).create(data.model_dump())
    await db.commit()
    return school

@router.get("/schools/{school_id}", response_model=SchoolOut)
async def get_school(school_id: UUID, db: AsyncSession = Depends(get_db)):
    school = await SchoolService(db).get(school_id)
    if not school:
        raise NotFoundError("School not found")
    return school

@router.post("/classes", response_model=ClassOut, status_code=201)
async def create_class(data: ClassCreate, db: AsyncSession = Depends(get_db)):
    """Create a class inside an existing school"""
    if not await SchoolService(db).get(data.school_id):
        raise NotFoundError("School not found")
    service = ClassService(db)
    if await service.get_multi(school_id=data.school_id, class_name=data.class_name):
        raise ConflictError(f"Class {data.class_name} already exists in this school")
    school_class = await service.create(data.model_dump())
    await db.commit()
    return school_class

@router.get("/classes/{class_id}", response_model=ClassOut)
async def get_class(class_id: UUID, db: AsyncSession = Depends(get_db)):
    school_class = await ClassService(db).get(class_id)
    if not school_class:
        raise NotFoundError("Class not found")
    return school_class
