# schooladmin/schemas/subject_schemas.py
from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field

class SubjectSpec(BaseModel):
    sub_name: str = Field(..., min_length=1, max_length=100)
    sub_code: str = Field(..., min_length=1, max_length=30)
    sessions: Optional[int] = Field(default=None, ge=0)

class SubjectBatchCreate(BaseModel):
    class_id: UUID
    school_id: UUID
    subjects: List[SubjectSpec] = Field(..., min_length=1)

class SubjectOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    sub_name: str
    sub_code: str
    sessions: Optional[int] = None
    class_id: UUID
    school_id: UUID
    teacher_id: Optional[UUID] = None

class SubjectListItem(SubjectOut):
    class_name: Optional[str] = None

class NamedRef(BaseModel):
    id: UUID
    name: str

class SubjectDetail(SubjectOut):
    """Subject with its class and teacher names populated."""
    class_ref: Optional[NamedRef] = None
    teacher: Optional[NamedRef] = None
