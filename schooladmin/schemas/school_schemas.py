# schooladmin/schemas/school_schemas.py
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field

class SchoolCreate(BaseModel):
    school_name: str = Field(..., min_length=1, max_length=200)

class SchoolOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    school_name: str

class ClassCreate(BaseModel):
    school_id: UUID
    class_name: str = Field(..., min_length=1, max_length=50)

class ClassOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    school_id: UUID
    class_name: str
