# schooladmin/schemas/teacher_schemas.py
from typing import List, Optional, Union
from datetime import date, datetime
from uuid import UUID
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

class TeacherRegister(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: Optional[str] = Field(default=None, min_length=1)
    role: Optional[str] = None
    school_id: Optional[UUID] = None
    teach_class_id: Optional[UUID] = None
    teach_subjects: List[UUID] = Field(default_factory=list)

    @field_validator("teach_subjects", mode="before")
    @classmethod
    def coerce_single_subject(cls, value):
        if value is None:
            return []
        if not isinstance(value, (list, tuple, set)):
            return [value]
        return value

class TeacherLogin(BaseModel):
    email: EmailStr
    password: str

class TeacherSubjectsUpdate(BaseModel):
    teacher_id: UUID
    teach_subjects: List[UUID]

    @field_validator("teach_subjects", mode="before")
    @classmethod
    def coerce_single_subject(cls, value):
        if not isinstance(value, (list, tuple, set)):
            return [value]
        return value

class AttendanceMark(BaseModel):
    date: Union[datetime, date]
    status: str = Field(..., min_length=1, max_length=20)

class AttendanceEntry(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: date
    status: str

class TeacherOut(BaseModel):
    """Public teacher representation; carries no credential material."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    role: str
    school_id: Optional[UUID] = None
    teach_class_id: Optional[UUID] = None
    teach_subjects: List[UUID] = Field(default_factory=list)
    attendance: List[AttendanceEntry] = Field(default_factory=list)

    @field_validator("teach_subjects", mode="before")
    @classmethod
    def sort_subject_set(cls, value):
        return sorted(value, key=str)

class TeacherSubjectInfo(BaseModel):
    id: UUID
    sub_name: str
    sessions: Optional[int] = None
    class_id: UUID
    class_name: Optional[str] = None

class TeacherDetail(TeacherOut):
    subjects: List[TeacherSubjectInfo] = Field(default_factory=list)
    school_name: Optional[str] = None
    class_name: Optional[str] = None
