# schooladmin/schemas/student_schemas.py
from typing import List, Optional, Union
from datetime import date, datetime
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field

class StudentCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    roll_num: int
    password: Optional[str] = None
    school_id: UUID
    class_id: UUID

class ExamResultUpsert(BaseModel):
    subject_id: UUID
    marks_obtained: float = Field(..., ge=0)

class StudentAttendanceMark(BaseModel):
    subject_id: UUID
    date: Union[datetime, date]
    status: str = Field(..., min_length=1, max_length=20)

class ExamResultOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    subject_id: UUID
    marks_obtained: float

class StudentAttendanceOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    subject_id: UUID
    date: date
    status: str

class StudentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    roll_num: int
    role: str
    school_id: UUID
    class_id: UUID
    exam_results: List[ExamResultOut] = Field(default_factory=list)
    attendance: List[StudentAttendanceOut] = Field(default_factory=list)
