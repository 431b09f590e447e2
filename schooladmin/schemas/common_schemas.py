# schooladmin/schemas/common_schemas.py
from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel, Field

class MessageResponse(BaseModel):
    message: str

class DeletionSummary(BaseModel):
    """Outcome of a bulk deletion and its cascade."""
    deleted_count: int
    deleted_ids: List[UUID] = Field(default_factory=list)
    teachers_updated: Optional[int] = None
    subjects_updated: Optional[int] = None
    students_reset: Optional[int] = None
