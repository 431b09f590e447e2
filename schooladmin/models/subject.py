# schooladmin/models/subject.py
from sqlalchemy import Column, String, Integer, Uuid, UniqueConstraint
from .base import Base

class Subject(Base):
    __tablename__ = "subjects"

    # Scope; plain columns so bulk deletes never depend on FK order
    school_id = Column(Uuid, nullable=False, index=True)
    class_id = Column(Uuid, nullable=False, index=True)

    sub_name = Column(String(100), nullable=False)
    sub_code = Column(String(30), nullable=False)
    sessions = Column(Integer, nullable=True)

    # Back-reference to the owning teacher, maintained by the consistency coordinator
    teacher_id = Column(Uuid, nullable=True, index=True)

    __table_args__ = (
        UniqueConstraint("school_id", "sub_code", name="uq_subject_school_code"),
    )
