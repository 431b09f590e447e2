# schooladmin/models/school.py
from sqlalchemy import Column, String, ForeignKey, Uuid, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base

class School(Base):
    __tablename__ = "schools"

    school_name = Column(String(200), nullable=False, index=True)

    classes = relationship("SchoolClass", back_populates="school")


class SchoolClass(Base):
    __tablename__ = "classes"

    school_id = Column(Uuid, ForeignKey("schools.id"), nullable=False, index=True)
    class_name = Column(String(50), nullable=False)

    __table_args__ = (
        UniqueConstraint("school_id", "class_name", name="uq_class_school_name"),
    )

    school = relationship("School", back_populates="classes")
