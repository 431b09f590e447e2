# schooladmin/models/teacher.py
from sqlalchemy import Column, String, Date, ForeignKey, Uuid, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base

class Teacher(Base):
    __tablename__ = "teachers"

    name = Column(String(100), nullable=False)
    email = Column(String(254), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), default="Teacher", nullable=False)

    school_id = Column(Uuid, nullable=True, index=True)
    teach_class_id = Column(Uuid, nullable=True, index=True)

    subject_links = relationship(
        "TeacherSubject", back_populates="teacher",
        cascade="all, delete-orphan", order_by="TeacherSubject.created_at"
    )
    attendance = relationship(
        "TeacherAttendance", back_populates="teacher",
        cascade="all, delete-orphan", order_by="TeacherAttendance.date"
    )

    @property
    def teach_subjects(self) -> set:
        return {link.subject_id for link in self.subject_links}


class TeacherSubject(Base):
    """One element of a teacher's subject set."""
    __tablename__ = "teacher_subjects"

    teacher_id = Column(Uuid, ForeignKey("teachers.id", ondelete="CASCADE"), nullable=False, index=True)
    subject_id = Column(Uuid, nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint("teacher_id", "subject_id", name="uq_teacher_subject"),
    )

    teacher = relationship("Teacher", back_populates="subject_links")


class TeacherAttendance(Base):
    __tablename__ = "teacher_attendance"

    teacher_id = Column(Uuid, ForeignKey("teachers.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    status = Column(String(20), nullable=False)

    __table_args__ = (
        UniqueConstraint("teacher_id", "date", name="uq_teacher_attendance_day"),
    )

    teacher = relationship("Teacher", back_populates="attendance")
