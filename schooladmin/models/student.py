# schooladmin/models/student.py
from sqlalchemy import Column, String, Integer, Float, Date, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from .base import Base

class Student(Base):
    __tablename__ = "students"

    name = Column(String(100), nullable=False)
    roll_num = Column(Integer, nullable=False)
    password_hash = Column(String(255), nullable=True)
    role = Column(String(20), default="Student", nullable=False)

    school_id = Column(Uuid, nullable=False, index=True)
    class_id = Column(Uuid, nullable=False, index=True)

    exam_results = relationship("StudentExamResult", back_populates="student", cascade="all, delete-orphan")
    attendance = relationship(
        "StudentAttendance", back_populates="student",
        cascade="all, delete-orphan", order_by="StudentAttendance.date"
    )


class StudentExamResult(Base):
    __tablename__ = "student_exam_results"

    student_id = Column(Uuid, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    # Subject reference without FK; cleaned up by the consistency coordinator
    subject_id = Column(Uuid, nullable=False, index=True)
    marks_obtained = Column(Float, default=0, nullable=False)

    student = relationship("Student", back_populates="exam_results")


class StudentAttendance(Base):
    __tablename__ = "student_attendance"

    student_id = Column(Uuid, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    subject_id = Column(Uuid, nullable=False, index=True)
    date = Column(Date, nullable=False)
    status = Column(String(20), nullable=False)

    student = relationship("Student", back_populates="attendance")
