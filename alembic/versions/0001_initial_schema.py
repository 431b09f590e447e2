"""Initial schema for schools, subjects, teachers and students

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '0001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _base_columns():
    return [
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    ]


def _base_indexes(table: str) -> None:
    op.create_index(op.f(f'ix_{table}_id'), table, ['id'], unique=False)
    op.create_index(op.f(f'ix_{table}_created_at'), table, ['created_at'], unique=False)


def upgrade() -> None:
    op.create_table(
        'schools',
        *_base_columns(),
        sa.Column('school_name', sa.String(length=200), nullable=False),
    )
    _base_indexes('schools')
    op.create_index(op.f('ix_schools_school_name'), 'schools', ['school_name'], unique=False)

    op.create_table(
        'classes',
        *_base_columns(),
        sa.Column('school_id', sa.Uuid(), sa.ForeignKey('schools.id'), nullable=False),
        sa.Column('class_name', sa.String(length=50), nullable=False),
        sa.UniqueConstraint('school_id', 'class_name', name='uq_class_school_name'),
    )
    _base_indexes('classes')
    op.create_index(op.f('ix_classes_school_id'), 'classes', ['school_id'], unique=False)

    # Subject references (teacher_id here, subject_id below) deliberately carry no FK
    op.create_table(
        'subjects',
        *_base_columns(),
        sa.Column('school_id', sa.Uuid(), nullable=False),
        sa.Column('class_id', sa.Uuid(), nullable=False),
        sa.Column('sub_name', sa.String(length=100), nullable=False),
        sa.Column('sub_code', sa.String(length=30), nullable=False),
        sa.Column('sessions', sa.Integer(), nullable=True),
        sa.Column('teacher_id', sa.Uuid(), nullable=True),
        sa.UniqueConstraint('school_id', 'sub_code', name='uq_subject_school_code'),
    )
    _base_indexes('subjects')
    for column in ('school_id', 'class_id', 'teacher_id'):
        op.create_index(op.f(f'ix_subjects_{column}'), 'subjects', [column], unique=False)

    op.create_table(
        'teachers',
        *_base_columns(),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='Teacher'),
        sa.Column('school_id', sa.Uuid(), nullable=True),
        sa.Column('teach_class_id', sa.Uuid(), nullable=True),
    )
    _base_indexes('teachers')
    op.create_index(op.f('ix_teachers_email'), 'teachers', ['email'], unique=True)
    op.create_index(op.f('ix_teachers_school_id'), 'teachers', ['school_id'], unique=False)
    op.create_index(op.f('ix_teachers_teach_class_id'), 'teachers', ['teach_class_id'], unique=False)

    op.create_table(
        'teacher_subjects',
        *_base_columns(),
        sa.Column('teacher_id', sa.Uuid(), sa.ForeignKey('teachers.id', ondelete='CASCADE'), nullable=False),
        sa.Column('subject_id', sa.Uuid(), nullable=False),
        sa.UniqueConstraint('teacher_id', 'subject_id', name='uq_teacher_subject'),
    )
    _base_indexes('teacher_subjects')
    op.create_index(op.f('ix_teacher_subjects_teacher_id'), 'teacher_subjects', ['teacher_id'], unique=False)
    op.create_index(op.f('ix_teacher_subjects_subject_id'), 'teacher_subjects', ['subject_id'], unique=False)

    op.create_table(
        'teacher_attendance',
        *_base_columns(),
        sa.Column('teacher_id', sa.Uuid(), sa.ForeignKey('teachers.id', ondelete='CASCADE'), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.UniqueConstraint('teacher_id', 'date', name='uq_teacher_attendance_day'),
    )
    _base_indexes('teacher_attendance')
    op.create_index(op.f('ix_teacher_attendance_teacher_id'), 'teacher_attendance', ['teacher_id'], unique=False)

    op.create_table(
        'students',
        *_base_columns(),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('roll_num', sa.Integer(), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=True),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='Student'),
        sa.Column('school_id', sa.Uuid(), nullable=False),
        sa.Column('class_id', sa.Uuid(), nullable=False),
    )
    _base_indexes('students')
    op.create_index(op.f('ix_students_school_id'), 'students', ['school_id'], unique=False)
    op.create_index(op.f('ix_students_class_id'), 'students', ['class_id'], unique=False)

    op.create_table(
        'student_exam_results',
        *_base_columns(),
        sa.Column('student_id', sa.Uuid(), sa.ForeignKey('students.id', ondelete='CASCADE'), nullable=False),
        sa.Column('subject_id', sa.Uuid(), nullable=False),
        sa.Column('marks_obtained', sa.Float(), nullable=False),
    )
    _base_indexes('student_exam_results')
    op.create_index(op.f('ix_student_exam_results_student_id'), 'student_exam_results', ['student_id'], unique=False)
    op.create_index(op.f('ix_student_exam_results_subject_id'), 'student_exam_results', ['subject_id'], unique=False)

    op.create_table(
        'student_attendance',
        *_base_columns(),
        sa.Column('student_id', sa.Uuid(), sa.ForeignKey('students.id', ondelete='CASCADE'), nullable=False),
        sa.Column('subject_id', sa.Uuid(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
    )
    _base_indexes('student_attendance')
    op.create_index(op.f('ix_student_attendance_student_id'), 'student_attendance', ['student_id'], unique=False)
    op.create_index(op.f('ix_student_attendance_subject_id'), 'student_attendance', ['subject_id'], unique=False)


def downgrade() -> None:
    for table in (
        'student_attendance', 'student_exam_results', 'students',
        'teacher_attendance', 'teacher_subjects', 'teachers',
        'subjects', 'classes', 'schools',
    ):
        op.drop_table(table)
