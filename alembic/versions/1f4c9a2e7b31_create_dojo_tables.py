"""create users, classes, class sessions and attendances

Revision ID: 1f4c9a2e7b31
Revises:
Create Date: 2026-01-02 18:20:11.402113

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '1f4c9a2e7b31'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

BELTS = ('white', 'yellow', 'orange', 'green', 'blue', 'brown', 'black')
STATUSES = ('pending', 'present', 'late', 'absent', 'excused')


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('registry', sa.String(), nullable=True, unique=True),
        sa.Column('hashed_password', sa.String(), nullable=True),
        sa.Column('belt', sa.Enum(*BELTS, name='belt'), nullable=False),
        sa.Column('birthday', sa.Date(), nullable=True),
        sa.Column('training_since', sa.Date(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('instructor_id', sa.Uuid(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_users_is_active', 'users', ['is_active'])
    op.create_index('ix_users_instructor_id', 'users', ['instructor_id'])

    op.create_table(
        'user_roles',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('role', sa.Enum('student', 'teacher', name='user_role'), nullable=False),
        sa.UniqueConstraint('user_id', 'role', name='uq_user_role'),
    )

    op.create_table(
        'classes',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('days', sa.JSON(), nullable=False),
        sa.Column('start_time', sa.Time(), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('teacher_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )

    op.create_table(
        'class_enrollments',
        sa.Column('class_id', sa.Uuid(), sa.ForeignKey('classes.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), primary_key=True),
    )

    op.create_table(
        'class_sessions',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('start_time', sa.Time(), nullable=True),
        sa.Column('end_time', sa.Time(), nullable=True),
        sa.Column('notes', sa.String(length=500), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('class_id', sa.Uuid(), sa.ForeignKey('classes.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('teacher_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_class_sessions_date', 'class_sessions', ['date'])
    op.create_index('ix_class_sessions_class_id', 'class_sessions', ['class_id'])
    op.create_index('ix_class_sessions_teacher_id', 'class_sessions', ['teacher_id'])

    op.create_table(
        'attendances',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('session_id', sa.Uuid(), sa.ForeignKey('class_sessions.id', ondelete='CASCADE'), nullable=False),
        sa.Column('student_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('is_enrolled_class', sa.Boolean(), nullable=False),
        sa.Column('status', sa.Enum(*STATUSES, name='attendance_status'), nullable=False),
        sa.Column('checked_in_at', sa.DateTime(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_attendances_session_id', 'attendances', ['session_id'])
    op.create_index('ix_attendances_student_id', 'attendances', ['student_id'])
    op.create_index('ix_attendances_created_at', 'attendances', ['created_at'])


def downgrade() -> None:
    op.drop_table('attendances')
    op.drop_table('class_sessions')
    op.drop_table('class_enrollments')
    op.drop_table('classes')
    op.drop_table('user_roles')
    op.drop_table('users')
    sa.Enum(name='attendance_status').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='user_role').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='belt').drop(op.get_bind(), checkfirst=True)
