"""one attendance per student per session

Revision ID: 8d2b6e0c4a57
Revises: 1f4c9a2e7b31
Create Date: 2026-01-09 21:04:37.118920

"""
from typing import Sequence, Union

from alembic import op
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '8d2b6e0c4a57'
down_revision: Union[str, None] = '1f4c9a2e7b31'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

CONSTRAINT = 'uq_attendance_session_student'


def constraint_exists(table_name: str, name: str) -> bool:
    inspector = inspect(op.get_bind())
    return any(c["name"] == name for c in inspector.get_unique_constraints(table_name))


def upgrade() -> None:
    # duplicates must be cleaned up by hand before this runs
    if not constraint_exists('attendances', CONSTRAINT):
        with op.batch_alter_table('attendances') as batch_op:
            batch_op.create_unique_constraint(CONSTRAINT, ['session_id', 'student_id'])


def downgrade() -> None:
    if constraint_exists('attendances', CONSTRAINT):
        with op.batch_alter_table('attendances') as batch_op:
            batch_op.drop_constraint(CONSTRAINT, type_='unique')
