"""create_attendance_tables

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d7b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

attendance_status = postgresql.ENUM(
    'present', 'late', 'absent', name='attendance_status_enum', create_type=False
)


def upgrade() -> None:
    """Upgrade schema - Create access control, office hours and attendance tables."""
    op.create_table(
        'departments',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'roles_tbl',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('department_id', sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_roles_tbl_department_id', 'roles_tbl', ['department_id'])

    op.create_table(
        'access_control',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('allowed_to', postgresql.ARRAY(sa.Integer()), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'office_hours',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('department_id', sa.Integer(), nullable=False),
        sa.Column('time_start', sa.Time(), nullable=False),
        sa.Column('time_end', sa.Time(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(
        'ix_office_hours_department_id', 'office_hours', ['department_id'], unique=True
    )

    attendance_status.create(op.get_bind(), checkfirst=True)
    op.create_table(
        'attendance_table',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('time_in', sa.Time(), nullable=True),
        sa.Column('time_out', sa.Time(), nullable=True),
        sa.Column('status', attendance_status, nullable=False),
        sa.Column('remarks', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        # One attendance row per user per day
        sa.UniqueConstraint('user_id', 'date', name='uq_attendance_user_date')
    )
    op.create_index('ix_attendance_table_user_id', 'attendance_table', ['user_id'])
    op.create_index('ix_attendance_table_date', 'attendance_table', ['date'])

    op.create_table(
        'sidebar_items',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('icon', sa.String(), nullable=True),
        sa.Column('user_access', postgresql.ARRAY(sa.Integer()), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )


def downgrade() -> None:
    """Downgrade schema - Drop attendance tables."""
    op.drop_table('sidebar_items')
    op.drop_index('ix_attendance_table_date', table_name='attendance_table')
    op.drop_index('ix_attendance_table_user_id', table_name='attendance_table')
    op.drop_table('attendance_table')
    attendance_status.drop(op.get_bind(), checkfirst=True)
    op.drop_index('ix_office_hours_department_id', table_name='office_hours')
    op.drop_table('office_hours')
    op.drop_table('access_control')
    op.drop_index('ix_roles_tbl_department_id', table_name='roles_tbl')
    op.drop_table('roles_tbl')
    op.drop_table('departments')
