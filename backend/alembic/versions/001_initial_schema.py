"""Initial database schema

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # === ORGANIZATIONS TABLE ===
    op.create_table(
        'organizations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(256), nullable=False),
        sa.Column('slug', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('timezone', sa.String(50), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_organizations_id', 'organizations', ['id'])
    op.create_index('ix_organizations_name', 'organizations', ['name'])
    op.create_index('ix_organizations_slug', 'organizations', ['slug'], unique=True)

    # === RESOURCES TABLE ===
    op.create_table(
        'resources',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('organization_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(256), nullable=False),
        sa.Column('type', sa.Enum('human', 'material', 'equipment', name='resourcetype'), nullable=False),
        sa.Column('hourly_rate', sa.Numeric(10, 2), nullable=False),
        sa.Column('daily_work_hours', sa.Numeric(4, 2), nullable=False),
        sa.Column('currency', sa.String(3), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['organization_id'], ['organizations.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_resources_id', 'resources', ['id'])
    op.create_index('ix_resources_organization_id', 'resources', ['organization_id'])
    op.create_index('ix_resources_type', 'resources', ['type'])
    op.create_index('ix_resources_is_active', 'resources', ['is_active'])

    # === RESOURCE WORK SCHEDULES TABLE ===
    op.create_table(
        'resource_work_schedules',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('resource_id', sa.Integer(), nullable=False),
        sa.Column('day_of_week', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('start_time', sa.Time(), nullable=False),
        sa.Column('end_time', sa.Time(), nullable=False),
        sa.Column('hourly_rate', sa.Numeric(10, 2), nullable=True),
        sa.Column('currency', sa.String(3), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['resource_id'], ['resources.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('resource_id', 'day_of_week', name='uq_work_schedule_resource_day')
    )
    op.create_index('ix_resource_work_schedules_id', 'resource_work_schedules', ['id'])
    op.create_index('ix_resource_work_schedules_resource_id', 'resource_work_schedules', ['resource_id'])

    # === RESOURCE AVAILABILITY EXCEPTIONS TABLE ===
    op.create_table(
        'resource_availability_exceptions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('organization_id', sa.Integer(), nullable=False),
        sa.Column('resource_id', sa.Integer(), nullable=False),
        sa.Column('exception_date', sa.Date(), nullable=False),
        sa.Column('start_time', sa.Time(), nullable=True),
        sa.Column('end_time', sa.Time(), nullable=True),
        sa.Column('hours_available', sa.Numeric(4, 2), nullable=False),
        sa.Column('hourly_rate', sa.Numeric(10, 2), nullable=True),
        sa.Column('currency', sa.String(3), nullable=True),
        sa.Column('exception_type', sa.Enum('vacation', 'sick_leave', 'holiday', 'training', 'unavailable', 'custom', name='exceptiontype'), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('notes', sa.String(1000), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['organization_id'], ['organizations.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['resource_id'], ['resources.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('resource_id', 'exception_date', name='uq_availability_exception_resource_date')
    )
    op.create_index('ix_resource_availability_exceptions_id', 'resource_availability_exceptions', ['id'])
    op.create_index(
        'ix_resource_availability_exceptions_organization_id', 'resource_availability_exceptions', ['organization_id']
    )
    op.create_index(
        'ix_resource_availability_exceptions_resource_id', 'resource_availability_exceptions', ['resource_id']
    )
    op.create_index(
        'ix_resource_availability_exceptions_exception_date', 'resource_availability_exceptions', ['exception_date']
    )


def downgrade() -> None:
    # Drop tables in reverse order of creation (respecting foreign keys)
    op.drop_index('ix_resource_availability_exceptions_exception_date', 'resource_availability_exceptions')
    op.drop_index('ix_resource_availability_exceptions_resource_id', 'resource_availability_exceptions')
    op.drop_index('ix_resource_availability_exceptions_organization_id', 'resource_availability_exceptions')
    op.drop_index('ix_resource_availability_exceptions_id', 'resource_availability_exceptions')
    op.drop_table('resource_availability_exceptions')

    op.drop_index('ix_resource_work_schedules_resource_id', 'resource_work_schedules')
    op.drop_index('ix_resource_work_schedules_id', 'resource_work_schedules')
    op.drop_table('resource_work_schedules')

    op.drop_index('ix_resources_is_active', 'resources')
    op.drop_index('ix_resources_type', 'resources')
    op.drop_index('ix_resources_organization_id', 'resources')
    op.drop_index('ix_resources_id', 'resources')
    op.drop_table('resources')

    op.drop_index('ix_organizations_slug', 'organizations')
    op.drop_index('ix_organizations_name', 'organizations')
    op.drop_index('ix_organizations_id', 'organizations')
    op.drop_table('organizations')

    # Drop enum types (PostgreSQL only)
    if op.get_bind().dialect.name == "postgresql":
        sa.Enum(name='exceptiontype').drop(op.get_bind(), checkfirst=True)
        sa.Enum(name='resourcetype').drop(op.get_bind(), checkfirst=True)
