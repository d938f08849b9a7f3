"""Initial schema: organizations, profiles, projects, memberships and time entries.

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-01-12
"""

from alembic import op
import sqlalchemy as sa

revision = '0001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]


def upgrade():
    op.create_table(
        'organizations',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        'profiles',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('org_id', sa.String(36), sa.ForeignKey('organizations.id'), nullable=False),
        sa.Column('role', sa.String(20), nullable=False, server_default='contractor'),
        sa.Column('full_name', sa.String(255)),
        sa.Column('email', sa.String(255)),
        sa.Column('hourly_rate', sa.Numeric(10, 2)),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('manager_id', sa.String(36), sa.ForeignKey('profiles.id')),
        sa.Column('phone', sa.String(50)),
        sa.Column('address', sa.Text()),
        sa.Column('onboarding_completed_at', sa.DateTime(timezone=True)),
        *_timestamps(),
        sa.CheckConstraint("role IN ('admin', 'manager', 'contractor')", name='ck_profiles_role'),
        sa.CheckConstraint('hourly_rate IS NULL OR hourly_rate >= 0', name='ck_profiles_rate'),
        sa.CheckConstraint('manager_id IS NULL OR manager_id <> id', name='ck_profiles_not_own_manager'),
    )
    op.create_index('idx_profiles_org', 'profiles', ['org_id'])
    op.create_index('idx_profiles_org_manager', 'profiles', ['org_id', 'manager_id'])
    op.create_index('idx_profiles_org_email', 'profiles', ['org_id', 'email'])

    op.create_table(
        'projects',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('org_id', sa.String(36), sa.ForeignKey('organizations.id'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('week_start', sa.String(10), nullable=False, server_default='sunday'),
        *_timestamps(),
        sa.CheckConstraint("week_start IN ('sunday', 'monday')", name='ck_projects_week_start'),
    )
    op.create_index('idx_projects_org_active', 'projects', ['org_id', 'is_active'])

    op.create_table(
        'project_members',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('org_id', sa.String(36), sa.ForeignKey('organizations.id'), nullable=False),
        sa.Column('project_id', sa.String(36), sa.ForeignKey('projects.id'), nullable=False),
        sa.Column('profile_id', sa.String(36), sa.ForeignKey('profiles.id'), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.UniqueConstraint('project_id', 'profile_id', name='uq_project_members_project_profile'),
    )
    op.create_index('idx_project_members_profile', 'project_members', ['org_id', 'profile_id', 'is_active'])

    op.create_table(
        'time_entries',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('org_id', sa.String(36), sa.ForeignKey('organizations.id'), nullable=False),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('profiles.id'), nullable=False),
        sa.Column('project_id', sa.String(36), sa.ForeignKey('projects.id')),
        sa.Column('entry_date', sa.Date(), nullable=False),
        sa.Column('time_in', sa.Time()),
        sa.Column('time_out', sa.Time()),
        sa.Column('lunch_hours', sa.Numeric(5, 2), nullable=False, server_default='0'),
        sa.Column('mileage', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('notes', sa.Text()),
        sa.Column('status', sa.String(20), nullable=False, server_default='draft'),
        sa.Column('hourly_rate_snapshot', sa.Numeric(10, 2)),
        sa.Column('approved_by', sa.String(36), sa.ForeignKey('profiles.id')),
        sa.Column('approved_at', sa.DateTime(timezone=True)),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('draft', 'submitted', 'approved', 'rejected')",
            name='ck_time_entries_status'
        ),
        sa.CheckConstraint('lunch_hours >= 0', name='ck_time_entries_lunch'),
        sa.CheckConstraint('mileage >= 0', name='ck_time_entries_mileage'),
    )
    op.create_index('idx_time_entries_org_user_date', 'time_entries', ['org_id', 'user_id', 'entry_date'])
    op.create_index('idx_time_entries_org_status_date', 'time_entries', ['org_id', 'status', 'entry_date'])
    op.create_index('idx_time_entries_project', 'time_entries', ['project_id'])


def downgrade():
    op.drop_table('time_entries')
    op.drop_table('project_members')
    op.drop_table('projects')
    op.drop_table('profiles')
    op.drop_table('organizations')
