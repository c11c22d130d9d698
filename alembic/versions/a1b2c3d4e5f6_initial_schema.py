"""initial_schema

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'a1b2c3d4e5f6'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('phone', sa.String(length=20), nullable=False),
        sa.Column('city', sa.String(length=200), nullable=False, server_default=''),
        sa.Column('organization', sa.String(length=200), nullable=False, server_default=''),
        sa.Column('profession', sa.String(length=200), nullable=False, server_default=''),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('is_minor', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('parent_guardian_name', sa.String(length=100), nullable=True),
        sa.Column('allow_communication', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('waiver_signed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('waiver_signed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('waiver_method', sa.String(length=20), nullable=True),
        sa.Column('total_hours', sa.Float(), nullable=False, server_default='0'),
        sa.Column('total_bags', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_checked_in', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('last_check_in', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_users_email', 'users', ['email'])
    op.create_index('idx_users_checked_in', 'users', ['is_checked_in'])

    op.create_table(
        'volunteer_sessions',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('check_in_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('check_out_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('hours_worked', sa.Float(), nullable=False),
        sa.Column('notes', sa.String(length=500), nullable=True),
    )
    op.create_index('idx_sessions_user', 'volunteer_sessions', ['user_id'])
    op.create_index('idx_sessions_check_in', 'volunteer_sessions', ['check_in_time'])

    op.create_table(
        'donations',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('bag_count', sa.Integer(), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint('bag_count > 0', name='ck_donations_positive_bags'),
    )
    op.create_index('idx_donations_user', 'donations', ['user_id'])
    op.create_index('idx_donations_timestamp', 'donations', ['timestamp'])

    op.create_table(
        'waiver_requests',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('token', sa.String(length=64), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('parent_email', sa.String(length=254), nullable=False),
        sa.Column('volunteer_name', sa.String(length=100), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('parent_signature', sa.String(length=100), nullable=True),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('signed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_waiver_requests_token', 'waiver_requests', ['token'], unique=True)

    op.create_table(
        'system_settings',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('key', sa.String(length=100), nullable=False),
        sa.Column('value', sa.Text(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_system_settings_key', 'system_settings', ['key'], unique=True)

    op.create_table(
        'staff_profiles',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('display_name', sa.String(length=100), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='staff'),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('first_login', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_staff_profiles_email', 'staff_profiles', ['email'], unique=True)
    op.create_index('ix_staff_profiles_username', 'staff_profiles', ['username'], unique=True)

    op.create_table(
        'hour_adjustments',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('session_id', sa.Integer(), nullable=True),
        sa.Column('old_hours', sa.Float(), nullable=False),
        sa.Column('new_hours', sa.Float(), nullable=False),
        sa.Column('reason', sa.String(length=500), nullable=True),
        sa.Column('adjusted_by', sa.String(length=100), nullable=False),
        sa.Column('adjusted_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_hour_adjustments_user_id', 'hour_adjustments', ['user_id'])


def downgrade():
    op.drop_table('hour_adjustments')
    op.drop_table('staff_profiles')
    op.drop_table('system_settings')
    op.drop_table('waiver_requests')
    op.drop_table('donations')
    op.drop_table('volunteer_sessions')
    op.drop_table('users')
