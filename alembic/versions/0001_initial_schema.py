"""initial_schema

Revision ID: 0001_initial_schema
Revises: 
Create Date: 2026-10-18 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'session_templates',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('focus_duration', sa.Integer(), nullable=False),
        sa.Column('break_duration', sa.Integer(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_session_templates_user_id', 'session_templates', ['user_id'])

    op.create_table(
        'timer_sessions',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('template_id', sa.Integer(), nullable=True),
        sa.Column('duration_minutes', sa.Integer(), nullable=False),
        sa.Column('phase', sa.String(), nullable=False),
        sa.Column('current_cycle', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('target_cycles', sa.Integer(), nullable=False, server_default='4'),
        sa.Column('completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('paused', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('start_time', sa.DateTime(), nullable=True),
        sa.Column('end_time', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('sentiment_label', sa.String(), nullable=True),
        sa.Column('sentiment_score', sa.Float(), nullable=True),
        sa.Column('analyzed_at', sa.DateTime(), nullable=True),
        sa.Column('session_group_id', sa.String(), nullable=True),
        sa.CheckConstraint("phase IN ('focus', 'short_break', 'long_break')", name='ck_timer_sessions_phase'),
        sa.ForeignKeyConstraint(['template_id'], ['session_templates.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_timer_sessions_user_id', 'timer_sessions', ['user_id'])
    op.create_index('ix_timer_sessions_completed', 'timer_sessions', ['completed'])
    op.create_index('ix_timer_sessions_session_group_id', 'timer_sessions', ['session_group_id'])
    op.create_index('ix_timer_sessions_user_completed', 'timer_sessions', ['user_id', 'completed'])

    op.create_table(
        'scheduled_sessions',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('template_id', sa.Integer(), nullable=True),
        sa.Column('title', sa.String(), nullable=True),
        sa.Column('start_datetime', sa.DateTime(), nullable=False),
        sa.Column('duration_min', sa.Integer(), nullable=True),
        sa.Column('completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['template_id'], ['session_templates.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_scheduled_sessions_user_id', 'scheduled_sessions', ['user_id'])
    op.create_index('ix_scheduled_sessions_start_datetime', 'scheduled_sessions', ['start_datetime'])


def downgrade():
    op.drop_index('ix_scheduled_sessions_start_datetime', table_name='scheduled_sessions')
    op.drop_index('ix_scheduled_sessions_user_id', table_name='scheduled_sessions')
    op.drop_table('scheduled_sessions')

    op.drop_index('ix_timer_sessions_user_completed', table_name='timer_sessions')
    op.drop_index('ix_timer_sessions_session_group_id', table_name='timer_sessions')
    op.drop_index('ix_timer_sessions_completed', table_name='timer_sessions')
    op.drop_index('ix_timer_sessions_user_id', table_name='timer_sessions')
    op.drop_table('timer_sessions')

    op.drop_index('ix_session_templates_user_id', table_name='session_templates')
    op.drop_table('session_templates')
