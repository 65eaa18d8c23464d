"""Initial schema - analyzed conversation sessions

Revision ID: 001_initial_schema
Revises: 
Create Date: 2026-10-17 00:00:00.000000

Creates the MoodLog database schema:
- sessions: One append-only row per analyzed conversation
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'sessions',
        sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column('session_id', sa.String(64), nullable=False),
        sa.Column('user_id', sa.String(100), nullable=False),
        sa.Column('date', sa.DateTime(), nullable=False),
        sa.Column('conversation_text', sa.Text(), nullable=False),
        sa.Column('overall_mood', sa.String(10), nullable=False),
        sa.Column('mood_score', sa.Integer(), nullable=False),
        sa.Column('stress_triggers', postgresql.JSONB(), nullable=False, server_default='[]'),
        sa.Column('suggestions', postgresql.JSONB(), nullable=False, server_default='[]'),
        sa.Column('key_topics', postgresql.JSONB(), nullable=False, server_default='[]'),
        sa.Column('ai_generated_summary', sa.Text(), nullable=False),
        sa.Column('message_count', sa.Integer(), nullable=False),
        sa.Column('session_duration', sa.Float(), nullable=False, server_default='0'),
        sa.Column('model', sa.String(100), nullable=False, server_default=''),
        sa.Column('processing_time', sa.Integer(), nullable=False, server_default='0'),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('mood_score >= 1 AND mood_score <= 10', name='ck_sessions_mood_score'),
        sa.CheckConstraint('message_count >= 1', name='ck_sessions_message_count'),
        sa.CheckConstraint('session_duration >= 0', name='ck_sessions_session_duration'),
    )
    op.create_index('ix_sessions_session_id', 'sessions', ['session_id'], unique=True)
    op.create_index('ix_sessions_date', 'sessions', ['date'])
    op.create_index('ix_sessions_user_id_date', 'sessions', ['user_id', 'date'])
    op.create_index('ix_sessions_overall_mood_date', 'sessions', ['overall_mood', 'date'])


def downgrade() -> None:
    op.drop_index('ix_sessions_overall_mood_date', table_name='sessions')
    op.drop_index('ix_sessions_user_id_date', table_name='sessions')
    op.drop_index('ix_sessions_date', table_name='sessions')
    op.drop_index('ix_sessions_session_id', table_name='sessions')
    op.drop_table('sessions')
