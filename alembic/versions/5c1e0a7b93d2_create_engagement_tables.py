"""Create engagement report tables

Revision ID: 5c1e0a7b93d2
Revises:
Create Date: 2026-10-18 10:12:04.118233

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5c1e0a7b93d2'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('timezone', sa.String(), nullable=False),
    )
    op.create_table(
        'artists',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
    )
    op.create_table(
        'user_events',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('artist_id', sa.Integer(), nullable=False),
        sa.Column('event_type', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )

    # Indexes for the report join and ordering
    op.create_index('ix_user_events_user_id', 'user_events', ['user_id'])
    op.create_index('ix_user_events_artist_id', 'user_events', ['artist_id'])
    op.create_index('idx_artist_created', 'user_events', ['artist_id', 'created_at'])


def downgrade():
    op.drop_index('idx_artist_created', 'user_events')
    op.drop_index('ix_user_events_artist_id', 'user_events')
    op.drop_index('ix_user_events_user_id', 'user_events')
    op.drop_table('user_events')
    op.drop_table('artists')
    op.drop_table('users')
