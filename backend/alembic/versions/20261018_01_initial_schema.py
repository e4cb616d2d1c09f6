"""users, templates and user checklists

Revision ID: 20261018_01
Revises:
Create Date: 2026-10-18 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa
from typing import Sequence, Union

revision: str = '20261018_01'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.UUID(), primary_key=True),
        sa.Column('phone', sa.String(length=11), nullable=True, unique=True),
        sa.Column('email', sa.String(), nullable=True, unique=True),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('nickname', sa.String(length=50), nullable=False),
        sa.Column('avatar_url', sa.String(), nullable=True),
        sa.Column('home_city', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_table(
        'templates',
        sa.Column('id', sa.UUID(), primary_key=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('location_tag', sa.String(length=50), nullable=False),
        sa.Column('steps', sa.JSON(), nullable=False),
        sa.Column('parent_id', sa.UUID(), sa.ForeignKey('templates.id', ondelete='SET NULL'), nullable=True),
        sa.Column('created_by', sa.UUID(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('is_official', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('idx_templates_location_tag', 'templates', ['location_tag'])
    op.create_index('idx_templates_created_by', 'templates', ['created_by'])
    op.create_index('idx_templates_created_at', 'templates', ['created_at'])

    op.create_table(
        'user_checklists',
        sa.Column('id', sa.UUID(), primary_key=True),
        sa.Column('user_id', sa.UUID(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('source_template_id', sa.UUID(), sa.ForeignKey('templates.id'), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('progress_status', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('idx_user_checklists_user_id', 'user_checklists', ['user_id'])
    op.create_index('idx_user_checklists_created_at', 'user_checklists', ['created_at'])


def downgrade() -> None:
    op.drop_index('idx_user_checklists_created_at', table_name='user_checklists')
    op.drop_index('idx_user_checklists_user_id', table_name='user_checklists')
    op.drop_table('user_checklists')
    op.drop_index('idx_templates_created_at', table_name='templates')
    op.drop_index('idx_templates_created_by', table_name='templates')
    op.drop_index('idx_templates_location_tag', table_name='templates')
    op.drop_table('templates')
    op.drop_table('users')
