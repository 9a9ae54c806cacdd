"""Initial schema with slug-addressed content tables.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SIMPLE_CONTENT_TABLES = (
    'blog_posts',
    'career_positions',
    'categories',
    'career_categories',
    'partners',
)


def _content_columns() -> list[sa.Column]:
    return [
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('slug', sa.String(length=80), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
    ]


def upgrade() -> None:
    # Create projects table
    op.create_table(
        'projects',
        *_content_columns(),
        sa.Column('client_name', sa.String(length=255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='completed'),
        sa.Column('is_featured', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('view_count', sa.Integer(), nullable=False, server_default='0'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug', name='uq_projects_slug'),
    )
    op.create_index('ix_projects_active_created', 'projects', ['is_active', 'created_at'])

    for table in SIMPLE_CONTENT_TABLES:
        op.create_table(
            table,
            *_content_columns(),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('slug', name=f'uq_{table}_slug'),
        )


def downgrade() -> None:
    for table in reversed(SIMPLE_CONTENT_TABLES):
        op.drop_table(table)
    op.drop_index('ix_projects_active_created', table_name='projects')
    op.drop_table('projects')
