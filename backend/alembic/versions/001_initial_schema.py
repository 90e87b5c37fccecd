"""Initial schema

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


def upgrade() -> None:
    jurisdiction = sa.Enum('federal', 'state', 'local', name='jurisdiction')

    # Create rules table
    op.create_table(
        'rules',
        sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('jurisdiction', jurisdiction, nullable=False),
        sa.Column('authority', sa.String(length=255), nullable=False),
        sa.Column('scope', sa.JSON(), nullable=True),
        sa.Column('conditions', sa.JSON(), nullable=False),
        sa.Column('requirements', sa.JSON(), nullable=False),
        sa.Column('penalties', sa.Text(), nullable=True),
        sa.Column('references', sa.JSON(), nullable=False),
        sa.Column('tags', sa.JSON(), nullable=False),
    )
    op.create_index('ix_rules_title', 'rules', ['title'])
    op.create_index('ix_rules_jurisdiction', 'rules', ['jurisdiction'])
    op.create_index('ix_rules_authority', 'rules', ['authority'])
    op.create_index('ix_rules_title_authority', 'rules', ['title', 'authority'], unique=True)


def downgrade() -> None:
    op.drop_index('ix_rules_title_authority', table_name='rules')
    op.drop_index('ix_rules_authority', table_name='rules')
    op.drop_index('ix_rules_jurisdiction', table_name='rules')
    op.drop_index('ix_rules_title', table_name='rules')
    op.drop_table('rules')

    # Drop ENUM types
    op.execute('DROP TYPE jurisdiction')
