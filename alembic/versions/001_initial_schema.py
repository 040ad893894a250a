"""Initial schema: tracked repair assets

Revision ID: 001_initial_schema
Revises:
Create Date: 2025-01-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'assets',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('asset_number', sa.String(100), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('tracking_date', sa.Date(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('completion_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('completed_by', sa.String(100), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id', name='pk_assets')
    )
    op.create_index('ix_assets_id', 'assets', ['id'], unique=False)
    # Deliberately not unique: duplicate numbers are only checked before insert
    op.create_index('ix_assets_asset_number', 'assets', ['asset_number'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_assets_asset_number', table_name='assets')
    op.drop_index('ix_assets_id', table_name='assets')
    op.drop_table('assets')
