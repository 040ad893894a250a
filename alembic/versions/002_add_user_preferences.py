"""Add user_preferences table for the theme setting

Revision ID: 002_add_user_preferences
Revises: 001_initial_schema
Create Date: 2025-01-01 00:00:01.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '002_add_user_preferences'
down_revision: Union[str, None] = '001_initial_schema'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'user_preferences',
        sa.Column('username', sa.String(100), nullable=False),
        sa.Column('dark_mode', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('username', name='pk_user_preferences')
    )


def downgrade() -> None:
    op.drop_table('user_preferences')
