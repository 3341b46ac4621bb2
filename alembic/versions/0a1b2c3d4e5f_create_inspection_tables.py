"""create inspection tables

Revision ID: 0a1b2c3d4e5f
Revises:
Create Date: 2026-10-18 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0a1b2c3d4e5f'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'inspection_group',
        sa.Column('id', sa.BigInteger(), autoincrement=False, nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_table(
        'inspection_region',
        sa.Column('id', sa.BigInteger(), autoincrement=False, nullable=False),
        sa.Column('group_id', sa.BigInteger(), nullable=False),
        sa.Column('coord_x', sa.Float(), nullable=False),
        sa.Column('coord_y', sa.Float(), nullable=False),
        sa.Column('category', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['group_id'], ['inspection_group.id']),
        sa.PrimaryKeyConstraint('id')
    )


def downgrade() -> None:
    op.drop_table('inspection_region')
    op.drop_table('inspection_group')
