"""add first_name and last_name to users

Revision ID: 2f9b6d3e8a14
Revises: 7c1e4a2b9d01
Create Date: 2025-10-03 09:24:05.118903

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '2f9b6d3e8a14'
down_revision: Union[str, None] = '7c1e4a2b9d01'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _recreate_mode() -> str:
    # SQLite cannot ALTER TABLE ADD a NOT NULL column without a default
    return "always" if op.get_bind().dialect.name == "sqlite" else "auto"


def upgrade() -> None:
    """Upgrade schema."""
    with op.batch_alter_table('users', recreate=_recreate_mode()) as batch_op:
        batch_op.add_column(sa.Column('first_name', sa.String(length=50), nullable=False))
        batch_op.add_column(sa.Column('last_name', sa.String(length=50), nullable=False))


def downgrade() -> None:
    """Downgrade schema."""
    with op.batch_alter_table('users', recreate=_recreate_mode()) as batch_op:
        batch_op.drop_column('last_name')
        batch_op.drop_column('first_name')
