"""Add verification flag and timestamp to recipes

Revision ID: 002_add_recipe_verification
Revises: 001_create_recipes
Create Date: 2025-12-27

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "002_add_recipe_verification"
down_revision: Union[str, None] = "001_create_recipes"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    with op.batch_alter_table("recipes") as batch_op:
        batch_op.add_column(
            sa.Column("is_verified", sa.Boolean, nullable=False, server_default=sa.false())
        )
        batch_op.add_column(sa.Column("verified_at", sa.DateTime(timezone=True), nullable=True))


def downgrade() -> None:
    with op.batch_alter_table("recipes") as batch_op:
        batch_op.drop_column("verified_at")
        batch_op.drop_column("is_verified")
