"""Add Chinese mirror columns to recipes

Revision ID: 003_add_multi_language_fields
Revises: 002_add_recipe_verification
Create Date: 2025-12-29

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "003_add_multi_language_fields"
down_revision: Union[str, None] = "002_add_recipe_verification"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Filled by translation on create/update, or by scripts/backfill_translations.py
    with op.batch_alter_table("recipes") as batch_op:
        batch_op.add_column(sa.Column("title_zh", sa.String(200), nullable=True))
        batch_op.add_column(sa.Column("description_zh", sa.String(500), nullable=True))
        batch_op.add_column(sa.Column("ingredients_zh", sa.Text, nullable=True))
        batch_op.add_column(sa.Column("instructions_zh", sa.Text, nullable=True))
        batch_op.add_column(sa.Column("category_zh", sa.String(100), nullable=True))


def downgrade() -> None:
    with op.batch_alter_table("recipes") as batch_op:
        batch_op.drop_column("category_zh")
        batch_op.drop_column("instructions_zh")
        batch_op.drop_column("ingredients_zh")
        batch_op.drop_column("description_zh")
        batch_op.drop_column("title_zh")
