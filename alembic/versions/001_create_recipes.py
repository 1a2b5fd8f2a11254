"""Create recipes table

Revision ID: 001_create_recipes
Revises: 
Create Date: 2025-12-20

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001_create_recipes"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "recipes",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("ingredients", sa.Text, nullable=False),
        sa.Column("instructions", sa.Text, nullable=False),
        sa.Column("prep_time_minutes", sa.Integer, nullable=False, server_default="0"),
        sa.Column("cook_time_minutes", sa.Integer, nullable=False, server_default="0"),
        sa.Column("servings", sa.Integer, nullable=False, server_default="4"),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column("image_url", sa.String(500), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        # Optimistic concurrency counter
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
    )
    op.create_index("ix_recipes_title", "recipes", ["title"])
    op.create_index("ix_recipes_category", "recipes", ["category"])
    op.create_index("ix_recipes_created_at", "recipes", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_recipes_created_at", table_name="recipes")
    op.drop_index("ix_recipes_category", table_name="recipes")
    op.drop_index("ix_recipes_title", table_name="recipes")
    op.drop_table("recipes")
