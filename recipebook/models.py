"""SQLAlchemy ORM models for the recipe book.

Tables:
- recipes: Recipe records with English primary fields and Chinese mirror fields
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import String, DateTime, Text, Integer, Boolean, Index
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import false

from .db import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Primary field -> Chinese mirror field
MIRROR_FIELDS = {
    "title": "title_zh",
    "description": "description_zh",
    "ingredients": "ingredients_zh",
    "instructions": "instructions_zh",
    "category": "category_zh",
}


class Recipe(Base):
    """A recipe with bilingual text.

    The primary fields hold the text as entered (or its English translation
    when it was entered in Chinese). The ``*_zh`` mirrors are only ever
    written by the translation orchestrator.
    """
    __tablename__ = "recipes"
    __table_args__ = (
        Index("ix_recipes_title", "title"),
        Index("ix_recipes_category", "category"),
        Index("ix_recipes_created_at", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    ingredients: Mapped[str] = mapped_column(Text, nullable=False)
    instructions: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # Chinese mirrors
    title_zh: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    description_zh: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    ingredients_zh: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    instructions_zh: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category_zh: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    prep_time_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    cook_time_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    servings: Mapped[int] = mapped_column(Integer, nullable=False, default=4)

    image_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    is_verified: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    verified_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    # Optimistic concurrency: UPDATEs match on the version they loaded
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    @property
    def total_time_minutes(self) -> int:
        return (self.prep_time_minutes or 0) + (self.cook_time_minutes or 0)

    def localized(self, field: str, culture: str) -> Optional[str]:
        """Mirror value for ``zh`` when present, otherwise the primary value."""
        if culture == "zh":
            mirror = getattr(self, MIRROR_FIELDS[field])
            if mirror:
                return mirror
        return getattr(self, field)
