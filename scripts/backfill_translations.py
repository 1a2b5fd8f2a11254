import sys
import os

# Add repo root to sys.path
sys.path.append(os.path.join(os.path.dirname(__file__), "../"))

from recipebook.core.translator_client import get_translator
from recipebook.db import make_engine, session_scope
from recipebook.models import Recipe, utcnow
from recipebook.services.translation import apply_translations
from recipebook.settings import settings


def backfill(session, translator) -> int:
    """Translate recipes that have no Chinese title yet. Returns how many were processed."""
    # Recipes saved before translation was configured have no Chinese title
    recipes = session.query(Recipe).filter(Recipe.title_zh.is_(None)).all()
    print(f"Found {len(recipes)} recipes to backfill.")

    for recipe in recipes:
        report = apply_translations(recipe, translator)
        recipe.updated_at = utcnow()
        status = "ok" if not report.failed_fields else f"failed: {', '.join(report.failed_fields)}"
        print(f"Recipe {recipe.id} ('{recipe.title}'): {report.direction} {status}")

    session.commit()
    return len(recipes)


def backfill_translations():
    translator = get_translator()
    if not translator.is_available():
        print(f"Translation provider '{settings.translation_provider}' is not configured; nothing to do.")
        return

    print(f"Connecting to {settings.database_url}...")
    try:
        with session_scope(make_engine()) as session:
            count = backfill(session, translator)
    except Exception as e:
        print(f"Error: {e}")
        raise
    print(f"Backfill complete ({count} recipes).")


if __name__ == "__main__":
    backfill_translations()
