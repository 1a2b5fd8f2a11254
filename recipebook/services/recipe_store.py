"""Recipe persistence operations shared by the API and the pages."""

import logging
from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from ..core.translator_client import TranslatorClient
from ..errors import RecipeConflictError, RecipeNotFoundError
from ..models import Recipe, utcnow
from ..schemas import RecipeCreate, RecipeUpdate
from .storage import LocalImageStore
from .translation import apply_translations

logger = logging.getLogger("recipebook.recipes")


def _commit(db: Session, recipe: Recipe) -> Recipe:
    recipe_id = recipe.id
    try:
        db.commit()
    except StaleDataError:
        db.rollback()
        logger.warning(f"Concurrent update detected for recipe {recipe_id}")
        raise RecipeConflictError(recipe_id)
    db.refresh(recipe)
    return recipe


def _contains_pattern(search: str) -> str:
    """LIKE pattern for a literal, case-insensitive substring of ``search``."""
    term = search.strip().lower()
    term = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{term}%"


def list_recipes(
    db: Session,
    search: Optional[str] = None,
    category: Optional[str] = None,
    limit: int = 50,
    offset: int = 0,
) -> tuple[list[Recipe], int]:
    """Page of recipes ordered by title, plus the total number of matches."""
    query = db.query(Recipe)

    if search and search.strip():
        pattern = _contains_pattern(search)
        query = query.filter(
            or_(
                func.lower(Recipe.title).like(pattern, escape="\\"),
                func.lower(Recipe.description).like(pattern, escape="\\"),
                func.lower(Recipe.ingredients).like(pattern, escape="\\"),
            )
        )

    if category and category.strip():
        query = query.filter(func.lower(Recipe.category) == category.strip().lower())

    total = query.count()
    recipes = query.order_by(Recipe.title.asc(), Recipe.id.asc()).offset(offset).limit(limit).all()
    return recipes, total


def get_recipe(db: Session, recipe_id: int) -> Recipe:
    recipe = db.get(Recipe, recipe_id)
    if recipe is None:
        raise RecipeNotFoundError(recipe_id)
    return recipe


def list_categories(db: Session) -> list[str]:
    rows = (
        db.query(Recipe.category)
        .filter(Recipe.category.isnot(None))
        .distinct()
        .order_by(Recipe.category.asc())
        .all()
    )
    return [row[0] for row in rows]


def create_recipe(db: Session, payload: RecipeCreate, translator: TranslatorClient) -> Recipe:
    recipe = Recipe(
        title=payload.title,
        description=payload.description,
        ingredients=payload.ingredients,
        instructions=payload.instructions,
        prep_time_minutes=payload.prep_time_minutes,
        cook_time_minutes=payload.cook_time_minutes,
        servings=payload.servings,
        category=payload.category,
        is_verified=False,
        created_at=utcnow(),
    )
    # Translate before the insert so a provider outage never blocks the save
    apply_translations(recipe, translator)

    db.add(recipe)
    db.commit()
    db.refresh(recipe)
    logger.info(f"Created recipe {recipe.id} '{recipe.title}'")
    return recipe


def update_recipe(
    db: Session, recipe_id: int, payload: RecipeUpdate, translator: TranslatorClient
) -> Recipe:
    """Apply only the fields present in ``payload``; null means "leave as is"."""
    recipe = get_recipe(db, recipe_id)

    if payload.title is not None:
        recipe.title = payload.title
    if payload.description is not None:
        recipe.description = payload.description
    if payload.ingredients is not None:
        recipe.ingredients = payload.ingredients
    if payload.instructions is not None:
        recipe.instructions = payload.instructions
    if payload.prep_time_minutes is not None:
        recipe.prep_time_minutes = payload.prep_time_minutes
    if payload.cook_time_minutes is not None:
        recipe.cook_time_minutes = payload.cook_time_minutes
    if payload.servings is not None:
        recipe.servings = payload.servings
    if payload.category is not None:
        recipe.category = payload.category

    recipe.updated_at = utcnow()
    apply_translations(recipe, translator)

    _commit(db, recipe)
    logger.info(f"Updated recipe {recipe_id}")
    return recipe


def replace_recipe(
    db: Session, recipe_id: int, payload: RecipeCreate, translator: TranslatorClient
) -> Recipe:
    """Overwrite every editable field (admin edit form)."""
    recipe = get_recipe(db, recipe_id)

    recipe.title = payload.title
    recipe.description = payload.description
    recipe.ingredients = payload.ingredients
    recipe.instructions = payload.instructions
    recipe.prep_time_minutes = payload.prep_time_minutes
    recipe.cook_time_minutes = payload.cook_time_minutes
    recipe.servings = payload.servings
    recipe.category = payload.category

    recipe.updated_at = utcnow()
    apply_translations(recipe, translator)

    _commit(db, recipe)
    logger.info(f"Replaced recipe {recipe_id}")
    return recipe


def set_image(db: Session, recipe: Recipe, image_url: Optional[str]) -> Recipe:
    recipe.image_url = image_url
    recipe.updated_at = utcnow()
    return _commit(db, recipe)


def clear_image(db: Session, recipe: Recipe) -> Recipe:
    return set_image(db, recipe, None)


def verify_recipe(db: Session, recipe_id: int) -> Recipe:
    recipe = get_recipe(db, recipe_id)
    recipe.is_verified = True
    recipe.verified_at = utcnow()
    _commit(db, recipe)
    logger.info(f"Verified recipe {recipe_id}")
    return recipe


def delete_recipe(db: Session, recipe_id: int, image_store: LocalImageStore) -> None:
    recipe = get_recipe(db, recipe_id)
    if image_store.is_managed_url(recipe.image_url):
        image_store.delete(recipe.image_url)
    db.delete(recipe)
    db.commit()
    logger.info(f"Deleted recipe {recipe_id}")


def recent_recipes(db: Session, count: int = 4) -> list[Recipe]:
    return db.query(Recipe).order_by(Recipe.created_at.desc(), Recipe.id.desc()).limit(count).all()


def browse_recipes(
    db: Session, search: Optional[str] = None, category: Optional[str] = None
) -> list[Recipe]:
    """Public index: title/description search, exact category, newest first."""
    query = db.query(Recipe)
    if search and search.strip():
        pattern = _contains_pattern(search)
        query = query.filter(
            or_(
                func.lower(Recipe.title).like(pattern, escape="\\"),
                func.lower(Recipe.description).like(pattern, escape="\\"),
            )
        )
    if category:
        query = query.filter(Recipe.category == category)
    return query.order_by(Recipe.created_at.desc(), Recipe.id.desc()).all()


def parse_id_list(ids: Optional[str]) -> list[int]:
    """Positive integers from a comma-separated string; anything else is dropped."""
    result = []
    for part in (ids or "").split(","):
        part = part.strip()
        if part.isdigit() and int(part) > 0:
            result.append(int(part))
    return result


def recipes_for_print(db: Session, ids: Optional[str] = None, all_recipes: bool = False) -> list[Recipe]:
    query = db.query(Recipe)
    if not all_recipes:
        id_list = parse_id_list(ids)
        if not id_list:
            return []
        query = query.filter(Recipe.id.in_(id_list))
    return query.order_by(Recipe.title.asc()).all()
