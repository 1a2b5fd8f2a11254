"""Recipes REST API router.

Endpoints:
- GET /api/recipes - List recipes (search, category, limit/offset)
- GET /api/recipes/categories - Distinct categories
- GET /api/recipes/{id} - Get recipe
- POST /api/recipes - Create recipe (auto-translated)
- PUT /api/recipes/{id} - Partial update (only supplied fields change)

Whole-recipe deletion is only available from the admin pages.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from ..core.translator_client import TranslatorClient
from ..deps import get_db, get_translator
from ..limiter import limiter
from ..schemas import (
    CategoriesResponse, ErrorResponse, RecipeCreate, RecipeListResponse, RecipeOut, RecipeUpdate
)
from ..services import recipe_store
from ..settings import settings

router = APIRouter()
logger = logging.getLogger("recipebook.recipes")

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Recipe not found"}}
BAD_REQUEST = {400: {"model": ErrorResponse, "description": "Invalid recipe data"}}


@router.get("/recipes", response_model=RecipeListResponse)
def list_recipes(
    db: Session = Depends(get_db),
    search: Optional[str] = Query(None, description="Matches title, description or ingredients"),
    category: Optional[str] = Query(None, description="Exact category, case-insensitive"),
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
):
    """List recipes ordered by title."""
    recipes, total = recipe_store.list_recipes(
        db, search=search, category=category, limit=limit, offset=offset
    )
    return RecipeListResponse(
        recipes=[RecipeOut.model_validate(r) for r in recipes],
        total_count=total,
        limit=limit,
        offset=offset,
    )


@router.get("/recipes/categories", response_model=CategoriesResponse)
def list_categories(db: Session = Depends(get_db)):
    """All categories in use, alphabetically."""
    return CategoriesResponse(categories=recipe_store.list_categories(db))


@router.get("/recipes/{recipe_id}", response_model=RecipeOut, responses=NOT_FOUND)
def get_recipe(recipe_id: int, db: Session = Depends(get_db)):
    return recipe_store.get_recipe(db, recipe_id)


@router.post("/recipes", response_model=RecipeOut, status_code=201, responses=BAD_REQUEST)
@limiter.limit(settings.rate_limit_writes)
def create_recipe(
    request: Request,  # Required for rate limiter
    payload: RecipeCreate,
    db: Session = Depends(get_db),
    translator: TranslatorClient = Depends(get_translator),
):
    """Create a recipe. Text is translated to the other language when a
    translation provider is configured."""
    return recipe_store.create_recipe(db, payload, translator)


@router.put(
    "/recipes/{recipe_id}",
    response_model=RecipeOut,
    responses={**BAD_REQUEST, **NOT_FOUND, 409: {"model": ErrorResponse}},
)
@limiter.limit(settings.rate_limit_writes)
def update_recipe(
    request: Request,  # Required for rate limiter
    recipe_id: int,
    payload: RecipeUpdate,
    db: Session = Depends(get_db),
    translator: TranslatorClient = Depends(get_translator),
):
    """Update a recipe. Omitted or null fields keep their stored values."""
    return recipe_store.update_recipe(db, recipe_id, payload, translator)
