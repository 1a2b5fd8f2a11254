"""Public HTML pages.

Pages:
- GET / - Home with the most recently added recipes
- GET /recipes - Browse with search and category filter
- GET /recipes/print - Print view for selected (or all) recipes
- GET /recipes/{id} - Recipe details
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from ..deps import get_db
from ..errors import RecipeNotFoundError
from ..services import recipe_store
from ..templating import render

router = APIRouter()

RECENT_COUNT = 4


@router.get("/", include_in_schema=False)
def home(request: Request, db: Session = Depends(get_db)):
    recipes = recipe_store.recent_recipes(db, count=RECENT_COUNT)
    return render(request, "index.html", {"recipes": recipes})


@router.get("/recipes", include_in_schema=False)
def browse(
    request: Request,
    search: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    recipes = recipe_store.browse_recipes(db, search=search, category=category)
    return render(
        request,
        "recipes/index.html",
        {
            "recipes": recipes,
            "categories": recipe_store.list_categories(db),
            "search": search or "",
            "category": category or "",
        },
    )


# Registered before /recipes/{recipe_id} so "print" never reaches the id route
@router.get("/recipes/print", include_in_schema=False)
def print_recipes(
    request: Request,
    ids: Optional[str] = Query(None),
    all: bool = Query(False),
    db: Session = Depends(get_db),
):
    recipes = recipe_store.recipes_for_print(db, ids=ids, all_recipes=all)
    return render(request, "recipes/print.html", {"recipes": recipes})


@router.get("/recipes/{recipe_id}", include_in_schema=False)
def details(request: Request, recipe_id: int, db: Session = Depends(get_db)):
    try:
        recipe = recipe_store.get_recipe(db, recipe_id)
    except RecipeNotFoundError:
        return render(request, "recipes/not_found.html", {"recipe_id": recipe_id}, status_code=404)
    return render(request, "recipes/details.html", {"recipe": recipe})
