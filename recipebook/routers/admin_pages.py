"""Admin HTML pages for managing recipes.

Every route requires HTTP Basic credentials (see ``deps.require_admin``).

Pages:
- GET/POST /admin/recipes/create - New recipe with optional image
- GET/POST /admin/recipes/{id}/edit - Replace all fields, optionally a new image
- POST /admin/recipes/{id}/verify - Mark as verified
- GET/POST /admin/recipes/{id}/delete - Confirm and delete
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import RedirectResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session

from ..core.translator_client import TranslatorClient
from ..deps import get_db, get_image_store, get_translator, require_admin
from ..errors import RecipeConflictError, RecipeNotFoundError
from ..models import Recipe
from ..schemas import RecipeCreate
from ..services import recipe_store
from ..services.storage import ALLOWED_EXTENSIONS, MAX_FILE_SIZE, ImageUpload, LocalImageStore
from ..templating import render

logger = logging.getLogger("recipebook.admin")

router = APIRouter(prefix="/admin/recipes", dependencies=[Depends(require_admin)])

FORM_FIELDS = (
    "title", "description", "ingredients", "instructions",
    "prep_time_minutes", "cook_time_minutes", "servings", "category",
)

# camelCase alias -> form field name, for validation error locations
FIELD_ALIASES = {RecipeCreate.model_fields[f].alias or f: f for f in FORM_FIELDS}


def _invalid_image_message() -> str:
    return (
        f"Invalid image file. Allowed types: {', '.join(ALLOWED_EXTENSIONS)}. "
        f"Max size: {MAX_FILE_SIZE // (1024 * 1024)}MB."
    )


def _form_values(
    title: str,
    description: str,
    ingredients: str,
    instructions: str,
    prep_time_minutes: str,
    cook_time_minutes: str,
    servings: str,
    category: str,
) -> dict:
    values = {
        "title": title,
        "description": description,
        "ingredients": ingredients,
        "instructions": instructions,
        "prep_time_minutes": prep_time_minutes,
        "cook_time_minutes": cook_time_minutes,
        "servings": servings,
        "category": category,
    }
    return {k: v.strip() if isinstance(v, str) else v for k, v in values.items()}


def _recipe_values(recipe: Recipe) -> dict:
    values = {}
    for field in FORM_FIELDS:
        value = getattr(recipe, field)
        values[field] = "" if value is None else value
    return values


def _parse_form(values: dict) -> tuple[Optional[RecipeCreate], dict]:
    """Validate submitted form values. Blank optional fields fall back to defaults."""
    data = {k: v for k, v in values.items() if v != ""}
    try:
        return RecipeCreate.model_validate(data), {}
    except ValidationError as e:
        errors = {}
        for err in e.errors():
            field = str(err["loc"][0]) if err.get("loc") else "form"
            field = FIELD_ALIASES.get(field, field)
            errors.setdefault(field, err["msg"])
        return None, errors


def _read_image(image_file: Optional[UploadFile]) -> Optional[ImageUpload]:
    """The uploaded image, or None when the file input was left empty."""
    if image_file is None or not image_file.filename:
        return None
    upload = ImageUpload.from_stream(image_file.filename, image_file.content_type, image_file.file)
    if not upload.data:
        return None
    return upload


def _render_form(
    request: Request,
    values: dict,
    errors: dict,
    recipe: Optional[Recipe] = None,
    status_code: int = 200,
):
    return render(
        request,
        "admin/form.html",
        {
            "recipe": recipe,
            "values": values,
            "errors": errors,
            "allowed_extensions": ALLOWED_EXTENSIONS,
            "max_size_mb": MAX_FILE_SIZE // (1024 * 1024),
        },
        status_code=status_code,
    )


def _not_found(request: Request, recipe_id: int):
    return render(request, "recipes/not_found.html", {"recipe_id": recipe_id}, status_code=404)


@router.get("/create", include_in_schema=False)
def create_form(request: Request):
    return _render_form(request, values={"servings": 4, "prep_time_minutes": 0, "cook_time_minutes": 0}, errors={})


@router.post("/create", include_in_schema=False)
def create_submit(
    request: Request,
    title: str = Form(""),
    description: str = Form(""),
    ingredients: str = Form(""),
    instructions: str = Form(""),
    prep_time_minutes: str = Form(""),
    cook_time_minutes: str = Form(""),
    servings: str = Form(""),
    category: str = Form(""),
    image_file: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    translator: TranslatorClient = Depends(get_translator),
    store: LocalImageStore = Depends(get_image_store),
):
    values = _form_values(
        title, description, ingredients, instructions,
        prep_time_minutes, cook_time_minutes, servings, category,
    )
    payload, errors = _parse_form(values)
    if payload is None:
        return _render_form(request, values, errors, status_code=400)

    image = _read_image(image_file)
    if image is not None and not store.validate(image):
        return _render_form(request, values, {"image_file": _invalid_image_message()}, status_code=400)

    recipe = recipe_store.create_recipe(db, payload, translator)

    if image is not None:
        image_url = store.upload(image, recipe_id=recipe.id)
        if image_url is not None:
            recipe_store.set_image(db, recipe, image_url)
        else:
            logger.error(f"Image upload failed for new recipe {recipe.id}")

    return RedirectResponse(f"/recipes/{recipe.id}", status_code=303)


@router.get("/{recipe_id}/edit", include_in_schema=False)
def edit_form(request: Request, recipe_id: int, db: Session = Depends(get_db)):
    try:
        recipe = recipe_store.get_recipe(db, recipe_id)
    except RecipeNotFoundError:
        return _not_found(request, recipe_id)
    return _render_form(request, _recipe_values(recipe), {}, recipe=recipe)


@router.post("/{recipe_id}/edit", include_in_schema=False)
def edit_submit(
    request: Request,
    recipe_id: int,
    title: str = Form(""),
    description: str = Form(""),
    ingredients: str = Form(""),
    instructions: str = Form(""),
    prep_time_minutes: str = Form(""),
    cook_time_minutes: str = Form(""),
    servings: str = Form(""),
    category: str = Form(""),
    image_file: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    translator: TranslatorClient = Depends(get_translator),
    store: LocalImageStore = Depends(get_image_store),
):
    try:
        recipe = recipe_store.get_recipe(db, recipe_id)
    except RecipeNotFoundError:
        return _not_found(request, recipe_id)

    values = _form_values(
        title, description, ingredients, instructions,
        prep_time_minutes, cook_time_minutes, servings, category,
    )
    payload, errors = _parse_form(values)
    if payload is None:
        return _render_form(request, values, errors, recipe=recipe, status_code=400)

    image = _read_image(image_file)
    if image is not None:
        if not store.validate(image):
            return _render_form(
                request, values, {"image_file": _invalid_image_message()}, recipe=recipe, status_code=400
            )
        image_url = store.upload(image, recipe_id=recipe_id)
        if image_url is None:
            return _render_form(
                request, values, {"image_file": "Failed to upload image. Please try again."},
                recipe=recipe, status_code=400,
            )
        previous = recipe.image_url
        recipe_store.set_image(db, recipe, image_url)
        if store.is_managed_url(previous):
            store.delete(previous)
    # No new file keeps the current image

    try:
        recipe_store.replace_recipe(db, recipe_id, payload, translator)
    except RecipeConflictError:
        errors = {"form": "This recipe was changed by someone else. Reload and try again."}
        return _render_form(request, values, errors, recipe=recipe, status_code=409)

    return RedirectResponse(f"/recipes/{recipe_id}", status_code=303)


@router.post("/{recipe_id}/verify", include_in_schema=False)
def verify(request: Request, recipe_id: int, db: Session = Depends(get_db)):
    try:
        recipe_store.verify_recipe(db, recipe_id)
    except RecipeNotFoundError:
        return _not_found(request, recipe_id)
    return RedirectResponse(f"/admin/recipes/{recipe_id}/edit", status_code=303)


@router.get("/{recipe_id}/delete", include_in_schema=False)
def delete_confirm(request: Request, recipe_id: int, db: Session = Depends(get_db)):
    try:
        recipe = recipe_store.get_recipe(db, recipe_id)
    except RecipeNotFoundError:
        return _not_found(request, recipe_id)
    return render(request, "admin/delete.html", {"recipe": recipe})


@router.post("/{recipe_id}/delete", include_in_schema=False)
def delete_submit(
    request: Request,
    recipe_id: int,
    db: Session = Depends(get_db),
    store: LocalImageStore = Depends(get_image_store),
):
    try:
        recipe_store.delete_recipe(db, recipe_id, store)
    except RecipeNotFoundError:
        return _not_found(request, recipe_id)
    return RedirectResponse("/recipes", status_code=303)
