"""Recipe image endpoints.

Endpoints:
- POST /api/recipes/{id}/image - Multipart upload (field ``file``)
- PUT /api/recipes/{id}/image - Base64 / data URL upload
- DELETE /api/recipes/{id}/image - Remove the image
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile
from sqlalchemy.orm import Session

from ..deps import get_db, get_image_store
from ..errors import ImageUploadError
from ..limiter import limiter
from ..models import Recipe
from ..schemas import ErrorResponse, ImageBase64Request, RecipeOut
from ..services import recipe_store
from ..services.storage import ALLOWED_EXTENSIONS, MAX_FILE_SIZE, ImageUpload, LocalImageStore
from ..settings import settings

logger = logging.getLogger("recipebook.images")

router = APIRouter()

IMAGE_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid image"},
    404: {"model": ErrorResponse, "description": "Recipe not found"},
}


def _invalid_image_message() -> str:
    return (
        f"Invalid image file. Allowed types: {', '.join(ALLOWED_EXTENSIONS)}. "
        f"Max size: {MAX_FILE_SIZE // (1024 * 1024)}MB"
    )


def _attach_image(db: Session, recipe: Recipe, image_url: str, store: LocalImageStore) -> Recipe:
    """Point the recipe at a freshly stored image and drop the previous managed file."""
    previous = recipe.image_url
    recipe = recipe_store.set_image(db, recipe, image_url)
    if previous and previous != image_url and store.is_managed_url(previous):
        store.delete(previous)
    return recipe


@router.post("/recipes/{recipe_id}/image", response_model=RecipeOut, responses=IMAGE_RESPONSES)
@limiter.limit(settings.rate_limit_writes)
def upload_recipe_image(
    request: Request,  # Required for rate limiter
    recipe_id: int,
    file: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    store: LocalImageStore = Depends(get_image_store),
):
    """Upload an image file (jpg, jpeg, png, gif, webp - max 5MB)."""
    recipe = recipe_store.get_recipe(db, recipe_id)

    if file is None:
        raise ImageUploadError("Please provide an image file to upload", error="no_file")
    upload = ImageUpload.from_stream(file.filename, file.content_type, file.file)
    if not upload.data:
        raise ImageUploadError("Please provide an image file to upload", error="no_file")

    if not store.validate(upload):
        raise ImageUploadError(_invalid_image_message())

    image_url = store.upload(upload, recipe_id=recipe.id)
    if image_url is None:
        raise ImageUploadError("Failed to upload image. Please try again.", error="upload_failed")

    logger.info(f"Recipe {recipe_id} image set to {image_url}")
    return _attach_image(db, recipe, image_url, store)


@router.put("/recipes/{recipe_id}/image", response_model=RecipeOut, responses=IMAGE_RESPONSES)
@limiter.limit(settings.rate_limit_writes)
def upload_recipe_image_base64(
    request: Request,  # Required for rate limiter
    recipe_id: int,
    payload: ImageBase64Request,
    db: Session = Depends(get_db),
    store: LocalImageStore = Depends(get_image_store),
):
    """Upload an image as base64 or a data URL, for clients without multipart support."""
    recipe = recipe_store.get_recipe(db, recipe_id)

    image_url = store.upload_base64(payload.image_base64, file_name=payload.file_name, recipe_id=recipe.id)
    if image_url is None:
        raise ImageUploadError(
            "Invalid image data. Provide base64 (optionally a data URL) of a jpg, png, gif "
            f"or webp image up to {MAX_FILE_SIZE // (1024 * 1024)}MB"
        )

    logger.info(f"Recipe {recipe_id} image set to {image_url} (base64)")
    return _attach_image(db, recipe, image_url, store)


@router.delete(
    "/recipes/{recipe_id}/image",
    response_model=RecipeOut,
    responses={404: IMAGE_RESPONSES[404]},
)
def delete_recipe_image(
    recipe_id: int,
    db: Session = Depends(get_db),
    store: LocalImageStore = Depends(get_image_store),
):
    """Remove the recipe's image and clear ``imageUrl``."""
    recipe = recipe_store.get_recipe(db, recipe_id)

    previous = recipe.image_url
    recipe = recipe_store.clear_image(db, recipe)
    if store.is_managed_url(previous):
        store.delete(previous)
    return recipe
