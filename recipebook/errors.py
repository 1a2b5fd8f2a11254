"""Error taxonomy for the recipe book.

Every failure a caller can act on carries a short machine-readable ``error``
code and a human ``message``; the exception handlers in ``main`` turn them
into ``{"error": ..., "message": ...}`` JSON bodies.
"""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger("recipebook.errors")


class RecipeBookError(Exception):
    status_code = 500
    error = "internal_error"

    def __init__(self, message: str, error: str | None = None):
        super().__init__(message)
        self.message = message
        if error is not None:
            self.error = error

    def to_dict(self) -> dict:
        return {"error": self.error, "message": self.message}


class RecipeValidationError(RecipeBookError):
    status_code = 400
    error = "validation_failed"


class ImageUploadError(RecipeBookError):
    status_code = 400
    error = "invalid_image"


class RecipeNotFoundError(RecipeBookError):
    status_code = 404
    error = "recipe_not_found"

    def __init__(self, recipe_id: int):
        super().__init__(f"No recipe exists with ID {recipe_id}")
        self.recipe_id = recipe_id


class RecipeConflictError(RecipeBookError):
    status_code = 409
    error = "conflict"

    def __init__(self, recipe_id: int):
        super().__init__(
            f"Recipe {recipe_id} was modified by another request. Reload it and try again."
        )
        self.recipe_id = recipe_id


async def recipe_book_error_handler(request: Request, exc: RecipeBookError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{exc.error} on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path", "form")]
        field = ".".join(loc)
        msg = err.get("msg", "Invalid value")
        parts.append(f"{field}: {msg}" if field else msg)
    return "; ".join(parts) or "Invalid request"


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    error = RecipeValidationError(_format_validation_errors(exc))
    return JSONResponse(status_code=error.status_code, content=error.to_dict())
