"""Pydantic schemas for the recipe book API.

Request/response models for:
- Recipes (create, partial update, output)
- Recipe listing and categories
- Base64 image upload
- Error responses

JSON uses camelCase keys (``prepTimeMinutes``, ``titleZh``, ``totalCount``);
snake_case names are accepted on input as well.
"""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def _reject_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be empty")
    return value


RequiredText = Annotated[str, AfterValidator(_reject_blank)]


# --- Recipe ---

class RecipeCreate(CamelModel):
    title: RequiredText = Field(..., min_length=1, max_length=200, examples=["Chocolate Chip Cookies"])
    description: Optional[str] = Field(None, max_length=500)
    ingredients: RequiredText = Field(..., min_length=1, examples=["2 cups flour\n1 cup sugar\n1 cup butter"])
    instructions: RequiredText = Field(..., min_length=1, examples=["1. Preheat oven to 375F.\n2. Mix dry ingredients."])
    prep_time_minutes: int = Field(0, ge=0, le=1440)
    cook_time_minutes: int = Field(0, ge=0, le=1440)
    servings: int = Field(4, ge=1, le=1000)
    category: Optional[str] = Field(None, max_length=100)


class RecipeUpdate(CamelModel):
    """Partial update: only fields that are present and non-null are applied."""
    title: Optional[RequiredText] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=500)
    ingredients: Optional[RequiredText] = Field(None, min_length=1)
    instructions: Optional[RequiredText] = Field(None, min_length=1)
    prep_time_minutes: Optional[int] = Field(None, ge=0, le=1440)
    cook_time_minutes: Optional[int] = Field(None, ge=0, le=1440)
    servings: Optional[int] = Field(None, ge=1, le=1000)
    category: Optional[str] = Field(None, max_length=100)


class RecipeOut(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    ingredients: str
    instructions: str
    category: Optional[str] = None

    title_zh: Optional[str] = None
    description_zh: Optional[str] = None
    ingredients_zh: Optional[str] = None
    instructions_zh: Optional[str] = None
    category_zh: Optional[str] = None

    prep_time_minutes: int
    cook_time_minutes: int
    servings: int
    image_url: Optional[str] = None
    is_verified: bool
    verified_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class RecipeListResponse(CamelModel):
    recipes: list[RecipeOut]
    total_count: int
    limit: int
    offset: int


class CategoriesResponse(CamelModel):
    categories: list[str]


# --- Images ---

class ImageBase64Request(CamelModel):
    """Image upload for clients that cannot send multipart bodies.

    ``image_base64`` may be raw base64 or a data URL such as
    ``data:image/png;base64,iVBOR...``.
    """
    image_base64: str = Field(..., min_length=1)
    file_name: Optional[str] = None


# --- Errors ---

class ErrorResponse(BaseModel):
    error: str
    message: str


# --- Dev Seed ---

class SeedResponse(CamelModel):
    recipes_created: int
    message: str
