"""Service-level tests for recipe_store helpers used by the pages."""

from datetime import datetime, timedelta, timezone

import pytest

from recipebook.core.translator_client import TranslatorClient
from recipebook.errors import RecipeConflictError, RecipeNotFoundError
from recipebook.schemas import RecipeCreate, RecipeUpdate
from recipebook.services import recipe_store


def test_get_recipe_missing_raises(db_session):
    with pytest.raises(RecipeNotFoundError) as exc:
        recipe_store.get_recipe(db_session, 7)
    assert exc.value.recipe_id == 7
    assert exc.value.status_code == 404


def test_concurrent_update_raises_conflict(make_recipe, session_factory):
    recipe = make_recipe(title="Original")
    translator = TranslatorClient()

    first = session_factory()
    second = session_factory()
    try:
        # Both sessions load version 1
        recipe_store.get_recipe(first, recipe.id)
        recipe_store.get_recipe(second, recipe.id)

        recipe_store.update_recipe(first, recipe.id, RecipeUpdate(title="First"), translator)

        with pytest.raises(RecipeConflictError):
            recipe_store.update_recipe(second, recipe.id, RecipeUpdate(title="Second"), translator)
    finally:
        first.close()
        second.close()


def test_replace_recipe_clears_optional_fields(db_session, make_recipe):
    recipe = make_recipe(description="Old", category="Old")
    payload = RecipeCreate(title="New", ingredients="x", instructions="y")

    updated = recipe_store.replace_recipe(db_session, recipe.id, payload, TranslatorClient())
    assert updated.title == "New"
    assert updated.description is None
    assert updated.category is None
    assert updated.servings == 4
    assert updated.updated_at is not None


def test_verify_recipe(db_session, make_recipe):
    recipe = make_recipe()
    verified = recipe_store.verify_recipe(db_session, recipe.id)
    assert verified.is_verified is True
    assert verified.verified_at is not None


def test_delete_recipe_removes_managed_image(db_session, make_recipe, image_store):
    from recipebook.services.storage import ImageUpload

    url = image_store.upload(ImageUpload("a.png", "image/png", b"png-bytes"), recipe_id=1)
    recipe = make_recipe(image_url=url)

    recipe_store.delete_recipe(db_session, recipe.id, image_store)

    assert image_store.path_for_url(url).exists() is False
    with pytest.raises(RecipeNotFoundError):
        recipe_store.get_recipe(db_session, recipe.id)


def test_delete_recipe_with_external_image(db_session, make_recipe, image_store):
    recipe = make_recipe(image_url="https://example.com/cake.jpg")
    recipe_store.delete_recipe(db_session, recipe.id, image_store)
    assert recipe_store.list_recipes(db_session)[1] == 0


def test_recent_recipes_newest_first(db_session, make_recipe):
    now = datetime.now(timezone.utc)
    for i in range(6):
        make_recipe(title=f"R{i}", created_at=now + timedelta(minutes=i))

    recent = recipe_store.recent_recipes(db_session)
    assert [r.title for r in recent] == ["R5", "R4", "R3", "R2"]


def test_browse_recipes_search_and_category(db_session, make_recipe):
    make_recipe(title="Banana Bread", category="Breads", description="Moist")
    make_recipe(title="Soda Bread", category="Breads")
    make_recipe(title="Fudge", category="Candy", description="Rich bread pudding style")
    # ingredients are not searched on the public page
    make_recipe(title="Stuffing", category="Sides", ingredients="bread cubes")

    titles = {r.title for r in recipe_store.browse_recipes(db_session, search="BREAD")}
    assert titles == {"Banana Bread", "Soda Bread", "Fudge"}

    breads = recipe_store.browse_recipes(db_session, category="Breads")
    assert {r.title for r in breads} == {"Banana Bread", "Soda Bread"}


def test_parse_id_list():
    assert recipe_store.parse_id_list("3, 1,abc,,0,-2,7") == [3, 1, 7]
    assert recipe_store.parse_id_list(None) == []
    assert recipe_store.parse_id_list("") == []


def test_recipes_for_print(db_session, make_recipe):
    c = make_recipe(title="Cake")
    a = make_recipe(title="Apple Pie")
    make_recipe(title="Bread")

    selected = recipe_store.recipes_for_print(db_session, ids=f"{c.id},{a.id},bogus")
    assert [r.title for r in selected] == ["Apple Pie", "Cake"]

    everything = recipe_store.recipes_for_print(db_session, all_recipes=True)
    assert [r.title for r in everything] == ["Apple Pie", "Bread", "Cake"]

    assert recipe_store.recipes_for_print(db_session, ids="x,y") == []
