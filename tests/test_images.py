"""Tests for the recipe image endpoints."""

import base64

from recipebook.errors import RecipeConflictError
from recipebook.services import recipe_store

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 256


def _upload(client, recipe_id, name="photo.png", content_type="image/png", data=PNG_BYTES):
    return client.post(
        f"/api/recipes/{recipe_id}/image",
        files={"file": (name, data, content_type)},
    )


def test_upload_image(client, make_recipe, image_store):
    recipe = make_recipe()

    response = _upload(client, recipe.id)
    assert response.status_code == 200

    image_url = response.json()["imageUrl"]
    assert image_url.startswith(f"/images/recipes/recipe-{recipe.id}-")
    assert image_url.endswith(".png")
    assert image_store.path_for_url(image_url).read_bytes() == PNG_BYTES
    assert response.json()["updatedAt"] is not None


def test_upload_replaces_previous_managed_image(client, make_recipe, image_store):
    recipe = make_recipe()
    first_url = _upload(client, recipe.id).json()["imageUrl"]

    second_url = _upload(client, recipe.id, name="new.jpg", content_type="image/jpeg").json()["imageUrl"]

    assert second_url != first_url
    assert second_url.endswith(".jpg")
    assert not image_store.path_for_url(first_url).exists()
    assert image_store.path_for_url(second_url).exists()


def test_upload_keeps_external_previous_image(client, make_recipe):
    recipe = make_recipe(image_url="https://cdn.example.com/cake.jpg")
    response = _upload(client, recipe.id)
    assert response.status_code == 200
    assert response.json()["imageUrl"].startswith("/images/recipes/")


def test_upload_rejects_bad_extension(client, make_recipe):
    recipe = make_recipe()
    response = _upload(client, recipe.id, name="photo.bmp", content_type="image/bmp")
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "invalid_image"
    assert ".jpg, .jpeg, .png, .gif, .webp" in body["message"]
    assert "5MB" in body["message"]


def test_upload_rejects_mismatched_content_type(client, make_recipe):
    recipe = make_recipe()
    response = _upload(client, recipe.id, name="photo.png", content_type="image/jpeg")
    assert response.status_code == 400
    assert response.json()["error"] == "invalid_image"


def test_upload_rejects_oversized_file(client, make_recipe):
    recipe = make_recipe()
    response = _upload(client, recipe.id, data=b"\x00" * (5 * 1024 * 1024 + 1))
    assert response.status_code == 400
    assert response.json()["error"] == "invalid_image"


def test_upload_without_file(client, make_recipe):
    recipe = make_recipe()
    response = client.post(f"/api/recipes/{recipe.id}/image")
    assert response.status_code == 400
    assert response.json()["error"] == "no_file"


def test_upload_empty_file(client, make_recipe):
    recipe = make_recipe()
    response = _upload(client, recipe.id, data=b"")
    assert response.status_code == 400
    assert response.json()["error"] == "no_file"


def test_upload_missing_recipe(client):
    response = _upload(client, 404)
    assert response.status_code == 404
    assert response.json()["error"] == "recipe_not_found"


def test_upload_base64_data_url(client, make_recipe, image_store):
    recipe = make_recipe()
    payload = "data:image/webp;base64," + base64.b64encode(PNG_BYTES).decode()

    response = client.put(f"/api/recipes/{recipe.id}/image", json={"imageBase64": payload})
    assert response.status_code == 200

    image_url = response.json()["imageUrl"]
    assert image_url.endswith(".webp")
    assert image_store.path_for_url(image_url).read_bytes() == PNG_BYTES


def test_upload_base64_raw_uses_file_name_hint(client, make_recipe):
    recipe = make_recipe()
    response = client.put(
        f"/api/recipes/{recipe.id}/image",
        json={"imageBase64": base64.b64encode(PNG_BYTES).decode(), "fileName": "cake.gif"},
    )
    assert response.status_code == 200
    assert response.json()["imageUrl"].endswith(".gif")


def test_upload_base64_invalid(client, make_recipe):
    recipe = make_recipe()
    response = client.put(f"/api/recipes/{recipe.id}/image", json={"imageBase64": "not base64!!"})
    assert response.status_code == 400
    assert response.json()["error"] == "invalid_image"


def test_upload_base64_missing_payload(client, make_recipe):
    recipe = make_recipe()
    response = client.put(f"/api/recipes/{recipe.id}/image", json={})
    assert response.status_code == 400
    assert response.json()["error"] == "validation_failed"


def test_delete_image(client, make_recipe, image_store):
    recipe = make_recipe()
    image_url = _upload(client, recipe.id).json()["imageUrl"]

    response = client.delete(f"/api/recipes/{recipe.id}/image")
    assert response.status_code == 200
    assert response.json()["imageUrl"] is None
    assert not image_store.path_for_url(image_url).exists()


def test_delete_image_conflict_keeps_file(client, make_recipe, image_store, monkeypatch):
    recipe = make_recipe()
    image_url = _upload(client, recipe.id).json()["imageUrl"]

    def conflicting_clear(db, recipe):
        raise RecipeConflictError(recipe.id)

    monkeypatch.setattr(recipe_store, "clear_image", conflicting_clear)

    response = client.delete(f"/api/recipes/{recipe.id}/image")
    assert response.status_code == 409
    assert response.json()["error"] == "conflict"
    # The recipe still points at the image, so the file must survive
    assert image_store.path_for_url(image_url).exists()
    assert client.get(f"/api/recipes/{recipe.id}").json()["imageUrl"] == image_url


def test_delete_image_missing_recipe(client):
    response = client.delete("/api/recipes/123/image")
    assert response.status_code == 404


def test_uploaded_image_is_served(client, make_recipe):
    """Images written by the default store are reachable under /images."""
    from recipebook.services.storage import ImageUpload, get_image_store

    store = get_image_store()
    url = store.upload(ImageUpload("served.png", "image/png", PNG_BYTES))
    try:
        response = client.get(url)
        assert response.status_code == 200
        assert response.content == PNG_BYTES
    finally:
        store.delete(url)
