"""Tests for the local image store."""

import base64
import io
import re

import pytest

from recipebook.services.storage import MAX_FILE_SIZE, ImageUpload, LocalImageStore, sanitize_file_name

MB = 1024 * 1024


@pytest.fixture
def store(tmp_path):
    return LocalImageStore(root=tmp_path)


def test_directory_created_under_root(tmp_path):
    store = LocalImageStore(root=tmp_path)
    assert store.directory == tmp_path / "images" / "recipes"
    assert store.directory.is_dir()


@pytest.mark.parametrize(
    "upload",
    [
        None,
        ImageUpload("empty.png", "image/png", b""),
        ImageUpload("huge.png", "image/png", b"\x00" * (6 * MB)),
        ImageUpload("photo.bmp", "image/bmp", b"\x00" * 10),
        ImageUpload("photo.png", "image/jpeg", b"\x00" * 10),
        ImageUpload("photo", "image/png", b"\x00" * 10),
        ImageUpload("photo.png", None, b"\x00" * 10),
    ],
)
def test_validate_rejects(store, upload):
    assert store.validate(upload) is False


def test_validate_accepts_one_megabyte_png(store):
    assert store.validate(ImageUpload("photo.png", "image/png", b"\x00" * MB)) is True


def test_validate_extension_case_insensitive(store):
    assert store.validate(ImageUpload("PHOTO.JPEG", "image/jpeg", b"\x00")) is True


def test_from_stream_reads_one_byte_past_limit(store):
    stream = io.BytesIO(b"\x00" * (MAX_FILE_SIZE + 1024))
    upload = ImageUpload.from_stream("huge.png", "image/png", stream)

    assert upload.size == MAX_FILE_SIZE + 1
    assert stream.tell() == MAX_FILE_SIZE + 1
    assert store.validate(upload) is False


def test_from_stream_small_file(store):
    upload = ImageUpload.from_stream("photo.png", "image/png", io.BytesIO(b"data"))
    assert upload.data == b"data"
    assert store.validate(upload) is True


def test_upload_with_recipe_id(store):
    url = store.upload(ImageUpload("My Cake.png", "image/png", b"data"), recipe_id=12)
    assert re.fullmatch(r"/images/recipes/recipe-12-\d{14}-[0-9a-f]{8}\.png", url)


def test_upload_without_recipe_id_uses_sanitized_name(store):
    url = store.upload(ImageUpload("My  Best: Cake?.jpg", "image/jpeg", b"data"))
    assert re.fullmatch(r"/images/recipes/My-Best-Cake-\d{14}-[0-9a-f]{8}\.jpg", url)


def test_upload_invalid_returns_none(store):
    assert store.upload(ImageUpload("photo.bmp", "image/bmp", b"data")) is None
    assert list(store.directory.iterdir()) == []


def test_upload_then_delete_leaves_no_file(store):
    url = store.upload(ImageUpload("photo.png", "image/png", b"data"), recipe_id=1)
    path = store.path_for_url(url)
    assert path.exists()

    assert store.delete(url) is True
    assert not path.exists()
    assert list(store.directory.iterdir()) == []


def test_delete_nonexistent_returns_false(store):
    assert store.delete("/images/recipes/missing.png") is False
    assert store.delete("") is False
    assert store.delete(None) is False


def test_delete_refuses_paths_outside_directory(store, tmp_path):
    outside = tmp_path / "images" / "secret.txt"
    outside.write_text("keep me")

    assert store.delete("/images/recipes/..%2Fsecret.txt") is False
    assert store.delete("/images/recipes/../secret.txt") is False
    assert store.delete("/elsewhere/secret.txt") is False
    assert outside.exists()


def test_delete_percent_encoded_name(store):
    path = store.directory / "Rainbow Divinity.jpg"
    path.write_bytes(b"x")
    assert store.delete("/images/recipes/Rainbow%20Divinity.jpg") is True
    assert not path.exists()


def test_is_managed_url(store):
    assert store.is_managed_url("/images/recipes/recipe-1-x.png")
    assert not store.is_managed_url("https://example.com/images/recipes/a.png")
    assert not store.is_managed_url(None)


def test_upload_base64_data_url(store):
    payload = "data:image/png;base64," + base64.b64encode(b"png-data").decode()
    url = store.upload_base64(payload, recipe_id=3)
    assert url.endswith(".png")
    assert store.path_for_url(url).read_bytes() == b"png-data"


def test_upload_base64_defaults_to_jpg(store):
    url = store.upload_base64(base64.b64encode(b"raw").decode())
    assert url.endswith(".jpg")


def test_upload_base64_file_name_hint(store):
    url = store.upload_base64(base64.b64encode(b"raw").decode(), file_name="dinner.webp")
    assert url.endswith(".webp")
    assert "/dinner-" in url


def test_upload_base64_rejects_bad_input(store):
    assert store.upload_base64("%%% not base64 %%%") is None
    assert store.upload_base64("data:image/bmp;base64," + base64.b64encode(b"x").decode()) is None
    too_big = base64.b64encode(b"\x00" * (5 * MB + 1)).decode()
    assert store.upload_base64(too_big) is None


@pytest.mark.parametrize(
    "name,expected",
    [
        ("My Cake", "My-Cake"),
        ("a<b>c:d", "abcd"),
        ("--spaced   out--", "spaced-out"),
        ("???", "image"),
        ("x" * 80, "x" * 50),
    ],
)
def test_sanitize_file_name(name, expected):
    assert sanitize_file_name(name) == expected
