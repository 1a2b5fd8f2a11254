import os
import tempfile
from typing import Optional

import pytest

# Settings are read at import time: keep tests off the real database, image
# directory and translation provider.
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["STATIC_ROOT"] = tempfile.mkdtemp(prefix="recipebook-static-")
os.environ["TRANSLATION_PROVIDER"] = "mock"
os.environ["DEV_ROUTES_ENABLED"] = "false"
os.environ.pop("ADMIN_PASSWORD", None)

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from recipebook.main import app
from recipebook.db import Base, get_db
from recipebook.core.translator_client import TranslationResult, TranslatorClient, get_translator
from recipebook.limiter import limiter
from recipebook.models import Recipe
from recipebook.services.storage import LocalImageStore, get_image_store
from recipebook.settings import settings

# --- Test Database Setup ---

SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,  # Share the single in-memory connection across sessions
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


class FakeTranslator:
    """Stands in for TranslatorClient.

    Known texts come back from ``mapping``; anything else is tagged with the
    target language. Texts listed in ``failing`` return a failed result.
    """

    def __init__(self, mapping: Optional[dict] = None, failing=(), available: bool = True):
        self.mapping = mapping or {}
        self.failing = set(failing)
        self.available = available
        self.calls = []

    def is_available(self) -> bool:
        return self.available

    def translate(self, text, from_language, to_language):
        self.calls.append((text, from_language, to_language))
        if not self.available:
            return TranslationResult.failed("not_configured")
        if text in self.failing:
            return TranslationResult.failed("HTTPStatusError: 503")
        return TranslationResult(text=self.mapping.get(text, f"[{to_language}] {text}"))


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test, drop after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def disable_rate_limits():
    limiter.enabled = False
    yield
    limiter.enabled = True


@pytest.fixture
def image_store(tmp_path):
    return LocalImageStore(root=tmp_path)


@pytest.fixture
def fake_translator():
    """Factory for FakeTranslator instances."""
    return FakeTranslator


@pytest.fixture
def translator(fake_translator):
    """Configured fake translator (swap into the app with ``translated_client``)."""
    return fake_translator()


@pytest.fixture
def client(image_store):
    """Test client with DB and image store overrides; translation not configured."""
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_image_store] = lambda: image_store
    app.dependency_overrides[get_translator] = lambda: TranslatorClient()
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def translated_client(client, translator):
    app.dependency_overrides[get_translator] = lambda: translator
    return client


@pytest.fixture
def admin_auth(monkeypatch):
    """Enable the admin pages and return matching Basic credentials."""
    monkeypatch.setattr(settings, "admin_username", "admin")
    monkeypatch.setattr(settings, "admin_password", "s3cret")
    return ("admin", "s3cret")


@pytest.fixture
def session_factory():
    """Open extra sessions on the test database (e.g. to simulate concurrent requests)."""
    return TestingSessionLocal


@pytest.fixture
def db_session():
    """Direct database session for setup."""
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture
def make_recipe(db_session):
    """Insert a recipe directly, bypassing translation."""
    def _make(**overrides):
        fields = {
            "title": "Pancakes",
            "description": "Fluffy breakfast pancakes",
            "ingredients": "1 cup flour\n1 egg\n1 cup milk",
            "instructions": "1. Mix.\n2. Fry.",
            "prep_time_minutes": 10,
            "cook_time_minutes": 15,
            "servings": 4,
            "category": "Breakfast",
        }
        fields.update(overrides)
        recipe = Recipe(**fields)
        db_session.add(recipe)
        db_session.commit()
        db_session.refresh(recipe)
        return recipe
    return _make
