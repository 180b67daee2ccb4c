import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("STORAGE_TYPE", "memory")
os.environ.setdefault("LOG_FORMAT", "console")

import pytest
from fastapi.testclient import TestClient

from estate.main import app
from estate.services.memory_store import InMemoryListingStore, InMemoryUserStore
from estate.services.storage_factory import get_listing_store, get_user_store

SAMPLE_LISTING = {
    "name": "Sunny two bedroom flat",
    "description": "Bright flat close to the park",
    "address": "12 Harbour Road",
    "type": "rent",
    "bedrooms": 2,
    "bathrooms": 1,
    "regularPrice": 1500,
    "discountPrice": 0,
    "offer": False,
    "parking": True,
    "furnished": False,
    "imageUrls": ["https://cdn.estate.io/1.jpg"],
}


@pytest.fixture
def user_store():
    return InMemoryUserStore()


@pytest.fixture
def listing_store():
    return InMemoryListingStore()


@pytest.fixture
def api_app(user_store, listing_store):
    app.dependency_overrides[get_user_store] = lambda: user_store
    app.dependency_overrides[get_listing_store] = lambda: listing_store
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def make_client(api_app):
    """Each client keeps its own cookie jar, i.e. its own session."""

    def _make():
        return TestClient(api_app)

    return _make


@pytest.fixture
def client(make_client):
    return make_client()

