"""
Shared fixtures: fresh stores and fresh applications for every test.
"""

import pytest
from fastapi.testclient import TestClient

from user_orders_api.app.core.config import Settings
from user_orders_api.app.core.store import DataStore
from user_orders_api.app.main import create_app
from user_orders_api.app.services.data_service import DataService


@pytest.fixture
def store():
    """Empty store."""
    return DataStore()


@pytest.fixture
def seeded_store(store):
    """Store holding the example dataset."""
    DataService.seed(store)
    return store


@pytest.fixture
def app():
    """Application with its own seeded store, mounted under /examples."""
    return create_app(Settings(api_prefix="/examples", seed_on_startup=True))


@pytest.fixture
def client(app):
    return TestClient(app)
