# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app
from app.store import ProductStore

API_KEY = "test-key"


@pytest.fixture
def settings():
    return Settings(api_key=API_KEY, seed_sample_data=False, log_level="WARNING")


@pytest.fixture
def store():
    return ProductStore.with_samples()


@pytest.fixture
def app(settings, store):
    return create_app(settings=settings, store=store)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def auth():
    return {"x-api-key": API_KEY}


@pytest.fixture
def payload():
    return {
        "name": "Desk Lamp",
        "description": "LED lamp with dimmer",
        "price": 35.5,
        "category": "Lighting",
        "inStock": True,
    }
