# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app
from app.store import DEMO_PRODUCTS, ProductStore

API_KEY = "test-secret"


@pytest.fixture
def auth():
    return {"x-api-key": API_KEY}


@pytest.fixture
def store():
    return ProductStore(DEMO_PRODUCTS)


@pytest.fixture
def settings():
    return Settings(_env_file=None, api_key=API_KEY, seed_demo_data=False)


@pytest.fixture
def client(store, settings):
    with TestClient(create_app(settings=settings, store=store)) as c:
        yield c
