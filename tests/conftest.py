"""Pytest configuration and fixtures"""
import json
import os

import pytest
from fastapi.testclient import TestClient

# Keep test output quiet and never talk to a real Redis
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.pop("UPSTASH_REDIS_REST_URL", None)
os.environ.pop("UPSTASH_REDIS_REST_TOKEN", None)

from vegefood.auth import AuthService
from vegefood.cart import CartService
from vegefood.catalog import CatalogProvider, Product
from vegefood.db import MemoryStorage, set_storage


PRODUCTS = [
    {"id": 1, "name": "Tomatoes", "category": "Vegetables", "price": 10, "image": "tomatoes.jpg",
     "description": "Red tomatoes", "inStock": True, "rating": 4.5},
    {"id": 2, "name": "Carrots", "category": "Vegetables", "price": 5, "image": "carrots.jpg",
     "description": "Orange carrots", "inStock": True, "rating": 4.1},
    {"id": 3, "name": "Broccoli", "category": "Vegetables", "price": 2.49, "image": "broccoli.jpg",
     "description": "Green broccoli", "inStock": False, "rating": 4.0},
    {"id": 4, "name": "Apples", "category": "Fruits", "price": 3.99, "image": "apples.jpg",
     "description": "Crisp apples", "inStock": True, "rating": 4.7},
]

CATEGORIES = [
    {"id": 1, "name": "Vegetables", "description": "Fresh vegetables", "imageUrl": "veg.jpg"},
    {"id": 2, "name": "Fruits", "description": "Seasonal fruits", "imageUrl": "fruit.jpg"},
]


@pytest.fixture
def storage():
    """Empty in-memory storage"""
    return MemoryStorage()


@pytest.fixture
def tomatoes():
    return Product.model_validate(PRODUCTS[0])


@pytest.fixture
def carrots():
    return Product.model_validate(PRODUCTS[1])


@pytest.fixture
def apples():
    return Product.model_validate(PRODUCTS[3])


@pytest.fixture
def cart(storage):
    """Cart service over empty storage"""
    return CartService(storage)


@pytest.fixture
def auth(storage):
    """Auth service over empty storage"""
    return AuthService(storage)


@pytest.fixture
def catalog_dir(tmp_path):
    """Directory holding products.json and categories.json"""
    (tmp_path / "products.json").write_text(json.dumps(PRODUCTS), encoding="utf-8")
    (tmp_path / "categories.json").write_text(json.dumps(CATEGORIES), encoding="utf-8")
    return tmp_path


@pytest.fixture
def client(catalog_dir):
    """API test client with fresh storage and the test catalog"""
    from vegefood.app import app
    from vegefood.routers.deps import get_catalog

    set_storage(MemoryStorage())
    app.dependency_overrides[get_catalog] = lambda: CatalogProvider(catalog_dir)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    set_storage(None)
