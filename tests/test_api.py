"""Tests for API endpoints"""
import pytest

from vegefood.app import create_app
from vegefood.catalog import CatalogProvider
from vegefood.db import StorageKeys

HEADERS = {"X-Client-Id": "tester"}


def login(client, headers=HEADERS):
    client.post("/api/auth/register", headers=headers, json={
        "username": "jane",
        "email": "jane@example.com",
        "password": "secret1",
        "confirm_password": "secret1",
    })
    return client.post("/api/auth/login", headers=headers, json={
        "email": "jane@example.com",
        "password": "secret1",
    })


def test_dotenv_settings_apply_after_import(tmp_path, monkeypatch):
    """Settings from a .env in the working directory reach storage and catalog."""
    (tmp_path / ".env").write_text(
        "STOREFRONT_KEY_PREFIX=shop:\nCATALOG_SOURCE=https://cdn.example.com/catalog\n"
    )
    for name in ("STOREFRONT_KEY_PREFIX", "CATALOG_SOURCE"):
        # setenv first so monkeypatch restores the variable as unset afterwards
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)

    create_app()

    assert StorageKeys.namespace_prefix("tester") == "shop:tester:"
    assert CatalogProvider().source == "https://cdn.example.com/catalog"


def test_health_check(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_get_products(client):
    response = client.get("/api/products")
    assert response.status_code == 200
    assert len(response.json()) == 4


def test_get_product_not_found(client):
    response = client.get("/api/products/999")
    assert response.status_code == 404
    assert response.json()["detail"] == "Product not found"


def test_category_products(client):
    response = client.get("/api/categories/Vegetables/products")
    assert [p["id"] for p in response.json()] == [1, 2, 3]

    categories = client.get("/api/categories").json()
    assert categories[1]["imageUrl"] == "fruit.jpg"


def test_register_validation_error(client):
    response = client.post("/api/auth/register", headers=HEADERS, json={
        "username": "jane",
        "email": "jane@example.com",
        "password": "secret1",
        "confirm_password": "secret2",
    })
    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Passwords do not match"}


def test_login_flow(client):
    response = login(client)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["user"] == {"username": "jane", "email": "jane@example.com"}
    assert body["token"]

    me = client.get("/api/auth/me", headers=HEADERS).json()
    assert me["authenticated"] is True


def test_login_wrong_password(client):
    login(client)
    response = client.post("/api/auth/login", headers=HEADERS, json={
        "email": "jane@example.com",
        "password": "nope123",
    })
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid email or password"


def test_cart_requires_session(client):
    """Cart and checkout routes reject clients without a session."""
    assert client.get("/api/cart", headers=HEADERS).status_code == 401
    response = client.post("/api/checkout", headers=HEADERS, json={})
    assert response.status_code == 401
    assert response.json()["detail"] == "Login required"


def test_sessions_are_per_client(client):
    login(client)
    other = {"X-Client-Id": "someone-else"}
    assert client.get("/api/cart", headers=HEADERS).status_code == 200
    assert client.get("/api/cart", headers=other).status_code == 401


def test_invalid_client_id(client):
    response = client.get("/api/cart", headers={"X-Client-Id": "bad id!"})
    assert response.status_code == 400


def test_cart_pricing_flow(client):
    """[10 x2, 5 x1] with SAVE20 on Standard shipping totals 27.00."""
    login(client)

    client.post("/api/cart/items", headers=HEADERS, json={"product_id": 1, "quantity": 2})
    client.post("/api/cart/items", headers=HEADERS, json={"product_id": 2})
    response = client.post("/api/cart/coupon", headers=HEADERS, json={"code": "save20"})

    assert response.status_code == 200
    assert response.json()["message"] == "Coupon applied: 20% off your order"
    cart = response.json()["cart"]
    assert cart["subtotal"] == 25.0
    assert cart["discount"] == 5.0
    assert cart["shipping_cost"] == 5.0
    assert cart["tax"] == 2.0
    assert cart["total"] == 27.0
    assert cart["cart_count"] == 3


def test_add_unknown_or_out_of_stock_product(client):
    login(client)
    assert client.post("/api/cart/items", headers=HEADERS, json={"product_id": 999}).status_code == 404

    response = client.post("/api/cart/items", headers=HEADERS, json={"product_id": 3})
    assert response.status_code == 400
    assert response.json()["detail"] == "Product out of stock"


def test_invalid_coupon(client):
    login(client)
    response = client.post("/api/cart/coupon", headers=HEADERS, json={"code": "FREE100"})
    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Invalid coupon code"}


def test_save_for_later_and_move_back(client):
    login(client)
    client.post("/api/cart/items", headers=HEADERS, json={"product_id": 4, "quantity": 3})

    saved = client.post("/api/cart/items/4/save", headers=HEADERS).json()
    assert saved["items"] == []
    assert saved["saved_count"] == 3

    moved = client.post("/api/cart/saved/4/move", headers=HEADERS).json()
    assert moved["items"][0]["quantity"] == 3
    assert moved["saved_items"] == []


def test_update_and_remove_items(client):
    login(client)
    client.post("/api/cart/items", headers=HEADERS, json={"product_id": 1})

    updated = client.put("/api/cart/items/1", headers=HEADERS, json={"quantity": 4}).json()
    assert updated["cart_count"] == 4

    removed = client.put("/api/cart/items/1", headers=HEADERS, json={"quantity": 0}).json()
    assert removed["is_empty"] is True


def test_shipping_selection(client):
    login(client)
    options = client.get("/api/cart/shipping", headers=HEADERS).json()
    assert options["selected"] == "Standard"

    cart = client.put("/api/cart/shipping", headers=HEADERS, json={"method": "Express"}).json()
    assert cart["shipping"]["method"] == "Express"
    assert cart["shipping_cost"] == 15.0

    cart = client.put("/api/cart/shipping", headers=HEADERS, json={"method": "Drone"}).json()
    assert cart["shipping"]["method"] == "Express"


@pytest.mark.parametrize("card_number,status", [("4111111111111111", 200), ("12", 400)])
def test_checkout(client, card_number, status):
    login(client)
    client.post("/api/cart/items", headers=HEADERS, json={"product_id": 1, "quantity": 2})

    response = client.post("/api/checkout", headers=HEADERS, json={
        "first_name": "Jane",
        "last_name": "Doe",
        "email": "jane@example.com",
        "address": "1 Market St",
        "city": "Springfield",
        "zip_code": "12345",
        "card_number": card_number,
    })

    assert response.status_code == status
    cart = client.get("/api/cart", headers=HEADERS).json()
    if status == 200:
        assert response.json()["summary"]["total"] == 27.0
        assert cart["is_empty"] is True
    else:
        assert response.json()["detail"] == "Please enter a valid card number"
        assert cart["is_empty"] is False


def test_logout_blocks_cart(client):
    login(client)
    client.post("/api/auth/logout", headers=HEADERS)
    assert client.get("/api/cart", headers=HEADERS).status_code == 401
