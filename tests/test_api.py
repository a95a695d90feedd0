"""End-to-end tests for the /auth routes."""

from fastapi.testclient import TestClient

from conftest import get_balance, get_item_quantity
from upoint_purchase_api.app.core.security import issue_token
from upoint_purchase_api.app.main import create_app
from upoint_purchase_api.app.services.catalog_service import CatalogService


def signup(client, username="user1", password="pass1234"):
    return client.post("/auth/signup", json={"username": username, "password": password})


def login(client, username="user1", password="pass1234"):
    response = client.post("/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


def test_signup_creates_account(client):
    response = signup(client)

    assert response.status_code == 201
    assert response.json()["message"] == "User created successfully"
    assert isinstance(response.json()["id"], int)


def test_signup_duplicate_username(client):
    signup(client)

    response = signup(client, password="different")

    assert response.status_code == 400
    assert response.json() == {"message": "Username already exists"}


def test_signup_invalid_body(client):
    response = client.post("/auth/signup", json={"username": "user1"})

    assert response.status_code == 400
    assert "message" in response.json()


def test_login_wrong_password(client):
    signup(client)

    response = client.post("/auth/login", json={"username": "user1", "password": "nope"})

    assert response.status_code == 401
    assert response.json() == {"message": "Invalid username or password"}


def test_me_returns_account_without_password(client):
    account_id = signup(client).json()["id"]
    headers = login(client)

    response = client.get("/auth/me", headers=headers)

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == account_id
    assert body["username"] == "user1"
    assert body["card"]["balance"] == 100
    assert len(body["card"]["cardNumber"]) == 16
    assert "password" not in body


def test_me_requires_token(client):
    response = client.get("/auth/me")

    assert response.status_code == 401
    assert response.json() == {"message": "Not authenticated"}


def test_me_rejects_token_with_bad_signature(client):
    signup(client)
    token = issue_token(1, secret_key="not-the-server-secret")

    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 403
    assert response.json() == {"message": "Invalid or expired token"}


def test_me_for_missing_account(client, settings):
    token = issue_token(999, secret_key=settings.secret_key)

    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 404
    assert response.json() == {"message": "User not found"}


def test_list_items(client, items):
    signup(client)

    response = client.get("/auth/items", headers=login(client))

    assert response.status_code == 200
    names = [item["name"] for item in response.json()]
    assert names == ["Coffee", "Headphones", "Sold Out Mug", "Last Sticker"]
    assert response.json()[0] == {"id": items["coffee"], "name": "Coffee", "price": 50, "quantity": 10}


def test_list_items_requires_token(client, items):
    assert client.get("/auth/items").status_code == 401


def test_purchase(client, db, items):
    account_id = signup(client).json()["id"]
    headers = login(client)

    response = client.post("/auth/purchase", json={"itemId": items["coffee"]}, headers=headers)

    assert response.status_code == 200
    assert response.json() == {
        "message": "Purchase successful",
        "itemPurchased": "Coffee",
        "cashbackReceived": 1.5,
        "newBalance": 51.5,
    }
    assert get_item_quantity(db, items["coffee"]) == 9
    assert client.get("/auth/me", headers=headers).json()["card"]["balance"] == 51.5
    assert float(get_balance(db, account_id)) == 51.5


def test_purchase_insufficient_balance(client, db, items):
    signup(client)
    headers = login(client)

    response = client.post("/auth/purchase", json={"itemId": items["headphones"]}, headers=headers)

    assert response.status_code == 400
    assert response.json() == {"message": "Insufficient balance"}
    assert client.get("/auth/me", headers=headers).json()["card"]["balance"] == 100
    assert get_item_quantity(db, items["headphones"]) == 3


def test_purchase_out_of_stock(client, items):
    signup(client)
    headers = login(client)

    response = client.post("/auth/purchase", json={"itemId": items["sold_out"]}, headers=headers)

    assert response.status_code == 400
    assert response.json() == {"message": "Item is out of stock"}


def test_purchase_unknown_item(client, items):
    signup(client)
    headers = login(client)

    response = client.post("/auth/purchase", json={"itemId": 999}, headers=headers)

    assert response.status_code == 404
    assert response.json() == {"message": "Item not found"}


def test_purchase_requires_token(client, items):
    response = client.post("/auth/purchase", json={"itemId": items["coffee"]})

    assert response.status_code == 401


def test_purchase_item_id_out_of_range(client, items):
    signup(client)
    headers = login(client)

    for item_id in (2**70, 0):
        response = client.post("/auth/purchase", json={"itemId": item_id}, headers=headers)

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid request payload"}


def test_unexpected_error_maps_to_500(settings, db, monkeypatch):
    async def broken_list_items(db):
        raise RuntimeError("store unavailable")

    monkeypatch.setattr(CatalogService, "list_items", broken_list_items)

    with TestClient(create_app(settings), raise_server_exceptions=False) as client:
        signup(client)
        response = client.get("/auth/items", headers=login(client))

    assert response.status_code == 500
    assert response.json() == {"message": "Internal server error"}
