"""Pytest fixtures: a fresh SQLite file per test, seeded items and an API client."""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from upoint_purchase_api.app.core.config import Settings
from upoint_purchase_api.app.core.db import Database
from upoint_purchase_api.app.main import create_app


def add_item(db: Database, name: str, price: str, quantity: int) -> int:
    with db.cursor() as cursor:
        cursor.execute(
            "INSERT INTO items (name, price, quantity) VALUES (?, ?, ?)",
            (name, price, quantity),
        )
        return cursor.lastrowid


def get_item_quantity(db: Database, item_id: int) -> int:
    with db.cursor() as cursor:
        return cursor.execute("SELECT quantity FROM items WHERE id = ?", (item_id,)).fetchone()["quantity"]


def get_balance(db: Database, account_id: int) -> Decimal:
    with db.cursor() as cursor:
        return Decimal(cursor.execute("SELECT balance FROM accounts WHERE id = ?", (account_id,)).fetchone()["balance"])


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=str(tmp_path / "test.db"),
        secret_key="test-secret",
        starting_balance=Decimal("100"),
        cashback_rate=Decimal("0.03"),
    )


@pytest.fixture
def db(settings) -> Database:
    database = Database(settings.database_url)
    database.init()
    return database


@pytest.fixture
def items(db) -> dict:
    return {
        "coffee": add_item(db, "Coffee", "50", 10),
        "headphones": add_item(db, "Headphones", "150", 3),
        "sold_out": add_item(db, "Sold Out Mug", "20", 0),
        "last_one": add_item(db, "Last Sticker", "10", 1),
    }


@pytest.fixture
def client(settings, db):
    with TestClient(create_app(settings)) as test_client:
        yield test_client
