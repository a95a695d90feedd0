"""Tests for account creation, login and lookup."""

import asyncio
from decimal import Decimal

import pytest

from upoint_purchase_api.app.core.errors import AccountNotFound, DuplicateUsername, InvalidCredentials
from upoint_purchase_api.app.services.account_service import AccountService, generate_card_number


def create(db, username="bold", password="password", starting_balance=Decimal("100")):
    return asyncio.run(AccountService.create_account(db, username, password, starting_balance))


def test_generated_card_number_has_sixteen_digits():
    for _ in range(50):
        number = generate_card_number()
        assert len(number) == 16
        assert number.isdigit()


def test_new_account_gets_starting_balance_and_card(db):
    account_id = create(db)

    account = asyncio.run(AccountService.get_account(db, account_id))

    assert account.id == account_id
    assert account.username == "bold"
    assert account.card.balance == 100
    assert len(account.card.card_number) == 16
    assert account.card.card_number.isdigit()


def test_starting_balance_is_configurable(db):
    account_id = create(db, starting_balance=Decimal("1500"))

    account = asyncio.run(AccountService.get_account(db, account_id))

    assert account.card.balance == 1500


def test_account_view_has_no_password(db):
    account_id = create(db)

    payload = asyncio.run(AccountService.get_account(db, account_id)).model_dump()

    assert "password" not in payload
    assert "password" not in payload["card"]


@pytest.mark.parametrize("second_password", ["password", "something-else"])
def test_duplicate_username_is_rejected(db, second_password):
    create(db)

    with pytest.raises(DuplicateUsername):
        create(db, password=second_password)


def test_password_is_stored_hashed(db):
    account_id = create(db, password="pass1234")

    with db.cursor() as cursor:
        stored = cursor.execute("SELECT password FROM accounts WHERE id = ?", (account_id,)).fetchone()["password"]

    assert stored != "pass1234"


def test_authenticate_returns_account_id(db):
    account_id = create(db, password="pass1234")

    assert asyncio.run(AccountService.authenticate(db, "bold", "pass1234")) == account_id


def test_authenticate_rejects_wrong_password(db):
    create(db, password="pass1234")

    with pytest.raises(InvalidCredentials):
        asyncio.run(AccountService.authenticate(db, "bold", "wrong"))


def test_authenticate_rejects_unknown_user(db):
    with pytest.raises(InvalidCredentials):
        asyncio.run(AccountService.authenticate(db, "nobody", "pass1234"))


def test_get_missing_account_raises(db):
    with pytest.raises(AccountNotFound):
        asyncio.run(AccountService.get_account(db, 999))
