"""
Business logic for accounts.

An account is a username, a PBKDF2 password hash and a virtual payment
card (a 16‑digit number plus a cash balance).  The ``AccountService``
creates accounts, authenticates logins and reads accounts back without
their password hash.
"""

import logging
import secrets
import sqlite3
from decimal import Decimal

from ..core.db import Database
from ..core.errors import AccountNotFound, DuplicateUsername, InvalidCredentials
from ..core.security import hash_password, verify_password
from ..schemas.account import AccountRead, CardRead


logger = logging.getLogger(__name__)

CARD_NUMBER_LENGTH = 16


def generate_card_number() -> str:
    """Return a card number of 16 independently sampled decimal digits.

    Collisions are not retried here; the UNIQUE constraint on
    ``accounts.card_number`` rejects a duplicate at insert time.
    """
    return "".join(str(secrets.randbelow(10)) for _ in range(CARD_NUMBER_LENGTH))


class AccountService:
    """Service for creating and reading accounts."""

    @classmethod
    async def create_account(
        cls,
        db: Database,
        username: str,
        password: str,
        starting_balance: Decimal,
    ) -> int:
        """Create an account with a fresh card and return its id.

        Raises ``DuplicateUsername`` if the username is taken, whether
        that is seen by the lookup or by the UNIQUE constraint when two
        signups race.
        """
        logger.info("Registering account %s", username)
        with db.cursor() as cursor:
            existing = cursor.execute(
                "SELECT id FROM accounts WHERE username = ?", (username,)
            ).fetchone()
            if existing:
                raise DuplicateUsername()
            try:
                cursor.execute(
                    "INSERT INTO accounts (username, password, card_number, balance) "
                    "VALUES (?, ?, ?, ?)",
                    (
                        username,
                        hash_password(password),
                        generate_card_number(),
                        str(starting_balance),
                    ),
                )
            except sqlite3.IntegrityError as e:
                if "accounts.username" in str(e):
                    raise DuplicateUsername() from e
                raise
            account_id = cursor.lastrowid
        logger.info("Account %s created with id %s", username, account_id)
        return account_id

    @classmethod
    async def authenticate(cls, db: Database, username: str, password: str) -> int:
        """Return the id of the account matching the credentials.

        Unknown usernames and wrong passwords both raise
        ``InvalidCredentials`` with the same message.
        """
        with db.cursor() as cursor:
            row = cursor.execute(
                "SELECT id, password FROM accounts WHERE username = ?",
                (username,),
            ).fetchone()
        if not row or not verify_password(password, row["password"]):
            logger.info("Failed login for %s", username)
            raise InvalidCredentials()
        return row["id"]

    @classmethod
    async def get_account(cls, db: Database, account_id: int) -> AccountRead:
        """Retrieve an account by id, without the password hash."""
        with db.cursor() as cursor:
            row = cursor.execute(
                "SELECT id, username, card_number, balance FROM accounts WHERE id = ?",
                (account_id,),
            ).fetchone()
        if not row:
            raise AccountNotFound()
        return AccountRead(
            id=row["id"],
            username=row["username"],
            card=CardRead(card_number=row["card_number"], balance=float(Decimal(row["balance"]))),
        )
