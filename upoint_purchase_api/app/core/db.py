"""
SQLite database integration and simple migration system.

The ``Database`` class is a small handle around a SQLite file.  One
instance is created by ``create_app`` and stored on ``app.state.db``;
services receive it explicitly instead of reaching for a global
connection.  It provides short‑lived connections (``connect``), a
cursor context manager that commits on exit (``cursor``), an exclusive
write transaction (``transaction``) and the migration runner (``init``).

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from fastapi import Request

from .config import settings


# Largest value an INTEGER PRIMARY KEY can hold.
MAX_ROW_ID = 2**63 - 1

MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: accounts with their payment card, and the catalog
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS accounts (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            username TEXT NOT NULL UNIQUE,
            password TEXT NOT NULL,
            card_number TEXT NOT NULL UNIQUE,
            balance TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS items (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            price TEXT NOT NULL,
            quantity INTEGER NOT NULL CHECK (quantity >= 0),
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """,
    ),
]


def resolve_database_path(db_url: str) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths are used as is; relative paths are resolved against
    the project root.
    """
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


class Database:
    """Handle to the SQLite file holding accounts and items."""

    def __init__(self, path: str) -> None:
        self.path = resolve_database_path(path)

    def connect(self) -> sqlite3.Connection:
        """Create and return a new SQLite connection.

        Rows are returned as ``sqlite3.Row`` so columns can be accessed
        by name.
        """
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    @contextmanager
    def cursor(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor, commit on success and always close the connection."""
        conn = self.connect()
        try:
            yield conn.cursor()
            conn.commit()
        finally:
            conn.close()

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor inside a ``BEGIN IMMEDIATE`` transaction.

        The write lock is taken before the first read, so everything done
        with the cursor is serialised against other writers.  Any
        exception rolls the whole transaction back and is re‑raised.
        """
        conn = self.connect()
        conn.isolation_level = None
        try:
            cursor = conn.cursor()
            cursor.execute("BEGIN IMMEDIATE")
            try:
                yield cursor
            except BaseException:
                cursor.execute("ROLLBACK")
                raise
            cursor.execute("COMMIT")
        finally:
            conn.close()

    def init(self) -> None:
        """Create the database file if needed and apply pending migrations."""
        with self.cursor() as cursor:
            cursor.execute(
                "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
            )
            cursor.execute("SELECT MAX(version) as version FROM migrations")
            row = cursor.fetchone()
            current_version = row["version"] if row and row["version"] is not None else 0

            for version, sql in MIGRATIONS:
                if version > current_version:
                    cursor.executescript(sql)
                    cursor.execute(
                        "INSERT INTO migrations (version) VALUES (?)", (version,)
                    )
                    current_version = version


def create_database(db_url: str | None = None) -> Database:
    """Build a ``Database`` for ``db_url`` (defaults to ``settings.database_url``)."""
    return Database(db_url or settings.database_url)


def get_db(request: Request) -> Database:
    """FastAPI dependency returning the handle created by ``create_app``."""
    return request.app.state.db
